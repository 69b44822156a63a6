from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from offline_license.client.bridge import CommandBridge, UnknownCommandError, build_bridge
from offline_license.client.checker import LicenseChecker
from offline_license.client.store import (
    FileLicenseStorage,
    InMemoryLicenseStorage,
    LicenseStore,
    create_storage,
    can_use_all_features,
)
from offline_license.config import CheckerConfig
from offline_license.issuer import LicenseIssuer
from offline_license.keys import public_key_to_base64
from offline_license.token.types import LicenseErrorKind
from offline_license.token.verifier import LicenseVerifier


@pytest.fixture
def checker(verifier: LicenseVerifier) -> LicenseChecker:
    return LicenseChecker(verifier)


def test_checker_from_config(issuer: LicenseIssuer) -> None:
    config = CheckerConfig(public_key=public_key_to_base64(issuer.signer.public_key))
    checker = LicenseChecker.from_config(config)
    token = issuer.issue("a@b.com", expires_in_days=0).token
    assert checker.check(f"  {token}\n").valid is True


def test_bridge_exposes_only_verify_license(checker: LicenseChecker, issuer: LicenseIssuer) -> None:
    bridge = build_bridge(checker)
    assert bridge.commands() == ["verify_license"]

    token = issuer.issue("a@b.com", expires_in_days=0).token
    status = bridge.invoke("verify_license", token=token)
    assert status["valid"] is True
    assert status["payload"]["email"] == "a@b.com"

    with pytest.raises(UnknownCommandError):
        bridge.invoke("generate_demo_license", email="a@b.com")


def test_demo_builder_registered_by_tests_is_still_rejected(checker: LicenseChecker, demo_license) -> None:
    bridge = build_bridge(checker)
    bridge.register("generate_demo_license", lambda *, email: demo_license(email))
    token = bridge.invoke("generate_demo_license", email="dev@example.com")
    status = bridge.invoke("verify_license", token=token)
    assert status["valid"] is False
    assert status["error_kind"] == LicenseErrorKind.SIGNATURE_INVALID.value


def test_empty_bridge() -> None:
    assert CommandBridge().commands() == []


@pytest.mark.parametrize("token", [None, 42, ["a.b"]])
def test_bridge_rejects_non_string_token(checker: LicenseChecker, token) -> None:
    status = build_bridge(checker).invoke("verify_license", token=token)
    assert status["valid"] is False
    assert status["error_kind"] == LicenseErrorKind.MALFORMED_TOKEN.value
    assert status["error"] == "Invalid token format"


def test_store_from_config_uses_configured_path(tmp_path: Path, issuer: LicenseIssuer) -> None:
    config = CheckerConfig(
        public_key=public_key_to_base64(issuer.signer.public_key),
        store_path=tmp_path / "saved" / "license.json",
        reverify_after_days=3,
    )
    storage = create_storage(config)
    assert isinstance(storage, FileLicenseStorage)
    assert storage.path == config.store_path

    store = LicenseStore.from_config(config)
    assert store.reverify_after == timedelta(days=3)
    assert store.activate(issuer.issue("a@b.com", expires_in_days=0).token).valid is True
    assert config.store_path.exists()


def _store(checker: LicenseChecker, storage, clock) -> LicenseStore:
    return LicenseStore(checker, storage, reverify_after_days=7, clock=clock)


def test_activate_saves_valid_license(checker: LicenseChecker, issuer: LicenseIssuer, clock) -> None:
    storage = InMemoryLicenseStorage()
    store = _store(checker, storage, clock)
    token = issuer.issue("a@b.com").token

    result = store.activate(token)
    assert result.valid is True
    assert storage.record is not None
    assert storage.record["token"] == token
    assert storage.record["verified_at"] == "2024-01-01T00:00:00Z"
    assert can_use_all_features(result) is True


def test_activate_does_not_save_invalid_license(checker: LicenseChecker, clock) -> None:
    storage = InMemoryLicenseStorage()
    result = _store(checker, storage, clock).activate("not-a-token")
    assert result.valid is False
    assert storage.record is None
    assert can_use_all_features(result) is False
    assert can_use_all_features(None) is False


def test_load_saved_uses_cache_within_window(
    checker: LicenseChecker, issuer: LicenseIssuer, clock
) -> None:
    storage = InMemoryLicenseStorage()
    store = _store(checker, storage, clock)
    issued = issuer.issue("a@b.com", expires_in_days=3)
    store.activate(issued.token)

    # The license has expired, but the cached status is still inside the window.
    clock.now = clock.now + timedelta(days=5)
    cached = store.load_saved()
    assert cached is not None
    assert cached.valid is True
    assert cached.payload == issued.payload


def test_load_saved_reverifies_stale_record(
    checker: LicenseChecker, issuer: LicenseIssuer, clock
) -> None:
    storage = InMemoryLicenseStorage()
    store = _store(checker, storage, clock)
    store.activate(issuer.issue("a@b.com", expires_in_days=3).token)

    clock.now = clock.now + timedelta(days=8)
    result = store.load_saved()
    assert result is not None
    assert result.valid is False
    assert result.error_kind is LicenseErrorKind.EXPIRED


def test_load_saved_refreshes_verified_at(checker: LicenseChecker, issuer: LicenseIssuer, clock) -> None:
    storage = InMemoryLicenseStorage()
    store = _store(checker, storage, clock)
    store.activate(issuer.issue("a@b.com", expires_in_days=0).token)

    clock.now = datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert store.load_saved().valid is True
    assert storage.record["verified_at"] == "2024-02-01T00:00:00Z"


def test_load_saved_without_record(checker: LicenseChecker, clock) -> None:
    assert _store(checker, InMemoryLicenseStorage(), clock).load_saved() is None


def test_corrupt_record_is_ignored(checker: LicenseChecker, clock) -> None:
    storage = InMemoryLicenseStorage()
    storage.save({"token": "x"})
    assert _store(checker, storage, clock).load_saved() is None


@pytest.mark.parametrize("status", ["corrupt", 42, ["valid"], {"valid": True, "payload": "x"}])
def test_record_with_malformed_status_is_ignored(checker: LicenseChecker, clock, status) -> None:
    storage = InMemoryLicenseStorage()
    storage.save({"token": "x", "verified_at": "2024-01-01T00:00:00Z", "status": status})
    assert _store(checker, storage, clock).load_saved() is None


def test_non_mapping_record_is_ignored(tmp_path: Path, checker: LicenseChecker, clock) -> None:
    path = tmp_path / "license.json"
    path.write_text('["token", "status"]', encoding="utf-8")
    assert _store(checker, FileLicenseStorage(path), clock).load_saved() is None


def test_clear(checker: LicenseChecker, issuer: LicenseIssuer, clock) -> None:
    storage = InMemoryLicenseStorage()
    store = _store(checker, storage, clock)
    store.activate(issuer.issue("a@b.com").token)
    store.clear()
    assert store.load_saved() is None


def test_file_storage_round_trip(
    tmp_path: Path, checker: LicenseChecker, issuer: LicenseIssuer, clock
) -> None:
    path = tmp_path / "nested" / "license.json"
    store = _store(checker, FileLicenseStorage(path), clock)
    issued = issuer.issue("a@b.com")
    store.activate(issued.token)
    assert path.exists()

    reopened = _store(checker, FileLicenseStorage(path), clock)
    loaded = reopened.load_saved()
    assert loaded is not None
    assert loaded.payload == issued.payload

    reopened.clear()
    assert not path.exists()
    reopened.clear()


def test_file_storage_with_invalid_json(tmp_path: Path, checker: LicenseChecker, clock) -> None:
    path = tmp_path / "license.json"
    path.write_text("{oops", encoding="utf-8")
    assert _store(checker, FileLicenseStorage(path), clock).load_saved() is None
