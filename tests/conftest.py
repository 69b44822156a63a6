import base64
import json
from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from offline_license.issuer import LicenseIssuer
from offline_license.token.signer import LicenseSigner
from offline_license.token.types import LicensePayload
from offline_license.token.verifier import LicenseVerifier

PRODUCT_ID = "localendar-mvp"


class FixedClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def build_demo_license(email: str, *, expires_at: str | None = "2099-01-01T00:00:00Z") -> str:
    """Unsigned token with an all-zero signature. Test-only: never verifies."""
    payload = LicensePayload(
        email=email,
        product_id=PRODUCT_ID,
        plan="pro",
        issued_at="2024-01-01T00:00:00Z",
        expires_at=expires_at,
    )
    payload_json = json.dumps(payload.to_dict(), separators=(",", ":"))
    payload_b64 = base64.b64encode(payload_json.encode("utf-8")).decode("ascii")
    return f"{payload_b64}.{base64.b64encode(bytes(64)).decode('ascii')}"


@pytest.fixture
def demo_license():
    return build_demo_license


@pytest.fixture
def private_key() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.generate()


@pytest.fixture
def signer(private_key: Ed25519PrivateKey) -> LicenseSigner:
    return LicenseSigner(private_key)


@pytest.fixture
def verifier(private_key: Ed25519PrivateKey) -> LicenseVerifier:
    return LicenseVerifier(private_key.public_key())


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def issuer(signer: LicenseSigner, clock: FixedClock) -> LicenseIssuer:
    return LicenseIssuer(signer, product_id=PRODUCT_ID, clock=clock)


@pytest.fixture
def payload() -> LicensePayload:
    return LicensePayload(
        email="a@b.com",
        product_id=PRODUCT_ID,
        plan="pro",
        issued_at="2024-01-01T00:00:00Z",
        expires_at="2025-01-01T00:00:00Z",
    )
