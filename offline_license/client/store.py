"""Saved-license store for the checking side.

A valid token is saved together with its last verification result. On load
the cached result is trusted for ``reverify_after_days``; after that the
saved token is verified again.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..config import DEFAULT_REVERIFY_DAYS, CheckerConfig
from ..token.types import VerificationResult
from ..utils.time import format_rfc3339, parse_rfc3339, utc_now
from .checker import LicenseChecker

logger = logging.getLogger(__name__)


class LicenseStorage(ABC):
    """Abstract persistence for one saved license record."""

    @abstractmethod
    def load(self) -> Optional[Dict[str, Any]]:
        """Return the saved record, or None if nothing is saved."""

    @abstractmethod
    def save(self, record: Dict[str, Any]) -> None:
        """Replace the saved record."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the saved record if present."""


class InMemoryLicenseStorage(LicenseStorage):
    def __init__(self) -> None:
        self.record: Optional[Dict[str, Any]] = None

    def load(self) -> Optional[Dict[str, Any]]:
        return dict(self.record) if self.record is not None else None

    def save(self, record: Dict[str, Any]) -> None:
        self.record = dict(record)

    def delete(self) -> None:
        self.record = None


class FileLicenseStorage(LicenseStorage):
    """JSON file backend."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        with self.path.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def save(self, record: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(record, fh, indent=2)
        os.replace(tmp_path, self.path)

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)


def create_storage(config: CheckerConfig) -> LicenseStorage:
    """File storage at the configured ``store_path``."""
    return FileLicenseStorage(config.store_path)


class LicenseStore:
    """Activate, cache and re-verify the locally saved license."""

    def __init__(
        self,
        checker: LicenseChecker,
        storage: LicenseStorage,
        *,
        reverify_after_days: int = DEFAULT_REVERIFY_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.checker = checker
        self.storage = storage
        self.reverify_after = timedelta(days=reverify_after_days)
        self._clock = clock

    @classmethod
    def from_config(cls, config: CheckerConfig, *, checker: Optional[LicenseChecker] = None) -> "LicenseStore":
        return cls(
            checker or LicenseChecker.from_config(config),
            create_storage(config),
            reverify_after_days=config.reverify_after_days,
        )

    def activate(self, token: str) -> VerificationResult:
        now = self._clock()
        result = self.checker.check(token, now=now)
        if result.valid:
            self.storage.save(
                {
                    "token": token.strip(),
                    "status": result.to_dict(),
                    "verified_at": format_rfc3339(now),
                }
            )
        else:
            logger.info("License activation rejected: %s", result.error_kind.value if result.error_kind else result.error)
        return result

    def load_saved(self) -> Optional[VerificationResult]:
        """Return the saved license status, re-verifying stale records.

        ``None`` means no usable license is saved.
        """
        try:
            record = self.storage.load()
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load saved license: %s", exc)
            return None
        if record is None:
            return None

        try:
            if not isinstance(record, dict):
                raise TypeError(f"expected a mapping, got {type(record).__name__}")
            token = str(record["token"])
            verified_at = parse_rfc3339(str(record["verified_at"]))
            status = VerificationResult.from_dict(record["status"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Saved license record is corrupt: %s", exc)
            return None

        now = self._clock()
        if verified_at is None or now - verified_at > self.reverify_after:
            logger.info("Saved license is older than %s; re-verifying", self.reverify_after)
            return self.activate(token)
        return status

    def clear(self) -> None:
        self.storage.delete()


def can_use_all_features(result: Optional[VerificationResult]) -> bool:
    return result is not None and result.valid
