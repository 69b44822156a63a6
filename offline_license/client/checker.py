"""Checking-side entry point bound to a configured public key."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..config import CheckerConfig
from ..token.types import LicenseErrorKind, VerificationResult
from ..token.verifier import LicenseVerifier


class LicenseChecker:
    """Validate license tokens offline."""

    def __init__(self, verifier: LicenseVerifier) -> None:
        self.verifier = verifier

    @classmethod
    def from_config(cls, config: CheckerConfig) -> "LicenseChecker":
        return cls(LicenseVerifier.from_base64(config.public_key))

    def check(self, token: Any, *, now: Optional[datetime] = None) -> VerificationResult:
        # UI layers can pass null or numbers through the bridge.
        if not isinstance(token, str):
            return VerificationResult.failure(LicenseErrorKind.MALFORMED_TOKEN, "Invalid token format")
        return self.verifier.verify(token.strip(), now=now)
