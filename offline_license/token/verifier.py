"""Offline license token verification."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ..keys import load_public_key
from ..utils.time import utc_now
from .codec import TokenEncodingError, TokenError, b64decode_segment, decode_payload, split
from .expiry import is_expired
from .types import LicenseErrorKind, VerificationResult

SIGNATURE_LENGTH = 64


class LicenseVerifier:
    """Verify signed license tokens against a single trusted public key.

    Verification is a single pass over the token: split, decode the signature,
    decode the payload, check the signature, check expiry. The first failing
    stage decides the result. Malformed or forged tokens never raise.
    """

    def __init__(self, public_key: Ed25519PublicKey) -> None:
        self._public_key = public_key

    @classmethod
    def from_base64(cls, value: str | None) -> "LicenseVerifier":
        return cls(load_public_key(value, name="LICENSE_PUBLIC_KEY"))

    def verify(self, token: str, *, now: Optional[datetime] = None) -> VerificationResult:
        if now is not None and now.tzinfo is None:
            raise ValueError("now must be a timezone-aware datetime")
        try:
            payload_b64, signature_b64 = split(token)
        except TokenError as exc:
            return VerificationResult.failure(exc.kind, "Invalid token format")

        try:
            signature = b64decode_segment(signature_b64)
        except TokenEncodingError as exc:
            return VerificationResult.failure(exc.kind, "Failed to decode signature")
        if len(signature) != SIGNATURE_LENGTH:
            return VerificationResult.failure(LicenseErrorKind.SIGNATURE_LENGTH, "Invalid signature length")

        try:
            payload = decode_payload(payload_b64)
        except TokenEncodingError as exc:
            return VerificationResult.failure(exc.kind, "Failed to decode payload")
        except TokenError as exc:
            return VerificationResult.failure(exc.kind, "Failed to parse payload")

        # Signed bytes are the payload segment exactly as received.
        try:
            self._public_key.verify(signature, payload_b64.encode("utf-8"))
        except InvalidSignature:
            return VerificationResult.failure(LicenseErrorKind.SIGNATURE_INVALID, "Signature verification failed")

        if is_expired(payload.expires_at, now if now is not None else utc_now()):
            return VerificationResult.failure(LicenseErrorKind.EXPIRED, "License has expired", payload=payload)

        return VerificationResult(valid=True, payload=payload, expires_at=payload.expires_at)
