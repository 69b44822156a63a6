"""License token datatypes."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class LicenseErrorKind(str, Enum):
    """Closed set of reasons a token fails verification."""

    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    ENCODING_ERROR = "ENCODING_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    SIGNATURE_LENGTH = "SIGNATURE_LENGTH"
    SIGNATURE_INVALID = "SIGNATURE_INVALID"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class LicensePayload:
    """The signed license claim.

    Field order is part of the wire format: it fixes the order of keys in the
    canonical JSON that gets signed.
    """

    email: str
    product_id: str
    plan: str
    issued_at: str
    expires_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IssuedLicense:
    token: str
    payload: LicensePayload


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying one token."""

    valid: bool
    payload: Optional[LicensePayload] = None
    expires_at: Optional[str] = None
    expired: bool = False
    error: Optional[str] = None
    error_kind: Optional[LicenseErrorKind] = None

    @classmethod
    def failure(
        cls,
        kind: LicenseErrorKind,
        error: str,
        *,
        payload: Optional[LicensePayload] = None,
    ) -> "VerificationResult":
        return cls(
            valid=False,
            payload=payload,
            expires_at=payload.expires_at if payload is not None else None,
            expired=kind is LicenseErrorKind.EXPIRED,
            error=error,
            error_kind=kind,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON transports (HTTP responses, command bridge)."""
        data: Dict[str, Any] = {
            "valid": self.valid,
            "payload": self.payload.to_dict() if self.payload is not None else None,
            "expires_at": self.expires_at,
            "expired": self.expired,
            "error_kind": self.error_kind.value if self.error_kind is not None else None,
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VerificationResult":
        """Rebuild a result from :meth:`to_dict` output."""
        if not isinstance(data, dict):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        payload_data = data.get("payload")
        kind = data.get("error_kind")
        return cls(
            valid=bool(data.get("valid", False)),
            payload=LicensePayload(**payload_data) if payload_data else None,
            expires_at=data.get("expires_at"),
            expired=bool(data.get("expired", False)),
            error=data.get("error"),
            error_kind=LicenseErrorKind(kind) if kind else None,
        )
