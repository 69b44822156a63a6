"""Canonical payload encoding and the two-segment token wire format.

Wire format::

    token := base64(JSON(payload)) "." base64(signature)

Both segments use the standard base64 alphabet with ``=`` padding. The
signature covers the UTF-8 bytes of the payload *segment*, so the payload is
never re-serialized on the verifying side.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, Tuple

from .types import LicenseErrorKind, LicensePayload

SEPARATOR = "."

_REQUIRED_FIELDS = ("email", "product_id", "plan", "issued_at")


class TokenError(ValueError):
    """Base class for token decoding failures."""

    kind: LicenseErrorKind = LicenseErrorKind.MALFORMED_TOKEN


class MalformedTokenError(TokenError):
    kind = LicenseErrorKind.MALFORMED_TOKEN


class TokenEncodingError(TokenError):
    kind = LicenseErrorKind.ENCODING_ERROR


class TokenParseError(TokenError):
    kind = LicenseErrorKind.PARSE_ERROR


def b64encode_segment(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode_segment(segment: str) -> bytes:
    """Strict-alphabet base64 decode that tolerates missing ``=`` padding."""
    padded = segment + "=" * (-len(segment) % 4)
    try:
        return base64.b64decode(padded.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise TokenEncodingError(f"segment is not valid base64: {exc}") from exc


def canonical_json(payload: LicensePayload) -> str:
    """Compact JSON with keys in declaration order."""
    return json.dumps(payload.to_dict(), separators=(",", ":"), ensure_ascii=False)


def encode_payload(payload: LicensePayload) -> str:
    return b64encode_segment(canonical_json(payload).encode("utf-8"))


def decode_payload(segment: str) -> LicensePayload:
    """Decode a payload segment back into a :class:`LicensePayload`."""
    raw = b64decode_segment(segment)
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise TokenParseError(f"payload is not valid JSON: {exc}") from exc
    return payload_from_mapping(data)


def payload_from_mapping(data: Any) -> LicensePayload:
    if not isinstance(data, dict):
        raise TokenParseError("payload must be a JSON object")

    fields: Dict[str, Any] = {}
    for name in _REQUIRED_FIELDS:
        value = data.get(name)
        if not isinstance(value, str):
            raise TokenParseError(f"payload field '{name}' is missing or not a string")
        fields[name] = value

    expires_at = data.get("expires_at")
    if expires_at is not None and not isinstance(expires_at, str):
        raise TokenParseError("payload field 'expires_at' must be a string or null")

    return LicensePayload(expires_at=expires_at, **fields)


def join(encoded_payload: str, encoded_signature: str) -> str:
    return f"{encoded_payload}{SEPARATOR}{encoded_signature}"


def split(token: str) -> Tuple[str, str]:
    parts = token.split(SEPARATOR)
    if len(parts) != 2:
        raise MalformedTokenError(f"expected 2 token segments, got {len(parts)}")
    return parts[0], parts[1]
