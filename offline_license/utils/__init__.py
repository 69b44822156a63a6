"""Utility helpers for hashing and time operations."""

from .hashing import sha256_hex, token_fingerprint
from .time import format_rfc3339, parse_rfc3339, utc_now

__all__ = ["sha256_hex", "token_fingerprint", "utc_now", "format_rfc3339", "parse_rfc3339"]
