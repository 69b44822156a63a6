"""Hashing helpers."""

from __future__ import annotations

import hashlib


def sha256_hex(value: str) -> str:
    """Return SHA-256 hex digest for the provided string value."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def token_fingerprint(token: str, length: int = 12) -> str:
    """Short stable identifier for a token, safe to write to logs."""
    return sha256_hex(token)[:length]
