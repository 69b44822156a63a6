"""Ed25519 key loading and generation.

Keys travel as standard base64 of their raw bytes: a 32-byte seed for the
private key, 32 bytes for the public key.
"""

from __future__ import annotations

import base64
import binascii
from typing import Tuple

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, NoEncryption, PrivateFormat, PublicFormat

PRIVATE_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 32


class KeyConfigurationError(ValueError):
    """Key material is missing or malformed. Fatal at startup."""


def _decode_key(value: str | None, *, name: str, length: int) -> bytes:
    if value is None or not value.strip():
        raise KeyConfigurationError(f"{name} is not set")
    try:
        raw = base64.b64decode(value.strip().encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise KeyConfigurationError(f"{name} is not valid base64") from exc
    if len(raw) != length:
        raise KeyConfigurationError(f"{name} must be {length} bytes, got {len(raw)}")
    return raw


def load_private_key(value: str | None, *, name: str = "private key") -> Ed25519PrivateKey:
    """Load an Ed25519 private key from a base64 32-byte seed."""
    raw = _decode_key(value, name=name, length=PRIVATE_KEY_LENGTH)
    return Ed25519PrivateKey.from_private_bytes(raw)


def load_public_key(value: str | None, *, name: str = "public key") -> Ed25519PublicKey:
    """Load an Ed25519 public key from base64 of its 32 raw bytes."""
    raw = _decode_key(value, name=name, length=PUBLIC_KEY_LENGTH)
    try:
        return Ed25519PublicKey.from_public_bytes(raw)
    except ValueError as exc:
        raise KeyConfigurationError(f"{name} is not a valid Ed25519 public key") from exc


def private_key_to_base64(key: Ed25519PrivateKey) -> str:
    raw = key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    return base64.b64encode(raw).decode("ascii")


def public_key_to_base64(key: Ed25519PublicKey) -> str:
    return base64.b64encode(key.public_bytes(Encoding.Raw, PublicFormat.Raw)).decode("ascii")


def generate_keypair() -> Tuple[str, str]:
    """Generate a fresh keypair; return ``(private_b64, public_b64)``."""
    private_key = Ed25519PrivateKey.generate()
    return private_key_to_base64(private_key), public_key_to_base64(private_key.public_key())
