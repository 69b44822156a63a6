"""Ed25519 license token signer."""

from __future__ import annotations

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from ..keys import load_private_key
from .codec import b64encode_segment, encode_payload, join
from .types import LicensePayload


class LicenseSigner:
    """Sign license payloads into offline-verifiable tokens."""

    def __init__(self, private_key: Ed25519PrivateKey) -> None:
        self._key = private_key

    @classmethod
    def from_base64(cls, value: str | None) -> "LicenseSigner":
        return cls(load_private_key(value, name="PRIVATE_KEY"))

    @property
    def public_key(self) -> Ed25519PublicKey:
        return self._key.public_key()

    def sign(self, payload: LicensePayload) -> str:
        encoded_payload = encode_payload(payload)
        signature = self._key.sign(encoded_payload.encode("utf-8"))
        return join(encoded_payload, b64encode_segment(signature))

    def __repr__(self) -> str:
        return "LicenseSigner(<private key>)"
