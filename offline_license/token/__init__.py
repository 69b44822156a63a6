"""License token protocol: payload codec, signing and verification."""

from .codec import MalformedTokenError, TokenEncodingError, TokenError, TokenParseError, decode_payload, encode_payload
from .expiry import is_expired
from .signer import LicenseSigner
from .types import IssuedLicense, LicenseErrorKind, LicensePayload, VerificationResult
from .verifier import SIGNATURE_LENGTH, LicenseVerifier

__all__ = [
    "LicensePayload",
    "IssuedLicense",
    "LicenseErrorKind",
    "VerificationResult",
    "LicenseSigner",
    "LicenseVerifier",
    "SIGNATURE_LENGTH",
    "encode_payload",
    "decode_payload",
    "is_expired",
    "TokenError",
    "MalformedTokenError",
    "TokenEncodingError",
    "TokenParseError",
]
