"""Offline license tokens.

Ed25519-signed license tokens that a product can verify without contacting a
server: the issuing side signs, the checking side verifies with only the
public key.
"""

from .config import CheckerConfig, IssuerConfig
from .issuer import LicenseIssuer
from .keys import KeyConfigurationError, generate_keypair
from .token import (
    IssuedLicense,
    LicenseErrorKind,
    LicensePayload,
    LicenseSigner,
    LicenseVerifier,
    VerificationResult,
    is_expired,
)

__all__ = [
    "LicensePayload",
    "IssuedLicense",
    "LicenseErrorKind",
    "VerificationResult",
    "LicenseSigner",
    "LicenseVerifier",
    "LicenseIssuer",
    "IssuerConfig",
    "CheckerConfig",
    "KeyConfigurationError",
    "generate_keypair",
    "is_expired",
]
