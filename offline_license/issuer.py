"""License issuance: builds payloads from request fields and signs them."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from .token.signer import LicenseSigner
from .token.types import IssuedLicense, LicensePayload
from .utils.hashing import token_fingerprint
from .utils.time import format_rfc3339, utc_now

logger = logging.getLogger(__name__)

DEFAULT_PLAN = "pro"
DEFAULT_EXPIRES_IN_DAYS = 365
PURCHASE_PLAN = "pro"

Clock = Callable[[], datetime]


class LicenseIssuer:
    """Issue licenses for one product with a single signing key."""

    def __init__(self, signer: LicenseSigner, *, product_id: str, clock: Clock = utc_now) -> None:
        self.signer = signer
        self.product_id = product_id
        self._clock = clock

    def build_payload(self, *, email: str, plan: str, expires_in_days: int) -> LicensePayload:
        now = self._clock()
        expires_at: Optional[str] = None
        if expires_in_days > 0:
            expires_at = format_rfc3339(now + timedelta(days=expires_in_days))
        return LicensePayload(
            email=email,
            product_id=self.product_id,
            plan=plan,
            issued_at=format_rfc3339(now),
            expires_at=expires_at,
        )

    def issue(
        self,
        email: str,
        plan: str = DEFAULT_PLAN,
        expires_in_days: int = DEFAULT_EXPIRES_IN_DAYS,
    ) -> IssuedLicense:
        """Sign a new license. ``expires_in_days <= 0`` means it never expires."""
        payload = self.build_payload(email=email, plan=plan, expires_in_days=expires_in_days)
        token = self.signer.sign(payload)
        logger.info(
            "Generated license for %s (plan=%s, expires=%s, token=%s)",
            email,
            plan,
            payload.expires_at,
            token_fingerprint(token),
        )
        return IssuedLicense(token=token, payload=payload)

    def issue_for_purchase(self, email: str, sale_id: Optional[str] = None) -> IssuedLicense:
        """Perpetual license for a completed third-party sale."""
        issued = self.issue(email, plan=PURCHASE_PLAN, expires_in_days=0)
        logger.info("Purchase license issued for %s (sale=%s)", email, sale_id)
        return issued
