"""Expiry policy shared by issuer self-checks and client verification."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..utils.time import parse_rfc3339


def is_expired(expires_at: Optional[str], now: datetime) -> bool:
    """Return True when ``now`` is strictly past ``expires_at``.

    A missing expiry never expires. An expiry that does not parse as RFC3339 is
    treated as not expired (fail-open).
    """
    if expires_at is None:
        return False
    deadline = parse_rfc3339(expires_at)
    if deadline is None:
        return False
    return now > deadline
