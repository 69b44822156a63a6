"""UTC time helpers and RFC3339 formatting."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def format_rfc3339(value: datetime) -> str:
    """Format an aware datetime as RFC3339 in UTC with a ``Z`` suffix."""
    if value.tzinfo is None:
        raise ValueError("format_rfc3339 requires a timezone-aware datetime")
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_rfc3339(value: str) -> Optional[datetime]:
    """Parse an RFC3339 timestamp; return ``None`` if it is not one.

    Timestamps without an explicit UTC offset are rejected.
    """
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00").replace("z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return None
    return parsed
