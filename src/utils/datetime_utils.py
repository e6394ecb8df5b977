"""Timestamp helpers.

All timestamps stored by Recipe Box are timezone-aware UTC datetimes.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime.

    Used as the SQLAlchemy column default for created_at/updated_at.
    """
    return datetime.now(timezone.utc)


def format_timestamp(value: Optional[datetime]) -> str:
    """Render a stored timestamp for display, or "-" when missing.

    SQLite drops tzinfo on round trip, so naive values are treated as UTC.
    """
    if value is None:
        return "-"
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.strftime("%Y-%m-%d %H:%M UTC")
