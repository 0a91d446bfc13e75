from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a stored timestamp to the server's local timezone.

    Some backends (SQLite) hand back naive datetimes even for
    ``DateTime(timezone=True)`` columns; those are treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone()
