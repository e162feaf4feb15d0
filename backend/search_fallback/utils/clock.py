from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return current UTC time as a timezone-aware datetime.

    Timestamp columns use ``UTCDateTime``, which stores naive UTC (SQLite
    keeps no offset) and hands back aware values, so comparisons against
    this never mix naive and aware datetimes.
    """
    return datetime.now(timezone.utc)
