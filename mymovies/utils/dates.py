"""
UTC calendar helpers.

Timestamps are stored as naive datetimes in UTC; these helpers keep the
daily request window consistent between writes and reads.
"""

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_utc_day(moment: datetime) -> datetime:
    """Midnight (00:00 UTC) of the day containing ``moment``."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def next_utc_midnight(moment: datetime) -> datetime:
    """The next 00:00 UTC strictly after the start of ``moment``'s day."""
    return start_of_utc_day(moment) + timedelta(days=1)
