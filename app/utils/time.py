"""Time Utilities for UTC management"""

from datetime import datetime, timezone


def get_utc_now() -> datetime:
    """
    Returns a naive UTC datetime.
    Matches the DB schema (TIMESTAMP WITHOUT TIME ZONE).
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_epoch_millis(moment: datetime) -> int:
    """Milliseconds since the epoch; naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def format_long_date(moment: datetime) -> str:
    """e.g. 7 March 2026 (day without zero padding, full month name)"""
    return f"{moment.day} {moment.strftime('%B')} {moment.year}"
