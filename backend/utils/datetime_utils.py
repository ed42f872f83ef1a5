"""
UTC clock helpers.

Timestamps are stored as naive UTC datetimes (SQLite has no timezone type).
"""

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today() -> date:
    """Current UTC calendar date"""
    return utcnow().date()
