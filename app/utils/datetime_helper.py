"""Datetime helpers; everything stored and compared in UTC"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to aware UTC.

    Naive datetimes are taken to already be in UTC (SQLite hands them back
    without tzinfo). Aware datetimes are converted.

    Args:
        dt: datetime or None

    Returns:
        UTC datetime (timezone.utc), or None if dt is None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
