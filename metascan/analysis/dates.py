"""
Record dating.

A record's authoritative date is the /YYYY/MM/DD/ segment of its storage
path; the date inside the record is never used for aging.

Day arithmetic is deliberately approximate (365-day years, a leap day every
four years, 30-day months). Half-life tuning was done against this model, so
it must not be replaced with calendar-accurate arithmetic.
"""

import re
import time

# Groups: (year, month, day)
PATH_DATE_PATTERN = re.compile(r"/(\d{4})/(\d{2})/(\d{2})/")

SECONDS_PER_DAY = 86400


def extract_date_from_path(path: str) -> tuple[int, int, int] | None:
    """
    Find the first /YYYY/MM/DD/ segment in a storage path.

    No calendar validation is done: "/2024/13/40/" yields (2024, 13, 40).

    Args:
        path: File path, with either separator style

    Returns:
        (year, month, day), or None when the path carries no date
    """
    match = PATH_DATE_PATTERN.search(str(path).replace("\\", "/"))
    if not match:
        return None
    year, month, day = match.groups()
    return int(year), int(month), int(day)


def days_since_epoch(year: int, month: int, day: int) -> int:
    """Approximate day number of a date, counted from 1970."""
    return (year - 1970) * 365 + (year - 1969) // 4 + (month - 1) * 30 + day


def today_days(now: float | None = None) -> int:
    """Whole days elapsed since the Unix epoch at `now` (defaults to the current time)."""
    if now is None:
        now = time.time()
    return int(now // SECONDS_PER_DAY)


def date_key(year: int, month: int, day: int) -> str:
    """Zero-padded YYYY-MM-DD; sorts lexicographically in chronological order."""
    return f"{year:04d}-{month:02d}-{day:02d}"
