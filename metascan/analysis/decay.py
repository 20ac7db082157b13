"""
Recency weighting.

A record's contribution halves every `half_life` days:

    weight = 2 ** (-age / half_life)

Records older than `max_age` days are dropped outright, whether or not
weighting is enabled.
"""

from metascan.analysis.dates import days_since_epoch


def file_age(date: tuple[int, int, int], today: int) -> int:
    """Age in days of a record dated `date`, relative to day number `today`."""
    return today - days_since_epoch(*date)


def is_too_old(age: int, max_age: int) -> bool:
    return age > max_age


def decay_weight(age: float, half_life: float) -> float:
    """
    Exponential decay weight for a record of the given age.

    Returns 1.0 at age 0 and 0.5 at age == half_life. Records dated after
    `today` (negative age) weigh more than 1.0.
    """
    return 2.0 ** (-age / half_life)


def record_weight(age: int, half_life: float, use_weight: bool) -> float:
    if not use_weight:
        return 1.0
    return decay_weight(age, half_life)
