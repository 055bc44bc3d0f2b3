"""Small numeric, date and text helpers shared across services."""

import math
from datetime import date, timedelta

# Upper bound for maintenance and rotation intervals, in days
MAX_INTERVAL_DAYS = 36500


def round_half_up(value: float, ndigits: int = 0) -> float | int:
    """Round halves up (2.5 -> 3), unlike the built-in ``round``."""
    factor = 10**ndigits
    rounded = math.floor(value * factor + 0.5) / factor
    if ndigits == 0:
        return int(rounded)
    return rounded


def contains_any(text: str | None, *needles: str) -> bool:
    """Case-insensitive substring test against several needles."""
    lowered = (text or "").lower()
    return any(needle in lowered for needle in needles)


def add_days(start: date, days: int) -> date | None:
    """Return ``start`` shifted by ``days``, or None past the calendar's range."""
    try:
        return start + timedelta(days=days)
    except OverflowError:
        return None
