"""Human-readable rendering of elapsed times for leaderboard payloads.

Labels and thresholds follow the usual "time ago" wording: whole seconds,
minutes rounded half up, and years described as about/over/almost by how
far into the next year the duration runs.
"""

from __future__ import annotations

import math

_MINUTES_IN_DAY = 24 * 60
_MINUTES_IN_ALMOST_TWO_DAYS = 42 * 60
_MINUTES_IN_MONTH = 30 * _MINUTES_IN_DAY
_MINUTES_IN_TWO_MONTHS = 2 * _MINUTES_IN_MONTH
_YEAR_MS = 365 * _MINUTES_IN_DAY * 60_000


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_duration(ms: float) -> str:
    """Render a duration the way a leaderboard reads it.

    >>> format_duration(10_000)
    'less than a minute'
    >>> format_duration(3 * 60 * 60 * 1000)
    'about 3 hours'
    >>> format_duration(2 * 24 * 60 * 60 * 1000)
    '2 days'
    """
    ms = abs(ms)
    seconds = int(ms // 1000)
    minutes = _round_half_up(seconds / 60)

    if minutes == 0:
        return "less than a minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < _MINUTES_IN_DAY:
        return f"about {_plural(_round_half_up(minutes / 60), 'hour')}"
    if minutes < _MINUTES_IN_ALMOST_TWO_DAYS:
        return "1 day"
    if minutes < _MINUTES_IN_MONTH:
        return _plural(_round_half_up(minutes / _MINUTES_IN_DAY), "day")
    if minutes < _MINUTES_IN_TWO_MONTHS:
        return f"about {_plural(_round_half_up(minutes / _MINUTES_IN_MONTH), 'month')}"

    # Whole months, with a month taken as a twelfth of a 365-day year.
    months = int(ms * 12 // _YEAR_MS)
    if months < 12:
        return _plural(_round_half_up(minutes / _MINUTES_IN_MONTH), "month")

    years, into_year = divmod(months, 12)
    if into_year < 3:
        return f"about {_plural(years, 'year')}"
    if into_year < 9:
        return f"over {_plural(years, 'year')}"
    return f"almost {_plural(years + 1, 'year')}"
