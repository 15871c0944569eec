# sviftstats/analysis/calendar.py
"""
Fractional calendar differences between two datetimes.

days/minutes/seconds are elapsed time divided by the unit length.
months are anchored: the whole-month difference plus the fraction of the
adjacent month span covered by the remainder, so that e.g. Jan 31 -> Feb 28
and Jan 1 -> Feb 1 both count as one month. years = months / 12.
"""
from __future__ import annotations

import calendar
from datetime import datetime, timedelta

_UNIT_LENGTHS: dict[str, timedelta] = {
    "days": timedelta(days=1),
    "minutes": timedelta(minutes=1),
    "seconds": timedelta(seconds=1),
}


def shift_months(dt: datetime, months: int) -> datetime:
    """Move `dt` by whole months, clamping the day to the target month's length."""
    total = dt.year * 12 + (dt.month - 1) + months
    year, month0 = divmod(total, 12)
    month = month0 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def month_diff(later: datetime, earlier: datetime) -> float:
    """Fractional number of months from `earlier` to `later`."""
    if later.day < earlier.day:
        return -month_diff(earlier, later)

    whole = (earlier.year - later.year) * 12 + (earlier.month - later.month)
    anchor = shift_months(later, whole)
    if earlier - anchor < timedelta(0):
        anchor2 = shift_months(later, whole - 1)
        adjust = (earlier - anchor) / (anchor - anchor2)
    else:
        anchor2 = shift_months(later, whole + 1)
        adjust = (earlier - anchor) / (anchor2 - anchor)

    # normalise -0.0
    return -(whole + adjust) or 0.0


def diff(later: datetime, earlier: datetime, unit: str) -> float:
    """`later - earlier` expressed in `unit` (years, months, days, minutes, seconds)."""
    if unit == "years":
        return month_diff(later, earlier) / 12
    if unit == "months":
        return month_diff(later, earlier)
    try:
        length = _UNIT_LENGTHS[unit]
    except KeyError as e:
        raise ValueError(f"Unknown calendar unit: {unit!r}") from e
    return (later - earlier) / length
