from __future__ import annotations
from datetime import date, datetime, timezone
import math
from typing import Tuple

# R.D. 1 is 0h UT, Monday 1 January 1 (proleptic Gregorian).
RD_JD_OFFSET = 1721424.5


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 400) not in (100, 200, 300)


def fixed_from_gregorian(year: int, month: int, day: int) -> int:
    """Proleptic Gregorian date -> R.D. day number."""
    y1 = year - 1
    if month <= 2:
        correction = 0
    elif _is_leap(year):
        correction = -1
    else:
        correction = -2
    return 365 * y1 + y1 // 4 - y1 // 100 + y1 // 400 + (367 * month - 362) // 12 + correction + day


def gregorian_year_from_fixed(t: float) -> int:
    """Gregorian year containing the moment t (R.D.)."""
    d0 = math.floor(t) - 1
    n400, d1 = divmod(d0, 146097)
    n100, d2 = divmod(d1, 36524)
    n4, d3 = divmod(d2, 1461)
    n1 = d3 // 365
    year = 400 * n400 + 100 * n100 + 4 * n4 + n1
    if n100 == 4 or n1 == 4:
        return year
    return year + 1


def gregorian_from_fixed(t: float) -> Tuple[int, int, int]:
    """R.D. moment -> (year, month, day); the time of day is dropped."""
    year = gregorian_year_from_fixed(t)
    d = math.floor(t)
    prior_days = d - fixed_from_gregorian(year, 1, 1)
    if d < fixed_from_gregorian(year, 3, 1):
        correction = 0
    elif _is_leap(year):
        correction = 1
    else:
        correction = 2
    month = (12 * (prior_days + correction) + 373) // 367
    day = d - fixed_from_gregorian(year, month, 1) + 1
    return year, month, day


def jd_from_moment(t: float) -> float:
    return t + RD_JD_OFFSET


def moment_from_jd(jd: float) -> float:
    return jd - RD_JD_OFFSET


def moment_from_date(d: date) -> float:
    """Midnight (UT) at the start of the civil date d."""
    return float(fixed_from_gregorian(d.year, d.month, d.day))


def moment_from_datetime(dt: datetime) -> float:
    """
    datetime -> R.D. moment (UT). Requires a timezone-aware datetime.
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    u = dt.astimezone(timezone.utc)
    seconds = u.hour * 3600 + u.minute * 60 + u.second + u.microsecond / 1_000_000
    return fixed_from_gregorian(u.year, u.month, u.day) + seconds / 86400.0


def datetime_from_moment(t: float) -> datetime:
    """
    R.D. moment (UT) -> timezone-aware datetime in UTC, rounded to the microsecond.

    Raises ValueError for moments outside the years 1..9999 that datetime supports.
    """
    micros = round((t - math.floor(t)) * 86_400_000_000)
    day = math.floor(t)
    if micros >= 86_400_000_000:
        day += 1
        micros -= 86_400_000_000
    year, month, dom = gregorian_from_fixed(day)
    if not (1 <= year <= 9999):
        raise ValueError(f"moment {t} is outside the datetime range (years 1..9999)")
    secs, us = divmod(micros, 1_000_000)
    hh, rem = divmod(secs, 3600)
    mm, ss = divmod(rem, 60)
    return datetime(year, month, dom, hh, mm, ss, us, tzinfo=timezone.utc)


def date_from_moment(t: float) -> date:
    year, month, day = gregorian_from_fixed(t)
    if not (1 <= year <= 9999):
        raise ValueError(f"moment {t} is outside the date range (years 1..9999)")
    return date(year, month, day)
