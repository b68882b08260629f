from __future__ import annotations

from datetime import date, datetime
from typing import Iterator, Optional, Tuple, Union

from .core.time import date_from_moment, moment_from_date, moment_from_datetime
from .core.types import PRINCIPAL_ANGLES, PhaseEvent
from .engines import iter as _iter
from .engines import phase as _phase
from .engines.search import find_phase
from .reference import time_scales as _ts

Target = Union[float, str]


def _angle(target: Target) -> float:
    if isinstance(target, str):
        if target not in PRINCIPAL_ANGLES:
            raise ValueError(f"Unknown phase '{target}'. Available: {sorted(PRINCIPAL_ANGLES)}")
        return PRINCIPAL_ANGLES[target]
    return float(target)


# ============================================================
# Moment (R.D., UT) queries
# ============================================================

def phase_at(moment: float) -> float:
    """Lunar phase angle in [0, 360) at the UT moment (R.D.)."""
    return _phase.lunar_phase(moment)


def next_phase(moment: float, target: Target) -> float:
    """First UT moment after `moment` at which the phase equals `target`."""
    return find_phase(_angle(target), moment, "after")


def previous_phase(moment: float, target: Target) -> float:
    """Last UT moment before `moment` at which the phase equals `target`."""
    return find_phase(_angle(target), moment, "before")


def nearest_phase(moment: float, target: Target) -> float:
    return find_phase(_angle(target), moment, "nearest")


def nth_new_moon(index: int) -> float:
    """UT moment of new moon number `index` (0 is the new moon of January, year 1)."""
    anchor = _ts.universal_from_dynamical(_phase.mean_new_moon(index))
    return find_phase(0.0, anchor, "nearest")


def to_dynamical(moment: float) -> float:
    return _ts.dynamical_from_universal(moment)


def to_universal(moment_tt: float) -> float:
    return _ts.universal_from_dynamical(moment_tt)


def phase_events(
    start: float,
    end: Optional[float] = None,
    *,
    start_inclusive: bool = True,
    end_inclusive: bool = True,
) -> Iterator[PhaseEvent]:
    return _iter.phase_events(
        start, end, start_inclusive=start_inclusive, end_inclusive=end_inclusive
    )


# ============================================================
# datetime / date adapters
# ============================================================

def lunar_phase(dt: datetime) -> float:
    """Phase angle at a timezone-aware datetime."""
    return phase_at(moment_from_datetime(dt))


def daily_phase(d: date) -> str:
    """
    Phase name for the UTC day `d`: the principal phase occurring on that day,
    otherwise the intermediate phase the day falls in.
    """
    return _iter.daily_phase(moment_from_date(d))


def daily_phase_events(start: date, end: date) -> Iterator[Tuple[str, date]]:
    """
    (phase name, UTC date) of each principal phase between two dates, both
    inclusive. Runs backward in time when start > end.
    """
    if start <= end:
        events = _iter.phase_events(moment_from_date(start), moment_from_date(end) + 1.0, end_inclusive=False)
    else:
        events = _iter.phase_events(moment_from_date(start) + 1.0, moment_from_date(end), start_inclusive=False)
    for ev in events:
        yield ev.phase, date_from_moment(ev.moment)
