from __future__ import annotations

from typing import Iterator, Optional

from ..core.types import PRINCIPAL_ANGLES, PhaseEvent, phase_from_range, principal_from_angle
from .phase import lunar_phase
from .search import DEFAULT_TOLERANCE, find_phase


def _first_event(start: float, forward: bool, inclusive: bool) -> tuple[float, float]:
    """(angle, moment) of the first principal phase from `start` in the given direction."""
    direction = "after" if forward else "before"
    found = [(a, find_phase(a, start, direction, inclusive=inclusive)) for a in PRINCIPAL_ANGLES.values()]
    pick = min if forward else max
    return pick(found, key=lambda item: item[1])


def phase_events(
    start: float,
    end: Optional[float] = None,
    *,
    start_inclusive: bool = True,
    end_inclusive: bool = True,
) -> Iterator[PhaseEvent]:
    """
    Principal phases between the UT moments `start` and `end` (R.D.).

    Runs forward in time when start <= end and backward otherwise; with
    end=None it runs forward without bound. Events within the solver tolerance
    of a bound count as falling on it.
    """
    forward = end is None or start <= end
    tol = DEFAULT_TOLERANCE

    def beyond(t: float) -> bool:
        if end is None:
            return False
        if forward:
            return t > end + tol or (not end_inclusive and t >= end - tol)
        return t < end - tol or (not end_inclusive and t <= end + tol)

    angle, t = _first_event(start, forward, start_inclusive)
    while not beyond(t):
        yield PhaseEvent(phase=principal_from_angle(angle), moment=t)
        angle = (angle + (90.0 if forward else -90.0)) % 360.0
        t = find_phase(angle, t, "after" if forward else "before")


def daily_phase(day_start: float) -> str:
    """Phase name for the UT day starting at the moment `day_start`."""
    return phase_from_range(lunar_phase(day_start), lunar_phase(day_start + 1.0))
