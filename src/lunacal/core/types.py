from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Literal, Tuple

PhaseName = Literal[
    "new_moon",
    "waxing_crescent",
    "first_quarter",
    "waxing_gibbous",
    "full_moon",
    "waning_gibbous",
    "last_quarter",
    "waning_crescent",
]

PrincipalPhaseName = Literal["new_moon", "first_quarter", "full_moon", "last_quarter"]

Direction = Literal["nearest", "after", "before"]

DIRECTIONS: Tuple[str, ...] = ("nearest", "after", "before")

PHASES: Tuple[str, ...] = (
    "new_moon",
    "waxing_crescent",
    "first_quarter",
    "waxing_gibbous",
    "full_moon",
    "waning_gibbous",
    "last_quarter",
    "waning_crescent",
)

PRINCIPAL_ANGLES: Dict[str, float] = {
    "new_moon": 0.0,
    "first_quarter": 90.0,
    "full_moon": 180.0,
    "last_quarter": 270.0,
}

PHASE_EMOJI: Dict[str, str] = {
    "new_moon": "\U0001F311",
    "waxing_crescent": "\U0001F312",
    "first_quarter": "\U0001F313",
    "waxing_gibbous": "\U0001F314",
    "full_moon": "\U0001F315",
    "waning_gibbous": "\U0001F316",
    "last_quarter": "\U0001F317",
    "waning_crescent": "\U0001F318",
}


def is_principal(phase: str) -> bool:
    return phase in PRINCIPAL_ANGLES


def principal_from_angle(angle: float) -> str:
    """Principal phase name for an angle that is a multiple of 90 degrees."""
    q = int(round(angle / 90.0)) % 4
    return ("new_moon", "first_quarter", "full_moon", "last_quarter")[q]


def phase_from_range(start: float, end: float) -> str:
    """
    Name of the phase for an interval whose phase angle runs from start to end.

    Both ends are angles in [0, 360). The interval is labelled with the principal
    phase it contains (start inclusive, end exclusive), otherwise with the
    intermediate phase that start lies in.
    """
    if end < start:
        end += 360.0

    def contains(x: float) -> bool:
        return start <= x < end

    if contains(0.0) or contains(360.0):
        return "new_moon"
    if contains(90.0):
        return "first_quarter"
    if contains(180.0):
        return "full_moon"
    if contains(270.0):
        return "last_quarter"
    if start < 90.0:
        return "waxing_crescent"
    if start < 180.0:
        return "waxing_gibbous"
    if start < 270.0:
        return "waning_gibbous"
    return "waning_crescent"


@dataclass(frozen=True)
class PhaseEvent:
    """A principal phase and the UT moment (R.D.) at which it occurs."""
    phase: PrincipalPhaseName
    moment: float

    @property
    def angle(self) -> float:
        return PRINCIPAL_ANGLES[self.phase]

    @property
    def emoji(self) -> str:
        return PHASE_EMOJI[self.phase]

    @property
    def datetime(self) -> datetime:
        from .time import datetime_from_moment
        return datetime_from_moment(self.moment)
