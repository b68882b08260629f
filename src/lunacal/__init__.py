"""lunacal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    phase_at,
    next_phase,
    previous_phase,
    nearest_phase,
    nth_new_moon,
    to_dynamical,
    to_universal,
    phase_events,
    lunar_phase,
    daily_phase,
    daily_phase_events,
)
from .core.errors import LunacalError, NonConvergenceError
from .core.types import PHASES, PhaseEvent, phase_from_range

__all__ = [
    "phase_at",
    "next_phase",
    "previous_phase",
    "nearest_phase",
    "nth_new_moon",
    "to_dynamical",
    "to_universal",
    "phase_events",
    "lunar_phase",
    "daily_phase",
    "daily_phase_events",
    "phase_from_range",
    "PhaseEvent",
    "PHASES",
    "LunacalError",
    "NonConvergenceError",
]
