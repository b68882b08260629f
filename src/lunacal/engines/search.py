from __future__ import annotations

from ..core.errors import NonConvergenceError
from ..core.types import DIRECTIONS, Direction
from ..reference.astro_args import wrap_deg
from ._solver import solve_angle
from .phase import MEAN_SYNODIC_MONTH, lunar_phase

DEFAULT_TOLERANCE = 1e-6  # days, ~0.09 s
MAX_ITERATIONS = 100
_MAX_LUNATION_STEPS = 4


def _accepts(direction: Direction, t: float, anchor: float, tolerance: float, inclusive: bool) -> bool:
    if direction == "after":
        return t >= anchor - tolerance if inclusive else t > anchor + tolerance
    if direction == "before":
        return t <= anchor + tolerance if inclusive else t < anchor - tolerance
    return True


def find_phase(
    target: float,
    anchor: float,
    direction: Direction = "nearest",
    *,
    inclusive: bool = False,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    UT moment (R.D.) at which the lunar phase equals `target` degrees.

    direction:
      - "nearest": the occurrence closest to `anchor` by the mean lunation model.
      - "after":   the first occurrence later than `anchor`.
      - "before":  the last occurrence earlier than `anchor`.

    An occurrence within `tolerance` days of the anchor counts as being at the
    anchor: "after"/"before" skip it unless `inclusive` is set.

    The initial estimate advances the anchor by the fraction of a mean lunation
    separating its phase from the target; the estimate is then bracketed and
    refined on the residual wrapped to (-180, 180].
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of: {', '.join(DIRECTIONS)}")
    target = wrap_deg(target)

    # fraction of a lunation until the phase next reaches target, in [0,1)
    lead = wrap_deg(target - lunar_phase(anchor)) / 360.0

    if direction == "after":
        k = -1 if inclusive and (1.0 - lead) * MEAN_SYNODIC_MONTH < 1.0 else 0
        step = 1
    elif direction == "before":
        k = 0 if inclusive and lead * MEAN_SYNODIC_MONTH < 1.0 else -1
        step = -1
    else:
        k = 0 if lead <= 0.5 else -1
        step = 0

    for _ in range(_MAX_LUNATION_STEPS):
        estimate = anchor + (lead + k) * MEAN_SYNODIC_MONTH
        t = solve_angle(
            lunar_phase,
            target,
            estimate,
            tolerance=tolerance,
            max_iterations=max_iterations,
        )
        if _accepts(direction, t, anchor, tolerance, inclusive):
            return t
        k += step

    raise NonConvergenceError(
        f"no {direction} occurrence of phase {target} found from moment {anchor}",
        target=target,
        anchor=anchor,
        iterations=_MAX_LUNATION_STEPS,
    )


def phase_at_or_after(target: float, t: float) -> float:
    return find_phase(target, t, "after", inclusive=True)


def phase_at_or_before(target: float, t: float) -> float:
    return find_phase(target, t, "before", inclusive=True)
