from __future__ import annotations
from typing import Callable, Tuple

from ..core.errors import NonConvergenceError
from ..reference.astro_args import wrap180

# Slowest daily motion of the elongation (degrees); the mean is 12.19.
MIN_PHASE_RATE_DEG_PER_DAY = 10.0


def angle_residual(f: Callable[[float], float], target: float) -> Callable[[float], float]:
    """r(t) = f(t) - target, re-wrapped to (-180, 180] on every call."""
    def r(t: float) -> float:
        return wrap180(f(t) - target)
    return r


def bracket_root(
    r: Callable[[float], float],
    center: float,
    *,
    halfwidth: float = 2.0,
    max_halfwidth: float = 12.0,
    grow: float = 1.6,
    target: float = 0.0,
) -> Tuple[float, float, float, float]:
    """
    Widen [center - w, center + w] until the wrapped residual changes sign.

    Both ends must stay within a quarter circle of the target so the bracket
    cannot straddle the ±180° seam half a lunation away.
    Returns (lo, hi, r(lo), r(hi)).
    """
    w = halfwidth
    while w <= max_halfwidth:
        lo, hi = center - w, center + w
        r_lo, r_hi = r(lo), r(hi)
        if r_lo <= 0.0 <= r_hi and r_lo > -90.0 and r_hi < 90.0:
            return lo, hi, r_lo, r_hi
        w *= grow
    raise NonConvergenceError(
        f"could not bracket phase {target} near moment {center}",
        target=target,
        anchor=center,
    )


def refine_root(
    r: Callable[[float], float],
    lo: float,
    hi: float,
    r_lo: float,
    r_hi: float,
    *,
    tolerance: float,
    max_iterations: int,
    target: float = 0.0,
) -> float:
    """
    Illinois regula falsi on an increasing residual bracketed by [lo, hi].

    Stops when the bracket is narrower than `tolerance` days (returning its
    midpoint) or the residual puts the root within `tolerance`/2 days. Takes a
    bisection step whenever the secant point leaves the bracket or the previous
    step failed to halve it.
    """
    residual_tol = 0.5 * tolerance * MIN_PHASE_RATE_DEG_PER_DAY
    if abs(r_lo) < residual_tol:
        return lo
    if abs(r_hi) < residual_tol:
        return hi

    side = 0
    prev_width = 2.0 * (hi - lo)
    for _ in range(max_iterations):
        width = hi - lo
        if width < tolerance:
            return 0.5 * (lo + hi)

        denom = r_hi - r_lo
        if width > 0.5 * prev_width or denom <= 0.0:
            # secant is not shrinking the bracket
            x = 0.5 * (lo + hi)
        else:
            x = lo - r_lo * width / denom
            if not (lo < x < hi):
                x = 0.5 * (lo + hi)
        prev_width = width

        rx = r(x)
        if abs(rx) < residual_tol:
            return x

        if rx < 0.0:
            lo, r_lo = x, rx
            if side == -1:
                r_hi *= 0.5
            side = -1
        else:
            hi, r_hi = x, rx
            if side == 1:
                r_lo *= 0.5
            side = 1

    raise NonConvergenceError(
        f"phase {target} did not converge within {max_iterations} iterations",
        target=target,
        anchor=0.5 * (lo + hi),
        iterations=max_iterations,
    )


def solve_angle(
    f: Callable[[float], float],
    target: float,
    estimate: float,
    *,
    tolerance: float,
    max_iterations: int,
) -> float:
    """Moment near `estimate` at which the angle function f reaches `target`."""
    r = angle_residual(f, target)
    lo, hi, r_lo, r_hi = bracket_root(r, estimate, target=target)
    return refine_root(
        r, lo, hi, r_lo, r_hi,
        tolerance=tolerance,
        max_iterations=max_iterations,
        target=target,
    )
