from __future__ import annotations

import math

from ..reference import astro_args as aa
from ..reference.lunar import lunar_longitude
from ..reference.solar import solar_longitude
from ..reference.tables import NEW_MOON_ADDITIONAL_TERMS, NEW_MOON_CORRECTION_TERMS
from ..reference.time_scales import universal_from_dynamical

MEAN_SYNODIC_MONTH = aa.MEAN_SYNODIC_MONTH

# Lunation 24724 is the first new moon of 2000 (Meeus k = 0).
K0_LUNATION = 24724
LUNATIONS_PER_CENTURY = 1236.85

# Elongation and lunation fraction differ by well under this in a lunation.
PHASE_DISAGREEMENT_DEG = 90.0


def _centuries_of_lunation(n: int) -> tuple[int, float]:
    k = n - K0_LUNATION
    return k, k / LUNATIONS_PER_CENTURY


def mean_new_moon(n: int) -> float:
    """
    Mean new moon of lunation n as a TT moment (R.D.).

    Meeus mean-phase polynomial:
      JDE = 2451550.09766 + 29.530588861 k
            + 0.00015437 T^2 - 0.000000150 T^3 + 0.00000000073 T^4,
      T = k / 1236.85.
    """
    _, c = _centuries_of_lunation(n)
    return aa.J2000 + aa.polynomial(
        c,
        (5.09766, MEAN_SYNODIC_MONTH * LUNATIONS_PER_CENTURY, 0.00015437, -0.000000150, 0.00000000073),
    )


def nth_new_moon(n: int) -> float:
    """
    Moment (UT, R.D.) of the n-th new moon after the new moon of January, year 1.

    Mean phase plus the periodic corrections in the solar anomaly, lunar anomaly
    and argument of latitude, the node term, and the planetary arguments.
    """
    k, c = _centuries_of_lunation(n)
    approx = mean_new_moon(n)
    E = aa.eccentricity_factor(c)
    solar_anomaly = aa.polynomial(
        c, (2.5534, LUNATIONS_PER_CENTURY * 29.10535670, -0.0000014, -0.00000011)
    )
    lunar_anomaly = aa.polynomial(
        c, (201.5643, 385.81693528 * LUNATIONS_PER_CENTURY, 0.0107582, 0.00001238, -0.000000058)
    )
    moon_argument = aa.polynomial(
        c, (160.7108, 390.67050284 * LUNATIONS_PER_CENTURY, -0.0016118, -0.00000227, 0.000000011)
    )
    omega = aa.polynomial(c, (124.7746, -1.56375588 * LUNATIONS_PER_CENTURY, 0.0020672, 0.00000215))

    def term(row) -> float:
        m, mp, f, e_pow, amp = row
        arg = m * solar_anomaly + mp * lunar_anomaly + f * moon_argument
        return amp * (E ** e_pow) * aa.sin_deg(arg)

    correction = -0.00017 * aa.sin_deg(omega) + aa.sigma(NEW_MOON_CORRECTION_TERMS, term)
    extra = 0.000325 * aa.sin_deg(aa.polynomial(c, (299.77, 132.8475848, -0.009173)))
    additional = aa.sigma(
        NEW_MOON_ADDITIONAL_TERMS,
        lambda row: row[2] * aa.sin_deg(row[0] + row[1] * k),
    )
    return universal_from_dynamical(approx + correction + extra + additional)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def lunar_phase(t: float) -> float:
    """
    Lunar phase angle (degrees, [0,360)) at the UT moment t (R.D.).

    This is the elongation λ_moon - λ_sun, which rises continuously through the
    lunation. It is cross-checked against the phase implied by the nearest true
    new moon and the mean lunation rate; only when the two disagree by more
    than PHASE_DISAGREEMENT_DEG (on the circle) is the latter returned.
    """
    phi = aa.wrap_deg(lunar_longitude(t) - solar_longitude(t))
    t0 = nth_new_moon(0)
    n = _round_half_up((t - t0) / MEAN_SYNODIC_MONTH)
    phi_prime = aa.wrap_deg(360.0 * (t - nth_new_moon(n)) / MEAN_SYNODIC_MONTH)
    if abs(aa.wrap180(phi - phi_prime)) > PHASE_DISAGREEMENT_DEG:
        return phi_prime
    return phi


def lunation_index(t: float) -> int:
    """Index n of the last new moon at or before the UT moment t."""
    n = _round_half_up((t - nth_new_moon(0)) / MEAN_SYNODIC_MONTH - lunar_phase(t) / 360.0)
    while nth_new_moon(n) > t:
        n -= 1
    while nth_new_moon(n + 1) <= t:
        n += 1
    return n


def new_moon_at_or_after(t: float) -> float:
    n = lunation_index(t)
    nm = nth_new_moon(n)
    return nm if nm >= t else nth_new_moon(n + 1)


def new_moon_before(t: float) -> float:
    n = lunation_index(t)
    nm = nth_new_moon(n)
    return nm if nm < t else nth_new_moon(n - 1)
