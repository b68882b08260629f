from __future__ import annotations

from dataclasses import dataclass
from math import cos, fmod, radians, sin
from typing import Callable, Iterable, Sequence, TypeVar

Row = TypeVar("Row")


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    # -1e-17 + 360.0 rounds to 360.0
    if y >= 360.0:
        y = 0.0
    return y


def wrap180(deg: float) -> float:
    """Wraps an angle in degrees to the range (-180.0, 180.0]."""
    y = wrap_deg(deg)
    return y - 360.0 if y > 180.0 else y


def sin_deg(x_deg: float) -> float:
    return sin(radians(wrap_deg(x_deg)))


def cos_deg(x_deg: float) -> float:
    return cos(radians(wrap_deg(x_deg)))


def polynomial(x: float, coeffs: Sequence[float]) -> float:
    """Horner evaluation for Σ coeffs[k] x^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * x + c
    return acc


def sigma(table: Iterable[Row], fn: Callable[[Row], float]) -> float:
    """Sum fn(row) over a constant table, in table order."""
    total = 0.0
    for row in table:
        total += fn(row)
    return total


# ------------------------------------------------------------
# Time variable (TT), R.D. moments
# ------------------------------------------------------------

J2000 = 730120.5  # R.D. of 2000-01-01 12:00


def T_centuries(t_tt: float) -> float:
    """Julian centuries from J2000.0 for a dynamical-time moment."""
    return (t_tt - J2000) / 36525.0


# ------------------------------------------------------------
# Mean periods (days)
# ------------------------------------------------------------

# Coefficient of k in the mean new moon polynomial.
MEAN_SYNODIC_MONTH = 29.530588861


def synodic_month_days(T: float) -> float:
    """
    Mean synodic month length in days (ELP2000/Meeus):
      29.5305888531 + 2.1621e-7 T - 3.64e-10 T^2
    """
    return 29.5305888531 + 2.1621e-7 * T - 3.64e-10 * (T * T)


# ------------------------------------------------------------
# Fundamental arguments (Meeus / ELP2000-style; degrees)
# ------------------------------------------------------------

@dataclass(frozen=True)
class FundamentalArgs:
    """Mean elements in degrees, wrapped to [0,360)."""
    Lp_deg: float   # mean lunar longitude
    D_deg: float    # mean elongation
    M_deg: float    # solar anomaly
    Mp_deg: float   # lunar anomaly
    F_deg: float    # moon argument of latitude (from the node)


def fundamental_args(c: float) -> FundamentalArgs:
    """
    Fundamental arguments for c Julian centuries of TT:
      L' = 218.3164477 + 481267.88123421 c - 0.0015786 c^2 + c^3/538841 - c^4/65194000
      D  = 297.8501921 + 445267.1114034  c - 0.0018819 c^2 + c^3/545868  - c^4/113065000
      M  = 357.5291092 + 35999.0502909  c - 0.0001536 c^2 + c^3/24490000
      M' = 134.9633964 + 477198.8675055 c + 0.0087414 c^2 + c^3/69699   - c^4/14712000
      F  = 93.2720950  + 483202.0175233 c - 0.0036539 c^2 - c^3/3526000 + c^4/863310000
    """
    Lp = polynomial(c, (218.3164477, 481267.88123421, -0.0015786, 1.0 / 538841.0, -1.0 / 65194000.0))
    D = polynomial(c, (297.8501921, 445267.1114034, -0.0018819, 1.0 / 545868.0, -1.0 / 113065000.0))
    M = polynomial(c, (357.5291092, 35999.0502909, -0.0001536, 1.0 / 24490000.0))
    Mp = polynomial(c, (134.9633964, 477198.8675055, 0.0087414, 1.0 / 69699.0, -1.0 / 14712000.0))
    F = polynomial(c, (93.2720950, 483202.0175233, -0.0036539, -1.0 / 3526000.0, 1.0 / 863310000.0))
    return FundamentalArgs(
        Lp_deg=wrap_deg(Lp),
        D_deg=wrap_deg(D),
        M_deg=wrap_deg(M),
        Mp_deg=wrap_deg(Mp),
        F_deg=wrap_deg(F),
    )


def eccentricity_factor(c: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Scales lunar perturbations that depend on the Sun's mean anomaly.
    """
    return polynomial(c, (1.0, -0.002516, -0.0000074))


# ------------------------------------------------------------
# Nutation & aberration (degrees)
# ------------------------------------------------------------

def nutation(c: float) -> float:
    """Nutation in longitude, leading two terms."""
    a = polynomial(c, (124.90, -1934.134, 0.002063))
    b = polynomial(c, (201.11, 72001.5377, 0.00057))
    return -0.004778 * sin_deg(a) - 0.0003667 * sin_deg(b)


def aberration(c: float) -> float:
    """Annual aberration of the Sun's apparent longitude."""
    return 0.0000974 * cos_deg(177.63 + 35999.01848 * c) - 0.005575
