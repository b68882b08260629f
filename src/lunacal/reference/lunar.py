# reference/lunar.py

from __future__ import annotations

from dataclasses import dataclass

from . import astro_args as aa
from . import time_scales as ts
from .tables import LUNAR_LONGITUDE_TERMS


@dataclass(frozen=True)
class LunarCoordinates:
    """Mean-equinox and apparent lunar longitude (degrees)."""
    L_true_deg: float
    L_app_deg: float


def lunar_position_centuries(c: float) -> LunarCoordinates:
    """
    Lunar longitude for c Julian centuries of TT from J2000.0.
    """
    fa = aa.fundamental_args(c)
    E = aa.eccentricity_factor(c)

    def term(row) -> float:
        d, m, mp, f, coef = row
        arg = d * fa.D_deg + m * fa.M_deg + mp * fa.Mp_deg + f * fa.F_deg
        return coef * (E ** abs(m)) * aa.sin_deg(arg)

    correction = aa.sigma(LUNAR_LONGITUDE_TERMS, term) * 1e-6

    # Venus, Jupiter and flattening of the Earth
    venus = 0.003958 * aa.sin_deg(119.75 + c * 131.849)
    jupiter = 0.000318 * aa.sin_deg(53.09 + c * 479264.29)
    flat_earth = 0.001962 * aa.sin_deg(fa.Lp_deg - fa.F_deg)

    L_true = fa.Lp_deg + correction + venus + jupiter + flat_earth
    return LunarCoordinates(
        L_true_deg=aa.wrap_deg(L_true),
        L_app_deg=aa.wrap_deg(L_true + aa.nutation(c)),
    )


def lunar_longitude(t: float) -> float:
    """Apparent lunar longitude (degrees) at the UT moment t (R.D.)."""
    return lunar_position_centuries(ts.julian_centuries(t)).L_app_deg
