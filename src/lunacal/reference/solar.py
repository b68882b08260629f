# reference/solar.py

from __future__ import annotations

from dataclasses import dataclass

from . import astro_args as aa
from . import time_scales as ts
from .tables import SOLAR_LONGITUDE_TERMS

# Series amplitudes are in units of 1e-7 radian.
_SERIES_SCALE = 0.000005729577951308232


@dataclass(frozen=True)
class SolarCoordinates:
    """Mean-equinox and apparent solar longitude (degrees)."""
    L_true_deg: float
    L_app_deg: float


def solar_position_centuries(c: float) -> SolarCoordinates:
    """
    Solar longitude for c Julian centuries of TT from J2000.0.

    The true longitude is the 49-term series; the apparent longitude adds
    aberration and nutation.
    """
    lam = (
        282.7771834
        + 36000.76953744 * c
        + _SERIES_SCALE * aa.sigma(
            SOLAR_LONGITUDE_TERMS,
            lambda row: row[0] * aa.sin_deg(row[1] + row[2] * c),
        )
    )
    return SolarCoordinates(
        L_true_deg=aa.wrap_deg(lam),
        L_app_deg=aa.wrap_deg(lam + aa.aberration(c) + aa.nutation(c)),
    )


def solar_longitude(t: float) -> float:
    """Apparent solar longitude (degrees) at the UT moment t (R.D.)."""
    return solar_position_centuries(ts.julian_centuries(t)).L_app_deg
