from __future__ import annotations

from datetime import datetime

from ..core.time import datetime_from_moment, moment_from_datetime
from .astro_args import J2000, T_centuries
from .deltat import ephemeris_correction


# ============================================================
# TT <-> UT conversions (via ΔT)
# ============================================================

def dynamical_from_universal(t: float) -> float:
    """
    Convert a UT moment (R.D.) to Dynamical Time:
      TT = UT + ΔT(UT)
    """
    return t + ephemeris_correction(t)


def universal_from_dynamical(t_tt: float) -> float:
    """
    Approximate inverse of dynamical_from_universal.

    Solve:
      t_tt = t + ΔT(t)

    We do 2 fixed-point iterations. ΔT is constant within a Gregorian year, so
    this is exact wherever ΔT does not fall from one year to the next. Where it
    falls, TT moments near the New Year have two UT preimages and the one in
    the TT year is returned: a UT moment within that fall of the New Year comes
    back off by the fall (late while ΔT is positive). Over -499..2150 the
    largest fall is about 18 s (2.1e-4 days), at the start of the range.
    """
    t = t_tt
    for _ in range(2):
        t = t_tt - ephemeris_correction(t)
    return t


# Public names of the pair.
to_dynamical = dynamical_from_universal
to_universal = universal_from_dynamical


# ============================================================
# Julian centuries from J2000.0 (TT)
# ============================================================

def julian_centuries(t: float) -> float:
    """
    Julian centuries of Dynamical Time from J2000.0 for the UT moment t.
    """
    return T_centuries(dynamical_from_universal(t))


def moment_from_centuries(c: float) -> float:
    """TT moment for c Julian centuries from J2000.0."""
    return J2000 + 36525.0 * c


# ============================================================
# datetime(UTC) helpers
# ============================================================

def datetime_to_dynamical(dt: datetime) -> float:
    """Timezone-aware datetime -> TT moment (R.D.)."""
    return dynamical_from_universal(moment_from_datetime(dt))


def dynamical_to_datetime(t_tt: float) -> datetime:
    """TT moment (R.D.) -> timezone-aware UTC datetime."""
    return datetime_from_moment(universal_from_dynamical(t_tt))
