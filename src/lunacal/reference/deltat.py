"""
lunacal.reference.deltat

ΔT (= TT − UT) model used to move between civil Universal Time and uniform
Dynamical Time.

Philosophy
----------
- Inside the historical range, ΔT is the Espenak–Meeus (NASA) piecewise
  polynomial fit, as adopted by Reingold & Dershowitz. Branches are selected by
  the proleptic Gregorian year of the moment, so ΔT is constant within a year.
- Outside it (before −499, after 2150), fall back to the long-term parabola
  −20 + 32 u², u = (year − 1820)/100. Accuracy degrades
  there.

The segments are immutable data; `ephemeris_correction` only looks them up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Protocol, Tuple, Union

from ..core.time import fixed_from_gregorian, gregorian_year_from_fixed
from .astro_args import polynomial

SECONDS_PER_DAY = 86400.0


class DeltaTModel(Protocol):
    """ΔT for a Gregorian year, in days."""
    def delta_t_days(self, year: int) -> float: ...
    def info(self) -> Dict[str, object]: ...


@dataclass(frozen=True)
class PolyDeltaT(DeltaTModel):
    """
    ΔT(year) = Σ_{k} coeff[k] * u^k seconds, where u = (year - y0) / scale.
    """
    coeff: Tuple[float, ...]
    y0: float
    scale: float = 1.0

    def delta_t_days(self, year: int) -> float:
        u = (year - self.y0) / self.scale
        return polynomial(u, self.coeff) / SECONDS_PER_DAY

    def info(self) -> Dict[str, object]:
        return {"type": "poly", "coeff": self.coeff, "y0": self.y0, "scale": self.scale}


@dataclass(frozen=True)
class CenturyDeltaT(DeltaTModel):
    """
    ΔT(year) = Σ_{k} coeff[k] * c^k days, where c is the number of Julian
    centuries from 1900-01-01 to 1 July of the year.
    """
    coeff: Tuple[float, ...]

    def delta_t_days(self, year: int) -> float:
        c = (fixed_from_gregorian(year, 7, 1) - fixed_from_gregorian(1900, 1, 1)) / 36525.0
        return polynomial(c, self.coeff)

    def info(self) -> Dict[str, object]:
        return {"type": "century", "coeff": self.coeff}


@dataclass(frozen=True)
class ParabolaDeltaT(DeltaTModel):
    """
    Long-term parabola ΔT = a + b*u^2 seconds, u = (year - y0)/100, with an
    optional linear term fade*(fade_end - year) that joins it to the modern fit.
    """
    a: float = -20.0
    b: float = 32.0
    y0: float = 1820.0
    fade: float = 0.0
    fade_end: float = 2150.0

    def delta_t_days(self, year: int) -> float:
        u = (year - self.y0) / 100.0
        seconds = self.a + self.b * u * u + self.fade * (self.fade_end - year)
        return seconds / SECONDS_PER_DAY

    def info(self) -> Dict[str, object]:
        return {"type": "parabola", "a": self.a, "b": self.b, "y0": self.y0, "fade": self.fade}


AnyDeltaT = Union[PolyDeltaT, CenturyDeltaT, ParabolaDeltaT]

# (first_year, last_year, model), both ends inclusive.
DELTA_T_SEGMENTS: Tuple[Tuple[int, int, AnyDeltaT], ...] = (
    (2051, 2150, ParabolaDeltaT(fade=0.5628)),
    (2006, 2050, PolyDeltaT((62.92, 0.32217, 0.005589), y0=2000.0)),
    (1987, 2005, PolyDeltaT(
        (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599),
        y0=2000.0,
    )),
    (1900, 1986, CenturyDeltaT(
        (-0.00002, 0.000297, 0.025184, -0.181133, 0.553040, -0.861938, 0.677066, -0.212591),
    )),
    (1800, 1899, CenturyDeltaT((
        -0.000009, 0.003844, 0.083563, 0.865736, 4.867575, 15.845535,
        31.332267, 38.291999, 28.316289, 11.636204, 2.043794,
    ))),
    (1700, 1799, PolyDeltaT((8.118780842, -0.005092142, 0.003336121, -0.0000266484), y0=1700.0)),
    (1600, 1699, PolyDeltaT((120.0, -0.9808, -0.01532, 0.000140272128), y0=1600.0)),
    (500, 1599, PolyDeltaT(
        (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073),
        y0=1000.0,
        scale=100.0,
    )),
    (-499, 499, PolyDeltaT(
        (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521),
        y0=0.0,
        scale=100.0,
    )),
)

LONG_TERM = ParabolaDeltaT()

TABULATED_RANGE: Tuple[int, int] = (-499, 2150)


def model_for_year(year: int) -> AnyDeltaT:
    for first, last, model in DELTA_T_SEGMENTS:
        if first <= year <= last:
            return model
    return LONG_TERM


def delta_t_days_for_year(year: int) -> float:
    return model_for_year(year).delta_t_days(year)


def ephemeris_correction(t: float) -> float:
    """ΔT in days for the moment t (R.D.)."""
    return delta_t_days_for_year(gregorian_year_from_fixed(t))


def delta_t_seconds(t: float) -> float:
    """Convenience wrapper: ΔT in seconds for the moment t (R.D.)."""
    return ephemeris_correction(t) * SECONDS_PER_DAY


def in_tabulated_range(t: float) -> bool:
    y = gregorian_year_from_fixed(t)
    return TABULATED_RANGE[0] <= y <= TABULATED_RANGE[1]
