"""Diagnostics package.

- diagnostics: light-weight checks of the phase engine (no ephemeris)
- lunacal.ephemeris: optional comparison against a JPL ephemeris (requires ephemeris extras)
"""

__all__ = ["round_trip", "lunations", "plot_deltat"]
