"""Ephemeris adapters/providers (optional).

This package compares the closed-form phase engine against a JPL ephemeris
through Skyfield. Install with:
  pip install "lunacal[ephemeris]"
"""

def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import skyfield  # noqa: F401
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "lunacal[ephemeris]"') from e
