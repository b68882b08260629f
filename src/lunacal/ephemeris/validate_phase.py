#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import lunacal
from lunacal.core.time import moment_from_datetime
from lunacal.core.types import PHASES, PhaseEvent
from lunacal.ephemeris import require_ephemeris

# skyfield.almanac.moon_phases codes 0..3
_SKYFIELD_PHASES = ("new_moon", "first_quarter", "full_moon", "last_quarter")


def skyfield_events(y0: int, y1: int, *, cache_dir: str, bsp: str) -> List[Tuple[str, float]]:
    """(phase, UT moment) of each principal phase in [y0-01-01, y1-01-01) per the JPL ephemeris."""
    require_ephemeris()
    from skyfield import almanac
    from skyfield.api import Loader

    load = Loader(cache_dir)
    eph = load(bsp)
    ts = load.timescale()

    t0 = ts.utc(y0, 1, 1)
    t1 = ts.utc(y1, 1, 1)
    times, codes = almanac.find_discrete(t0, t1, almanac.moon_phases(eph))
    return [
        (_SKYFIELD_PHASES[int(code)], moment_from_datetime(t.utc_datetime()))
        for t, code in zip(times, codes)
    ]


def pair_events(
    ours: List[PhaseEvent], ref: List[Tuple[str, float]], *, window_days: float = 2.0
) -> List[Tuple[str, float, float]]:
    """Match each reference event to ours with the same phase within `window_days`."""
    out = []
    for name, t_ref in ref:
        best = None
        for ev in ours:
            if ev.phase != name:
                continue
            if abs(ev.moment - t_ref) <= window_days and (best is None or abs(ev.moment - t_ref) < abs(best - t_ref)):
                best = ev.moment
        if best is not None:
            out.append((name, t_ref, best))
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate principal phase moments against a JPL ephemeris (Skyfield).")
    p.add_argument("--y0", type=int, default=1950)
    p.add_argument("--y1", type=int, default=2050)
    p.add_argument("--bsp", default="de421.bsp", help="ephemeris file (downloaded on first use)")
    p.add_argument("--cache-dir", default=".", help="where Skyfield keeps downloaded files")
    p.add_argument("--max-seconds", type=float, default=120.0, help="report events off by more than this")
    args = p.parse_args(argv)

    if args.y1 <= args.y0:
        raise SystemExit("--y1 must be > --y0")

    print(f"Loading {args.bsp} ...")
    ref = skyfield_events(args.y0, args.y1, cache_dir=args.cache_dir, bsp=args.bsp)
    if not ref:
        raise SystemExit("ephemeris returned no phases for that range")

    start, end = ref[0][1] - 1.0, ref[-1][1] + 1.0
    ours = list(lunacal.phase_events(start, end))
    pairs = pair_events(ours, ref)

    print(f"Compared {len(pairs)} of {len(ref)} events ({args.y0}..{args.y1 - 1})")
    worst = 0.0
    bad = 0
    for name in PHASES:
        errs = [(t_ours - t_ref) * 86400.0 for (n, t_ref, t_ours) in pairs if n == name]
        if not errs:
            continue
        mean = sum(errs) / len(errs)
        peak = max(errs, key=abs)
        worst = max(worst, abs(peak))
        print(f"  {name:14s} n={len(errs):5d}  mean={mean:+8.2f} s  max|err|={abs(peak):7.2f} s")

    for name, t_ref, t_ours in pairs:
        if abs(t_ours - t_ref) * 86400.0 > args.max_seconds:
            bad += 1
            print(f"  OFF  {name:14s} ref R.D. {t_ref:.6f}  ours R.D. {t_ours:.6f}")

    print(f"worst error: {worst:.2f} s")
    missing = len(ref) - len(pairs)
    if missing:
        print(f"unmatched reference events: {missing}")
    return 1 if (bad or missing) else 0


if __name__ == "__main__":
    raise SystemExit(main())
