#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from lunacal.engines.phase import MEAN_SYNODIC_MONTH
from lunacal.core.time import fixed_from_gregorian


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "lunacal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "lunacal[diagnostics]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Plot lunation lengths (new moon to new moon) over a range of years.")
    p.add_argument("--y0", type=int, default=1900, help="start year")
    p.add_argument("--y1", type=int, default=2100, help="end year")
    p.add_argument("--solver", action="store_true", help="use the root-finding nth_new_moon (slower)")
    p.add_argument("--out", default="lunations.png", help="output image filename")
    args = p.parse_args(argv)

    if args.y1 <= args.y0:
        raise SystemExit("--y1 must be > --y0")

    np = _need_numpy()
    plt = _need_matplotlib()

    if args.solver:
        from lunacal.api import nth_new_moon
    else:
        from lunacal.engines.phase import nth_new_moon
    from lunacal.engines.phase import lunation_index

    n0 = lunation_index(float(fixed_from_gregorian(args.y0, 1, 1)))
    n1 = lunation_index(float(fixed_from_gregorian(args.y1, 1, 1)))

    print(f"Computing new moons {n0}..{n1} ...")
    moons = np.array([nth_new_moon(n) for n in range(n0, n1 + 2)], dtype=float)
    lengths = np.diff(moons)
    years = args.y0 + (moons[:-1] - moons[0]) / 365.2425

    print(f"lunations: {len(lengths)}")
    print(f"  min  = {lengths.min():.5f} d")
    print(f"  max  = {lengths.max():.5f} d")
    print(f"  mean = {lengths.mean():.7f} d  (mean synodic month {MEAN_SYNODIC_MONTH} d)")

    fig, ax = plt.subplots(figsize=(12, 5))
    ax.plot(years, lengths, linewidth=0.8)
    ax.axhline(MEAN_SYNODIC_MONTH, color="k", linestyle="--", linewidth=1, label="mean synodic month")
    ax.set_title("Lunation length (days)")
    ax.set_xlabel("Year")
    ax.set_ylabel("days")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
