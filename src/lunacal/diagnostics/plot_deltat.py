#!/usr/bin/env python3
from __future__ import annotations

import argparse


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


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot Delta T (TT-UT) using lunacal.reference.deltat.")
    p.add_argument("--y0", type=int, default=-500, help="start year")
    p.add_argument("--y1", type=int, default=2150, help="end year")
    p.add_argument("--out", default="deltat.png", help="output image filename")
    p.add_argument("--show-long-term", action="store_true", help="also plot the long-term parabola everywhere")
    args = p.parse_args(argv)

    if args.y1 < args.y0:
        raise SystemExit("--y1 must be >= --y0")

    np = _need_numpy()
    plt = _need_matplotlib()

    from lunacal.reference import deltat as dt

    # ΔT is evaluated per Gregorian year
    ys = np.arange(args.y0, args.y1 + 1, dtype=int)
    best = np.array([dt.delta_t_days_for_year(int(y)) * dt.SECONDS_PER_DAY for y in ys], dtype=float)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(ys, best, linewidth=2, label="piecewise (Espenak–Meeus)")

    if args.show_long_term:
        lt = np.array([dt.LONG_TERM.delta_t_days(int(y)) * dt.SECONDS_PER_DAY for y in ys], dtype=float)
        ax.plot(ys, lt, linewidth=1.5, linestyle="--", label="long-term parabola")

        fig2, ax2 = plt.subplots(figsize=(10, 3))
        ax2.plot(ys, best - lt, linewidth=2)
        ax2.set_title("piecewise - parabola (seconds)")
        ax2.set_xlabel("Year")
        ax2.set_ylabel("ΔT_piecewise - ΔT_parabola")
        ax2.grid(True, alpha=0.3)
        fig2.tight_layout()
        fig2.savefig("deltat_diff.png", dpi=200)
        print("Saved: deltat_diff.png")

    for first, _last, _model in dt.DELTA_T_SEGMENTS:
        if args.y0 <= first <= args.y1:
            ax.axvline(first, color="gray", linewidth=0.5, alpha=0.5)

    ax.set_title("Delta T = TT − UT (seconds)")
    ax.set_xlabel("Year")
    ax.set_ylabel("ΔT (s)")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
