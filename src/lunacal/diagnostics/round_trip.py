from __future__ import annotations

import argparse
import random
from datetime import date
from typing import Optional

import lunacal
from lunacal.core.time import moment_from_date


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_moment(start: float, end: float) -> float:
    return start + random.random() * (end - start)


def roundtrip_test(
    N: int,
    start: float,
    end: float,
    seed: int,
    *,
    tolerance_days: float,
    max_failures: int,
) -> int:
    """
    phase_at(t) -> nearest_phase(t, phase) should land back on t, and the
    new moons on either side of t should be one lunation apart.
    """
    random.seed(seed)
    failures = 0

    for _ in range(N):
        t0 = random_moment(start, end)
        angle = lunacal.phase_at(t0)
        back = lunacal.nearest_phase(t0, angle)
        if abs(back - t0) > tolerance_days:
            failures += 1
            print("\nFAIL (phase -> moment)")
            print("t0:", t0)
            print("phase:", angle)
            print("back:", back, " diff (s):", (back - t0) * 86400.0)
            if failures >= max_failures:
                return failures

        prev_nm = lunacal.previous_phase(t0, "new_moon")
        next_nm = lunacal.next_phase(t0, "new_moon")
        span = next_nm - prev_nm
        if not (prev_nm < t0 < next_nm and 29.0 <= span <= 30.0):
            failures += 1
            print("\nFAIL (lunation)")
            print("t0:", t0)
            print("prev new moon:", prev_nm)
            print("next new moon:", next_nm)
            print("span:", span)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: moment -> phase -> moment.")
    p.add_argument("--N", type=int, default=2000, help="Number of trials.")
    p.add_argument("--start", type=str, default="1600-01-01", help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default="2400-12-31", help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--tolerance", type=float, default=1e-5, help="Allowed round-trip error in days.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures.")
    args = p.parse_args(argv)

    start = moment_from_date(parse_date(args.start))
    end = moment_from_date(parse_date(args.end))

    if end < start:
        raise SystemExit("--end must be >= --start")

    print(f"Testing {args.N} moments from {args.start} to {args.end} ...")
    failures = roundtrip_test(
        args.N, start, end, args.seed,
        tolerance_days=args.tolerance,
        max_failures=args.max_failures,
    )

    if failures == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {failures}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
