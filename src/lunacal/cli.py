from __future__ import annotations

import argparse
import calendar as pycal
from datetime import date, datetime, timedelta, timezone
import sys
import re
import importlib
import inspect


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_PHASE_ALIASES = {
    "new": "new_moon",
    "first": "first_quarter",
    "full": "full_moon",
    "last": "last_quarter",
}


def _parse_ymd(s: str) -> date:
    if not _DATE_RE.match(s):
        raise SystemExit(f"expected YYYY-MM-DD, got '{s}'")
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_datetime(s: str) -> datetime:
    """ISO 8601 datetime; a trailing 'Z' or a missing offset means UTC."""
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as e:
        raise SystemExit(f"bad datetime '{s}': {e}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_target(s: str):
    if s in _PHASE_ALIASES:
        return _PHASE_ALIASES[s]
    try:
        return float(s)
    except ValueError:
        raise SystemExit(f"--phase must be one of {sorted(_PHASE_ALIASES)} or an angle in degrees") from None


def _add_moment_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group()
    g.add_argument("--rd", type=float, help="moment as R.D. (UT)")
    g.add_argument("--datetime", dest="when", help="ISO datetime (default: now, UTC)")


def _moment_from_args(args: argparse.Namespace) -> float:
    from lunacal.core.time import moment_from_datetime

    if args.rd is not None:
        return float(args.rd)
    dt = _parse_datetime(args.when) if args.when else datetime.now(timezone.utc)
    return moment_from_datetime(dt)


def _fmt_moment(t: float) -> str:
    from lunacal.core.time import datetime_from_moment

    try:
        stamp = datetime_from_moment(t).strftime("%Y-%m-%d %H:%M:%S UTC")
    except ValueError:
        stamp = "(outside datetime range)"
    return f"R.D. {t:.6f}  {stamp}"


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_phase(argv: list[str]) -> int:
    import lunacal
    from lunacal.core.types import PHASE_EMOJI, phase_from_range

    p = argparse.ArgumentParser(prog="lunacal phase", description="Lunar phase angle at a moment.")
    _add_moment_args(p)
    args = p.parse_args(argv)

    t = _moment_from_args(args)
    angle = lunacal.phase_at(t)
    # label the instant by the phase over the next minute
    name = phase_from_range(angle, lunacal.phase_at(t + 1.0 / 1440.0))
    print(_fmt_moment(t))
    print(f"phase = {angle:.6f} deg  {name} {PHASE_EMOJI[name]}")
    return 0


def _cmd_step(argv: list[str], *, forward: bool) -> int:
    import lunacal

    prog = "lunacal next" if forward else "lunacal prev"
    p = argparse.ArgumentParser(prog=prog, description="Moment of the next/previous occurrence of a phase.")
    p.add_argument("--phase", default="new", help="new|first|full|last or an angle in degrees")
    _add_moment_args(p)
    args = p.parse_args(argv)

    t = _moment_from_args(args)
    target = _parse_target(args.phase)
    hit = lunacal.next_phase(t, target) if forward else lunacal.previous_phase(t, target)
    print(_fmt_moment(hit))
    return 0


def cmd_new_moon(argv: list[str]) -> int:
    import lunacal

    p = argparse.ArgumentParser(prog="lunacal new-moon", description="Moment of the n-th new moon (0 = January, year 1).")
    p.add_argument("n", type=int, help="lunation index")
    args = p.parse_args(argv)

    print(f"n = {args.n}")
    print(_fmt_moment(lunacal.nth_new_moon(args.n)))
    return 0


def cmd_events(argv: list[str]) -> int:
    import lunacal
    from lunacal.core.types import PHASE_EMOJI

    p = argparse.ArgumentParser(prog="lunacal events", description="Principal phases between two dates (inclusive).")
    p.add_argument("start", help="YYYY-MM-DD")
    p.add_argument("end", help="YYYY-MM-DD (earlier than start lists backward)")
    args = p.parse_args(argv)

    start, end = _parse_ymd(args.start), _parse_ymd(args.end)
    for name, d in lunacal.daily_phase_events(start, end):
        print(f"{d.isoformat()}  {PHASE_EMOJI[name]}  {name}")
    return 0


def cmd_month(argv: list[str]) -> int:
    import lunacal
    from lunacal.core.types import PHASE_EMOJI, is_principal

    p = argparse.ArgumentParser(prog="lunacal month", description="cal(1)-style month with principal phases as emoji.")
    p.add_argument("month", nargs="?", help="YYYY-MM (default: current UTC month)")
    args = p.parse_args(argv)

    today = datetime.now(timezone.utc).date()
    if args.month:
        try:
            y, m = map(int, args.month.split("-"))
        except ValueError:
            raise SystemExit(f"expected YYYY-MM, got '{args.month}'") from None
    else:
        y, m = today.year, today.month

    first = date(y, m, 1)
    last = date(y, m, pycal.monthrange(y, m)[1])

    print(f"{first.strftime('%B %Y'):^20}")
    print("Su Mo Tu We Th Fr Sa")
    pad = (first.weekday() + 1) % 7  # Sunday=0
    line = "   " * pad
    d = first
    while d <= last:
        name = lunacal.daily_phase(d)
        cell = PHASE_EMOJI[name] if is_principal(name) else f"{d.day:>2}"
        if d == today:
            cell = f"\x1b[7m{cell}\x1b[27m"
        line += cell
        if d.weekday() == 5:
            print(line)
            line = ""
        else:
            line += " "
        d += timedelta(days=1)
    if line:
        print(line.rstrip())
    return 0


def cmd_deltat(argv: list[str]) -> int:
    from lunacal.reference import deltat as dt
    from lunacal.reference import time_scales as ts

    p = argparse.ArgumentParser(prog="lunacal deltat", description="Delta T (TT - UT) and both time scales at a moment.")
    _add_moment_args(p)
    args = p.parse_args(argv)

    t = _moment_from_args(args)
    print(f"UT  = R.D. {t:.8f}")
    print(f"TT  = R.D. {ts.dynamical_from_universal(t):.8f}")
    print(f"ΔT  = {dt.delta_t_seconds(t):.3f} s")
    if not dt.in_tabulated_range(t):
        print("(outside the fitted polynomial range: long-term parabola)")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `lunacal YYYY-MM-DD ...` lists that day's phase
    if argv and _DATE_RE.match(argv[0]):
        return cmd_phase(["--datetime", argv[0]] + argv[1:])

    p = argparse.ArgumentParser(prog="lunacal", description="Lunar phase toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("phase", help="Lunar phase angle at a moment")
    sub.add_parser("next", help="Next occurrence of a phase")
    sub.add_parser("prev", help="Previous occurrence of a phase")
    sub.add_parser("new-moon", help="Moment of the n-th new moon")
    sub.add_parser("events", help="Principal phases between two dates")
    sub.add_parser("month", help="Month calendar with phase emoji")
    sub.add_parser("deltat", help="Delta T and UT/TT at a moment")

    # diagnostics (non-ephem)
    p_diag = sub.add_parser("diag", help="Diagnostics tools (no ephemeris required)")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "lunations", "deltat-plot"],
        help="Which diagnostic to run",
    )

    # ephem diagnostics
    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument("tool", choices=["validate"], help="Which ephemeris diagnostic to run")

    args, rest = p.parse_known_args(argv)

    try:
        if args.cmd == "phase":
            return cmd_phase(rest)

        if args.cmd == "next":
            return _cmd_step(rest, forward=True)

        if args.cmd == "prev":
            return _cmd_step(rest, forward=False)

        if args.cmd == "new-moon":
            return cmd_new_moon(rest)

        if args.cmd == "events":
            return cmd_events(rest)

        if args.cmd == "month":
            return cmd_month(rest)

        if args.cmd == "deltat":
            return cmd_deltat(rest)
    except (ValueError, ArithmeticError) as e:
        raise SystemExit(f"lunacal {args.cmd}: {e}") from e

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "lunacal.diagnostics.round_trip",
            "lunations": "lunacal.diagnostics.lunations",
            "deltat-plot": "lunacal.diagnostics.plot_deltat",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "ephem":
        tool_map = {
            "validate": "lunacal.ephemeris.validate_phase",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
