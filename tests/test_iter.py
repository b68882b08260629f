# tests/test_iter.py

import itertools
import pytest
from datetime import date, timezone

import lunacal
from lunacal.core.time import moment_from_date
from lunacal.core.types import PHASE_EMOJI, PhaseEvent, phase_from_range, principal_from_angle

OCT_1 = moment_from_date(date(2020, 10, 1))
NOV_1 = moment_from_date(date(2020, 11, 1))

OCTOBER_2020 = [
    ("full_moon", date(2020, 10, 1)),
    ("last_quarter", date(2020, 10, 10)),
    ("new_moon", date(2020, 10, 16)),
    ("first_quarter", date(2020, 10, 23)),
    ("full_moon", date(2020, 10, 31)),
]

def test_october_2020_forward():
    events = list(lunacal.phase_events(OCT_1, NOV_1))
    assert [e.phase for e in events] == [p for p, _ in OCTOBER_2020]
    assert [e.datetime.date() for e in events] == [d for _, d in OCTOBER_2020]
    assert all(a.moment < b.moment for a, b in zip(events, events[1:]))

def test_october_2020_reverse():
    events = list(lunacal.phase_events(NOV_1, OCT_1))
    assert [e.phase for e in events] == [p for p, _ in reversed(OCTOBER_2020)]
    assert all(a.moment > b.moment for a, b in zip(events, events[1:]))

def test_daily_events_forward_and_reverse():
    assert list(lunacal.daily_phase_events(date(2020, 10, 1), date(2020, 11, 1))) == OCTOBER_2020
    assert list(lunacal.daily_phase_events(date(2020, 11, 1), date(2020, 10, 1))) == OCTOBER_2020[::-1]

def test_daily_events_bounds_are_inclusive():
    assert list(lunacal.daily_phase_events(date(2020, 10, 16), date(2020, 10, 16))) == [
        ("new_moon", date(2020, 10, 16))
    ]
    assert list(lunacal.daily_phase_events(date(2020, 10, 2), date(2020, 10, 9))) == []

def test_unbounded_iteration():
    events = list(itertools.islice(lunacal.phase_events(OCT_1), 9))
    assert [e.phase for e in events[:5]] == [p for p, _ in OCTOBER_2020]
    for a, b in zip(events, events[1:]):
        assert 5.5 <= b.moment - a.moment <= 9.0
        assert (b.angle - a.angle) % 360.0 == 90.0

def test_start_bound_inclusion():
    first = next(lunacal.phase_events(OCT_1))
    full = first.moment

    again = next(lunacal.phase_events(full, full + 10.0))
    assert again.phase == "full_moon"
    assert again.moment == pytest.approx(full, abs=2e-6)

    skipped = next(lunacal.phase_events(full, full + 10.0, start_inclusive=False))
    assert skipped.phase == "last_quarter"

def test_end_bound_inclusion():
    full = next(lunacal.phase_events(OCT_1)).moment
    assert [e.phase for e in lunacal.phase_events(full - 5.0, full)] == ["full_moon"]
    assert list(lunacal.phase_events(full - 5.0, full, end_inclusive=False)) == []

def test_daily_phase_names():
    assert lunacal.daily_phase(date(2020, 10, 1)) == "full_moon"
    assert lunacal.daily_phase(date(2020, 10, 5)) == "waning_gibbous"
    assert lunacal.daily_phase(date(2020, 10, 10)) == "last_quarter"
    assert lunacal.daily_phase(date(2020, 10, 13)) == "waning_crescent"
    assert lunacal.daily_phase(date(2020, 10, 16)) == "new_moon"
    assert lunacal.daily_phase(date(2020, 10, 20)) == "waxing_crescent"
    assert lunacal.daily_phase(date(2020, 10, 23)) == "first_quarter"
    assert lunacal.daily_phase(date(2020, 10, 27)) == "waxing_gibbous"
    assert lunacal.daily_phase(date(2020, 10, 31)) == "full_moon"

def test_phase_from_range():
    assert phase_from_range(359.0, 1.0) == "new_moon"
    assert phase_from_range(0.0, 2.0) == "new_moon"
    assert phase_from_range(37.0, 39.0) == "waxing_crescent"
    assert phase_from_range(88.0, 90.0) == "waxing_crescent"
    assert phase_from_range(89.0, 91.0) == "first_quarter"
    assert phase_from_range(90.0, 92.0) == "first_quarter"
    assert phase_from_range(132.0, 134.0) == "waxing_gibbous"
    assert phase_from_range(178.0, 180.0) == "waxing_gibbous"
    assert phase_from_range(179.0, 181.0) == "full_moon"
    assert phase_from_range(180.0, 182.0) == "full_moon"
    assert phase_from_range(216.0, 218.0) == "waning_gibbous"
    assert phase_from_range(268.0, 270.0) == "waning_gibbous"
    assert phase_from_range(269.0, 271.0) == "last_quarter"
    assert phase_from_range(270.0, 272.0) == "last_quarter"
    assert phase_from_range(314.0, 316.0) == "waning_crescent"
    assert phase_from_range(358.0, 0.0) == "waning_crescent"

def test_phase_event_properties():
    ev = PhaseEvent(phase="full_moon", moment=737729.617352)
    assert ev.angle == 180.0
    assert ev.emoji == PHASE_EMOJI["full_moon"] == "\U0001F315"
    assert ev.datetime.tzinfo is timezone.utc
    assert ev.datetime.date() == date(2020, 10, 31)
    with pytest.raises(AttributeError):
        ev.moment = 0.0

def test_principal_from_angle():
    assert principal_from_angle(0.0) == "new_moon"
    assert principal_from_angle(90.0) == "first_quarter"
    assert principal_from_angle(180.0) == "full_moon"
    assert principal_from_angle(270.0) == "last_quarter"
    assert principal_from_angle(360.0) == "new_moon"
