from datetime import date, datetime

import pytest

from worktime.core.enums import AttendanceStatus, EntryKind
from worktime.tracking.calculator.standard_calculator import StandardHoursCalculator
from worktime.tracking.model import AttendanceRecord, TimeEntry


def _entry(kind: EntryKind, hour: int, minute: int = 0) -> TimeEntry:
    return TimeEntry(kind=kind, timestamp=datetime(2026, 2, 2, hour, minute))


def test_single_interval():
    calc = StandardHoursCalculator()
    totals = calc.totals([_entry(EntryKind.CHECK_IN, 9), _entry(EntryKind.CHECK_OUT, 17, 30)])

    assert totals.work_hours == pytest.approx(8.5)
    assert totals.break_hours == 0


def test_break_is_excluded_from_work():
    calc = StandardHoursCalculator()
    totals = calc.totals(
        [
            _entry(EntryKind.CHECK_IN, 9),
            _entry(EntryKind.BREAK_START, 13),
            _entry(EntryKind.BREAK_END, 14),
            _entry(EntryKind.CHECK_OUT, 18),
        ]
    )

    assert totals.work_hours == pytest.approx(8.0)
    assert totals.break_hours == pytest.approx(1.0)


def test_unmatched_check_in_is_overwritten():
    calc = StandardHoursCalculator()
    totals = calc.totals(
        [
            _entry(EntryKind.CHECK_IN, 8),
            _entry(EntryKind.CHECK_IN, 10),
            _entry(EntryKind.CHECK_OUT, 12),
        ]
    )

    assert totals.work_hours == pytest.approx(2.0)


def test_closing_events_without_opener_are_ignored():
    calc = StandardHoursCalculator()
    totals = calc.totals([_entry(EntryKind.CHECK_OUT, 12), _entry(EntryKind.BREAK_END, 13)])

    assert totals.work_hours == 0
    assert totals.break_hours == 0


def test_open_session_contributes_nothing_until_closed():
    calc = StandardHoursCalculator()
    totals = calc.totals([_entry(EntryKind.CHECK_IN, 9), _entry(EntryKind.BREAK_START, 12)])

    assert totals.work_hours == pytest.approx(3.0)
    assert totals.break_hours == 0


def test_backdated_check_out_never_goes_negative():
    calc = StandardHoursCalculator()
    totals = calc.totals([_entry(EntryKind.CHECK_IN, 12), _entry(EntryKind.CHECK_OUT, 9)])

    assert totals.work_hours == 0


def test_recompute_is_idempotent():
    calc = StandardHoursCalculator()
    record = AttendanceRecord(
        worker_id="w1",
        work_day=date(2026, 2, 2),
        entries=(
            _entry(EntryKind.CHECK_IN, 9),
            _entry(EntryKind.BREAK_START, 12),
            _entry(EntryKind.BREAK_END, 12, 45),
            _entry(EntryKind.CHECK_OUT, 17),
        ),
    )

    once = calc.recompute(record)
    twice = calc.recompute(once)

    assert once.total_work_hours == twice.total_work_hours == pytest.approx(7.25)
    assert once.total_break_hours == twice.total_break_hours == pytest.approx(0.75)


def test_live_totals_treat_now_as_provisional_close():
    calc = StandardHoursCalculator()
    record = AttendanceRecord(
        worker_id="w1",
        work_day=date(2026, 2, 2),
        entries=(_entry(EntryKind.CHECK_IN, 9),),
        status=AttendanceStatus.CHECKED_IN,
    )

    live = calc.live_totals(record, datetime(2026, 2, 2, 11, 30))

    assert live.work_hours == pytest.approx(2.5)
    assert calc.recompute(record).total_work_hours == 0


def test_live_totals_during_break_count_break_not_work():
    calc = StandardHoursCalculator()
    record = AttendanceRecord(
        worker_id="w1",
        work_day=date(2026, 2, 2),
        entries=(_entry(EntryKind.CHECK_IN, 9), _entry(EntryKind.BREAK_START, 12)),
        status=AttendanceStatus.ON_BREAK,
    )

    live = calc.live_totals(record, datetime(2026, 2, 2, 12, 30))

    assert live.work_hours == pytest.approx(3.0)
    assert live.break_hours == pytest.approx(0.5)


def test_totals_never_negative_for_any_ordering():
    from itertools import permutations

    calc = StandardHoursCalculator()
    entries = [
        _entry(EntryKind.CHECK_IN, 9),
        _entry(EntryKind.BREAK_START, 12),
        _entry(EntryKind.BREAK_END, 13),
        _entry(EntryKind.CHECK_OUT, 17),
        _entry(EntryKind.CHECK_IN, 18),
    ]

    for ordering in permutations(entries):
        totals = calc.totals(ordering)
        assert totals.work_hours >= 0
        assert totals.break_hours >= 0


def test_check_out_ends_an_open_break():
    calc = StandardHoursCalculator()
    totals = calc.totals(
        [
            _entry(EntryKind.CHECK_IN, 9),
            _entry(EntryKind.BREAK_START, 12),
            _entry(EntryKind.CHECK_OUT, 18),
            _entry(EntryKind.CHECK_IN, 19),
            _entry(EntryKind.BREAK_END, 19, 30),
        ]
    )

    assert totals.work_hours == pytest.approx(3.0)
    assert totals.break_hours == 0
