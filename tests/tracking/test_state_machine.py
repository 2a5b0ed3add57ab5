from datetime import date, datetime

from worktime.core.enums import AttendanceStatus, EntryKind, EntrySource
from worktime.tracking.model import CrossDayAdjustment, TimeEntry, new_record
from worktime.tracking.state_machine import SessionStateMachine


def _entry(kind: EntryKind, hour: int, source: EntrySource = EntrySource.LOGIN) -> TimeEntry:
    return TimeEntry(kind=kind, timestamp=datetime(2026, 2, 2, hour), source=source)


def test_check_in_sets_first_check_in_once():
    machine = SessionStateMachine()
    record = machine.apply(new_record("w1", date(2026, 2, 2)), _entry(EntryKind.CHECK_IN, 9))

    assert record.status == AttendanceStatus.CHECKED_IN
    assert record.first_check_in == datetime(2026, 2, 2, 9)

    record = machine.apply(record, _entry(EntryKind.CHECK_OUT, 12))
    record = machine.apply(record, _entry(EntryKind.CHECK_IN, 13))

    assert record.first_check_in == datetime(2026, 2, 2, 9)


def test_check_out_completes_day():
    machine = SessionStateMachine()
    record = machine.apply(new_record("w1", date(2026, 2, 2)), _entry(EntryKind.CHECK_IN, 9))
    record = machine.apply(record, _entry(EntryKind.CHECK_OUT, 17))

    assert record.status == AttendanceStatus.CHECKED_OUT
    assert record.last_check_out == datetime(2026, 2, 2, 17)
    assert record.is_completed is True


def test_break_round_trip():
    machine = SessionStateMachine()
    record = machine.apply(new_record("w1", date(2026, 2, 2)), _entry(EntryKind.CHECK_IN, 9))
    record = machine.apply(record, _entry(EntryKind.BREAK_START, 12))
    assert record.status == AttendanceStatus.ON_BREAK

    record = machine.apply(record, _entry(EntryKind.BREAK_END, 13))
    assert record.status == AttendanceStatus.CHECKED_IN


def test_check_out_while_on_break_closes_day():
    machine = SessionStateMachine()
    record = machine.apply(new_record("w1", date(2026, 2, 2)), _entry(EntryKind.CHECK_IN, 9))
    record = machine.apply(record, _entry(EntryKind.BREAK_START, 12))
    record = machine.apply(record, _entry(EntryKind.CHECK_OUT, 18))

    assert record.status == AttendanceStatus.CHECKED_OUT
    assert record.is_completed is True


def test_uncovered_pair_is_logged_without_status_change():
    machine = SessionStateMachine()
    start = new_record("w1", date(2026, 2, 2))

    record = machine.apply(start, _entry(EntryKind.BREAK_START, 12))

    assert record.status == AttendanceStatus.CHECKED_OUT
    assert len(record.entries) == 1
    assert start.entries == ()


def test_manual_entry_sets_status_from_kind():
    machine = SessionStateMachine()
    record = new_record("w1", date(2026, 2, 2))

    record = machine.apply_manual(record, _entry(EntryKind.BREAK_START, 12, EntrySource.MANUAL))
    assert record.status == AttendanceStatus.ON_BREAK

    record = machine.apply_manual(record, _entry(EntryKind.BREAK_END, 13, EntrySource.MANUAL))
    assert record.status == AttendanceStatus.CHECKED_IN


def test_close_at_boundary_is_terminal():
    machine = SessionStateMachine()
    record = machine.apply(new_record("w1", date(2026, 2, 2)), _entry(EntryKind.CHECK_IN, 22))
    boundary = datetime(2026, 2, 2, 23, 59, 59, 999000)
    logout = datetime(2026, 2, 3, 1, 30)
    closing = TimeEntry(EntryKind.CHECK_OUT, boundary, EntrySource.AUTO)

    record = machine.close_at_boundary(record, closing, CrossDayAdjustment(logout, boundary, logout))

    assert record.status == AttendanceStatus.AUTO_CHECKOUT
    assert record.is_completed is True
    assert machine.next_action(record.status) == []
    assert machine.apply(record, _entry(EntryKind.CHECK_IN, 23)).status == AttendanceStatus.AUTO_CHECKOUT


def test_next_action_from_checked_in():
    machine = SessionStateMachine()
    assert machine.next_action(AttendanceStatus.CHECKED_IN) == [EntryKind.BREAK_START, EntryKind.CHECK_OUT]
    assert machine.next_action(AttendanceStatus.CHECKED_OUT) == [EntryKind.CHECK_IN]
