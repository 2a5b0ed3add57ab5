from datetime import date, datetime

from worktime.core.enums import AttendanceStatus, EntryKind, EntrySource
from worktime.tracking.factory import EventClassifierFactory
from worktime.tracking.model import AttendanceRecord
from worktime.tracking.strategies.login_strategy import LoginClassifier
from worktime.tracking.strategies.logout_strategy import LogoutClassifier
from worktime.tracking.strategies.manual_strategy import ManualClassifier


def _record(status: AttendanceStatus) -> AttendanceRecord:
    return AttendanceRecord(worker_id="w1", work_day=date(2025, 1, 1), status=status)


def test_factory_returns_strategy_per_origin():
    factory = EventClassifierFactory()

    assert isinstance(factory.for_login(), LoginClassifier)
    assert isinstance(factory.for_logout(), LogoutClassifier)
    assert isinstance(factory.for_manual(EntryKind.BREAK_END), ManualClassifier)


def test_login_on_fresh_day_is_check_in():
    decision = LoginClassifier().classify(record=_record(AttendanceStatus.CHECKED_OUT), when=datetime(2025, 1, 1, 9))

    assert decision.kind == EntryKind.CHECK_IN
    assert decision.source == EntrySource.LOGIN


def test_login_while_checked_in_is_break_end():
    decision = LoginClassifier().classify(record=_record(AttendanceStatus.CHECKED_IN), when=datetime(2025, 1, 1, 14))

    assert decision.kind == EntryKind.BREAK_END


def test_logout_thresholds():
    classifier = EventClassifierFactory().for_logout()
    record = _record(AttendanceStatus.CHECKED_IN)

    assert classifier.classify(record=record, when=datetime(2025, 1, 1, 16, 59)).kind == EntryKind.BREAK_START
    assert classifier.classify(record=record, when=datetime(2025, 1, 1, 17, 0)).kind == EntryKind.CHECK_OUT
    assert classifier.classify(record=record, when=datetime(2025, 1, 1, 5, 59)).kind == EntryKind.CHECK_OUT
    assert classifier.classify(record=record, when=datetime(2025, 1, 1, 6, 0)).kind == EntryKind.BREAK_START


def test_manual_classifier_keeps_kind_and_note():
    decision = EventClassifierFactory().for_manual(EntryKind.CHECK_OUT, "forgot to log out").classify(
        record=_record(AttendanceStatus.CHECKED_IN), when=datetime(2025, 1, 1, 18)
    )

    assert decision.kind == EntryKind.CHECK_OUT
    assert decision.source == EntrySource.MANUAL
    assert decision.note == "forgot to log out"
