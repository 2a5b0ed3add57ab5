from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional, TypeVar

from ..common.datetime_utils import now_local
from ..common.validators import require_entry_kind, require_non_empty, require_timestamp
from ..core.constants import DEFAULT_MAX_PERSIST_RETRIES
from ..core.enums import EntryKind
from ..core.exceptions import PersistenceConflictError, TransientFailureError
from ..reporting.model import AttendanceSummary
from ..reporting.service import ReportService
from .calculator.base import HoursCalculator, HoursTotals
from .calculator.standard_calculator import StandardHoursCalculator
from .cross_day import CrossDayLogoutHandler
from .day_resolver import DayResolver
from .factory import EventClassifierFactory
from .locks import Key, KeyedLockManager
from .model import AttendanceRecord, TimeEntry, new_record
from .notifier import AttendanceNotifier, NullNotifier
from .repository import AttendanceRepository
from .state_machine import SessionStateMachine

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CurrentStatus:
    record: AttendanceRecord
    live: HoursTotals
    next_actions: list[EntryKind]


class AttendanceService:
    """Entry point for login/logout handlers, manual corrections and reports.

    Every mutation is a load, apply, recompute, save cycle run while holding
    the (worker, day) lock. A save that loses a version race is retried from
    a fresh load, at most ``max_retries`` times in total.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        resolver: DayResolver | None = None,
        calculator: HoursCalculator | None = None,
        machine: SessionStateMachine | None = None,
        classifier_factory: EventClassifierFactory | None = None,
        notifier: AttendanceNotifier | None = None,
        locks: KeyedLockManager | None = None,
        reports: ReportService | None = None,
        max_retries: int = DEFAULT_MAX_PERSIST_RETRIES,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._resolver = resolver or DayResolver()
        self._calculator = calculator or StandardHoursCalculator()
        self._machine = machine or SessionStateMachine()
        self._factory = classifier_factory or EventClassifierFactory(cutover_hour=self._resolver.cutover_hour)
        self._notifier = notifier or NullNotifier()
        self._locks = locks or KeyedLockManager()
        self._reports = reports or ReportService(attendance, resolver=self._resolver)
        self._max_retries = max(int(max_retries), 1)
        self._clock = clock
        self._cross_day = CrossDayLogoutHandler(
            attendance,
            resolver=self._resolver,
            calculator=self._calculator,
            machine=self._machine,
        )

    # --- events -----------------------------------------------------------

    def record_login(self, worker_id: str, user_id: Optional[str] = None, *, now: datetime | None = None) -> AttendanceRecord:
        worker_id = require_non_empty(worker_id, "worker_id")
        now = now or self._clock()
        day = self._resolver.work_day(now)

        def apply() -> AttendanceRecord:
            record = self._load_or_new(worker_id, day, user_id)
            decision = self._factory.for_login().classify(record=record, when=now)
            entry = TimeEntry(kind=decision.kind, timestamp=now, source=decision.source, note=decision.note)
            return self._attendance.save(self._calculator.recompute(self._machine.apply(record, entry)))

        record = self._run_locked([(worker_id, day)], apply)
        logger.info("Login for %s@%s -> status=%s", worker_id, day, record.status.value)
        self._notify(record)
        return record

    def record_logout(self, worker_id: str, user_id: Optional[str] = None, *, now: datetime | None = None) -> AttendanceRecord:
        worker_id = require_non_empty(worker_id, "worker_id")
        now = now or self._clock()

        open_record = self._attendance.find_open_record(worker_id)
        if open_record is not None and self._is_cross_day(open_record, now):
            keys = self._cross_day.keys_for(worker_id, now, open_record.work_day)
            result = self._run_locked(
                keys,
                lambda: self._cross_day.handle(
                    worker_id=worker_id,
                    user_id=user_id,
                    logout_time=now,
                    open_day=open_record.work_day,
                ),
            )
            if result is not None:
                self._notify(result.closed)
                if result.spillover is not None:
                    self._notify(result.spillover)
                return result.closed

        day = self._resolver.work_day(now)

        def apply() -> AttendanceRecord:
            record = self._load_or_new(worker_id, day, user_id)
            decision = self._factory.for_logout().classify(record=record, when=now)
            entry = TimeEntry(kind=decision.kind, timestamp=now, source=decision.source, note=decision.note)
            return self._attendance.save(self._calculator.recompute(self._machine.apply(record, entry)))

        record = self._run_locked([(worker_id, day)], apply)
        logger.info("Logout for %s@%s -> status=%s", worker_id, day, record.status.value)
        self._notify(record)
        return record

    def record_manual_entry(
        self,
        worker_id: str,
        user_id: Optional[str],
        kind,
        timestamp: datetime,
        note: Optional[str] = None,
        *,
        target_date: Optional[date] = None,
    ) -> AttendanceRecord:
        """Append an explicit correction; the status follows ``kind`` directly."""
        worker_id = require_non_empty(worker_id, "worker_id")
        kind = require_entry_kind(kind)
        timestamp = require_timestamp(timestamp)
        day = target_date or self._resolver.work_day(timestamp)

        def apply() -> AttendanceRecord:
            record = self._load_or_new(worker_id, day, user_id)
            decision = self._factory.for_manual(kind, note).classify(record=record, when=timestamp)
            entry = TimeEntry(kind=decision.kind, timestamp=timestamp, source=decision.source, note=decision.note)
            return self._attendance.save(self._calculator.recompute(self._machine.apply_manual(record, entry)))

        record = self._run_locked([(worker_id, day)], apply)
        logger.info("Manual %s for %s@%s -> status=%s", kind.value, worker_id, day, record.status.value)
        self._notify(record)
        return record

    # --- reads ------------------------------------------------------------

    def get_record_for_day(self, worker_id: str, work_day: date, *, user_id: Optional[str] = None) -> AttendanceRecord:
        """Never "not found": a day without activity yields a zeroed record."""
        worker_id = require_non_empty(worker_id, "worker_id")
        existing = self._attendance.get_for_worker_and_day(worker_id, work_day)
        if existing is not None:
            return existing

        with self._locks.locked((worker_id, work_day)):
            existing = self._attendance.get_for_worker_and_day(worker_id, work_day)
            if existing is not None:
                return existing
            try:
                created = self._attendance.save(new_record(worker_id, work_day, user_id=user_id))
            except PersistenceConflictError:
                # Another writer created it first; theirs is the record.
                created = self._attendance.get_for_worker_and_day(worker_id, work_day)
                if created is None:
                    raise
            logger.debug("Created empty record for %s@%s", worker_id, work_day)
            return created

    def get_current_status(self, worker_id: str, *, now: datetime | None = None) -> CurrentStatus:
        now = now or self._clock()
        record = self.get_record_for_day(worker_id, self._resolver.work_day(now))
        return CurrentStatus(
            record=record,
            live=self._calculator.live_totals(record, now),
            next_actions=self._machine.next_action(record.status),
        )

    def get_summary(self, worker_id: str, start: date, end: date) -> AttendanceSummary:
        return self._reports.build_summary(worker_id, start=start, end=end)

    def get_period_summary(self, worker_id: str, period, *, now: datetime | None = None) -> AttendanceSummary:
        return self._reports.build_period_summary(worker_id, period, now=now or self._clock())

    # --- internals --------------------------------------------------------

    def _load_or_new(self, worker_id: str, day: date, user_id: Optional[str]) -> AttendanceRecord:
        record = self._attendance.get_for_worker_and_day(worker_id, day)
        if record is None:
            logger.debug("No record for %s@%s yet; starting a new one", worker_id, day)
            return new_record(worker_id, day, user_id=user_id)
        return record

    def _is_cross_day(self, record: AttendanceRecord, now: datetime) -> bool:
        """Open session on another work day than ``now``, or last active on an earlier date."""
        if self._resolver.work_day(now) != record.work_day:
            return True
        if not record.entries:
            return now.date() > record.work_day
        return max(e.timestamp for e in record.entries).date() < now.date()

    def _run_locked(self, keys: list[Key] | tuple[Key, ...], operation: Callable[[], T]) -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                with self._locks.locked(*keys):
                    return operation()
            except PersistenceConflictError as exc:
                if attempt >= self._max_retries:
                    logger.warning(
                        "Giving up on %s@%s after %d conflicting writes",
                        exc.worker_id,
                        exc.work_day,
                        attempt,
                    )
                    raise TransientFailureError(exc.worker_id, exc.work_day, attempt) from exc
                logger.warning(
                    "Write conflict on %s@%s (attempt %d/%d); reloading",
                    exc.worker_id,
                    exc.work_day,
                    attempt,
                    self._max_retries,
                )

    def _notify(self, record: AttendanceRecord) -> None:
        try:
            self._notifier.record_updated(record)
        except Exception:
            logger.exception("Notifier failed for %s@%s", record.worker_id, record.work_day)
