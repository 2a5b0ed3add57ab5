from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.enums import AttendanceStatus, EntryKind, EntrySource
from .calculator.base import HoursCalculator
from .day_resolver import DayResolver
from .model import AttendanceRecord, CrossDayAdjustment, TimeEntry, new_record
from .repository import AttendanceRepository
from .state_machine import SessionStateMachine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrossDayResult:
    closed: AttendanceRecord
    spillover: Optional[AttendanceRecord] = None


class CrossDayLogoutHandler:
    """Closes a day left open when the worker logs out on a later day.

    The open day gets a synthetic check-out at its last instant and becomes
    ``auto_checkout``. A logout in the early hours also opens the calendar
    day of the logout with a check-in at the logout time (the spillover).
    Both records go through a single ``save_many``.

    The caller must hold the locks for both keys returned by ``keys_for``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        resolver: DayResolver,
        calculator: HoursCalculator,
        machine: SessionStateMachine,
    ):
        self._attendance = attendance
        self._resolver = resolver
        self._calculator = calculator
        self._machine = machine

    @staticmethod
    def previous_day(logout_time: datetime, open_day: Optional[date] = None) -> date:
        return open_day if open_day is not None else logout_time.date() - timedelta(days=1)

    def keys_for(self, worker_id: str, logout_time: datetime, open_day: Optional[date] = None):
        return (worker_id, self.previous_day(logout_time, open_day)), (worker_id, logout_time.date())

    def handle(
        self,
        *,
        worker_id: str,
        user_id: Optional[str],
        logout_time: datetime,
        open_day: Optional[date] = None,
    ) -> Optional[CrossDayResult]:
        day = self.previous_day(logout_time, open_day)
        record = self._attendance.get_for_worker_and_day(worker_id, day)
        if record is None:
            logger.debug("No record for %s@%s; cross-day logout not applicable", worker_id, day)
            return None

        already_closed = self._already_closed_by(record, logout_time)
        if not already_closed and record.status != AttendanceStatus.CHECKED_IN:
            logger.debug("Record %s@%s is %s; cross-day logout not applicable", worker_id, day, record.status.value)
            return None
        closed = None if already_closed else self._close(record, logout_time)

        spillover = None
        if self._resolver.is_early_hours(logout_time):
            spillover = self._open_spillover(worker_id, user_id, logout_time)

        # Both days are written together or not at all.
        pending = [r for r in (closed, spillover) if r is not None]
        stored = list(self._attendance.save_many(pending)) if pending else []
        if closed is not None:
            closed = stored.pop(0)
            logger.info(
                "Cross-day logout at %s closed %s@%s at %s",
                logout_time.isoformat(),
                worker_id,
                day,
                closed.last_check_out.isoformat(),
            )
        if spillover is not None:
            spillover = stored.pop(0)
            logger.info("Spillover check-in for %s@%s at %s", worker_id, spillover.work_day, logout_time.isoformat())
        return CrossDayResult(closed=closed or record, spillover=spillover)

    def _close(self, record: AttendanceRecord, logout_time: datetime) -> AttendanceRecord:
        latest = max((e.timestamp for e in record.entries), default=None)
        boundary = self._resolver.boundary(record.work_day, like=logout_time, after=latest)
        adjustment = CrossDayAdjustment(
            original_event_time=logout_time,
            adjusted_boundary_time=boundary,
            spillover_check_in_time=logout_time,
        )
        entry = TimeEntry(
            kind=EntryKind.CHECK_OUT,
            timestamp=boundary,
            source=EntrySource.AUTO,
            note="Auto checkout due to cross-day logout",
        )
        return self._calculator.recompute(self._machine.close_at_boundary(record, entry, adjustment))

    def _open_spillover(self, worker_id: str, user_id: Optional[str], logout_time: datetime) -> Optional[AttendanceRecord]:
        day = logout_time.date()
        record = self._attendance.get_for_worker_and_day(worker_id, day) or new_record(worker_id, day, user_id=user_id)
        entry = TimeEntry(
            kind=EntryKind.CHECK_IN,
            timestamp=logout_time,
            source=EntrySource.AUTO,
            note="Auto check-in from cross-day logout",
        )
        if entry in record.entries:
            return None
        return self._calculator.recompute(self._machine.apply_manual(record, entry))

    @staticmethod
    def _already_closed_by(record: AttendanceRecord, logout_time: datetime) -> bool:
        adjustment = record.cross_day_adjustment
        return (
            record.status == AttendanceStatus.AUTO_CHECKOUT
            and adjustment is not None
            and adjustment.original_event_time == logout_time
        )
