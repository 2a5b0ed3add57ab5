from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, EntryKind, EntrySource


@dataclass(frozen=True)
class TimeEntry:
    """One atomic event in a work-day log. Never edited once appended."""

    kind: EntryKind
    timestamp: datetime
    source: EntrySource = EntrySource.MANUAL
    note: Optional[str] = None


@dataclass(frozen=True)
class CrossDayAdjustment:
    """Audit trail left on a day closed by a logout that happened after midnight."""

    original_event_time: datetime
    adjusted_boundary_time: datetime
    spillover_check_in_time: datetime


@dataclass(frozen=True)
class AttendanceRecord:
    """Per-worker, per-logical-day aggregate.

    Identity is ``(worker_id, work_day)``. ``entries`` keeps append order,
    which may differ from timestamp order when corrections are backdated.
    Totals are derived by the hours calculator and must not be set by hand.
    ``version`` is the storage compare-and-swap token (0 = not stored yet).
    """

    worker_id: str
    work_day: date
    user_id: Optional[str] = None
    entries: tuple[TimeEntry, ...] = ()
    first_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None
    total_work_hours: float = 0.0
    total_break_hours: float = 0.0
    status: AttendanceStatus = AttendanceStatus.CHECKED_OUT
    is_completed: bool = False
    cross_day_adjustment: Optional[CrossDayAdjustment] = None
    version: int = 0
    record_id: Optional[int] = None

    @property
    def key(self) -> tuple[str, date]:
        return self.worker_id, self.work_day

    @property
    def is_open(self) -> bool:
        return self.status in (AttendanceStatus.CHECKED_IN, AttendanceStatus.ON_BREAK)

    def with_entry(self, entry: TimeEntry) -> "AttendanceRecord":
        return replace(self, entries=self.entries + (entry,))


def new_record(worker_id: str, work_day: date, *, user_id: Optional[str] = None) -> AttendanceRecord:
    """Zeroed ``checked_out`` record for a day with no activity yet."""
    return AttendanceRecord(worker_id=worker_id, work_day=work_day, user_id=user_id)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def entry_to_dict(entry: TimeEntry) -> dict:
    return {
        "type": entry.kind.value,
        "timestamp": _iso(entry.timestamp),
        "source": entry.source.value,
        "notes": entry.note,
    }


def record_to_dict(record: AttendanceRecord) -> dict:
    """Read model handed to API layers."""
    adjustment = record.cross_day_adjustment
    return {
        "workerId": record.worker_id,
        "userId": record.user_id,
        "date": record.work_day.isoformat(),
        "status": record.status.value,
        "totalWorkHours": record.total_work_hours,
        "totalBreakHours": record.total_break_hours,
        "checkInTime": _iso(record.first_check_in),
        "checkOutTime": _iso(record.last_check_out),
        "isCompleted": record.is_completed,
        "crossDayLogout": (
            {
                "originalLogoutTime": _iso(adjustment.original_event_time),
                "adjustedCheckoutTime": _iso(adjustment.adjusted_boundary_time),
                "nextDayCheckInTime": _iso(adjustment.spillover_check_in_time),
            }
            if adjustment
            else None
        ),
        "entries": [entry_to_dict(e) for e in record.entries],
    }
