from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, start_of_month, start_of_week
from ..common.validators import require_date_range, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import SummaryPeriod
from ..core.exceptions import ValidationError
from ..tracking.day_resolver import DayResolver
from ..tracking.model import AttendanceRecord
from ..tracking.repository import AttendanceRepository
from .model import AttendanceSummary, DayBreakdown


class ReportService:
    """Read-only aggregation over stored records."""

    def __init__(self, attendance: AttendanceRepository, *, resolver: Optional[DayResolver] = None):
        self._attendance = attendance
        self._resolver = resolver or DayResolver()

    def build_summary(self, worker_id: str, *, start: date, end: date) -> AttendanceSummary:
        worker_id = require_non_empty(worker_id, "worker_id")
        start, end = require_date_range(start, end)
        records = self._attendance.list_for_worker(worker_id, start_date=start, end_date=end)

        total_work = sum(r.total_work_hours for r in records)
        total_break = sum(r.total_break_hours for r in records)
        days_worked = sum(1 for r in records if r.total_work_hours > 0)

        per_day = [
            DayBreakdown(
                work_day=r.work_day,
                work_hours=r.total_work_hours,
                break_hours=r.total_break_hours,
                status=r.status,
                check_in_time=r.first_check_in,
                check_out_time=r.last_check_out,
            )
            for r in records
        ]

        return AttendanceSummary(
            worker_id=worker_id,
            start_date=start,
            end_date=end,
            total_work_hours=total_work,
            total_break_hours=total_break,
            days_worked=days_worked,
            average_work_hours=total_work / days_worked if days_worked else 0.0,
            per_day=per_day,
        )

    def period_range(self, period, *, now: Optional[datetime] = None) -> tuple[date, date]:
        """Week starts on Sunday; the range ends on the logical day of ``now``."""
        try:
            period = SummaryPeriod(period)
        except ValueError:
            raise ValidationError(f"Unknown summary period {period!r}") from None

        today = self._resolver.work_day(now or now_local())
        if period == SummaryPeriod.WEEK:
            return start_of_week(today), today
        return start_of_month(today), today

    def build_period_summary(self, worker_id: str, period, *, now: Optional[datetime] = None) -> AttendanceSummary:
        start, end = self.period_range(period, now=now)
        return self.build_summary(worker_id, start=start, end=end)

    def get_history(
        self,
        worker_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        worker_id = require_non_empty(worker_id, "worker_id")
        if start is not None and end is not None:
            require_date_range(start, end)
        if int(limit) <= 0:
            raise ValidationError("limit must be positive")
        return self._attendance.list_for_worker(
            worker_id,
            start_date=start,
            end_date=end,
            limit=int(limit),
            newest_first=True,
        )
