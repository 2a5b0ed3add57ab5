from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class DayBreakdown:
    """Read-model: one row per logical day in a summary."""

    work_day: date
    work_hours: float
    break_hours: float
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceSummary:
    worker_id: str
    start_date: date
    end_date: date
    total_work_hours: float = 0.0
    total_break_hours: float = 0.0
    days_worked: int = 0
    average_work_hours: float = 0.0
    per_day: list[DayBreakdown] = field(default_factory=list)


def summary_to_dict(summary: AttendanceSummary) -> dict:
    return {
        "workerId": summary.worker_id,
        "startDate": summary.start_date.isoformat(),
        "endDate": summary.end_date.isoformat(),
        "totalWorkHours": summary.total_work_hours,
        "totalBreakHours": summary.total_break_hours,
        "daysWorked": summary.days_worked,
        "averageWorkHours": summary.average_work_hours,
        "perDayBreakdown": [
            {
                "date": d.work_day.isoformat(),
                "workHours": d.work_hours,
                "breakHours": d.break_hours,
                "status": d.status.value,
                "checkInTime": d.check_in_time.isoformat() if d.check_in_time else None,
                "checkOutTime": d.check_out_time.isoformat() if d.check_out_time else None,
            }
            for d in summary.per_day
        ],
    }
