from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable

from ..model import AttendanceRecord, TimeEntry


@dataclass(frozen=True)
class HoursTotals:
    work_hours: float = 0.0
    break_hours: float = 0.0


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for hour totals)."""

    @abstractmethod
    def totals(self, entries: Iterable[TimeEntry]) -> HoursTotals:
        raise NotImplementedError

    @abstractmethod
    def live_totals(self, record: AttendanceRecord, now: datetime) -> HoursTotals:
        raise NotImplementedError

    def recompute(self, record: AttendanceRecord) -> AttendanceRecord:
        """Full recomputation from the entry log; never incremental."""
        totals = self.totals(record.entries)
        return replace(record, total_work_hours=totals.work_hours, total_break_hours=totals.break_hours)
