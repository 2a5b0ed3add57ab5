from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ...common.datetime_utils import hours_between
from ...core.enums import EntryKind
from ..model import AttendanceRecord, TimeEntry
from .base import HoursCalculator, HoursTotals


class StandardHoursCalculator(HoursCalculator):
    """Pairs entries in stored order.

    - check_in opens work, overwriting an unclosed check_in.
    - check_out closes open work and drops any open break; ignored for work
      when nothing is open.
    - break_start opens a break and pauses open work; break_end closes the
      break and resumes the paused work from its own timestamp.
    - Intervals never count below zero.

    Intervals still open at the end of the log add nothing; ``live_totals``
    gives the provisional figure.
    """

    def totals(self, entries: Iterable[TimeEntry]) -> HoursTotals:
        work, brk, _, _ = self._scan(entries)
        return HoursTotals(work_hours=work, break_hours=brk)

    def live_totals(self, record: AttendanceRecord, now: datetime) -> HoursTotals:
        """Stored totals plus ``now`` as a provisional close of open markers."""
        work, brk, open_check_in, open_break = self._scan(record.entries)
        if record.is_open:
            if open_check_in is not None:
                work += max(hours_between(open_check_in, now), 0.0)
            if open_break is not None:
                brk += max(hours_between(open_break, now), 0.0)
        return HoursTotals(work_hours=work, break_hours=brk)

    @staticmethod
    def _scan(entries: Iterable[TimeEntry]) -> tuple[float, float, Optional[datetime], Optional[datetime]]:
        work = 0.0
        brk = 0.0
        open_check_in: Optional[datetime] = None
        open_break: Optional[datetime] = None
        paused = False

        for entry in entries:
            ts = entry.timestamp
            if entry.kind == EntryKind.CHECK_IN:
                open_check_in = ts
                paused = False
            elif entry.kind == EntryKind.CHECK_OUT:
                if open_check_in is not None:
                    work += max(hours_between(open_check_in, ts), 0.0)
                    open_check_in = None
                paused = False
                open_break = None
            elif entry.kind == EntryKind.BREAK_START:
                open_break = ts
                if open_check_in is not None:
                    work += max(hours_between(open_check_in, ts), 0.0)
                    open_check_in = None
                    paused = True
            elif entry.kind == EntryKind.BREAK_END:
                if open_break is not None:
                    brk += max(hours_between(open_break, ts), 0.0)
                    open_break = None
                if paused:
                    open_check_in = ts
                    paused = False

        return work, brk, open_check_in, open_break
