from __future__ import annotations

from datetime import datetime

from ...core.constants import DEFAULT_DAY_CUTOVER_HOUR, DEFAULT_END_OF_DAY_LOGOUT_HOUR
from ...core.enums import EntryKind, EntrySource
from ..model import AttendanceRecord
from .base import EntryDecision, EventClassifier


class LogoutClassifier(EventClassifier):
    """Time-of-day heuristic: "going home" vs "stepping out".

    Evening and early-morning logouts end the day; anything in between
    starts a break. Changing the thresholds changes historical hours.
    """

    def __init__(
        self,
        *,
        end_of_day_hour: int = DEFAULT_END_OF_DAY_LOGOUT_HOUR,
        cutover_hour: int = DEFAULT_DAY_CUTOVER_HOUR,
    ):
        self._end_of_day_hour = int(end_of_day_hour)
        self._cutover_hour = int(cutover_hour)

    def is_end_of_day(self, when: datetime) -> bool:
        return when.hour >= self._end_of_day_hour or when.hour < self._cutover_hour

    def classify(self, *, record: AttendanceRecord, when: datetime) -> EntryDecision:
        if self.is_end_of_day(when):
            return EntryDecision(EntryKind.CHECK_OUT, EntrySource.LOGOUT, "End of day - logout")
        return EntryDecision(EntryKind.BREAK_START, EntrySource.LOGOUT, "Break started - logout during day")
