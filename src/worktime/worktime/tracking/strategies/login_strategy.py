from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus, EntryKind, EntrySource
from ..model import AttendanceRecord
from .base import EntryDecision, EventClassifier


class LoginClassifier(EventClassifier):
    """Login while a session is open is a return from an implicit break."""

    def classify(self, *, record: AttendanceRecord, when: datetime) -> EntryDecision:
        if record.status in (AttendanceStatus.CHECKED_IN, AttendanceStatus.ON_BREAK):
            return EntryDecision(EntryKind.BREAK_END, EntrySource.LOGIN, "Break ended - login after break")
        return EntryDecision(EntryKind.CHECK_IN, EntrySource.LOGIN, "Check-in from login")
