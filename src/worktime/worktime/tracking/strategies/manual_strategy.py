from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import EntryKind, EntrySource
from ..model import AttendanceRecord
from .base import EntryDecision, EventClassifier


class ManualClassifier(EventClassifier):
    """Manual corrections are explicit: the requested kind is used verbatim."""

    def __init__(self, kind: EntryKind, note: Optional[str] = None):
        self._kind = kind
        self._note = note

    def classify(self, *, record: AttendanceRecord, when: datetime) -> EntryDecision:
        return EntryDecision(self._kind, EntrySource.MANUAL, self._note or "Manual entry")
