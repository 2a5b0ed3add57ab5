from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import EntryKind, EntrySource
from ..model import AttendanceRecord


@dataclass(frozen=True)
class EntryDecision:
    kind: EntryKind
    source: EntrySource
    note: Optional[str] = None


class EventClassifier(ABC):
    """Strategy Pattern: decide which entry kind an incoming event becomes."""

    @abstractmethod
    def classify(self, *, record: AttendanceRecord, when: datetime) -> EntryDecision:
        raise NotImplementedError
