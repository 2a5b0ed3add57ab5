from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_DAY_CUTOVER_HOUR, DEFAULT_END_OF_DAY_LOGOUT_HOUR
from ..core.enums import EntryKind
from .strategies.base import EventClassifier
from .strategies.login_strategy import LoginClassifier
from .strategies.logout_strategy import LogoutClassifier
from .strategies.manual_strategy import ManualClassifier


@dataclass
class EventClassifierFactory:
    """Factory Pattern: choose the classifier for an event's origin."""

    end_of_day_hour: int = DEFAULT_END_OF_DAY_LOGOUT_HOUR
    cutover_hour: int = DEFAULT_DAY_CUTOVER_HOUR

    def for_login(self) -> EventClassifier:
        return LoginClassifier()

    def for_logout(self) -> LogoutClassifier:
        return LogoutClassifier(end_of_day_hour=self.end_of_day_hour, cutover_hour=self.cutover_hour)

    def for_manual(self, kind: EntryKind, note: Optional[str] = None) -> EventClassifier:
        return ManualClassifier(kind, note)
