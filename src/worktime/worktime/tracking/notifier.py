from __future__ import annotations

import logging
from typing import Protocol

from .model import AttendanceRecord

logger = logging.getLogger(__name__)


class AttendanceNotifier(Protocol):
    """Broadcast hook called after a record has been persisted."""

    def record_updated(self, record: AttendanceRecord) -> None:
        raise NotImplementedError


class NullNotifier:
    def record_updated(self, record: AttendanceRecord) -> None:
        return None


class LoggingNotifier:
    def record_updated(self, record: AttendanceRecord) -> None:
        logger.info(
            "Attendance updated %s@%s status=%s work=%.2fh break=%.2fh",
            record.worker_id,
            record.work_day,
            record.status.value,
            record.total_work_hours,
            record.total_break_hours,
        )
