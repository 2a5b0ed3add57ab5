from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_worker_and_day(self, worker_id: str, work_day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_open_record(self, worker_id: str) -> Optional[AttendanceRecord]:
        """Most recent record whose status is checked_in or on_break."""

        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        """Compare-and-swap on ``record.version``.

        Version 0 inserts and fails if a record for the key already exists;
        any other version updates only if the stored version still matches.
        Returns the stored record with its version bumped, or raises
        ``PersistenceConflictError``.
        """

        raise NotImplementedError

    def save_many(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """``save`` for several records at once: either all are stored or none is."""

        raise NotImplementedError

    def list_for_worker(
        self,
        worker_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
