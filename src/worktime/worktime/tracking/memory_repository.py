from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import PersistenceConflictError
from .model import AttendanceRecord


class InMemoryAttendanceRepository:
    """Process-local store keyed by (worker_id, work_day).

    Same compare-and-swap contract as the MySQL repository, so the service's
    retry path behaves identically in tests.
    """

    def __init__(self):
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._lock = threading.Lock()
        self._id = 0

    def get_for_worker_and_day(self, worker_id: str, work_day: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_key.get((worker_id, work_day))

    def find_open_record(self, worker_id: str) -> Optional[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_key.values() if r.worker_id == worker_id and r.is_open]
        if not items:
            return None
        return max(items, key=lambda r: r.work_day)

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        return self.save_many([record])[0]

    def save_many(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        with self._lock:
            staged = [self._stage(record) for record in records]
            for stored in staged:
                self._by_key[stored.key] = stored
            return staged

    def _stage(self, record: AttendanceRecord) -> AttendanceRecord:
        current = self._by_key.get(record.key)
        if record.version == 0:
            if current is not None:
                raise PersistenceConflictError(record.worker_id, record.work_day, "Record already exists")
            self._id += 1
            return replace(record, version=1, record_id=self._id)
        if current is None or current.version != record.version:
            raise PersistenceConflictError(record.worker_id, record.work_day)
        return replace(record, version=record.version + 1, record_id=current.record_id)

    def list_for_worker(
        self,
        worker_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_key.values() if r.worker_id == worker_id]
        if start_date is not None:
            items = [r for r in items if r.work_day >= start_date]
        if end_date is not None:
            items = [r for r in items if r.work_day <= end_date]
        items.sort(key=lambda r: r.work_day, reverse=newest_first)
        if limit is not None:
            items = items[: int(limit)]
        return items
