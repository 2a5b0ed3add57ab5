from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus, EntryKind, EntrySource
from ..core.exceptions import PersistenceConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, CrossDayAdjustment, TimeEntry
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    record_id, worker_id, user_id, work_day, status, first_check_in, last_check_out,
    total_work_hours, total_break_hours, is_completed,
    cross_day_original_time, cross_day_boundary_time, cross_day_spillover_time, version
"""


class MySQLAttendanceRepository(AttendanceRepository):
    """Records in ``attendance_records``, append-only log in ``attendance_entries``.

    ``save`` is a compare-and-swap on ``version``; entries beyond the stored
    count are inserted in the same transaction.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_worker_and_day(self, worker_id: str, work_day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE worker_id=%s AND work_day=%s
                """,
                (worker_id, work_day),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._load(cur, r)

    def find_open_record(self, worker_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE worker_id=%s AND status IN (%s, %s)
                ORDER BY work_day DESC
                LIMIT 1
                """,
                (worker_id, AttendanceStatus.CHECKED_IN.value, AttendanceStatus.ON_BREAK.value),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._load(cur, r)

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._write(cur, record)

    def save_many(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """One transaction for all records; a failure rolls every write back."""
        with db_cursor(self._conn_factory) as (_, cur):
            return [self._write(cur, record) for record in records]

    def _write(self, cur, record: AttendanceRecord) -> AttendanceRecord:
        adjustment = record.cross_day_adjustment
        values = (
            record.status.value,
            record.first_check_in,
            record.last_check_out,
            float(record.total_work_hours),
            float(record.total_break_hours),
            1 if record.is_completed else 0,
            adjustment.original_event_time if adjustment else None,
            adjustment.adjusted_boundary_time if adjustment else None,
            adjustment.spillover_check_in_time if adjustment else None,
        )

        if record.version == 0:
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        worker_id, user_id, work_day, status, first_check_in, last_check_out,
                        total_work_hours, total_break_hours, is_completed,
                        cross_day_original_time, cross_day_boundary_time, cross_day_spillover_time,
                        version
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                    """,
                    (record.worker_id, record.user_id, record.work_day) + values,
                )
            except IntegrityError as exc:
                if exc.errno == errorcode.ER_DUP_ENTRY:
                    raise PersistenceConflictError(record.worker_id, record.work_day, "Record already exists") from exc
                raise
            record_id = int(cur.lastrowid)
            stored_entries = 0
        else:
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, first_check_in=%s, last_check_out=%s,
                    total_work_hours=%s, total_break_hours=%s, is_completed=%s,
                    cross_day_original_time=%s, cross_day_boundary_time=%s, cross_day_spillover_time=%s,
                    version=version + 1
                WHERE worker_id=%s AND work_day=%s AND version=%s
                """,
                values + (record.worker_id, record.work_day, record.version),
            )
            if cur.rowcount == 0:
                raise PersistenceConflictError(record.worker_id, record.work_day)
            record_id = int(record.record_id)
            cur.execute("SELECT COUNT(*) AS n FROM attendance_entries WHERE record_id=%s", (record_id,))
            stored_entries = int(fetchone(cur)["n"])

        for seq, entry in enumerate(record.entries[stored_entries:], start=stored_entries + 1):
            cur.execute(
                """
                INSERT INTO attendance_entries(record_id, seq, kind, event_time, source, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (record_id, seq, entry.kind.value, entry.timestamp, entry.source.value, entry.note),
            )

        return replace(record, version=record.version + 1, record_id=record_id)

    def list_for_worker(
        self,
        worker_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["worker_id=%s"]
        params: list[object] = [worker_id]

        if start_date is not None:
            clauses.append("work_day >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_day <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)
        order = "DESC" if newest_first else "ASC"
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_day {order}
                {limit_sql}
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [self._load(cur, r) for r in rows]

    def _load(self, cur, r: dict) -> AttendanceRecord:
        cur.execute(
            """
            SELECT kind, event_time, source, note
            FROM attendance_entries
            WHERE record_id=%s
            ORDER BY seq ASC
            """,
            (int(r["record_id"]),),
        )
        entries = tuple(
            TimeEntry(
                kind=EntryKind(e["kind"]),
                timestamp=e["event_time"],
                source=EntrySource(e["source"]),
                note=e.get("note"),
            )
            for e in fetchall(cur)
        )

        adjustment = None
        if r.get("cross_day_original_time") is not None:
            adjustment = CrossDayAdjustment(
                original_event_time=r["cross_day_original_time"],
                adjusted_boundary_time=r["cross_day_boundary_time"],
                spillover_check_in_time=r["cross_day_spillover_time"],
            )

        return AttendanceRecord(
            record_id=int(r["record_id"]),
            worker_id=r["worker_id"],
            user_id=r.get("user_id"),
            work_day=r["work_day"],
            entries=entries,
            first_check_in=r.get("first_check_in"),
            last_check_out=r.get("last_check_out"),
            total_work_hours=float(r["total_work_hours"] or 0),
            total_break_hours=float(r["total_break_hours"] or 0),
            status=AttendanceStatus(r["status"]),
            is_completed=bool(r["is_completed"]),
            cross_day_adjustment=adjustment,
            version=int(r["version"]),
        )
