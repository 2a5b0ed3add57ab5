from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_DAY_CUTOVER_HOUR, DEFAULT_END_OF_DAY_LOGOUT_HOUR, DEFAULT_MAX_PERSIST_RETRIES
from .database.connection import DBConfig, DatabaseConnection
from .reporting.service import ReportService
from .tracking.calculator.standard_calculator import StandardHoursCalculator
from .tracking.day_resolver import DayResolver
from .tracking.factory import EventClassifierFactory
from .tracking.locks import KeyedLockManager
from .tracking.memory_repository import InMemoryAttendanceRepository
from .tracking.mysql_attendance_repository import MySQLAttendanceRepository
from .tracking.notifier import AttendanceNotifier, LoggingNotifier
from .tracking.repository import AttendanceRepository
from .tracking.service import AttendanceService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService
    report_service: ReportService


def _wire(
    attendance_repo: AttendanceRepository,
    *,
    conn: Optional[DatabaseConnection] = None,
    cutover_hour: int = DEFAULT_DAY_CUTOVER_HOUR,
    end_of_day_hour: int = DEFAULT_END_OF_DAY_LOGOUT_HOUR,
    max_retries: int = DEFAULT_MAX_PERSIST_RETRIES,
    notifier: Optional[AttendanceNotifier] = None,
) -> Container:
    resolver = DayResolver(cutover_hour=cutover_hour)
    report_service = ReportService(attendance_repo, resolver=resolver)
    attendance_service = AttendanceService(
        attendance_repo,
        resolver=resolver,
        calculator=StandardHoursCalculator(),
        classifier_factory=EventClassifierFactory(end_of_day_hour=end_of_day_hour, cutover_hour=cutover_hour),
        notifier=notifier or LoggingNotifier(),
        locks=KeyedLockManager(),
        reports=report_service,
        max_retries=max_retries,
    )
    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        report_service=report_service,
    )


def build_container(settings) -> Container:
    """Wire services from a settings module (see ``config``)."""
    policy = dict(
        cutover_hour=int(getattr(settings, "DAY_CUTOVER_HOUR", DEFAULT_DAY_CUTOVER_HOUR)),
        end_of_day_hour=int(getattr(settings, "END_OF_DAY_LOGOUT_HOUR", DEFAULT_END_OF_DAY_LOGOUT_HOUR)),
        max_retries=int(getattr(settings, "MAX_PERSIST_RETRIES", DEFAULT_MAX_PERSIST_RETRIES)),
    )

    if str(getattr(settings, "STORAGE", "mysql")).lower() == "memory":
        return _wire(InMemoryAttendanceRepository(), **policy)

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
    return _wire(MySQLAttendanceRepository(conn), conn=conn, **policy)


def build_in_memory_container(*, notifier: Optional[AttendanceNotifier] = None, **policy) -> Container:
    return _wire(InMemoryAttendanceRepository(), notifier=notifier, **policy)
