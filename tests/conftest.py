from __future__ import annotations

from datetime import datetime

import pytest

from worktime.tracking.memory_repository import InMemoryAttendanceRepository
from worktime.tracking.service import AttendanceService


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def service(repo, fixed_now) -> AttendanceService:
    return AttendanceService(repo, clock=lambda: fixed_now)
