"""Example: drive the engine through the service layer (no database).

Simulates one worker's day with a lunch-time logout, then a late shift that
ends after midnight.
"""

from datetime import date, datetime

from worktime.container import build_in_memory_container
from worktime.logging_config import configure_logging
from worktime.reporting.model import summary_to_dict
from worktime.tracking.model import record_to_dict


def main():
    configure_logging("INFO")
    container = build_in_memory_container()
    svc = container.attendance_service

    svc.record_login("emp-1", "user-1", now=datetime(2026, 3, 2, 9, 0))
    svc.record_logout("emp-1", "user-1", now=datetime(2026, 3, 2, 13, 0))
    svc.record_login("emp-1", "user-1", now=datetime(2026, 3, 2, 14, 0))
    svc.record_logout("emp-1", "user-1", now=datetime(2026, 3, 2, 18, 0))

    svc.record_login("emp-1", "user-1", now=datetime(2026, 3, 3, 22, 0))
    closed = svc.record_logout("emp-1", "user-1", now=datetime(2026, 3, 4, 1, 30))

    print(record_to_dict(closed))
    print(summary_to_dict(svc.get_summary("emp-1", date(2026, 3, 1), date(2026, 3, 7))))


if __name__ == "__main__":
    main()
