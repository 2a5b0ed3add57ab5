from __future__ import annotations

from enum import Enum


class EntryKind(str, Enum):
    """Loại sự kiện chấm công trong nhật ký của một ngày."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class EntrySource(str, Enum):
    """Nguồn gốc của sự kiện (chỉ dùng cho audit, không ảnh hưởng tính giờ)."""

    MANUAL = "manual"
    LOGIN = "login"
    LOGOUT = "logout"
    AUTO = "auto"


class AttendanceStatus(str, Enum):
    """Trạng thái hiện tại của ngày làm việc."""

    CHECKED_OUT = "checked_out"
    CHECKED_IN = "checked_in"
    ON_BREAK = "on_break"
    AUTO_CHECKOUT = "auto_checkout"


class SummaryPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
