from __future__ import annotations

from datetime import date, datetime

from ..core.enums import EntryKind
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_entry_kind(value) -> EntryKind:
    if isinstance(value, EntryKind):
        return value
    try:
        return EntryKind(str(value))
    except ValueError:
        allowed = ", ".join(k.value for k in EntryKind)
        raise ValidationError(f"Invalid entry kind {value!r}; expected one of: {allowed}") from None


def require_timestamp(value, field_name: str = "timestamp") -> datetime:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    if not isinstance(value, datetime):
        raise ValidationError(f"{field_name} must be a datetime, got {type(value).__name__}")
    return value


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if start is None or end is None:
        raise ValidationError("start_date and end_date are required")
    if start > end:
        raise ValidationError(f"start_date {start} is after end_date {end}")
    return start, end
