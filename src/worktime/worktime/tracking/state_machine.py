from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..core.enums import AttendanceStatus, EntryKind
from .model import AttendanceRecord, CrossDayAdjustment, TimeEntry

logger = logging.getLogger(__name__)

S = AttendanceStatus
K = EntryKind

TRANSITIONS: dict[tuple[AttendanceStatus, EntryKind], AttendanceStatus] = {
    (S.CHECKED_OUT, K.CHECK_IN): S.CHECKED_IN,
    (S.CHECKED_IN, K.BREAK_START): S.ON_BREAK,
    (S.CHECKED_IN, K.CHECK_OUT): S.CHECKED_OUT,
    (S.ON_BREAK, K.BREAK_END): S.CHECKED_IN,
    (S.ON_BREAK, K.CHECK_OUT): S.CHECKED_OUT,
}

# Manual corrections set the status straight from the entry kind.
STATUS_FOR_KIND: dict[EntryKind, AttendanceStatus] = {
    K.CHECK_IN: S.CHECKED_IN,
    K.CHECK_OUT: S.CHECKED_OUT,
    K.BREAK_START: S.ON_BREAK,
    K.BREAK_END: S.CHECKED_IN,
}


class SessionStateMachine:
    """Authoritative status of a work-day and its legal transitions.

    Every method returns a new record; the input record is left untouched.
    No event is ever rejected here: pairs missing from ``TRANSITIONS`` are
    logged in the entry list without moving the status.
    """

    def next_status(self, current: AttendanceStatus, kind: EntryKind) -> Optional[AttendanceStatus]:
        return TRANSITIONS.get((current, kind))

    def apply(self, record: AttendanceRecord, entry: TimeEntry) -> AttendanceRecord:
        updated = record.with_entry(entry)
        nxt = self.next_status(record.status, entry.kind)
        if nxt is None:
            logger.debug(
                "No transition for %s on %s (%s@%s); entry logged only",
                entry.kind.value,
                record.status.value,
                record.worker_id,
                record.work_day,
            )
            return updated
        return self._with_side_effects(replace(updated, status=nxt), entry)

    def apply_manual(self, record: AttendanceRecord, entry: TimeEntry) -> AttendanceRecord:
        updated = replace(record.with_entry(entry), status=STATUS_FOR_KIND[entry.kind])
        return self._with_side_effects(updated, entry)

    def close_at_boundary(
        self,
        record: AttendanceRecord,
        entry: TimeEntry,
        adjustment: CrossDayAdjustment,
    ) -> AttendanceRecord:
        """Terminal close used by the cross-day logout path."""
        return replace(
            record.with_entry(entry),
            status=S.AUTO_CHECKOUT,
            last_check_out=entry.timestamp,
            is_completed=True,
            cross_day_adjustment=adjustment,
        )

    def next_action(self, status: AttendanceStatus) -> list[EntryKind]:
        """Entry kinds that move ``status`` forward."""
        return [kind for (current, kind) in TRANSITIONS if current == status]

    @staticmethod
    def _with_side_effects(record: AttendanceRecord, entry: TimeEntry) -> AttendanceRecord:
        if entry.kind == K.CHECK_IN and record.first_check_in is None:
            return replace(record, first_check_in=entry.timestamp)
        if entry.kind == K.CHECK_OUT:
            # Every check-out reaching the machine is an end-of-day close.
            return replace(record, last_check_out=entry.timestamp, is_completed=True)
        return record
