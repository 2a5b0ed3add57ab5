from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..common.datetime_utils import end_of_day
from ..core.constants import DEFAULT_DAY_CUTOVER_HOUR


@dataclass(frozen=True)
class DayResolver:
    """Maps wall-clock timestamps to the logical work-day they belong to.

    Anything before ``cutover_hour`` local time is the tail end of the
    previous work-day, so a 01:00 check-out still lands on the day the
    worker checked in.
    """

    cutover_hour: int = DEFAULT_DAY_CUTOVER_HOUR

    def work_day(self, timestamp: datetime) -> date:
        if timestamp.hour < self.cutover_hour:
            return timestamp.date() - timedelta(days=1)
        return timestamp.date()

    def is_early_hours(self, timestamp: datetime) -> bool:
        return timestamp.hour < self.cutover_hour

    def boundary(
        self,
        work_day: date,
        *,
        like: datetime | None = None,
        after: datetime | None = None,
    ) -> datetime:
        """Last instant of ``work_day``; ``like`` supplies the timezone, if any.

        When ``after`` (the latest activity being closed) is already past
        midnight, the close moves to the end of the early-hours tail, one
        millisecond before the cutover, so it never precedes that activity.
        """
        tzinfo = like.tzinfo if like is not None else None
        end = end_of_day(work_day, tzinfo=tzinfo)
        if after is not None and after > end and self.cutover_hour > 0:
            return end_of_day(work_day + timedelta(days=1), tzinfo=tzinfo).replace(hour=self.cutover_hour - 1)
        return end
