from datetime import date, datetime, timezone

from worktime.tracking.day_resolver import DayResolver


def test_just_before_cutover_belongs_to_previous_day():
    resolver = DayResolver()
    assert resolver.work_day(datetime(2026, 2, 2, 5, 59, 59)) == date(2026, 2, 1)


def test_cutover_hour_belongs_to_same_day():
    resolver = DayResolver()
    assert resolver.work_day(datetime(2026, 2, 2, 6, 0, 0)) == date(2026, 2, 2)


def test_midnight_rolls_back_across_month_boundary():
    resolver = DayResolver()
    assert resolver.work_day(datetime(2026, 3, 1, 0, 15)) == date(2026, 2, 28)


def test_boundary_is_last_millisecond_of_day_and_keeps_timezone():
    resolver = DayResolver()
    aware = datetime(2026, 2, 3, 1, 30, tzinfo=timezone.utc)

    boundary = resolver.boundary(date(2026, 2, 2), like=aware)

    assert boundary == datetime(2026, 2, 2, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_custom_cutover():
    resolver = DayResolver(cutover_hour=4)
    assert resolver.work_day(datetime(2026, 2, 2, 5, 0)) == date(2026, 2, 2)
    assert resolver.is_early_hours(datetime(2026, 2, 2, 3, 59))


def test_boundary_moves_past_midnight_when_activity_already_did():
    resolver = DayResolver()

    boundary = resolver.boundary(date(2026, 2, 2), after=datetime(2026, 2, 3, 5, 0))

    assert boundary == datetime(2026, 2, 3, 5, 59, 59, 999000)
    assert resolver.work_day(boundary) == date(2026, 2, 2)
