from datetime import date

import pytest
import QuantLib as ql

from curvelib.business_calendar import (
    add_business_days,
    adjust_date,
    compute_maturity,
    generate_schedule,
    get_spot_date,
)
from curvelib.conventions.calendars import (
    NULL_CALENDAR,
    TARGET,
    WEEKEND_ONLY,
    BusinessDayCalendar,
    Calendar,
    get_calendar,
)
from curvelib.conventions.types import BusinessDayAdjustment, CalendarType, Frequency
from curvelib.errors import NoBusinessDayFound, UnknownConventionError

BDA = BusinessDayAdjustment


def test_target_holidays():
    assert not TARGET.is_business_day(date(2024, 1, 1))
    assert not TARGET.is_business_day(date(2024, 3, 29))  # Good Friday
    assert not TARGET.is_business_day(date(2024, 4, 1))  # Easter Monday
    assert TARGET.is_business_day(date(2024, 1, 2))
    assert TARGET.is_holiday(date(2024, 12, 25))


def test_weekend_and_null_calendars():
    saturday = date(2024, 6, 29)
    assert not WEEKEND_ONLY.is_business_day(saturday)
    assert WEEKEND_ONLY.is_business_day(date(2024, 12, 25))
    assert NULL_CALENDAR.is_business_day(saturday)


def test_calendar_registry():
    assert get_calendar("target") is TARGET
    assert get_calendar("EUR") is TARGET
    assert get_calendar(CalendarType.WEEKEND) is WEEKEND_ONLY
    assert get_calendar(TARGET) is TARGET
    with pytest.raises(UnknownConventionError):
        get_calendar("MARS")


def test_custom_calendars_satisfy_protocol(never_calendar):
    assert isinstance(TARGET, BusinessDayCalendar)
    assert isinstance(never_calendar, BusinessDayCalendar)
    assert get_calendar(never_calendar) is never_calendar


@pytest.mark.parametrize(
    "rule, expected",
    [
        (BDA.NO_ADJUSTMENT, date(2024, 6, 29)),
        (BDA.FOLLOWING, date(2024, 7, 1)),
        (BDA.MODIFIED_FOLLOWING, date(2024, 6, 28)),
        (BDA.PRECEDING, date(2024, 6, 28)),
        (BDA.MODIFIED_PRECEDING, date(2024, 6, 28)),
    ],
)
def test_adjust_month_end_saturday(rule, expected):
    assert adjust_date(date(2024, 6, 29), rule, WEEKEND_ONLY) == expected


def test_modified_preceding_rolls_forward_at_month_start():
    # Saturday 2024-06-01: preceding would leave the month
    assert adjust_date(date(2024, 6, 1), BDA.MODIFIED_PRECEDING, WEEKEND_ONLY) == date(2024, 6, 3)


def test_modified_following_skips_easter_holidays():
    # Sat 30 Mar -> Tue 2 Apr leaves the month; preceding skips Good Friday
    assert adjust_date(date(2024, 3, 30), BDA.MODIFIED_FOLLOWING, TARGET) == date(2024, 3, 28)


def test_business_day_is_left_unchanged():
    d = date(2024, 1, 3)
    for rule in BDA:
        assert adjust_date(d, rule, TARGET) == d


@pytest.mark.parametrize("rule", [r for r in BDA if r != BDA.NO_ADJUSTMENT])
def test_adjustment_search_is_bounded(rule, never_calendar):
    with pytest.raises(NoBusinessDayFound) as excinfo:
        adjust_date(date(2024, 1, 1), rule, never_calendar, max_search_days=10)
    assert excinfo.value.horizon_days == 10


def test_no_adjustment_never_consults_calendar(never_calendar):
    assert adjust_date(date(2024, 1, 1), BDA.NO_ADJUSTMENT, never_calendar) == date(2024, 1, 1)


def test_add_business_days():
    assert add_business_days(date(2024, 3, 28), 2, TARGET) == date(2024, 4, 3)
    assert add_business_days(date(2024, 4, 3), -2, TARGET) == date(2024, 3, 28)
    assert TARGET.add_business_days(date(2024, 3, 28), 2) == date(2024, 4, 3)
    assert add_business_days(date(2024, 1, 5), 0, TARGET) == date(2024, 1, 5)


def test_add_business_days_bounded(never_calendar):
    with pytest.raises(NoBusinessDayFound):
        add_business_days(date(2024, 1, 1), 1, never_calendar)


def test_spot_date():
    assert get_spot_date(date(2024, 3, 28)) == date(2024, 4, 3)
    assert get_spot_date(date(2024, 1, 2), WEEKEND_ONLY, spot_lag=0) == date(2024, 1, 2)


def test_business_days_between():
    assert TARGET.business_days_between(date(2024, 3, 28), date(2024, 4, 3)) == 2
    assert TARGET.business_days_between(date(2024, 4, 3), date(2024, 3, 28)) == 0


def test_compute_maturity():
    assert compute_maturity(date(2024, 1, 31), "1M", WEEKEND_ONLY) == date(2024, 2, 29)
    assert compute_maturity(date(2024, 6, 28), "1D", WEEKEND_ONLY) == date(2024, 7, 1)
    assert compute_maturity(date(2024, 5, 31), "1M", WEEKEND_ONLY) == date(2024, 6, 28)
    assert compute_maturity(date(2024, 1, 2), "6M", TARGET) == date(2024, 7, 2)


def test_generate_schedule_regular():
    schedule = generate_schedule(
        date(2024, 1, 15), date(2025, 1, 15), Frequency.SEMIANNUAL, NULL_CALENDAR
    )
    assert schedule == [date(2024, 1, 15), date(2024, 7, 15), date(2025, 1, 15)]


def test_generate_schedule_short_front_stub():
    schedule = generate_schedule(
        date(2024, 3, 1), date(2025, 1, 15), Frequency.SEMIANNUAL, NULL_CALENDAR
    )
    assert schedule == [date(2024, 3, 1), date(2024, 7, 15), date(2025, 1, 15)]


def test_generate_schedule_adjusts_intermediate_dates():
    schedule = generate_schedule(
        date(2024, 3, 29), date(2025, 3, 29), Frequency.QUARTERLY, WEEKEND_ONLY
    )
    # 2024-06-29 is a Saturday, 2024-12-29 a Sunday
    assert schedule == [
        date(2024, 3, 29),
        date(2024, 6, 28),
        date(2024, 9, 30),
        date(2024, 12, 30),
        date(2025, 3, 29),
    ]


def test_generate_schedule_rejects_empty_period():
    with pytest.raises(ValueError):
        generate_schedule(date(2024, 1, 1), date(2024, 1, 1), Frequency.ANNUAL)


@pytest.mark.parametrize(
    "calendar, dt, rule, expected",
    [
        (TARGET, date(2025, 1, 1), BusinessDayAdjustment.MODIFIED_FOLLOWING, date(2025, 1, 2)),
        (WEEKEND_ONLY, date(2026, 11, 7), BusinessDayAdjustment.MODIFIED_FOLLOWING, date(2026, 11, 9)),
        (WEEKEND_ONLY, date(2024, 3, 30), BusinessDayAdjustment.MODIFIED_FOLLOWING, date(2024, 3, 29)),
        (WEEKEND_ONLY, date(2024, 3, 30), BusinessDayAdjustment.NO_ADJUSTMENT, date(2024, 3, 30)),
    ],
)
def test_calendar_adjust_agrees_with_adjust_date(calendar, dt, rule, expected):
    assert calendar.adjust(dt, rule) == expected
    assert adjust_date(dt, rule, calendar) == expected


def test_calendar_adjust_search_is_bounded():
    closed = ql.BespokeCalendar("CLOSED")
    weekdays = (ql.Monday, ql.Tuesday, ql.Wednesday, ql.Thursday, ql.Friday, ql.Saturday, ql.Sunday)
    for weekday in weekdays:
        closed.addWeekend(weekday)
    calendar = Calendar("CLOSED", closed)
    with pytest.raises(NoBusinessDayFound):
        calendar.adjust(date(2024, 6, 3), BDA.FOLLOWING)
    with pytest.raises(NoBusinessDayFound):
        calendar.adjust(date(2024, 6, 3), BDA.MODIFIED_PRECEDING)


def test_calendar_adjust_honours_search_horizon():
    saturday = date(2024, 3, 30)
    with pytest.raises(NoBusinessDayFound):
        WEEKEND_ONLY.adjust(saturday, BDA.FOLLOWING, max_search_days=1)
    assert WEEKEND_ONLY.adjust(saturday, BDA.FOLLOWING, max_search_days=2) == date(2024, 4, 1)
