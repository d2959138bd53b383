"""Calendar arithmetic: month lengths, date gaps, working days.

Weekday indices follow 0=Sunday..6=Saturday throughout. Functions accept
datetime.date or naive datetime.datetime values; holidays are compared
by calendar date, never by instant.

Reversed ranges never raise: totals degrade to zero.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import TypeVar

from labor_engine.calculators.types import (
    DateBreakdown,
    DateDiffResult,
    WeekendConfig,
    WeekendType,
    WorkingDaysCount,
)

D = TypeVar("D", date, datetime)

SAUDI_WEEKEND = WeekendConfig(WeekendType.SAUDI)
WESTERN_WEEKEND = WeekendConfig(WeekendType.WESTERN)

WEEKEND_DAYS: MappingProxyType[WeekendType, tuple[int, ...]] = MappingProxyType({
    WeekendType.SAUDI: (5, 6),  # Friday, Saturday
    WeekendType.WESTERN: (0, 6),  # Sunday, Saturday
    WeekendType.FRIDAY: (5,),
    WeekendType.SATURDAY: (6,),
    WeekendType.SUNDAY: (0,),
})

DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30.44


def _as_date(value: date) -> date:
    """Strip the time of day from a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _holiday_set(holidays: Iterable[date] | None) -> frozenset[date]:
    return frozenset(_as_date(h) for h in holidays or ())


def weekday_index(d: date) -> int:
    """Day of week with 0=Sunday..6=Saturday."""
    return (d.weekday() + 1) % 7


def days_in_month(d: date) -> int:
    return calendar.monthrange(d.year, d.month)[1]


def day_of_month(d: date) -> int:
    return d.day


def get_weekend_days(weekend: WeekendConfig = SAUDI_WEEKEND) -> tuple[int, ...]:
    """Resolve a weekend config to its weekday indices."""
    if weekend.type == WeekendType.CUSTOM:
        return tuple(weekend.custom_days)
    return WEEKEND_DAYS.get(weekend.type, WEEKEND_DAYS[WeekendType.SAUDI])


def is_weekend(d: date, weekend: WeekendConfig = SAUDI_WEEKEND) -> bool:
    return weekday_index(d) in get_weekend_days(weekend)


def is_working_day(
    d: date,
    weekend: WeekendConfig = SAUDI_WEEKEND,
    holidays: Iterable[date] | None = None,
) -> bool:
    if is_weekend(d, weekend):
        return False
    return _as_date(d) not in _holiday_set(holidays)


def calculate_working_days(
    start: date,
    end: date,
    weekend: WeekendConfig = SAUDI_WEEKEND,
    holidays: Iterable[date] | None = None,
) -> WorkingDaysCount:
    """Count working and weekend days in [start, end] inclusive.

    A holiday on a working day removes it from working_days without
    adding it to weekend_days. A holiday that falls on a weekend is
    counted once, as a weekend day.
    """
    current = _as_date(start)
    last = _as_date(end)
    if last < current:
        return WorkingDaysCount()

    weekend_days_set = get_weekend_days(weekend)
    holiday_set = _holiday_set(holidays)

    working = 0
    weekend_count = 0
    while current <= last:
        if weekday_index(current) in weekend_days_set:
            weekend_count += 1
        elif current not in holiday_set:
            working += 1
        current += timedelta(days=1)

    return WorkingDaysCount(working_days=working, weekend_days=weekend_count)


def calculate_business_days(start: date, end: date) -> int:
    """Working days in [start, end] under the Saudi (Fri/Sat) weekend."""
    return calculate_working_days(start, end, SAUDI_WEEKEND).working_days


def calculate_breakdown(start: date, end: date) -> DateBreakdown:
    """Split the gap into whole years, then months, then days.

    Subtraction is greedy from the end date; a negative day count borrows
    the length of the month preceding end's month.
    """
    start_d, end_d = _as_date(start), _as_date(end)
    if end_d <= start_d:
        return DateBreakdown()

    years = end_d.year - start_d.year
    months = end_d.month - start_d.month
    days = end_d.day - start_d.day

    if days < 0:
        months -= 1
        previous_month_end = end_d.replace(day=1) - timedelta(days=1)
        days += previous_month_end.day

    if months < 0:
        years -= 1
        months += 12

    return DateBreakdown(years=max(0, years), months=max(0, months), days=max(0, days))


def diff_between(
    start: date,
    end: date,
    weekend: WeekendConfig = SAUDI_WEEKEND,
    holidays: Iterable[date] | None = None,
) -> DateDiffResult:
    """Measure the gap from start to end.

    total_days counts calendar days between the date parts, so wall-clock
    drift never shifts it. Elapsed ms/seconds/minutes/hours come from the
    instants themselves (plain dates are taken at midnight).
    """
    start_dt = start if isinstance(start, datetime) else datetime.combine(start, datetime.min.time())
    end_dt = end if isinstance(end, datetime) else datetime.combine(end, datetime.min.time())

    if end_dt < start_dt:
        return DateDiffResult(
            ms=0,
            total_seconds=0,
            total_minutes=0,
            total_hours=0,
            total_days=0,
            total_weeks=0,
            years=0,
            months=0,
            business_days=0,
            working_days=0,
            weekend_days=0,
            breakdown=DateBreakdown(),
        )

    elapsed = end_dt - start_dt
    ms = elapsed // timedelta(milliseconds=1)
    total_seconds = ms // 1000
    total_minutes = total_seconds // 60
    total_hours = total_minutes // 60

    total_days = (_as_date(end) - _as_date(start)).days
    counts = calculate_working_days(start, end, weekend, holidays)

    return DateDiffResult(
        ms=ms,
        total_seconds=total_seconds,
        total_minutes=total_minutes,
        total_hours=total_hours,
        total_days=total_days,
        total_weeks=total_days // 7,
        years=int(total_days // DAYS_PER_YEAR),
        months=int(total_days // DAYS_PER_MONTH),
        business_days=counts.working_days,
        working_days=counts.working_days,
        weekend_days=counts.weekend_days,
        breakdown=calculate_breakdown(start, end),
    )


def add_working_days(
    d: D,
    days: int,
    weekend: WeekendConfig = SAUDI_WEEKEND,
    holidays: Iterable[date] | None = None,
) -> D:
    """Walk forward (days > 0) or backward (days < 0) by working days.

    The start date itself is never counted.
    """
    weekend_days_set = get_weekend_days(weekend)
    if set(range(7)) <= set(weekend_days_set):
        # Every weekday is a weekend day; nothing to land on
        return d

    holiday_set = _holiday_set(holidays)
    step = timedelta(days=1 if days >= 0 else -1)
    remaining = abs(days)
    result = d
    while remaining > 0:
        result = result + step
        if weekday_index(result) not in weekend_days_set and _as_date(result) not in holiday_set:
            remaining -= 1
    return result


def get_next_working_day(
    d: D,
    weekend: WeekendConfig = SAUDI_WEEKEND,
    holidays: Iterable[date] | None = None,
) -> D:
    return add_working_days(d, 1, weekend, holidays)


def get_previous_working_day(
    d: D,
    weekend: WeekendConfig = SAUDI_WEEKEND,
    holidays: Iterable[date] | None = None,
) -> D:
    return add_working_days(d, -1, weekend, holidays)


def get_working_days_in_month(
    year: int,
    month_index: int,
    weekend: WeekendConfig = SAUDI_WEEKEND,
    holidays: Iterable[date] | None = None,
) -> int:
    """Working days in a month; month_index is 0-based (0=January).

    Indices outside 0..11 roll into neighbouring years (12 is next January).
    """
    year += month_index // 12
    month_index %= 12
    first = date(year, month_index + 1, 1)
    last = first.replace(day=days_in_month(first))
    return calculate_working_days(first, last, weekend, holidays).working_days


def add_days(d: D, days: int) -> D:
    return d + timedelta(days=days)


def add_months(d: D, months: int) -> D:
    """Shift by calendar months, clamping to the target month's last day."""
    month_offset = d.month - 1 + months
    year = d.year + month_offset // 12
    month = month_offset % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def add_years(d: D, years: int) -> D:
    return add_months(d, years * 12)
