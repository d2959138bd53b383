"""Labor-law calculators: calendar, payroll, end of service, work hours."""

from labor_engine.calculators.dates import (
    SAUDI_WEEKEND,
    WESTERN_WEEKEND,
    add_days,
    add_months,
    add_working_days,
    add_years,
    calculate_breakdown,
    calculate_business_days,
    calculate_working_days,
    day_of_month,
    days_in_month,
    diff_between,
    get_next_working_day,
    get_previous_working_day,
    get_weekend_days,
    get_working_days_in_month,
    is_weekend,
    is_working_day,
)
from labor_engine.calculators.eos import SeparationRules, calc_eos
from labor_engine.calculators.hijri import from_hijri, to_hijri
from labor_engine.calculators.payroll import (
    GOSI_CAP,
    GOSI_PROFILES,
    calc_contributory_wage,
    calc_payroll,
    calculate_hourly_rate,
    calculate_overtime,
    get_gosi_rates,
    gosi_profile_from_resident,
)
from labor_engine.calculators.workhours import (
    RAMADAN_HOURS_PER_DAY,
    WORKING_HOURS_PER_DAY,
    calc_end_time_local,
    calc_shift,
    now_hhmm,
)

__all__ = [
    "GOSI_CAP",
    "GOSI_PROFILES",
    "RAMADAN_HOURS_PER_DAY",
    "SAUDI_WEEKEND",
    "WESTERN_WEEKEND",
    "WORKING_HOURS_PER_DAY",
    "SeparationRules",
    "add_days",
    "add_months",
    "add_working_days",
    "add_years",
    "calc_contributory_wage",
    "calc_end_time_local",
    "calc_eos",
    "calc_payroll",
    "calc_shift",
    "calculate_breakdown",
    "calculate_business_days",
    "calculate_hourly_rate",
    "calculate_overtime",
    "calculate_working_days",
    "day_of_month",
    "days_in_month",
    "diff_between",
    "from_hijri",
    "get_gosi_rates",
    "get_next_working_day",
    "get_previous_working_day",
    "get_weekend_days",
    "get_working_days_in_month",
    "gosi_profile_from_resident",
    "is_weekend",
    "is_working_day",
    "now_hhmm",
    "to_hijri",
]
