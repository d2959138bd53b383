"""Saudi payroll: gross <-> net conversion under GOSI rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType

from labor_engine.calculators.dates import day_of_month, days_in_month
from labor_engine.calculators.types import (
    GosiProfile,
    GosiRates,
    HourlyPay,
    HousingMode,
    InsuranceAllocation,
    InsuranceBase,
    InsuranceToDate,
    MonthlyPay,
    OvertimePay,
    PayrollInput,
    PayrollMode,
    PayrollResult,
    PeriodPay,
    Residency,
)
from labor_engine.calculators.workhours import WORKING_HOURS_PER_DAY

logger = logging.getLogger(__name__)

# Ceiling on the GOSI contributory wage (basic + housing), SAR per month
GOSI_CAP = 45000.0
OVERTIME_MULTIPLIER = 1.5  # 150% of the hourly rate
WORKING_DAYS_PER_MONTH = 30

GOSI_PROFILES: MappingProxyType[GosiProfile, GosiRates] = MappingProxyType({
    GosiProfile.SAUDI_STANDARD: GosiRates(emp_pct=10.0, er_pct=12.0),
    GosiProfile.SAUDI_LEGACY: GosiRates(emp_pct=9.75, er_pct=11.75),
    GosiProfile.NON_SAUDI: GosiRates(emp_pct=0.0, er_pct=2.0),  # Occupational hazards only
    GosiProfile.CUSTOM: GosiRates(emp_pct=0.0, er_pct=0.0),
})

# net2gross fixed-point solver
N2G_MAX_ITERATIONS = 30
N2G_STEP = 0.6
N2G_TOLERANCE = 0.01


def calculate_hourly_rate(
    monthly_gross: float,
    month_divisor: float = WORKING_DAYS_PER_MONTH,
    hours_per_day: float = WORKING_HOURS_PER_DAY,
) -> float:
    return monthly_gross / month_divisor / hours_per_day


def calculate_overtime(
    hourly_rate: float,
    hours: float,
    multiplier: float = OVERTIME_MULTIPLIER,
) -> OvertimePay:
    rate = hourly_rate * multiplier
    return OvertimePay(rate=rate, amount=rate * hours)


def get_gosi_rates(
    profile: GosiProfile | str,
    custom_emp_pct: float | None = None,
    custom_er_pct: float | None = None,
) -> GosiRates:
    """Resolve contribution rates for a profile.

    The custom profile takes both percentages from the caller; when either
    is missing, both resolve to 0%.
    """
    profile = GosiProfile.parse(profile, "gosi_profile")
    if profile == GosiProfile.CUSTOM:
        if custom_emp_pct is None or custom_er_pct is None:
            return GOSI_PROFILES[GosiProfile.CUSTOM]
        return GosiRates(emp_pct=custom_emp_pct, er_pct=custom_er_pct)
    return GOSI_PROFILES[profile]


def gosi_profile_from_resident(resident: Residency | str) -> GosiProfile:
    """Map the legacy residency field onto a profile."""
    if Residency.parse(resident, "resident") == Residency.EXPAT:
        return GosiProfile.NON_SAUDI
    return GosiProfile.SAUDI_LEGACY


def calc_contributory_wage(basic: float, housing: float) -> float:
    return min(basic + housing, GOSI_CAP)


def _resolve_rates(args: PayrollInput) -> GosiRates:
    """Profile wins over the legacy residency field."""
    if args.gosi_profile is not None:
        return get_gosi_rates(args.gosi_profile, args.ins_emp_pct, args.ins_er_pct)

    if args.resident == Residency.EXPAT:
        return GOSI_PROFILES[GosiProfile.NON_SAUDI]

    legacy = GOSI_PROFILES[GosiProfile.SAUDI_LEGACY]
    return GosiRates(
        emp_pct=legacy.emp_pct if args.ins_emp_pct is None else args.ins_emp_pct,
        er_pct=legacy.er_pct if args.ins_er_pct is None else args.ins_er_pct,
    )


@dataclass(frozen=True)
class _WageShape:
    """Allowance layout shared by the forward and inverse paths."""

    housing_mode: HousingMode
    housing_percent: float
    housing_fixed: float
    transport: float
    other_allow: float
    ins_base: InsuranceBase

    def housing_for(self, basic: float) -> float:
        if self.housing_mode == HousingMode.PERCENT:
            return basic * self.housing_percent / 100
        return self.housing_fixed

    def gross_for(self, basic: float) -> float:
        return basic + self.housing_for(basic) + self.transport + self.other_allow

    def insurable_wage(self, basic: float, gross: float) -> float:
        if self.ins_base == InsuranceBase.GOSI:
            return calc_contributory_wage(basic, self.housing_for(basic))
        if self.ins_base == InsuranceBase.BASIC:
            return basic
        return gross


def _solve_net_to_gross(
    shape: _WageShape,
    target_net: float,
    seed_basic: float,
    rates: GosiRates,
    other_ded_pct: float,
    flat_ded: float,
) -> tuple[float, float]:
    """Find the basic whose gross nets out to target_net.

    Damped fixed-point iteration; the result approximates the target to
    within N2G_TOLERANCE when it converges. Returns (gross, basic).
    """
    basic = max(seed_basic, 1.0)
    gross = 0.0
    for iteration in range(N2G_MAX_ITERATIONS):
        gross = shape.gross_for(basic)
        insurance = shape.insurable_wage(basic, gross) * rates.emp_pct / 100
        net = gross - insurance - gross * other_ded_pct / 100 - flat_ded
        diff = target_net - net
        if abs(diff) < N2G_TOLERANCE:
            logger.debug("net2gross converged after %d iterations", iteration + 1)
            break
        basic += diff * N2G_STEP
    else:
        gross = shape.gross_for(basic)
        logger.debug(
            "net2gross stopped after %d iterations (target %.2f)",
            N2G_MAX_ITERATIONS,
            target_net,
        )
    return max(0.0, gross), max(0.0, basic)


def _infer_basic_from_gross(shape: _WageShape, gross: float) -> float:
    if shape.housing_mode == HousingMode.PERCENT:
        inferred = (gross - shape.transport - shape.other_allow) / (1 + shape.housing_percent / 100)
    else:
        inferred = gross - shape.housing_fixed - shape.transport - shape.other_allow
    return max(0.0, inferred)


def _allocate_insurance(
    shape: _WageShape, basic: float, insurance_employee: float
) -> InsuranceAllocation:
    """Spread employee insurance over wage components, pro rata."""
    parts = {
        "basic": basic,
        "housing": shape.housing_for(basic),
        "transport": shape.transport,
        "other": shape.other_allow,
    }
    total = sum(parts.values())
    if total <= 0:
        return InsuranceAllocation()
    return InsuranceAllocation(
        **{name: insurance_employee * amount / total for name, amount in parts.items()}
    )


def calc_payroll(args: PayrollInput) -> PayrollResult:
    """Convert monthly compensation between gross and net.

    Calculation order:
    1) Resolve GOSI rates (profile, else residency)
    2) Gross: override, net2gross solve, or basic + allowances
    3) Insurance on the insurable wage (GOSI base capped at GOSI_CAP)
    4) net = gross - employee insurance - percentage deduction - flat
    5) Overtime reported alongside, never folded into net
    6) Period scaling, month-to-date proration, allocation
    """
    rates = _resolve_rates(args)
    shape = _WageShape(
        housing_mode=args.housing_mode,
        housing_percent=args.housing_percent,
        housing_fixed=args.housing_fixed,
        transport=args.transport,
        other_allow=args.other_allow,
        ins_base=args.ins_base,
    )

    basic = args.basic
    if args.gross_override is not None and args.gross_override > 0:
        gross = args.gross_override
        basic = _infer_basic_from_gross(shape, gross)
    elif args.mode == PayrollMode.NET_TO_GROSS:
        target_net = args.basic if args.target_net is None else args.target_net
        seed = target_net if args.assumed_basic_for_n2g is None else args.assumed_basic_for_n2g
        gross, basic = _solve_net_to_gross(
            shape, target_net, seed, rates, args.other_ded_pct, args.flat_ded
        )
    else:
        gross = shape.gross_for(basic)

    housing = shape.housing_for(basic)
    contributory_wage = calc_contributory_wage(basic, housing)
    insurable = shape.insurable_wage(basic, gross)

    insurance_employee = insurable * rates.emp_pct / 100
    insurance_employer = insurable * rates.er_pct / 100
    other_pct_amt = gross * args.other_ded_pct / 100
    flat = args.flat_ded
    net = gross - insurance_employee - other_pct_amt - flat

    month_divisor = max(1, args.month_divisor)
    hours_per_day = max(1, args.hours_per_day)
    hourly_rate = calculate_hourly_rate(gross, month_divisor, hours_per_day)

    overtime_amount = 0.0
    overtime_rate = 0.0
    if args.overtime is not None and args.overtime.enabled and args.overtime.hours > 0:
        pay = calculate_overtime(
            hourly_rate, args.overtime.hours, args.overtime.rate or OVERTIME_MULTIPLIER
        )
        overtime_rate = pay.rate
        overtime_amount = pay.amount

    if args.prorate_to_date:
        as_of = args.as_of or date.today()
        mtd_factor = day_of_month(as_of) / days_in_month(as_of)
    else:
        mtd_factor = 1.0

    if args.ins_base == InsuranceBase.GROSS and gross > 0 and insurance_employee > 0:
        allocation = _allocate_insurance(shape, basic, insurance_employee)
    else:
        allocation = InsuranceAllocation()

    return PayrollResult(
        monthly=MonthlyPay(
            basic=basic,
            housing=housing,
            gross=gross,
            net=net,
            insurance_employee=insurance_employee,
            insurance_employer=insurance_employer,
            contributory_wage=contributory_wage,
            other_pct_amt=other_pct_amt,
            flat=flat,
            overtime=overtime_amount,
            gross_with_overtime=gross + overtime_amount,
            net_with_overtime=net + overtime_amount,
        ),
        yearly=PeriodPay(
            gross=gross * 12,
            net=net * 12,
            insurance_employee=insurance_employee * 12,
            insurance_employer=insurance_employer * 12,
        ),
        daily=PeriodPay(
            gross=gross / month_divisor,
            net=net / month_divisor,
            insurance_employee=insurance_employee / month_divisor,
            insurance_employer=insurance_employer / month_divisor,
        ),
        hourly=HourlyPay(
            gross=hourly_rate,
            net=net / month_divisor / hours_per_day,
            insurance_employee=insurance_employee / month_divisor / hours_per_day,
            insurance_employer=insurance_employer / month_divisor / hours_per_day,
            overtime_rate=overtime_rate,
        ),
        to_date=InsuranceToDate(
            insurance_employee=insurance_employee * mtd_factor,
            insurance_employer=insurance_employer * mtd_factor,
        ),
        allocation=allocation,
        rates=rates,
    )
