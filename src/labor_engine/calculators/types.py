"""Type definitions for the labor-law calculators."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any


class InvalidChoiceError(ValueError):
    """Raised when a caller-supplied string names no known option."""

    def __init__(self, field_name: str, value: Any, choices: list[str]):
        self.field = field_name
        self.value = value
        self.choices = choices
        super().__init__(
            f"Invalid {field_name} '{value}', expected one of: {', '.join(choices)}"
        )


class _ParsableEnum(str, Enum):
    """String enum that can be built from its value or a legacy alias."""

    @classmethod
    def aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def parse(cls, value: Any, field_name: str | None = None):
        if isinstance(value, cls):
            return value
        raw = str(value).strip()
        raw = cls.aliases().get(raw, raw)
        try:
            return cls(raw)
        except ValueError:
            raise InvalidChoiceError(
                field_name or cls.__name__, value, [m.value for m in cls]
            ) from None


# =============================================================================
# Calendar
# =============================================================================


class WeekendType(_ParsableEnum):
    """Weekend schemes. Weekday indices run 0=Sunday..6=Saturday."""

    SAUDI = "saudi"
    WESTERN = "western"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
    CUSTOM = "custom"

    @classmethod
    def aliases(cls) -> dict[str, str]:
        return {
            "fri-sat": "saudi",
            "sat-sun": "western",
            "fri": "friday",
            "sat": "saturday",
            "sun": "sunday",
        }


@dataclass(frozen=True)
class WeekendConfig:
    """Which weekdays are non-working.

    custom_days is only consulted for WeekendType.CUSTOM.
    """

    type: WeekendType = WeekendType.SAUDI
    custom_days: tuple[int, ...] = ()


@dataclass(frozen=True)
class DateBreakdown:
    """Calendar gap as whole years, then months, then days."""

    years: int = 0
    months: int = 0
    days: int = 0


@dataclass(frozen=True)
class WorkingDaysCount:
    """Working and weekend days across an inclusive date range."""

    working_days: int = 0
    weekend_days: int = 0


@dataclass(frozen=True)
class DateDiffResult:
    """Snapshot of the gap between two instants.

    Two year figures are carried on purpose:
    - years: floor(total_days / 365.25), a coarse age-style figure
    - breakdown.years: greedy calendar subtraction (used by EOS)
    They can disagree, e.g. for exactly 365 days across a non-leap year.
    """

    ms: int
    total_seconds: int
    total_minutes: int
    total_hours: int
    total_days: int
    total_weeks: int
    years: int
    months: int
    business_days: int  # Alias of working_days
    working_days: int
    weekend_days: int
    breakdown: DateBreakdown

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HijriDate:
    """A date in the Hijri calendar (Umm al-Qura, or tabular outside its range)."""

    year: int
    month: int
    day: int
    month_name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# Payroll
# =============================================================================


class PayrollMode(_ParsableEnum):
    GROSS_TO_NET = "gross2net"
    NET_TO_GROSS = "net2gross"


class Residency(_ParsableEnum):
    SAUDI = "saudi"
    EXPAT = "expat"


class GosiProfile(_ParsableEnum):
    """Named GOSI contribution profiles."""

    SAUDI_STANDARD = "saudi-standard"
    SAUDI_LEGACY = "saudi-legacy"
    NON_SAUDI = "non-saudi"
    CUSTOM = "custom"


class HousingMode(_ParsableEnum):
    PERCENT = "percent"
    FIXED = "fixed"


class InsuranceBase(_ParsableEnum):
    """Wage the insurance percentages are applied to."""

    GOSI = "gosi"  # min(basic + housing, GOSI_CAP)
    GROSS = "gross"
    BASIC = "basic"


@dataclass(frozen=True)
class GosiRates:
    """Employee and employer contribution percentages."""

    emp_pct: float
    er_pct: float


@dataclass(frozen=True)
class OvertimeInput:
    enabled: bool = False
    hours: float = 0.0
    rate: float | None = None  # Multiplier; defaults to OVERTIME_MULTIPLIER


@dataclass(frozen=True)
class OvertimePay:
    rate: float
    amount: float


@dataclass(frozen=True)
class PayrollInput:
    """Inputs for a monthly gross/net conversion.

    In net2gross mode the target net is target_net, or basic when
    target_net is not given.
    """

    mode: PayrollMode = PayrollMode.GROSS_TO_NET
    resident: Residency = Residency.SAUDI
    gosi_profile: GosiProfile | None = None
    basic: float = 0.0
    housing_mode: HousingMode = HousingMode.PERCENT
    housing_percent: float = 25.0
    housing_fixed: float = 0.0
    transport: float = 0.0
    other_allow: float = 0.0

    # Override rates: custom profile, or legacy saudi residency
    ins_emp_pct: float | None = None
    ins_er_pct: float | None = None
    ins_base: InsuranceBase = InsuranceBase.GOSI

    other_ded_pct: float = 0.0
    flat_ded: float = 0.0
    month_divisor: float = 30
    hours_per_day: float = 8

    # Month-to-date proration of insurance
    prorate_to_date: bool = False
    as_of: date | None = None

    # net2gross solver
    target_net: float | None = None
    assumed_basic_for_n2g: float | None = None

    gross_override: float | None = None
    overtime: OvertimeInput | None = None


@dataclass(frozen=True)
class MonthlyPay:
    basic: float
    housing: float
    gross: float
    net: float
    insurance_employee: float
    insurance_employer: float
    contributory_wage: float
    other_pct_amt: float
    flat: float
    overtime: float = 0.0
    gross_with_overtime: float = 0.0
    net_with_overtime: float = 0.0


@dataclass(frozen=True)
class PeriodPay:
    """Gross, net and insurance scaled to a yearly or daily period."""

    gross: float
    net: float
    insurance_employee: float
    insurance_employer: float


@dataclass(frozen=True)
class HourlyPay(PeriodPay):
    overtime_rate: float = 0.0


@dataclass(frozen=True)
class InsuranceToDate:
    insurance_employee: float
    insurance_employer: float


@dataclass(frozen=True)
class InsuranceAllocation:
    """Employee insurance split across wage components."""

    basic: float = 0.0
    housing: float = 0.0
    transport: float = 0.0
    other: float = 0.0


@dataclass(frozen=True)
class PayrollResult:
    monthly: MonthlyPay
    yearly: PeriodPay
    daily: PeriodPay
    hourly: HourlyPay
    to_date: InsuranceToDate
    allocation: InsuranceAllocation
    rates: GosiRates

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# End of service
# =============================================================================


class EOSBaseType(_ParsableEnum):
    """Wage components counted toward the EOS base."""

    BASIC = "basic"
    BASIC_PLUS_HOUSING = "basic_plus_housing"


class Article(_ParsableEnum):
    """Saudi Labor Law article governing the award."""

    ARTICLE_84 = "article84"  # Employer-side separation, full entitlement
    ARTICLE_85 = "article85"  # Resignation, tenure-tiered


class TerminationType(_ParsableEnum):
    """Separation causes accepted by the EOS calculator."""

    ARTICLE_84 = "article84"
    ARTICLE_85 = "article85"
    EMPLOYER_TERMINATION = "employerTermination"
    EMPLOYEE_RESIGNATION = "employeeResignation"
    MUTUAL_AGREEMENT = "mutualAgreement"
    RETIREMENT = "retirement"
    DEATH = "death"
    DISABILITY = "disability"
    FORCE_MAJEURE = "forceMajeure"
    PROBATION_END = "probationEnd"
    CONTRACT_END = "contractEnd"
    CONSTRUCTIVE_DISMISSAL = "constructiveDismissal"
    REDUNDANCY = "redundancy"
    TRANSFER_OF_BUSINESS = "transferOfBusiness"

    @classmethod
    def aliases(cls) -> dict[str, str]:
        # Older callers pass plain termination/resignation
        return {"termination": "article84", "resignation": "article85"}


@dataclass(frozen=True)
class EOSInput:
    start: date
    end: date
    basic: float
    separation: TerminationType | str = TerminationType.ARTICLE_84
    housing_mode: HousingMode = HousingMode.PERCENT
    housing_percent: float = 0.0
    housing_fixed: float = 0.0
    base_type: EOSBaseType = EOSBaseType.BASIC
    month_divisor: float = 30
    leave_days: float = 0.0
    extras: float = 0.0
    deductions: float = 0.0
    other_allowances: float = 0.0  # Counted only under basic_plus_housing


@dataclass(frozen=True)
class ServiceDuration:
    years: int
    months: int
    days: int
    total_days: int
    total_years_decimal: float


@dataclass(frozen=True)
class EOSBreakdown:
    """Tranche split of the raw award.

    Tranche amounts are months x base and are NOT scaled by the
    resignation factor; the factor applies only to the combined total.
    """

    first_5_years_months: float
    first_5_years_amount: float
    after_5_years_months: float
    after_5_years_amount: float
    resignation_factor: float
    resignation_factor_label: str


@dataclass(frozen=True)
class EOSResult:
    duration: ServiceDuration
    base_monthly: float
    daily_wage: float
    raw_months: float
    raw_eos: float
    factor: float
    final_eos: float
    leave_encash: float
    extras: float
    deductions: float
    total: float
    termination_type: TerminationType | str
    article: Article
    entitlement_months: float
    entitlement_amount: float
    breakdown: EOSBreakdown

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# Work hours
# =============================================================================


@dataclass(frozen=True)
class ShiftInput:
    start: str
    hours: float
    break_minutes: float = 0.0
    break_is_paid: bool = False


@dataclass(frozen=True)
class ShiftResult:
    """Shift end time; end_time is "--:--" when the start is unparseable."""

    end_time: str
    total_minutes: int = 0
    wraps_midnight: bool = False
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
