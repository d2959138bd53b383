"""End-of-service award under Saudi Labor Law Articles 84 and 85.

Article 84 (employer-side separation: termination, contract end,
retirement, death, disability, ...):
- Full entitlement regardless of tenure
- Half a month's wage per year for the first five years
- A full month's wage per year after that

Article 85 (resignation): the Article 84 amount scaled by tenure
- under 2 years: nothing
- 2 to 5 years: one third
- 5 to 10 years: two thirds
- 10 years or more: full entitlement
"""

from __future__ import annotations

import logging
from datetime import date
from types import MappingProxyType

from labor_engine.calculators.dates import diff_between
from labor_engine.calculators.types import (
    Article,
    EOSBaseType,
    EOSBreakdown,
    EOSInput,
    EOSResult,
    HousingMode,
    InvalidChoiceError,
    ServiceDuration,
    TerminationType,
)

logger = logging.getLogger(__name__)

FIRST_TRANCHE_YEARS = 5
FIRST_TRANCHE_MONTHS_PER_YEAR = 0.5
LATER_TRANCHE_MONTHS_PER_YEAR = 1.0


class SeparationRules:
    """Maps separation causes to articles and resignation factors.

    Resignation tiers, as (minimum tenure in years, factor, label), are
    checked from the longest tenure down.
    """

    ARTICLE_MAPPING: MappingProxyType[TerminationType, Article] = MappingProxyType({
        TerminationType.ARTICLE_84: Article.ARTICLE_84,
        TerminationType.ARTICLE_85: Article.ARTICLE_85,
        TerminationType.EMPLOYER_TERMINATION: Article.ARTICLE_84,
        TerminationType.EMPLOYEE_RESIGNATION: Article.ARTICLE_85,
        TerminationType.MUTUAL_AGREEMENT: Article.ARTICLE_84,
        TerminationType.RETIREMENT: Article.ARTICLE_84,
        TerminationType.DEATH: Article.ARTICLE_84,
        TerminationType.DISABILITY: Article.ARTICLE_84,
        TerminationType.FORCE_MAJEURE: Article.ARTICLE_84,
        TerminationType.PROBATION_END: Article.ARTICLE_85,
        TerminationType.CONTRACT_END: Article.ARTICLE_84,
        TerminationType.CONSTRUCTIVE_DISMISSAL: Article.ARTICLE_84,
        TerminationType.REDUNDANCY: Article.ARTICLE_84,
        TerminationType.TRANSFER_OF_BUSINESS: Article.ARTICLE_84,
    })

    RESIGNATION_TIERS: tuple[tuple[float, float, str], ...] = (
        (10, 1.0, "100% (10+ years)"),
        (5, 2 / 3, "2/3 (5-10 years)"),
        (2, 1 / 3, "1/3 (2-5 years)"),
        (0, 0.0, "0% (< 2 years)"),
    )

    # Probation separations inside this tenure earn nothing
    PROBATION_YEARS = 1

    @classmethod
    def normalize(cls, separation: TerminationType | str) -> TerminationType | None:
        """Resolve a separation cause, including legacy aliases."""
        try:
            return TerminationType.parse(separation, "separation")
        except InvalidChoiceError:
            return None

    @classmethod
    def article_for(cls, separation: TerminationType | str) -> Article:
        """Article governing a separation; unknown causes get Article 84."""
        termination = cls.normalize(separation)
        if termination is None:
            logger.warning(
                "Unknown separation cause %r, applying Article 84", separation
            )
            return Article.ARTICLE_84
        return cls.ARTICLE_MAPPING[termination]

    @classmethod
    def resignation_factor(cls, years: float) -> tuple[float, str]:
        for min_years, factor, label in cls.RESIGNATION_TIERS:
            if years >= min_years:
                return factor, label
        return 0.0, cls.RESIGNATION_TIERS[-1][2]


def calculate_service_duration(start: date, end: date) -> ServiceDuration:
    """Tenure the MOJ way: whole years, then months, then days.

    The decimal year count is years + months/12 + days/365.
    """
    diff = diff_between(start, end)
    b = diff.breakdown
    return ServiceDuration(
        years=b.years,
        months=b.months,
        days=b.days,
        total_days=diff.total_days,
        total_years_decimal=b.years + b.months / 12 + b.days / 365,
    )


def calculate_raw_eos_months(years: float) -> tuple[float, float, float]:
    """Return (raw_months, first_tranche_months, later_tranche_months)."""
    first = min(FIRST_TRANCHE_YEARS, years) * FIRST_TRANCHE_MONTHS_PER_YEAR
    later = max(0.0, years - FIRST_TRANCHE_YEARS) * LATER_TRANCHE_MONTHS_PER_YEAR
    return first + later, first, later


def calc_eos(args: EOSInput) -> EOSResult:
    """Compute the end-of-service award, leave encashment and total."""
    duration = calculate_service_duration(args.start, args.end)
    years = duration.total_years_decimal

    if args.housing_mode == HousingMode.PERCENT:
        housing = args.basic * args.housing_percent / 100
    else:
        housing = args.housing_fixed

    if args.base_type == EOSBaseType.BASIC_PLUS_HOUSING:
        base_monthly = args.basic + housing + args.other_allowances
    else:
        base_monthly = args.basic
    daily_wage = base_monthly / max(1, args.month_divisor)

    termination = SeparationRules.normalize(args.separation)
    article = SeparationRules.article_for(args.separation)

    raw_months, first_months, later_months = calculate_raw_eos_months(years)

    if article == Article.ARTICLE_85:
        factor, factor_label = SeparationRules.resignation_factor(years)
    else:
        factor, factor_label = 1.0, "100%"
    resignation_factor = factor

    if termination == TerminationType.PROBATION_END and years < SeparationRules.PROBATION_YEARS:
        factor = 0.0

    entitlement_months = raw_months * factor
    entitlement_amount = entitlement_months * base_monthly
    leave_encash = args.leave_days * daily_wage
    total = entitlement_amount + leave_encash + args.extras - args.deductions

    return EOSResult(
        duration=duration,
        base_monthly=base_monthly,
        daily_wage=daily_wage,
        raw_months=raw_months,
        raw_eos=raw_months * base_monthly,
        factor=factor,
        final_eos=entitlement_amount,
        leave_encash=leave_encash,
        extras=args.extras,
        deductions=args.deductions,
        total=total,
        termination_type=termination if termination is not None else args.separation,
        article=article,
        entitlement_months=entitlement_months,
        entitlement_amount=entitlement_amount,
        breakdown=EOSBreakdown(
            first_5_years_months=first_months,
            first_5_years_amount=first_months * base_monthly,
            after_5_years_months=later_months,
            after_5_years_amount=later_months * base_monthly,
            resignation_factor=resignation_factor,
            resignation_factor_label=factor_label,
        ),
    )
