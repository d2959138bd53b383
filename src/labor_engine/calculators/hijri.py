"""Gregorian <-> Hijri conversion.

Conversions use the official Umm al-Qura calendar through hijridate,
which covers 1343-1500 AH (1924-08-01 to 2077-11-16). Outside that table,
or for a Hijri date the table rejects, the tabular Islamic calendar (a
fixed 30-year cycle of 11 leap years) is used instead; it can differ from
Umm al-Qura by a day either way.
"""

from __future__ import annotations

import logging
import math
from datetime import date

from hijridate import Gregorian, Hijri

from labor_engine.calculators.types import HijriDate

logger = logging.getLogger(__name__)

HIJRI_MONTHS: tuple[str, ...] = (
    "Muharram",
    "Safar",
    "Rabi al-Awwal",
    "Rabi al-Thani",
    "Jumada al-Awwal",
    "Jumada al-Thani",
    "Rajab",
    "Shaban",
    "Ramadan",
    "Shawwal",
    "Dhu al-Qadah",
    "Dhu al-Hijjah",
)

# JDN of 1 Muharram 1 AH (16 July 622, Julian calendar)
ISLAMIC_EPOCH_JDN = 1948440

# date.toordinal() is 1 for 0001-01-01, whose JDN is 1721426
_ORDINAL_TO_JDN = 1721425


def _hijri_date(year: int, month: int, day: int) -> HijriDate:
    return HijriDate(year=year, month=month, day=day, month_name=HIJRI_MONTHS[month - 1])


def _tabular_to_hijri(d: date) -> HijriDate:
    jdn = d.toordinal() + _ORDINAL_TO_JDN

    l = jdn - ISLAMIC_EPOCH_JDN + 10632  # noqa: E741
    n = (l - 1) // 10631
    l = l - 10631 * n + 354  # noqa: E741
    j = ((10985 - l) // 5316) * ((50 * l) // 17719) + (l // 5670) * ((43 * l) // 15238)
    l = l - ((30 - j) // 15) * ((17719 * j) // 50) - (j // 16) * ((15238 * j) // 43) + 29  # noqa: E741

    month = (24 * l) // 709
    day = l - (709 * month) // 24
    year = 30 * n + j - 30
    return _hijri_date(year, month, day)


def _tabular_from_hijri(year: int, month: int, day: int) -> date:
    jdn = (
        day
        + math.ceil(29.5 * (month - 1))
        + (year - 1) * 354
        + (3 + 11 * year) // 30
        + ISLAMIC_EPOCH_JDN
        - 1
    )
    return date.fromordinal(jdn - _ORDINAL_TO_JDN)


def to_hijri(d: date) -> HijriDate:
    """Convert a Gregorian date to Hijri (Umm al-Qura where covered)."""
    try:
        hijri = Gregorian(d.year, d.month, d.day).to_hijri()
    except OverflowError:
        logger.debug("%s is outside the Umm al-Qura table, using tabular calendar", d)
        return _tabular_to_hijri(d)
    return _hijri_date(hijri.year, hijri.month, hijri.day)


def from_hijri(year: int, month: int, day: int) -> date:
    """Convert a Hijri date to Gregorian (Umm al-Qura where covered)."""
    try:
        gregorian = Hijri(year, month, day).to_gregorian()
    except (OverflowError, ValueError):
        logger.debug(
            "%d-%02d-%02d AH not in the Umm al-Qura table, using tabular calendar",
            year,
            month,
            day,
        )
        return _tabular_from_hijri(year, month, day)
    return date(gregorian.year, gregorian.month, gregorian.day)
