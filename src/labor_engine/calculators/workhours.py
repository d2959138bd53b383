"""Shift end-time arithmetic on a 24-hour clock."""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime

from labor_engine.calculators.types import ShiftInput, ShiftResult

logger = logging.getLogger(__name__)

INVALID_TIME = "--:--"
MINUTES_PER_DAY = 24 * 60
WORKING_HOURS_PER_DAY = 8
RAMADAN_HOURS_PER_DAY = 6

_HHMM = re.compile(r"(\d{2}):(\d{2})", re.ASCII)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _as_number(value: float | None) -> float:
    """Missing or non-finite numbers count as zero."""
    if value is None:
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


def parse_hhmm(value: str | None) -> int | None:
    """Minutes past midnight for an HH:mm string, or None if invalid.

    Hours above 23 or minutes above 59 are rejected rather than wrapped
    around the clock.
    """
    match = _HHMM.fullmatch(value or "")
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def format_hhmm(minutes: int) -> str:
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def calc_shift(shift: ShiftInput) -> ShiftResult:
    """End time of a shift.

    Paid breaks extend the clock; unpaid breaks do not.
    """
    start_minutes = parse_hhmm(shift.start)
    if start_minutes is None:
        logger.debug("Unparseable shift start %r", shift.start)
        return ShiftResult(
            end_time=INVALID_TIME,
            errors=(f"Invalid start time: {shift.start!r}",),
        )

    work_minutes = _round_half_up(_as_number(shift.hours) * 60)
    break_minutes = _round_half_up(_as_number(shift.break_minutes))
    total_minutes = work_minutes + break_minutes if shift.break_is_paid else work_minutes

    end_minutes = start_minutes + total_minutes
    return ShiftResult(
        end_time=format_hhmm(end_minutes),
        total_minutes=total_minutes,
        wraps_midnight=end_minutes >= MINUTES_PER_DAY or end_minutes < 0,
    )


def calc_end_time_local(
    start_hhmm: str,
    hours: float,
    break_minutes: float = 0,
    break_is_paid: bool = False,
) -> str:
    """End time as HH:mm.

    Returns "--:--" when start_hhmm is not a clock time between 00:00 and
    23:59; out-of-range starts such as "25:00" are not wrapped.
    """
    return calc_shift(
        ShiftInput(
            start=start_hhmm,
            hours=hours,
            break_minutes=break_minutes,
            break_is_paid=break_is_paid,
        )
    ).end_time


def now_hhmm(now: datetime | None = None) -> str:
    """Current local wall-clock time as HH:mm."""
    now = now or datetime.now()
    return f"{now.hour:02d}:{now.minute:02d}"
