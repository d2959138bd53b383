"""Labor engine command line interface.

Runs a single calculation and prints the result record as JSON:
- Payroll gross/net conversion
- End-of-service award
- Date gaps and working days
- Shift end time
- Hijri conversion

Usage:
    labor-engine payroll --basic 10000 --housing-percent 25 --gosi-profile saudi-standard
    labor-engine eos --start 2022-11-02 --end 2025-04-10 --basic 10000 --separation article84
    labor-engine dates diff --start 2024-01-01 --end 2024-01-31 --weekend saudi
    labor-engine dates add-working-days --date 2024-01-07 --days 5
    labor-engine shift --start 22:00 --hours 8
    labor-engine hijri --date 2024-01-01
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable

from labor_engine.calculators.dates import (
    add_working_days,
    calculate_working_days,
    diff_between,
    get_working_days_in_month,
)
from labor_engine.calculators.eos import calc_eos
from labor_engine.calculators.hijri import from_hijri, to_hijri
from labor_engine.calculators.payroll import calc_payroll
from labor_engine.calculators.types import (
    EOSBaseType,
    EOSInput,
    GosiProfile,
    HousingMode,
    InsuranceBase,
    InvalidChoiceError,
    OvertimeInput,
    PayrollInput,
    PayrollMode,
    Residency,
    ShiftInput,
    WeekendConfig,
    WeekendType,
)
from labor_engine.calculators.workhours import RAMADAN_HOURS_PER_DAY, calc_shift
from labor_engine.config import Settings, get_settings

logger = logging.getLogger(__name__)

OUTPUT_PRECISION = Decimal("0.01")  # Halalas


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_days(s: str) -> tuple[int, ...]:
    """Parse a comma-separated list of weekday indices (0=Sunday)."""
    days = tuple(int(part) for part in s.split(",") if part.strip())
    if any(d < 0 or d > 6 for d in days):
        raise argparse.ArgumentTypeError("weekday indices must be between 0 and 6")
    return days


def round_amounts(value: Any) -> Any:
    """Round every float in a result tree to halalas, half up."""
    if isinstance(value, dict):
        return {k: round_amounts(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [round_amounts(v) for v in value]
    if isinstance(value, float):
        return float(Decimal(str(value)).quantize(OUTPUT_PRECISION, rounding=ROUND_HALF_UP))
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class LaborEngineCli:
    """Labor engine command line interface."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        s = self.settings
        parser = argparse.ArgumentParser(
            prog="labor-engine",
            description="Saudi labor-law calculators",
        )
        parser.add_argument(
            "--round",
            action="store_true",
            help="Round monetary output to halalas (2 decimals)",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # payroll command
        payroll = subparsers.add_parser("payroll", help="Gross/net salary conversion")
        payroll.add_argument("--mode", default=PayrollMode.GROSS_TO_NET.value, help="gross2net or net2gross")
        payroll.add_argument("--resident", default=Residency.SAUDI.value, help="saudi or expat (legacy)")
        payroll.add_argument("--gosi-profile", help="saudi-standard, saudi-legacy, non-saudi or custom")
        payroll.add_argument(
            "--basic",
            type=float,
            required=True,
            help="Basic salary (the target net in net2gross mode unless --target-net is given)",
        )
        payroll.add_argument("--housing-mode", default=HousingMode.PERCENT.value, help="percent or fixed")
        payroll.add_argument("--housing-percent", type=float, default=25.0)
        payroll.add_argument("--housing-fixed", type=float, default=0.0)
        payroll.add_argument("--transport", type=float, default=0.0)
        payroll.add_argument("--other-allow", type=float, default=0.0)
        payroll.add_argument("--ins-emp-pct", type=float, help="Employee rate for custom/legacy")
        payroll.add_argument("--ins-er-pct", type=float, help="Employer rate for custom/legacy")
        payroll.add_argument("--ins-base", default=InsuranceBase.GOSI.value, help="gosi, gross or basic")
        payroll.add_argument("--other-ded-pct", type=float, default=0.0)
        payroll.add_argument("--flat-ded", type=float, default=0.0)
        payroll.add_argument("--month-divisor", type=float, default=s.month_divisor)
        payroll.add_argument("--hours-per-day", type=float, default=s.hours_per_day)
        payroll.add_argument("--target-net", type=float)
        payroll.add_argument("--gross-override", type=float)
        payroll.add_argument("--overtime-hours", type=float, default=0.0)
        payroll.add_argument("--overtime-rate", type=float, help="Overtime multiplier (default 1.5)")
        payroll.add_argument("--prorate-to-date", action="store_true")
        payroll.add_argument("--as-of", type=parse_date, help="Proration date (default: today)")

        # eos command
        eos = subparsers.add_parser("eos", help="End-of-service award")
        eos.add_argument("--start", type=parse_date, required=True, help="Service start (YYYY-MM-DD)")
        eos.add_argument("--end", type=parse_date, required=True, help="Service end (YYYY-MM-DD)")
        eos.add_argument("--basic", type=float, required=True)
        eos.add_argument("--separation", default="article84", help="Separation cause or article")
        eos.add_argument("--housing-mode", default=HousingMode.PERCENT.value)
        eos.add_argument("--housing-percent", type=float, default=0.0)
        eos.add_argument("--housing-fixed", type=float, default=0.0)
        eos.add_argument("--base-type", default=EOSBaseType.BASIC.value, help="basic or basic_plus_housing")
        eos.add_argument("--month-divisor", type=float, default=s.month_divisor)
        eos.add_argument("--leave-days", type=float, default=0.0)
        eos.add_argument("--extras", type=float, default=0.0)
        eos.add_argument("--deductions", type=float, default=0.0)
        eos.add_argument("--other-allowances", type=float, default=0.0)

        # dates command
        dates = subparsers.add_parser("dates", help="Date gaps and working days")
        dates_sub = dates.add_subparsers(dest="dates_command", help="Date commands")

        def add_weekend_args(p: argparse.ArgumentParser) -> None:
            p.add_argument("--weekend", default=s.weekend.value, help="saudi, western, friday, saturday, sunday, custom")
            p.add_argument("--custom-days", type=parse_days, default=(), help="Weekend indices for custom, e.g. 0,1")
            p.add_argument("--holiday", type=parse_date, action="append", default=[], help="Holiday date (repeatable)")

        diff = dates_sub.add_parser("diff", help="Gap between two dates")
        diff.add_argument("--start", type=parse_date, required=True)
        diff.add_argument("--end", type=parse_date, required=True)
        add_weekend_args(diff)

        working = dates_sub.add_parser("working-days", help="Working days in a range")
        working.add_argument("--start", type=parse_date, required=True)
        working.add_argument("--end", type=parse_date, required=True)
        add_weekend_args(working)

        add = dates_sub.add_parser("add-working-days", help="Shift a date by working days")
        add.add_argument("--date", type=parse_date, required=True)
        add.add_argument("--days", type=int, required=True)
        add_weekend_args(add)

        month = dates_sub.add_parser("month", help="Working days in a month")
        month.add_argument("--year", type=int, required=True)
        month.add_argument("--month", type=int, choices=range(1, 13), required=True, help="1-12")
        add_weekend_args(month)

        # shift command
        shift = subparsers.add_parser("shift", help="Shift end time")
        shift.add_argument("--start", required=True, help="Start time (HH:mm)")
        shift.add_argument("--hours", type=float, help=f"Shift length (default: {s.hours_per_day:g})")
        shift.add_argument("--ramadan", action="store_true", help=f"Use the {RAMADAN_HOURS_PER_DAY}-hour Ramadan day")
        shift.add_argument("--break-minutes", type=float, default=0.0)
        shift.add_argument("--break-paid", action="store_true")

        # hijri command
        hijri = subparsers.add_parser("hijri", help="Gregorian/Hijri conversion")
        group = hijri.add_mutually_exclusive_group()
        group.add_argument("--date", type=parse_date, help="Gregorian date (default: today)")
        group.add_argument("--from-hijri", help="Hijri date as YYYY-MM-DD")

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        logging.basicConfig(
            level=self.settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        handlers: dict[str, Callable[[argparse.Namespace], Any]] = {
            "payroll": self._cmd_payroll,
            "eos": self._cmd_eos,
            "dates": self._cmd_dates,
            "shift": self._cmd_shift,
            "hijri": self._cmd_hijri,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1

        try:
            output = handler(parsed)
        except InvalidChoiceError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

        if output is None:
            return 1
        if parsed.round:
            output = round_amounts(output)
        print(json.dumps(output, indent=2, default=_json_default))
        return 0

    def _cmd_payroll(self, args: argparse.Namespace) -> dict[str, Any]:
        overtime = None
        if args.overtime_hours > 0:
            overtime = OvertimeInput(enabled=True, hours=args.overtime_hours, rate=args.overtime_rate)

        payroll_input = PayrollInput(
            mode=PayrollMode.parse(args.mode, "mode"),
            resident=Residency.parse(args.resident, "resident"),
            gosi_profile=GosiProfile.parse(args.gosi_profile, "gosi_profile") if args.gosi_profile else None,
            basic=args.basic,
            housing_mode=HousingMode.parse(args.housing_mode, "housing_mode"),
            housing_percent=args.housing_percent,
            housing_fixed=args.housing_fixed,
            transport=args.transport,
            other_allow=args.other_allow,
            ins_emp_pct=args.ins_emp_pct,
            ins_er_pct=args.ins_er_pct,
            ins_base=InsuranceBase.parse(args.ins_base, "ins_base"),
            other_ded_pct=args.other_ded_pct,
            flat_ded=args.flat_ded,
            month_divisor=args.month_divisor,
            hours_per_day=args.hours_per_day,
            prorate_to_date=args.prorate_to_date,
            as_of=args.as_of,
            target_net=args.target_net,
            gross_override=args.gross_override,
            overtime=overtime,
        )
        return calc_payroll(payroll_input).to_dict()

    def _cmd_eos(self, args: argparse.Namespace) -> dict[str, Any]:
        eos_input = EOSInput(
            start=args.start,
            end=args.end,
            basic=args.basic,
            separation=args.separation,
            housing_mode=HousingMode.parse(args.housing_mode, "housing_mode"),
            housing_percent=args.housing_percent,
            housing_fixed=args.housing_fixed,
            base_type=EOSBaseType.parse(args.base_type, "base_type"),
            month_divisor=args.month_divisor,
            leave_days=args.leave_days,
            extras=args.extras,
            deductions=args.deductions,
            other_allowances=args.other_allowances,
        )
        return calc_eos(eos_input).to_dict()

    def _cmd_dates(self, args: argparse.Namespace) -> dict[str, Any] | None:
        if not args.dates_command:
            self.parser.parse_args(["dates", "--help"])
            return None

        weekend = WeekendConfig(
            type=WeekendType.parse(args.weekend, "weekend"),
            custom_days=args.custom_days,
        )
        holidays = args.holiday

        if args.dates_command == "diff":
            return diff_between(args.start, args.end, weekend, holidays).to_dict()

        if args.dates_command == "working-days":
            counts = calculate_working_days(args.start, args.end, weekend, holidays)
            return {"working_days": counts.working_days, "weekend_days": counts.weekend_days}

        if args.dates_command == "add-working-days":
            return {"date": add_working_days(args.date, args.days, weekend, holidays)}

        if args.dates_command == "month":
            return {
                "year": args.year,
                "month": args.month,
                "working_days": get_working_days_in_month(args.year, args.month - 1, weekend, holidays),
            }

        print(f"Unknown dates command: {args.dates_command}", file=sys.stderr)
        return None

    def _cmd_shift(self, args: argparse.Namespace) -> dict[str, Any]:
        if args.hours is not None:
            hours = args.hours
        elif args.ramadan:
            hours = RAMADAN_HOURS_PER_DAY
        else:
            hours = self.settings.hours_per_day

        result = calc_shift(
            ShiftInput(
                start=args.start,
                hours=hours,
                break_minutes=args.break_minutes,
                break_is_paid=args.break_paid,
            )
        )
        for error in result.errors:
            logger.warning(error)
        return result.to_dict()

    def _cmd_hijri(self, args: argparse.Namespace) -> dict[str, Any] | None:
        if args.from_hijri:
            try:
                year, month, day = (int(part) for part in args.from_hijri.split("-"))
            except ValueError:
                print(f"ERROR: invalid Hijri date '{args.from_hijri}', expected YYYY-MM-DD", file=sys.stderr)
                return None
            if not 1 <= month <= 12 or not 1 <= day <= 30:
                print(f"ERROR: Hijri date out of range: '{args.from_hijri}'", file=sys.stderr)
                return None
            return {"gregorian": from_hijri(year, month, day)}

        gregorian = args.date or date.today()
        return {"gregorian": gregorian, "hijri": to_hijri(gregorian).to_dict()}


def main() -> int:
    """CLI entry point."""
    cli = LaborEngineCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
