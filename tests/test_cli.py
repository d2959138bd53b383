"""Tests for the labor-engine command line interface."""

import json
from dataclasses import replace

import pytest

from labor_engine.calculators.types import WeekendType
from labor_engine.cli import LaborEngineCli, round_amounts


def _run(cli, capsys, *args):
    code = cli.run(list(args))
    captured = capsys.readouterr()
    return code, captured


def _json(captured):
    return json.loads(captured.out)


class TestPayrollCommand:
    def test_gross_to_net(self, cli, capsys):
        code, captured = _run(
            cli, capsys, "payroll", "--basic", "10000", "--gosi-profile", "saudi-standard"
        )

        assert code == 0
        data = _json(captured)
        assert data["monthly"]["gross"] == pytest.approx(12500)
        assert data["monthly"]["insurance_employee"] == pytest.approx(1250)
        assert data["rates"] == {"emp_pct": 10.0, "er_pct": 12.0}

    def test_net_to_gross_rounded(self, cli, capsys):
        code, captured = _run(
            cli,
            capsys,
            "--round",
            "payroll",
            "--mode",
            "net2gross",
            "--basic",
            "11250",
            "--gosi-profile",
            "saudi-standard",
        )

        assert code == 0
        data = _json(captured)
        assert data["monthly"]["net"] == pytest.approx(11250, abs=0.05)

    def test_overtime(self, cli, capsys):
        code, captured = _run(
            cli,
            capsys,
            "payroll",
            "--basic",
            "10000",
            "--gosi-profile",
            "saudi-standard",
            "--overtime-hours",
            "10",
        )

        assert code == 0
        assert _json(captured)["monthly"]["overtime"] == pytest.approx(781.25)

    def test_invalid_mode(self, cli, capsys):
        """Unknown option values exit 1 with a message on stderr."""
        code, captured = _run(cli, capsys, "payroll", "--basic", "10000", "--mode", "sideways")

        assert code == 1
        assert "Invalid mode 'sideways'" in captured.err
        assert captured.out == ""

    def test_missing_basic(self, cli, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.run(["payroll"])
        assert exc_info.value.code == 2


class TestEosCommand:
    def test_moj_reference(self, cli, capsys):
        code, captured = _run(
            cli,
            capsys,
            "--round",
            "eos",
            "--start",
            "2022-11-02",
            "--end",
            "2025-04-10",
            "--basic",
            "10000",
            "--separation",
            "article84",
            "--leave-days",
            "13",
        )

        assert code == 0
        data = _json(captured)
        assert data["final_eos"] == 12192.92
        assert data["leave_encash"] == 4333.33
        assert data["article"] == "article84"
        assert data["duration"]["years"] == 2

    def test_resignation_alias(self, cli, capsys):
        code, captured = _run(
            cli,
            capsys,
            "eos",
            "--start",
            "2022-11-02",
            "--end",
            "2025-04-10",
            "--basic",
            "10000",
            "--separation",
            "resignation",
        )

        assert code == 0
        data = _json(captured)
        assert data["article"] == "article85"
        assert data["termination_type"] == "article85"

    def test_bad_date(self, cli):
        with pytest.raises(SystemExit) as exc_info:
            cli.run(["eos", "--start", "2022-13-01", "--end", "2025-04-10", "--basic", "1"])
        assert exc_info.value.code == 2

    def test_invalid_base_type(self, cli, capsys):
        code, captured = _run(
            cli,
            capsys,
            "eos",
            "--start",
            "2022-11-02",
            "--end",
            "2025-04-10",
            "--basic",
            "10000",
            "--base-type",
            "everything",
        )

        assert code == 1
        assert "base_type" in captured.err


class TestDatesCommand:
    def test_diff(self, cli, capsys):
        code, captured = _run(
            cli, capsys, "dates", "diff", "--start", "2024-01-01", "--end", "2024-01-31"
        )

        assert code == 0
        data = _json(captured)
        assert data["total_days"] == 30
        assert data["working_days"] == 23
        assert data["breakdown"] == {"years": 0, "months": 0, "days": 30}

    def test_diff_with_holidays(self, cli, capsys):
        code, captured = _run(
            cli,
            capsys,
            "dates",
            "diff",
            "--start",
            "2024-01-01",
            "--end",
            "2024-01-31",
            "--holiday",
            "2024-01-02",
            "--holiday",
            "2024-01-03",
        )

        assert code == 0
        assert _json(captured)["working_days"] == 21

    def test_working_days_custom_weekend(self, cli, capsys):
        code, captured = _run(
            cli,
            capsys,
            "dates",
            "working-days",
            "--start",
            "2024-01-01",
            "--end",
            "2024-01-07",
            "--weekend",
            "custom",
            "--custom-days",
            "0,1",
        )

        assert code == 0
        assert _json(captured) == {"working_days": 5, "weekend_days": 2}

    def test_add_working_days(self, cli, capsys):
        code, captured = _run(
            cli, capsys, "dates", "add-working-days", "--date", "2024-01-07", "--days", "5"
        )

        assert code == 0
        assert _json(captured) == {"date": "2024-01-14"}

    def test_month(self, cli, capsys):
        code, captured = _run(cli, capsys, "dates", "month", "--year", "2024", "--month", "2")

        assert code == 0
        assert _json(captured)["working_days"] == 21

    def test_unknown_weekend(self, cli, capsys):
        code, captured = _run(
            cli,
            capsys,
            "dates",
            "diff",
            "--start",
            "2024-01-01",
            "--end",
            "2024-01-31",
            "--weekend",
            "mon-tue",
        )

        assert code == 1
        assert "weekend" in captured.err

    def test_weekend_default_from_settings(self, settings, capsys):
        cli = LaborEngineCli(settings=replace(settings, weekend=WeekendType.WESTERN))
        code, captured = _run(
            cli, capsys, "dates", "working-days", "--start", "2024-01-05", "--end", "2024-01-07"
        )

        assert code == 0
        assert _json(captured) == {"working_days": 1, "weekend_days": 2}


class TestShiftCommand:
    def test_wraparound(self, cli, capsys):
        code, captured = _run(cli, capsys, "shift", "--start", "22:00", "--hours", "8")

        assert code == 0
        data = _json(captured)
        assert data["end_time"] == "06:00"
        assert data["wraps_midnight"] is True

    def test_ramadan_hours(self, cli, capsys):
        code, captured = _run(cli, capsys, "shift", "--start", "09:00", "--ramadan")

        assert code == 0
        assert _json(captured)["end_time"] == "15:00"

    def test_default_hours_from_settings(self, cli, capsys):
        code, captured = _run(cli, capsys, "shift", "--start", "08:00")
        assert _json(captured)["end_time"] == "16:00"

    def test_invalid_start_still_prints(self, cli, capsys):
        """An unparseable start is reported in the result, not as a failure."""
        code, captured = _run(cli, capsys, "shift", "--start", "8am", "--hours", "8")

        assert code == 0
        data = _json(captured)
        assert data["end_time"] == "--:--"
        assert data["errors"]


class TestHijriCommand:
    def test_to_hijri(self, cli, capsys):
        code, captured = _run(cli, capsys, "hijri", "--date", "2024-01-01")

        assert code == 0
        data = _json(captured)
        assert data["gregorian"] == "2024-01-01"
        assert data["hijri"] == {
            "year": 1445,
            "month": 6,
            "day": 19,
            "month_name": "Jumada al-Thani",
        }

    def test_from_hijri(self, cli, capsys):
        code, captured = _run(cli, capsys, "hijri", "--from-hijri", "1445-06-19")

        assert code == 0
        assert _json(captured) == {"gregorian": "2024-01-01"}

    @pytest.mark.parametrize("value", ["1445/06/19", "1445-13-01", "1445-06-31"])
    def test_from_hijri_invalid(self, cli, capsys, value):
        code, captured = _run(cli, capsys, "hijri", "--from-hijri", value)

        assert code == 1
        assert "ERROR" in captured.err


class TestCliMisc:
    def test_no_command(self, cli, capsys):
        assert cli.run([]) == 1
        assert "labor-engine" in capsys.readouterr().out

    def test_dates_without_subcommand(self, cli):
        with pytest.raises(SystemExit) as exc_info:
            cli.run(["dates"])
        assert exc_info.value.code == 0

    def test_round_amounts(self):
        """Rounding is half up at two decimals, recursively."""
        data = {"a": 1.005, "b": [2.675, {"c": 3}], "d": "x", "e": True}
        assert round_amounts(data) == {"a": 1.01, "b": [2.68, {"c": 3}], "d": "x", "e": True}
