"""Tests for Gregorian/Hijri conversion."""

from datetime import date

import pytest

from labor_engine.calculators.hijri import HIJRI_MONTHS, from_hijri, to_hijri
from labor_engine.calculators.types import HijriDate


class TestToHijri:
    """Test Umm al-Qura conversion to Hijri."""

    def test_new_year_2024(self):
        """1 January 2024 is 19 Jumada al-Thani 1445."""
        assert to_hijri(date(2024, 1, 1)) == HijriDate(
            year=1445, month=6, day=19, month_name="Jumada al-Thani"
        )

    def test_eid_al_adha_1445(self):
        """16 June 2024 is 10 Dhu al-Hijjah; the tabular calendar says the 9th."""
        assert to_hijri(date(2024, 6, 16)) == HijriDate(
            year=1445, month=12, day=10, month_name="Dhu al-Hijjah"
        )

    @pytest.mark.parametrize(
        "gregorian,hijri",
        [
            (date(2024, 3, 11), (1445, 9, 1)),  # 1 Ramadan
            (date(2024, 4, 10), (1445, 10, 1)),  # Eid al-Fitr
        ],
    )
    def test_known_dates(self, gregorian, hijri):
        result = to_hijri(gregorian)
        assert (result.year, result.month, result.day) == hijri

    def test_month_names(self):
        assert len(HIJRI_MONTHS) == 12
        assert HIJRI_MONTHS[8] == "Ramadan"
        assert to_hijri(date(2024, 3, 11)).month_name == "Ramadan"


class TestFromHijri:
    """Test conversion back to Gregorian."""

    def test_new_year_2024(self):
        assert from_hijri(1445, 6, 19) == date(2024, 1, 1)

    def test_eid_al_adha_1445(self):
        assert from_hijri(1445, 12, 10) == date(2024, 6, 16)

    @pytest.mark.parametrize("d", [date(1990, 5, 17), date(2000, 2, 29), date(2025, 4, 10)])
    def test_round_trip(self, d):
        h = to_hijri(d)
        assert from_hijri(h.year, h.month, h.day) == d


class TestOutsideUmmAlQura:
    """Dates outside 1343-1500 AH use the tabular calendar."""

    def test_to_hijri_before_table(self):
        """1 January 1900 is 28 Shaban 1317 in the tabular calendar."""
        assert to_hijri(date(1900, 1, 1)) == HijriDate(
            year=1317, month=8, day=28, month_name="Shaban"
        )

    def test_epoch(self):
        """1 Muharram 1 AH is 19 July 622 in the proleptic Gregorian calendar."""
        assert from_hijri(1, 1, 1) == date(622, 7, 19)
        result = to_hijri(date(622, 7, 19))
        assert (result.year, result.month, result.day) == (1, 1, 1)

    @pytest.mark.parametrize("d", [date(1900, 1, 1), date(2090, 6, 1)])
    def test_round_trip(self, d):
        h = to_hijri(d)
        assert from_hijri(h.year, h.month, h.day) == d

    def test_day_missing_from_table(self):
        """Shawwal 1445 has 29 days in Umm al-Qura; day 30 falls back to tabular."""
        result = from_hijri(1445, 10, 30)
        assert date(2024, 5, 7) <= result <= date(2024, 5, 10)
