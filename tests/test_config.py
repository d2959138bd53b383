"""Tests for environment-driven settings."""

import pytest

from labor_engine import __version__
from labor_engine.calculators.types import InvalidChoiceError, WeekendType
from labor_engine.config import Settings, get_settings


class TestSettingsFromEnv:
    """Test Settings.from_env."""

    def test_defaults(self, clean_env):
        settings = Settings.from_env()

        assert settings.engine_version == __version__
        assert settings.log_level == "WARNING"
        assert settings.month_divisor == 30
        assert settings.hours_per_day == 8
        assert settings.weekend == WeekendType.SAUDI

    def test_overrides(self, clean_env):
        clean_env.setenv("LABOR_ENGINE_LOG_LEVEL", "debug")
        clean_env.setenv("LABOR_ENGINE_MONTH_DIVISOR", "26")
        clean_env.setenv("LABOR_ENGINE_HOURS_PER_DAY", "6")
        clean_env.setenv("LABOR_ENGINE_WEEKEND", "sat-sun")

        settings = Settings.from_env()

        assert settings.log_level == "DEBUG"
        assert settings.month_divisor == 26
        assert settings.hours_per_day == 6
        assert settings.weekend == WeekendType.WESTERN

    def test_unknown_weekend(self, clean_env):
        clean_env.setenv("LABOR_ENGINE_WEEKEND", "mon-tue")
        with pytest.raises(InvalidChoiceError) as exc_info:
            Settings.from_env()
        assert exc_info.value.field == "LABOR_ENGINE_WEEKEND"

    def test_non_numeric_divisor(self, clean_env):
        clean_env.setenv("LABOR_ENGINE_MONTH_DIVISOR", "thirty")
        with pytest.raises(ValueError, match="LABOR_ENGINE_MONTH_DIVISOR"):
            Settings.from_env()


class TestSettingsValidation:
    """Test __post_init__ checks."""

    def _settings(self, **overrides):
        values = dict(
            engine_version="test",
            log_level="INFO",
            month_divisor=30,
            hours_per_day=8,
            weekend=WeekendType.SAUDI,
        )
        values.update(overrides)
        return Settings(**values)

    def test_valid(self):
        assert self._settings().log_level == "INFO"

    def test_unknown_log_level(self):
        with pytest.raises(ValueError, match="log level"):
            self._settings(log_level="LOUD")

    def test_divisor_below_one(self):
        with pytest.raises(ValueError, match="month_divisor"):
            self._settings(month_divisor=0.5)

    @pytest.mark.parametrize("hours", [0, -1, 25])
    def test_hours_out_of_range(self, hours):
        with pytest.raises(ValueError, match="hours_per_day"):
            self._settings(hours_per_day=hours)

    def test_frozen(self):
        settings = self._settings()
        with pytest.raises(AttributeError):
            settings.month_divisor = 26


class TestGetSettings:
    def test_cached(self, clean_env):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def test_cache_clear_reloads(self, clean_env):
        get_settings.cache_clear()
        clean_env.setenv("LABOR_ENGINE_HOURS_PER_DAY", "6")
        try:
            assert get_settings().hours_per_day == 6
        finally:
            get_settings.cache_clear()
