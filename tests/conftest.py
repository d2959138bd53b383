"""Pytest fixtures for labor engine tests."""

from __future__ import annotations

from datetime import date

import pytest

from labor_engine.calculators.types import (
    EOSInput,
    GosiProfile,
    PayrollInput,
    TerminationType,
    WeekendType,
)
from labor_engine.cli import LaborEngineCli
from labor_engine.config import Settings

SETTINGS_ENV_VARS = (
    "LABOR_ENGINE_VERSION",
    "LABOR_ENGINE_LOG_LEVEL",
    "LABOR_ENGINE_MONTH_DIVISOR",
    "LABOR_ENGINE_HOURS_PER_DAY",
    "LABOR_ENGINE_WEEKEND",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove labor engine settings from the environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def settings() -> Settings:
    """Settings with the statutory defaults."""
    return Settings(
        engine_version="test",
        log_level="WARNING",
        month_divisor=30,
        hours_per_day=8,
        weekend=WeekendType.SAUDI,
    )


@pytest.fixture
def cli(settings) -> LaborEngineCli:
    return LaborEngineCli(settings=settings)


@pytest.fixture
def standard_payroll() -> PayrollInput:
    """10,000 basic with 25% housing under the current Saudi profile."""
    return PayrollInput(
        basic=10000,
        housing_percent=25,
        gosi_profile=GosiProfile.SAUDI_STANDARD,
    )


@pytest.fixture
def moj_eos() -> EOSInput:
    """Ministry of Justice reference case: 2y 5m 8d on a 10,000 basic."""
    return EOSInput(
        start=date(2022, 11, 2),
        end=date(2025, 4, 10),
        basic=10000,
        separation=TerminationType.ARTICLE_84,
        leave_days=13,
    )
