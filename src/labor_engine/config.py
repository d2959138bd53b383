"""Configuration management for labor engine callers.

Settings carry caller-side defaults only. The calculators never read
them; statutory constants (GOSI cap, profile rates, EOS tiers) live in
code.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from labor_engine import __version__
from labor_engine.calculators.types import WeekendType


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'") from None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    engine_version: str
    log_level: str
    month_divisor: float
    hours_per_day: float
    weekend: WeekendType

    def __post_init__(self) -> None:
        """Validate configuration."""
        if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
            raise ValueError(f"Unknown log level '{self.log_level}'")
        if self.month_divisor < 1:
            raise ValueError("month_divisor must be at least 1")
        if self.hours_per_day <= 0 or self.hours_per_day > 24:
            raise ValueError("hours_per_day must be between 0 and 24")

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            engine_version=os.getenv("LABOR_ENGINE_VERSION", __version__),
            log_level=os.getenv("LABOR_ENGINE_LOG_LEVEL", "WARNING").upper(),
            month_divisor=_env_float("LABOR_ENGINE_MONTH_DIVISOR", "30"),
            hours_per_day=_env_float("LABOR_ENGINE_HOURS_PER_DAY", "8"),
            weekend=WeekendType.parse(
                os.getenv("LABOR_ENGINE_WEEKEND", "saudi"), "LABOR_ENGINE_WEEKEND"
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
