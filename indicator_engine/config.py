"""Engine configuration."""

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INDICATOR_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Precision of the decimal context used while calculating
    decimal_precision: int = 28

    # Substituted when a CCI is built with a zero or missing factor
    cci_default_factor: Decimal = Decimal("0.015")


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
