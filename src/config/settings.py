"""
Fair Dice - Application Settings

Loads configuration from environment variables (prefixed FAIR_DICE_) and an
optional .env file using Pydantic Settings.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = False
    log_level: str = "WARNING"

    # Game
    min_dice: int = Field(default=3, ge=3)
    key_bytes: int = Field(default=32, ge=32)

    # Help table
    probability_precision: int = Field(default=4, ge=0, le=12)
    table_format: str = "grid"

    model_config = SettingsConfigDict(
        env_prefix="FAIR_DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}.")
        return level

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
