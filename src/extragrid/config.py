"""Library configuration using pydantic-settings.

Every setting can be overridden with an ``EXTRAGRID_`` environment variable
(for example ``EXTRAGRID_DEFAULT_ROWS=100``) or a local ``.env`` file.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for grid creation, import formatting and logging."""

    model_config = SettingsConfigDict(
        env_prefix="EXTRAGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars not defined in Settings
    )

    # Baseline size of a freshly created (or cleared) grid
    default_rows: int = 50
    default_cols: int = 30

    # Text shown for empty values at import
    placeholder: str = ""

    # Reject row/column inserts that would cut through a merged region
    strict_merges: bool = False

    log_level: str = "INFO"

    @field_validator("default_rows", "default_cols")
    @classmethod
    def validate_dimension(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("grid dimensions must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
