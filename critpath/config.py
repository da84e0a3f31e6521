"""
Application settings for Critpath.

Values are read from the environment (prefix ``CRITPATH_``) or a local
``.env`` file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CRITPATH_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "Critpath"
    debug: bool = False
    log_level: str | None = None  # Overrides the debug-derived level
    json_logs: bool = False

    # Scheduling
    hours_per_day: int = Field(default=8, ge=1)  # Effort hours per working day
    max_tasks: int = Field(default=5000, ge=1)  # Request payload guard


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
