"""Environment-driven configuration using pydantic-settings.

Only the CLI and the HTTP app read settings.  The codec and checksum take
everything as arguments and never consult the environment.
"""

from __future__ import annotations

import warnings

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crockid.codec import MAX_COMPACT_LENGTH

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Central configuration. All values can be overridden via env vars prefixed ``CROCKID_``."""

    model_config = SettingsConfigDict(
        env_prefix="CROCKID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- environment ---
    env: str = "development"

    # --- logging ---
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s %(message)s"

    # --- encoding defaults ---
    default_length: int = Field(default=8, ge=1, le=MAX_COMPACT_LENGTH)
    group_size: int = Field(default=5, ge=1)
    checksum_by_default: bool = True

    # --- HTTP API ---
    api_max_batch: int = Field(default=1000, ge=1)

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    def effective_log_level(self) -> str:
        """Return the log level, forcing at least INFO in production."""
        level = self.log_level.upper()
        if self.env == "production" and level == "DEBUG":
            warnings.warn(
                "DEBUG logging is disabled in production; using INFO. "
                "Set CROCKID_ENV to something else to debug.",
                UserWarning,
                stacklevel=2,
            )
            return "INFO"
        return level
