"""Runtime settings for the wadl-segment CLI."""

import os

from pydantic import BaseModel, ConfigDict, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"


class Settings(BaseModel):
    """CLI settings. Command line flags take precedence over the environment."""

    model_config = ConfigDict(frozen=True)

    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None

    @field_validator("log_level")
    @classmethod
    def _upper(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}")
        return v

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.getenv("WADL_SEGMENT_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            log_file=os.getenv("WADL_SEGMENT_LOG_FILE") or None,
        )
