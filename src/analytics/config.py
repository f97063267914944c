"""Runtime configuration for the analytics pipeline.

Values are read from ``ANALYTICS_*`` environment variables (or a ``.env``
file), e.g. ``ANALYTICS_ZERO_RANGE_POLICY=zero``.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ZeroRangePolicy = Literal["suppress", "zero", "nan"]
MalformedRecordPolicy = Literal["dead_letter", "skip"]
SinkAdapter = Literal["memory", "stdout"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Pipeline configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ANALYTICS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    zero_range_policy: ZeroRangePolicy = "suppress"
    malformed_records: MalformedRecordPolicy = "dead_letter"
    sink: SinkAdapter = "memory"
    log_level: LogLevel = "INFO"
    log_json: bool = False
    allocation_low: float = Field(default=0.25, ge=0.0)
    allocation_high: float = 0.85

    @field_validator("zero_range_policy", "malformed_records", "sink", mode="before")
    @classmethod
    def _lowercase(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_thresholds(self):
        if self.allocation_low > self.allocation_high:
            raise ValueError("Allocation thresholds must satisfy 0 <= low <= high")
        return self

    @property
    def dead_letter_enabled(self) -> bool:
        return self.malformed_records == "dead_letter"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached pipeline settings."""
    return Settings()


def reset_settings() -> None:
    """Drop cached settings so the next call re-reads the environment (useful for tests)."""
    get_settings.cache_clear()
