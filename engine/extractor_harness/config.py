"""
Configuration management for the extractor harness.

Uses pydantic-settings for type-safe environment variable handling.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DumpAction(str, Enum):
    """What the verifier does with a recorded output."""

    COMPARE = "compare"
    WRITE = "write"


class HarnessSettings(BaseSettings):
    """
    Harness settings loaded from environment variables.

    Defaults reproduce the reference behaviour: compare against goldens,
    retry transient faults without bound, run matrix cells serially.
    """

    model_config = SettingsConfigDict(
        env_prefix="XHARNESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Golden assets
    golden_dir: Path = Field(
        default=Path("./goldens"),
        description="Root directory holding sample files and their dumps",
    )
    dump_action: DumpAction = Field(
        default=DumpAction.COMPARE,
        description="compare: assert against stored dumps; write: record new dumps",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Retry ceilings (None means unbounded)
    max_read_retries: int | None = Field(
        default=None,
        description="Maximum consecutive transient faults tolerated for one read call",
        ge=1,
    )
    max_sniff_retries: int | None = Field(
        default=None,
        description="Maximum consecutive transient faults tolerated while sniffing",
        ge=1,
    )

    # Matrix execution
    parallel_cells: bool = Field(
        default=False,
        description="Run fault matrix cells concurrently",
    )
    max_workers: int = Field(
        default=4,
        description="Worker threads when parallel_cells is enabled",
        ge=1,
        le=8,
    )
    report_dir: Path | None = Field(
        default=None,
        description="Directory for per-sample matrix reports (disabled when unset)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @property
    def writes_goldens(self) -> bool:
        """Check if the verifier records dumps instead of comparing."""
        return self.dump_action == DumpAction.WRITE

    def get_summary(self) -> dict[str, str | int | bool | None]:
        """Configuration dict safe for logging."""
        return {
            "golden_dir": str(self.golden_dir),
            "dump_action": self.dump_action.value,
            "log_level": self.log_level,
            "max_read_retries": self.max_read_retries,
            "max_sniff_retries": self.max_sniff_retries,
            "parallel_cells": self.parallel_cells,
            "max_workers": self.max_workers,
            "report_dir": str(self.report_dir) if self.report_dir else None,
        }


@lru_cache
def get_settings() -> HarnessSettings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure single instance throughout the test session.
    """
    return HarnessSettings()
