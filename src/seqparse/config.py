"""
Consolidated configuration system for seqparse.

This module provides a centralized Pydantic-based configuration for the
sequence engine (gap limits, size estimation), directory scanning and
logging, with environment variable support and validation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.constants import ENV_PREFIX
from .core.constants import MAX_SEQUENCE_HOLE as DEFAULT_MAX_SEQUENCE_HOLE

LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}

# =============================================================================
# SEQUENCE SETTINGS
# =============================================================================

class SequenceSettings(BaseModel):
    """Configuration for sequence aggregation and range summaries."""

    max_sequence_hole: Annotated[int, Field(
        default=DEFAULT_MAX_SEQUENCE_HOLE,
        gt=0,
        description="Consecutive missing frame numbers after which range scanning gives up"
    )] = DEFAULT_MAX_SEQUENCE_HOLE

    size_estimation: Annotated[bool, Field(
        default=False,
        description="Sum the byte size of every file accepted into a sequence"
    )] = False


# =============================================================================
# SCAN SETTINGS
# =============================================================================

class ScanSettings(BaseModel):
    """Directory listing options for the default directory lister."""

    include_hidden: Annotated[bool, Field(
        default=True,
        description="Offer entries starting with '.' to the matchers"
    )] = True


# =============================================================================
# LOG SETTINGS
# =============================================================================

class LogSettings(BaseModel):
    """Logging level and optional log file."""

    level: Annotated[str, Field(
        default="WARNING",
        description="Level for the seqparse logger"
    )] = "WARNING"

    log_file: Annotated[Path | None, Field(
        default=None,
        description="Optional file receiving a copy of every log record"
    )] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v):
        """Ensure the level is one of the standard logging level names."""
        name = str(v).upper()
        if name not in LEVEL_NAMES:
            raise ValueError(f"Unknown log level: {v}")
        return name


# =============================================================================
# MAIN APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseSettings):
    """
    Main application configuration with environment variable support.

    All settings can be overridden via environment variables with SEQPARSE_ prefix.
    Example: SEQPARSE_SEQUENCE__MAX_SEQUENCE_HOLE=50
    """

    sequence: SequenceSettings = SequenceSettings()
    scan: ScanSettings = ScanSettings()
    log: LogSettings = LogSettings()

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
    )


# =============================================================================
# DEFAULT INSTANCE
# =============================================================================

app_config = AppConfig()

MAX_SEQUENCE_HOLE = app_config.sequence.max_sequence_hole
SIZE_ESTIMATION = app_config.sequence.size_estimation


def create_config_from_env() -> AppConfig:
    """Create a new configuration instance from environment variables."""
    return AppConfig()
