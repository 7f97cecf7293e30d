"""
Shared module - Cross-cutting concerns / Shared Layer

Constants, enums and logging helpers used by every other layer.
It must not depend on Infrastructure or Frameworks.
"""

from .consts import (
    DEFAULT_SUGGESTION_DAYS,
    DEFAULT_SUGGESTION_HOURS,
    TRAINING_LOCK_NAME,
    EnumArtifactsBackend,
    EnumEnvironment,
    EnumLogLevel,
)
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "DEFAULT_SUGGESTION_DAYS",
    "DEFAULT_SUGGESTION_HOURS",
    "TRAINING_LOCK_NAME",
    "EnumArtifactsBackend",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
