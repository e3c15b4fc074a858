"""Config module exports."""

from tagcheck.config.loader import load_config
from tagcheck.config.models import (
    LoggingConfig,
    LogOutputConfig,
    ScanConfig,
    TagCheckConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "ScanConfig",
    "TagCheckConfig",
]
