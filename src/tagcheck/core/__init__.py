"""Core module exports."""

from tagcheck.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ParseError,
    ScanError,
    TagCheckError,
)
from tagcheck.core.logging import configure_logging, get_logger, new_scan_id
from tagcheck.core.progress import pluralize, progress, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ParseError",
    "ScanError",
    "TagCheckError",
    # Logging
    "configure_logging",
    "get_logger",
    "new_scan_id",
    # Progress
    "pluralize",
    "progress",
    "status",
]
