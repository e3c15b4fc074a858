"""tagcheck error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Class file parsing
- 4xxx: Scan
- 9xxx: Internal

A duplicate tag is not an error here. It is the report a successful scan
produces; turning it into a build failure is the CLI's decision.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Class file parsing (3xxx)
    PARSE_TRUNCATED = 3001
    PARSE_BAD_MAGIC = 3002
    PARSE_BAD_CONSTANT_INDEX = 3003
    PARSE_BAD_CONSTANT_TAG = 3004
    PARSE_BAD_ELEMENT_TAG = 3005
    PARSE_MALFORMED = 3006

    # Scan (4xxx)
    SCAN_ROOT_NOT_FOUND = 4001
    SCAN_ROOT_NOT_DIRECTORY = 4002
    SCAN_READ_FAILED = 4003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class TagCheckError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_BAD_MAGIC')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(TagCheckError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ParseError(TagCheckError):
    """Malformed or truncated class file.

    ``source`` in details is the file path when known, else ``"<bytes>"``.
    """

    @classmethod
    def truncated(
        cls, source: str | None, offset: int, wanted: int, available: int
    ) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_TRUNCATED,
            message=(
                f"Truncated class file {source or '<bytes>'}: needed {wanted} byte(s) "
                f"at offset {offset}, {available} available"
            ),
            details={
                "source": source or "<bytes>",
                "offset": offset,
                "wanted": wanted,
                "available": available,
            },
        )

    @classmethod
    def bad_magic(cls, source: str | None, magic: int) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_BAD_MAGIC,
            message=f"Not a class file {source or '<bytes>'}: bad magic 0x{magic:08X}",
            details={"source": source or "<bytes>", "magic": f"0x{magic:08X}"},
        )

    @classmethod
    def bad_constant_index(
        cls, source: str | None, index: int, expected: str | None = None
    ) -> "ParseError":
        reason = f"expected {expected}" if expected else "out of range"
        return cls(
            code=ErrorCode.PARSE_BAD_CONSTANT_INDEX,
            message=f"Unreadable constant pool index {index} in {source or '<bytes>'}: {reason}",
            details={"source": source or "<bytes>", "index": index, "expected": expected},
        )

    @classmethod
    def bad_constant_tag(cls, source: str | None, index: int, tag: int) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_BAD_CONSTANT_TAG,
            message=f"Unknown constant pool tag {tag} at index {index} in {source or '<bytes>'}",
            details={"source": source or "<bytes>", "index": index, "tag": tag},
        )

    @classmethod
    def bad_element_tag(cls, source: str | None, tag: int, offset: int) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_BAD_ELEMENT_TAG,
            message=(
                f"Unknown annotation element tag {chr(tag)!r} at offset {offset} "
                f"in {source or '<bytes>'}"
            ),
            details={"source": source or "<bytes>", "tag": tag, "offset": offset},
        )

    @classmethod
    def malformed(cls, source: str | None, reason: str, **details: Any) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_MALFORMED,
            message=f"Malformed class file {source or '<bytes>'}: {reason}",
            details={"source": source or "<bytes>", "reason": reason, **details},
        )


class ScanError(TagCheckError):
    """Errors locating or reading the scanned tree."""

    @classmethod
    def root_not_found(cls, path: str) -> "ScanError":
        return cls(
            code=ErrorCode.SCAN_ROOT_NOT_FOUND,
            message=f"Classes directory not found: {path}",
            details={"path": path},
        )

    @classmethod
    def root_not_directory(cls, path: str) -> "ScanError":
        return cls(
            code=ErrorCode.SCAN_ROOT_NOT_DIRECTORY,
            message=f"Classes path is not a directory: {path}",
            details={"path": path},
        )

    @classmethod
    def read_failed(cls, path: str, reason: str) -> "ScanError":
        return cls(
            code=ErrorCode.SCAN_READ_FAILED,
            message=f"Failed to read {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(TagCheckError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
