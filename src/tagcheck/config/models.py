"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (TAGCHECK__SECTION__KEY)
3. Project YAML (tagcheck.yaml)
4. Global YAML (~/.config/tagcheck/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    TAGCHECK__<SECTION>__<KEY>=<VALUE>

Examples:
    TAGCHECK__LOGGING__LEVEL=DEBUG
    TAGCHECK__SCAN__FAIL_ON_ERROR=false
    TAGCHECK__SCAN__MAX_WORKERS=4
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from tagcheck.config.constants import DEFAULT_CLASS_EXTENSION, DEFAULT_TAG_DESCRIPTOR

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        TAGCHECK__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every analyzed class and tagged field.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ScanConfig(BaseModel):
    """Scan configuration.

    Env vars:
        TAGCHECK__SCAN__CLASSES_DIR: Compiled classes directory
        TAGCHECK__SCAN__TAG_ANNOTATION: Descriptor of the tag annotation
        TAGCHECK__SCAN__FAIL_ON_ERROR: Exit non-zero when duplicates are found
        TAGCHECK__SCAN__SKIP_INVALID: Skip unreadable class files instead of aborting
        TAGCHECK__SCAN__MAX_WORKERS: Parallel parse workers
    """

    classes_dir: str | None = Field(
        default=None,
        description="Compiled classes directory. Default: try target/classes, "
        "build/classes/java/main, build/classes/kotlin/main.",
    )
    extension: str = Field(
        default=DEFAULT_CLASS_EXTENSION,
        description="File extension of compiled modules.",
    )
    tag_annotation: str = Field(
        default=DEFAULT_TAG_DESCRIPTOR,
        description="Field descriptor of the tag annotation, e.g. Lio/protostuff/Tag;",
    )
    fail_on_error: bool = Field(
        default=True,
        description="Fail the build when duplicate tags are found.",
    )
    skip_invalid: bool = Field(
        default=False,
        description="Report unreadable class files as warnings and keep scanning. "
        "RISK: a skipped class is never checked for duplicates.",
    )
    max_workers: int = Field(
        default=1,
        description="Parallel parse workers. 1 parses sequentially.",
    )
    exclude_dirs: list[str] = Field(
        default_factory=list,
        description="Directory names never descended into. Default: walk everything.",
    )

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"Extension must start with '.', got {v!r}")
        return v

    @field_validator("tag_annotation")
    @classmethod
    def validate_tag_annotation(cls, v: str) -> str:
        if not (v.startswith("L") and v.endswith(";") and len(v) > 2):
            raise ValueError(f"Tag annotation must be a descriptor like Lpkg/Name;, got {v!r}")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class TagCheckConfig(BaseModel):
    """Root configuration for tagcheck.

    All settings can be configured via:
    1. Environment variables: TAGCHECK__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
