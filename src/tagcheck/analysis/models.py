"""Analysis models - conflicts, per-file outcomes and scan results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tagcheck.classfile.models import ClassDescriptor
from tagcheck.core.errors import TagCheckError


@dataclass(frozen=True, slots=True)
class FieldInfo:
    """A field that reused a tag value already claimed in its class."""

    class_name: str  # dotted form
    field_name: str
    tag_value: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "class_name": self.class_name,
            "field_name": self.field_name,
            "tag_value": self.tag_value,
        }

    def __str__(self) -> str:
        return f"{self.class_name}#{self.field_name} (tag={self.tag_value})"


# class name (dotted) -> tag value -> field that caused the conflict
ViolationReport = dict[str, dict[int, FieldInfo]]


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    """Result of parsing one class file: a descriptor or the error that stopped it."""

    path: str
    descriptor: ClassDescriptor | None = None
    error: TagCheckError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, path: str, descriptor: ClassDescriptor) -> ParseOutcome:
        return cls(path=path, descriptor=descriptor)

    @classmethod
    def failed(cls, path: str, error: TagCheckError) -> ParseOutcome:
        return cls(path=path, error=error)


@dataclass
class ScanResult:
    """Aggregated result of scanning one classes directory."""

    root: str
    violations: ViolationReport = field(default_factory=dict)
    classes_scanned: int = 0
    skipped: list[ParseOutcome] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    @property
    def total_conflicts(self) -> int:
        return sum(len(tags) for tags in self.violations.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output. Classes and tags are sorted."""
        return {
            "root": self.root,
            "status": "dirty" if self.has_violations else "clean",
            "classes_scanned": self.classes_scanned,
            "total_conflicts": self.total_conflicts,
            "violations": {
                class_name: {
                    str(tag): info.to_dict() for tag, info in sorted(tags.items())
                }
                for class_name, tags in sorted(self.violations.items())
            },
            "skipped": [
                {"path": o.path, "error": o.error.to_dict() if o.error else None}
                for o in self.skipped
            ],
            "duration_seconds": round(self.duration_seconds, 3),
        }
