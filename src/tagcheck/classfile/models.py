"""Class file models - the structural view the parser reconstructs.

Only what duplicate-tag analysis needs survives parsing: the class name,
its instance fields, and the runtime-visible annotations on each field.
Method bodies, debug tables and class attributes are never materialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tagcheck.config.constants import ACC_STATIC


@dataclass(frozen=True, slots=True)
class EnumValue:
    """Enum constant element value (``e`` tag)."""

    desc: str
    name: str


@dataclass(frozen=True, slots=True)
class ClassValue:
    """Class literal element value (``c`` tag), kept as its return descriptor."""

    desc: str


@dataclass(frozen=True, slots=True)
class AnnotationNode:
    """One annotation: its type descriptor and ordered element/value pairs.

    Values are ``int``, ``bool``, ``float``, ``str``, ``EnumValue``,
    ``ClassValue``, a nested ``AnnotationNode``, or a ``tuple`` of those.
    """

    desc: str
    values: tuple[tuple[str, object], ...] = ()

    def get(self, key: str, default: object = None) -> object:
        for name, value in self.values:
            if name == key:
                return value
        return default

    def keys(self) -> list[str]:
        return [name for name, _ in self.values]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A field of a class with its runtime-visible annotations."""

    name: str
    descriptor: str = ""
    access_flags: int = 0
    annotations: tuple[AnnotationNode, ...] = ()

    @property
    def is_static(self) -> bool:
        return bool(self.access_flags & ACC_STATIC)

    def find_annotation(self, desc: str) -> AnnotationNode | None:
        """Return the first annotation with descriptor *desc*, if any."""
        for ann in self.annotations:
            if ann.desc == desc:
                return ann
        return None


@dataclass(frozen=True, slots=True)
class ClassDescriptor:
    """One compiled type: internal name plus its instance fields in declaration order."""

    name: str  # internal form, e.g. com/acme/Order
    fields: tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    access_flags: int = 0

    @property
    def dotted_name(self) -> str:
        """Canonical display form, e.g. com.acme.Order."""
        return self.name.replace("/", ".")
