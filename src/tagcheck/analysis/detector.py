"""Duplicate tag detection over parsed class descriptors.

Per class, independently:

1. ``seen`` maps tag value -> first field declaring it.
2. Fields are visited in declaration order. A field whose tag is already in
   ``seen`` is a conflict and is recorded under that tag.
3. One slot per tag: when three or more fields share a tag, the record
   holds the last one visited. The first holder is never reported.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from tagcheck.analysis.models import FieldInfo, ViolationReport
from tagcheck.classfile.models import ClassDescriptor, FieldDescriptor
from tagcheck.config.constants import DEFAULT_TAG_DESCRIPTOR
from tagcheck.core.errors import InternalError
from tagcheck.core.logging import get_logger


def extract_tag_value(
    field: FieldDescriptor, tag_descriptor: str = DEFAULT_TAG_DESCRIPTOR
) -> int | None:
    """Return the tag declared on *field*, or None when it has none.

    The ``value`` element wins. Otherwise a tag annotation with exactly one
    element/value pair uses that pair. Non-integer values are not tags.
    """
    ann = field.find_annotation(tag_descriptor)
    if ann is None:
        return None

    value: object = None
    for name, candidate in ann.values:
        if name == "value":
            value = candidate
            break
    else:
        if len(ann.values) == 1:
            value = ann.values[0][1]

    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def detect_class_conflicts(
    descriptor: ClassDescriptor,
    *,
    tag_descriptor: str = DEFAULT_TAG_DESCRIPTOR,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> dict[int, FieldInfo]:
    """Map each reused tag value in one class to the field that reused it."""
    if descriptor is None:
        raise InternalError.unexpected("detect_class_conflicts called without a class descriptor")
    log = logger or get_logger("analysis")

    class_name = descriptor.dotted_name
    seen: dict[int, FieldInfo] = {}
    conflicts: dict[int, FieldInfo] = {}

    for field in descriptor.fields:
        if field.is_static:
            continue
        tag = extract_tag_value(field, tag_descriptor)
        log.debug("process_field", class_name=class_name, field=field.name, tag=tag)
        if tag is None:
            continue

        info = FieldInfo(class_name=class_name, field_name=field.name, tag_value=tag)
        if tag in seen:
            conflicts[tag] = info
        else:
            seen[tag] = info

    return conflicts


def build_violation_report(
    descriptors: Iterable[ClassDescriptor],
    *,
    tag_descriptor: str = DEFAULT_TAG_DESCRIPTOR,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> ViolationReport:
    """Run conflict detection over every class, keeping only classes with conflicts."""
    report: ViolationReport = {}
    for descriptor in descriptors:
        conflicts = detect_class_conflicts(descriptor, tag_descriptor=tag_descriptor, logger=logger)
        if conflicts:
            report[descriptor.dotted_name] = conflicts
    return report
