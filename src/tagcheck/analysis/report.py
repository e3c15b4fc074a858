"""Console rendering of a violation report."""

from __future__ import annotations

import structlog
from rich.console import Console

from tagcheck.analysis.models import ViolationReport
from tagcheck.core.logging import get_logger
from tagcheck.core.progress import get_console

HEADER = "Duplicate @Tag configuration found:"
SEPARATOR = "-" * 40


def format_report(report: ViolationReport) -> list[str]:
    """Render *report* as plain lines, classes and tags in sorted order.

    Example::

        Duplicate @Tag configuration found:
        Class: com.acme.Order
          Tag 1 conflicting field:
            ▸ com.acme.Order#status (tag=1)
        ----------------------------------------
    """
    if not report:
        return []
    lines = [HEADER]
    for class_name, tags in sorted(report.items()):
        lines.append(f"Class: {class_name}")
        for tag, info in sorted(tags.items()):
            lines.append(f"  Tag {tag} conflicting field:")
            lines.append(f"    ▸ {info}")
        lines.append(SEPARATOR)
    return lines


class ConsoleReporter:
    """Prints violations through Rich and mirrors each one to the log."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._console = console or get_console()
        self._log = logger or get_logger("report")

    def report(self, report: ViolationReport) -> None:
        for line in format_report(report):
            self._console.print(line, style="red", highlight=False, markup=False)
        for tags in report.values():
            for info in tags.values():
                self._log.error(
                    "duplicate_tag",
                    class_name=info.class_name,
                    field=info.field_name,
                    tag=info.tag_value,
                )
