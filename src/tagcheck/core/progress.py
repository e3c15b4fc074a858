"""User-facing progress feedback for CLI operations.

Design principles:
- Progress bar only when iterating >100 items on a TTY
- Single line updates, no spam
- Graceful degradation in non-TTY (CI, build logs)
- Suppress structlog console output while a bar is live

Usage::

    from tagcheck.core.progress import progress, status

    status("Scanning target/classes")
    for path in progress(paths, desc="Parsing"):
        parse(path)
    status("No duplicate tags", style="success")  # ✓ No duplicate tags
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable, Iterator, Sized
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Threshold for showing progress bar
_PROGRESS_THRESHOLD = 100

# Console for output
_console = Console(stderr=True)

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

_suppress_console_logs = threading.local()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return getattr(_suppress_console_logs, "active", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output for the duration of the block.

    Logs are still written to file handlers.
    """
    _suppress_console_logs.active = True
    try:
        yield
    finally:
        _suppress_console_logs.active = False


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from tagcheck.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    """Check if stderr is a TTY."""
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def status(message: str, *, style: str = "info") -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    _console.print(f"{prefix}{message}", highlight=False)

    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Examples:
        pluralize(1, "class") -> "1 class"
        pluralize(3, "class", "classes") -> "3 classes"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def _parse_bar() -> Progress:
    return Progress(
        TextColumn("    {task.description}:"),
        BarColumn(bar_width=25, style="cyan", complete_style="cyan"),
        TaskProgressColumn(),
        TextColumn("{task.completed}/{task.total} {task.fields[unit]}"),
        console=_console,
        transient=True,
    )


T = TypeVar("T")


def progress(
    iterable: Iterable[T],
    *,
    desc: str = "Parsing",
    total: int | None = None,
    unit: str = "classes",
) -> Iterator[T]:
    """Yield from *iterable*, drawing a bar on a TTY when there are >100 items.

    Console logging is muted while the bar is live; otherwise start and end
    are traced at debug level.
    """
    if total is None and isinstance(iterable, Sized):
        total = len(iterable)

    if total is None or total <= _PROGRESS_THRESHOLD or not _is_tty():
        log = _get_logger().bind(desc=desc, total=total)
        log.debug("progress_start")
        yield from iterable
        log.debug("progress_done")
        return

    with suppress_console_logs(), _parse_bar() as bar:
        task_id = bar.add_task(desc, total=total, unit=unit)
        for item in iterable:
            yield item
            bar.advance(task_id)
