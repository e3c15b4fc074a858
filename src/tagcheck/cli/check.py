"""tagcheck check command - fail the build on duplicate tags."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from tagcheck.analysis.ops import TagScanner
from tagcheck.analysis.report import ConsoleReporter
from tagcheck.cli.utils import resolve_classes_dir
from tagcheck.config.loader import load_config
from tagcheck.core.errors import ConfigError, ParseError, ScanError
from tagcheck.core.logging import configure_logging
from tagcheck.core.progress import pluralize, status

# Exit codes a build tool can act on
EXIT_VIOLATIONS = 1
EXIT_SCAN_FAILED = 2

FAILURE_MESSAGE = "Duplicate @Tag values found, failing the build"


@click.command()
@click.argument(
    "classes_dir",
    default=None,
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--project",
    "project_root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project directory holding tagcheck.yaml and the build output",
)
@click.option(
    "--fail-on-error/--no-fail-on-error",
    default=None,
    help="Exit non-zero when duplicate tags are found (default: on)",
)
@click.option(
    "--skip-invalid",
    is_flag=True,
    default=None,
    help="Warn about unreadable class files instead of aborting",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Parallel parse workers")
@click.option(
    "--annotation",
    default=None,
    help="Tag annotation descriptor (default: Lio/protostuff/Tag;)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def check_command(
    ctx: click.Context,
    classes_dir: Path | None,
    project_root: Path,
    fail_on_error: bool | None,
    skip_invalid: bool | None,
    workers: int | None,
    annotation: str | None,
    as_json: bool,
) -> None:
    """Check compiled classes for fields sharing a @Tag value.

    CLASSES_DIR is the compiled classes directory. If not specified, uses
    scan.classes_dir from config, else target/classes or build/classes/*/main.
    """
    project_root = project_root.resolve()

    overrides: dict[str, Any] = {}
    if fail_on_error is not None:
        overrides["fail_on_error"] = fail_on_error
    if skip_invalid:
        overrides["skip_invalid"] = True
    if workers is not None:
        overrides["max_workers"] = workers
    if annotation is not None:
        overrides["tag_annotation"] = annotation

    try:
        config = load_config(project_root, **({"scan": overrides} if overrides else {}))
    except ConfigError as e:
        click.echo(str(e), err=True)
        raise SystemExit(EXIT_SCAN_FAILED) from e

    if not (ctx.obj or {}).get("verbose"):
        configure_logging(config=config.logging)

    try:
        root = resolve_classes_dir(project_root, classes_dir, config.scan.classes_dir)
    except click.ClickException as e:
        e.show()
        raise SystemExit(EXIT_SCAN_FAILED) from e

    try:
        result = TagScanner(config.scan).scan(root)
    except (ParseError, ScanError) as e:
        if as_json:
            click.echo(json.dumps({"status": "error", "error": e.to_dict()}, indent=2))
        else:
            status(str(e), style="error")
        raise SystemExit(EXIT_SCAN_FAILED) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        for outcome in result.skipped:
            status(f"Skipped {outcome.path}: {outcome.error}", style="warning")
        if result.has_violations:
            ConsoleReporter().report(result.violations)
        else:
            scanned = pluralize(result.classes_scanned, "class", "classes")
            status(f"No duplicate tags in {scanned} under {root}", style="success")

    if result.has_violations and config.scan.fail_on_error:
        if not as_json:
            status(FAILURE_MESSAGE, style="error")
        raise SystemExit(EXIT_VIOLATIONS)
