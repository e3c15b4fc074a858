"""CLI utilities."""

from pathlib import Path

import click

from tagcheck.config.constants import DEFAULT_CLASSES_DIRS


def resolve_classes_dir(
    project_root: Path,
    explicit: Path | None = None,
    configured: str | None = None,
) -> Path:
    """Pick the directory of compiled classes to scan.

    Precedence: the CLASSES_DIR argument, then ``scan.classes_dir`` from
    config (relative paths resolve against the project root), then the
    first existing Maven or Gradle output directory.

    Raises:
        click.ClickException: If nothing was given and no build output exists
    """
    if explicit is not None:
        return explicit.resolve()

    if configured:
        path = Path(configured).expanduser()
        if not path.is_absolute():
            path = project_root / path
        return path.resolve()

    for candidate in DEFAULT_CLASSES_DIRS:
        path = project_root / candidate
        if path.is_dir():
            return path.resolve()

    tried = ", ".join(DEFAULT_CLASSES_DIRS)
    raise click.ClickException(
        f"No compiled classes found under {project_root} (tried {tried}).\n"
        "Build the project first or pass the directory: tagcheck check CLASSES_DIR"
    )
