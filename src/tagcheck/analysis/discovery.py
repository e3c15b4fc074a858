"""Class file discovery under a classes directory."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from tagcheck.config.constants import DEFAULT_CLASS_EXTENSION
from tagcheck.core.errors import ScanError


def discover_class_files(
    root: Path,
    *,
    extension: str = DEFAULT_CLASS_EXTENSION,
    exclude_dirs: Iterable[str] = (),
) -> list[Path]:
    """Recursively list files ending in *extension* under *root*, sorted.

    Directories named in *exclude_dirs* are pruned at any depth. Order has
    no effect on the report; sorting only keeps logs and fail-fast errors
    reproducible.

    Raises:
        ScanError: If *root* does not exist or is not a directory.
    """
    if not root.exists():
        raise ScanError.root_not_found(str(root))
    if not root.is_dir():
        raise ScanError.root_not_directory(str(root))

    pruned = frozenset(exclude_dirs)
    results: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in pruned]
        for filename in filenames:
            if filename.endswith(extension):
                results.append(Path(dirpath) / filename)
    return sorted(results)
