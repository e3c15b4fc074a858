"""Scan operations - discover, parse and check one classes directory."""

from __future__ import annotations

import time
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from functools import partial
from pathlib import Path

import structlog

from tagcheck.analysis.detector import build_violation_report
from tagcheck.analysis.discovery import discover_class_files
from tagcheck.analysis.models import ParseOutcome, ScanResult
from tagcheck.classfile.models import ClassDescriptor
from tagcheck.classfile.parser import parse_class_file
from tagcheck.config.models import ScanConfig
from tagcheck.core.errors import ParseError, ScanError
from tagcheck.core.logging import get_logger, new_scan_id
from tagcheck.core.progress import progress


def _parse_one(path: Path, *, log: structlog.stdlib.BoundLogger) -> ParseOutcome:
    log.debug("analyze_class", path=str(path))
    try:
        descriptor = parse_class_file(path)
    except (ParseError, ScanError) as e:
        return ParseOutcome.failed(str(path), e)
    return ParseOutcome.ok(str(path), descriptor)


class TagScanner:
    """Checks a classes directory for fields sharing a tag value.

    Holds configuration only. Every call to ``scan`` builds its own state,
    so one scanner can serve several directories, concurrently or not.

    Parse failures follow ``config.skip_invalid``:

    - False (default): the first unreadable class, in discovery order,
      aborts the scan with its ParseError. No partial report.
    - True: unreadable classes are logged, listed in ``ScanResult.skipped``
      and left out of the report.
    """

    def __init__(
        self,
        config: ScanConfig | None = None,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._config = config or ScanConfig()
        self._logger = logger

    @property
    def config(self) -> ScanConfig:
        return self._config

    def scan(self, root: Path) -> ScanResult:
        """Scan *root* and return the (possibly empty) violation report.

        Raises:
            ScanError: If *root* is missing or not a directory.
            ParseError: On the first malformed class when skip_invalid is off.
        """
        start_time = time.perf_counter()
        log = (self._logger or get_logger("analysis")).bind(
            scan_id=new_scan_id(), root=str(root)
        )

        paths = discover_class_files(
            root,
            extension=self._config.extension,
            exclude_dirs=self._config.exclude_dirs,
        )
        log.info("scan_start", files=len(paths), workers=self._config.max_workers)

        descriptors: list[ClassDescriptor] = []
        skipped: list[ParseOutcome] = []
        outcomes = progress(
            self._parse_outcomes(paths, log), desc="Parsing", total=len(paths), unit="classes"
        )
        with closing(outcomes):
            for outcome in outcomes:
                if outcome.descriptor is not None:
                    descriptors.append(outcome.descriptor)
                    continue
                assert outcome.error is not None
                if not self._config.skip_invalid:
                    log.error("scan_aborted", path=outcome.path, error=str(outcome.error))
                    raise outcome.error
                log.warning("class_skipped", path=outcome.path, error=str(outcome.error))
                skipped.append(outcome)

        violations = build_violation_report(
            descriptors, tag_descriptor=self._config.tag_annotation, logger=log
        )
        result = ScanResult(
            root=str(root),
            violations=violations,
            classes_scanned=len(descriptors),
            skipped=skipped,
            duration_seconds=time.perf_counter() - start_time,
        )
        log.info(
            "scan_done",
            classes=result.classes_scanned,
            conflicts=result.total_conflicts,
            skipped=len(skipped),
            elapsed_s=round(result.duration_seconds, 3),
        )
        return result

    def _parse_outcomes(
        self, paths: list[Path], log: structlog.stdlib.BoundLogger
    ) -> Iterator[ParseOutcome]:
        """Yield one outcome per path, in path order, parsing in a pool if configured."""
        parse = partial(_parse_one, log=log)
        workers = min(self._config.max_workers, len(paths))
        if workers <= 1:
            yield from map(parse, paths)
            return
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="tagcheck-parse") as pool:
            yield from pool.map(parse, paths)


def scan_directory(
    root: Path,
    *,
    config: ScanConfig | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> ScanResult:
    """Scan one classes directory with a throwaway TagScanner."""
    return TagScanner(config, logger=logger).scan(root)
