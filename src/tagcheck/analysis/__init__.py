"""Analysis module - duplicate tag detection over compiled classes."""

from tagcheck.analysis.detector import (
    build_violation_report,
    detect_class_conflicts,
    extract_tag_value,
)
from tagcheck.analysis.discovery import discover_class_files
from tagcheck.analysis.models import FieldInfo, ParseOutcome, ScanResult, ViolationReport
from tagcheck.analysis.ops import TagScanner, scan_directory
from tagcheck.analysis.report import ConsoleReporter, format_report

__all__ = [
    "ConsoleReporter",
    "FieldInfo",
    "ParseOutcome",
    "ScanResult",
    "TagScanner",
    "ViolationReport",
    "build_violation_report",
    "detect_class_conflicts",
    "discover_class_files",
    "extract_tag_value",
    "format_report",
    "scan_directory",
]
