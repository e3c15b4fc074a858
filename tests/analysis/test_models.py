"""Tests for analysis/models.py module."""

from __future__ import annotations

import json

from tagcheck.analysis.models import FieldInfo, ParseOutcome, ScanResult
from tagcheck.classfile.models import ClassDescriptor
from tagcheck.core.errors import ParseError


class TestFieldInfo:
    """Tests for FieldInfo."""

    def test_str(self) -> None:
        info = FieldInfo("com.acme.Order", "status", 1)
        assert str(info) == "com.acme.Order#status (tag=1)"

    def test_to_dict(self) -> None:
        info = FieldInfo("com.acme.Order", "status", 1)
        assert info.to_dict() == {
            "class_name": "com.acme.Order",
            "field_name": "status",
            "tag_value": 1,
        }

    def test_value_equality(self) -> None:
        assert FieldInfo("A", "x", 1) == FieldInfo("A", "x", 1)
        assert FieldInfo("A", "x", 1) != FieldInfo("A", "y", 1)


class TestParseOutcome:
    """Tests for ParseOutcome."""

    def test_ok(self) -> None:
        outcome = ParseOutcome.ok("A.class", ClassDescriptor("A"))
        assert outcome.success
        assert outcome.descriptor == ClassDescriptor("A")
        assert outcome.error is None

    def test_failed(self) -> None:
        error = ParseError.bad_magic("A.class", 0)
        outcome = ParseOutcome.failed("A.class", error)
        assert not outcome.success
        assert outcome.descriptor is None
        assert outcome.error is error


class TestScanResult:
    """Tests for ScanResult."""

    def test_clean_result(self) -> None:
        result = ScanResult(root="/out", classes_scanned=3)

        assert not result.has_violations
        assert result.total_conflicts == 0
        assert result.to_dict()["status"] == "clean"

    def test_total_conflicts_counts_tags(self) -> None:
        result = ScanResult(
            root="/out",
            violations={
                "A": {1: FieldInfo("A", "b", 1), 2: FieldInfo("A", "d", 2)},
                "B": {7: FieldInfo("B", "y", 7)},
            },
        )

        assert result.has_violations
        assert result.total_conflicts == 3

    def test_to_dict_sorted_and_json_safe(self) -> None:
        """Classes and tags are sorted and tag keys are strings."""
        error = ParseError.bad_magic("/out/Bad.class", 0xDEADBEEF)
        result = ScanResult(
            root="/out",
            violations={
                "z.Last": {10: FieldInfo("z.Last", "k", 10), 2: FieldInfo("z.Last", "j", 2)},
                "a.First": {1: FieldInfo("a.First", "b", 1)},
            },
            classes_scanned=5,
            skipped=[ParseOutcome.failed("/out/Bad.class", error)],
            duration_seconds=0.123456,
        )

        data = result.to_dict()

        assert data["status"] == "dirty"
        assert data["classes_scanned"] == 5
        assert data["total_conflicts"] == 3
        assert list(data["violations"]) == ["a.First", "z.Last"]
        assert list(data["violations"]["z.Last"]) == ["2", "10"]
        assert data["violations"]["a.First"]["1"]["field_name"] == "b"
        assert data["skipped"] == [{"path": "/out/Bad.class", "error": error.to_dict()}]
        assert data["duration_seconds"] == 0.123
        assert json.loads(json.dumps(data)) == data
