"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: global < project < env < kwargs
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from tagcheck.config.loader import GLOBAL_CONFIG_PATH, _deep_merge, _load_yaml, load_config
from tagcheck.config.models import LoggingConfig
from tagcheck.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "tagcheck.yaml"
        yaml_file.write_text("scan:\n  max_workers: 4\n")

        assert _load_yaml(yaml_file) == {"scan": {"max_workers": 4}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("scan:\n  exclude_dirs:\n    - [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        """A top-level list is not a config."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- scan\n- logging\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert "mapping" in exc_info.value.message


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        """Nested dicts are merged recursively."""
        base = {"scan": {"max_workers": 2, "skip_invalid": True}}
        override = {"scan": {"max_workers": 8}}

        assert _deep_merge(base, override) == {"scan": {"max_workers": 8, "skip_invalid": True}}

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}
        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_when_no_files(self, tmp_path: Path) -> None:
        with patch("tagcheck.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)

        assert config.logging.level == "WARNING"
        assert config.scan.fail_on_error is True
        assert config.scan.skip_invalid is False
        assert config.scan.max_workers == 1
        assert config.scan.classes_dir is None

    def test_loads_project_config(self, tmp_path: Path) -> None:
        (tmp_path / "tagcheck.yaml").write_text(
            "scan:\n  classes_dir: out/classes\n  fail_on_error: false\n"
        )

        with patch("tagcheck.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)

        assert config.scan.classes_dir == "out/classes"
        assert config.scan.fail_on_error is False

    def test_project_overrides_global(self, tmp_path: Path) -> None:
        """Project YAML wins key by key; untouched global keys survive."""
        global_yaml = tmp_path / "global.yaml"
        global_yaml.write_text("scan:\n  max_workers: 2\n  skip_invalid: true\n")
        project = tmp_path / "project"
        project.mkdir()
        (project / "tagcheck.yaml").write_text("scan:\n  max_workers: 6\n")

        with patch("tagcheck.config.loader.GLOBAL_CONFIG_PATH", global_yaml):
            config = load_config(project)

        assert config.scan.max_workers == 6
        assert config.scan.skip_invalid is True

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "tagcheck.yaml").write_text("scan:\n  max_workers: 2\n")

        with (
            patch("tagcheck.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(
                os.environ,
                {"TAGCHECK__SCAN__MAX_WORKERS": "4", "TAGCHECK__SCAN__FAIL_ON_ERROR": "false"},
            ),
        ):
            config = load_config(tmp_path)

        assert config.scan.max_workers == 4
        assert config.scan.fail_on_error is False

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        """Keyword arguments override everything."""
        (tmp_path / "tagcheck.yaml").write_text("scan:\n  skip_invalid: false\n")

        with (
            patch("tagcheck.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(os.environ, {"TAGCHECK__SCAN__SKIP_INVALID": "false"}),
        ):
            config = load_config(
                tmp_path,
                scan={"skip_invalid": True},
                logging=LoggingConfig(level="ERROR"),
            )

        assert config.scan.skip_invalid is True
        assert config.logging.level == "ERROR"

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / "tagcheck.yaml").write_text("scan:\n  max_workers: 0\n")

        with (
            patch("tagcheck.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            pytest.raises(ConfigError) as exc_info,
        ):
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "scan.max_workers"

    def test_invalid_yaml_in_project(self, tmp_path: Path) -> None:
        (tmp_path / "tagcheck.yaml").write_text("scan: [unclosed")

        with (
            patch("tagcheck.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            pytest.raises(ConfigError),
        ):
            load_config(tmp_path)


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_in_user_config_dir(self) -> None:
        assert isinstance(GLOBAL_CONFIG_PATH, Path)
        assert GLOBAL_CONFIG_PATH.parts[-2:] == ("tagcheck", "config.yaml")
