"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence and error handling
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from xcparse.config.loader import LOCAL_CONFIG_NAME, _deep_merge, _load_yaml, load_config
from xcparse.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path: Path) -> Iterator[Path]:
    """Point the global config at a temp file so the host config never leaks in."""
    global_path = tmp_path / "global" / "config.yaml"
    with patch("xcparse.config.loader.GLOBAL_CONFIG_PATH", global_path):
        yield global_path


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path) -> None:
        """Malformed YAML becomes a CONFIG_PARSE_ERROR."""
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("reader: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code is ErrorCode.CONFIG_PARSE_ERROR

    def test_non_mapping_raises_config_error(self, tmp_path: Path) -> None:
        """A top-level list is rejected."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_keys_merged(self) -> None:
        base = {"reader": {"xcrun_path": "xcrun", "timeout_sec": 10}}
        override = {"reader": {"timeout_sec": 30}}

        assert _deep_merge(base, override) == {"reader": {"xcrun_path": "xcrun", "timeout_sec": 30}}

    def test_base_not_mutated(self) -> None:
        base = {"a": 1}
        _deep_merge(base, {"a": 2})
        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults(self, workdir: Path) -> None:
        """No files and no env give built-in defaults."""
        config = load_config(cwd=workdir)

        assert config.logging.level == "WARNING"
        assert config.reader.xcrun_path == "xcrun"
        assert config.reader.legacy == "auto"
        assert config.report.slowest_count == 5

    def test_global_file_applies(self, workdir: Path, isolated_global_config: Path) -> None:
        isolated_global_config.parent.mkdir(parents=True)
        isolated_global_config.write_text("reader:\n  timeout_sec: 30\n")

        assert load_config(cwd=workdir).reader.timeout_sec == 30.0

    def test_local_overrides_global(self, workdir: Path, isolated_global_config: Path) -> None:
        isolated_global_config.parent.mkdir(parents=True)
        isolated_global_config.write_text("reader:\n  timeout_sec: 30\n  xcrun_path: /g/xcrun\n")
        (workdir / LOCAL_CONFIG_NAME).write_text("reader:\n  timeout_sec: 45\n")

        config = load_config(cwd=workdir)

        assert config.reader.timeout_sec == 45.0
        assert config.reader.xcrun_path == "/g/xcrun"

    def test_explicit_file_overrides_local(self, workdir: Path, tmp_path: Path) -> None:
        (workdir / LOCAL_CONFIG_NAME).write_text("report:\n  slowest_count: 3\n")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("report:\n  slowest_count: 12\n")

        assert load_config(explicit, cwd=workdir).report.slowest_count == 12

    def test_env_overrides_files(
        self, workdir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("reader:\n  legacy: never\n")
        monkeypatch.setenv("XCPARSE__READER__LEGACY", "always")

        assert load_config(explicit, cwd=workdir).reader.legacy == "always"

    def test_kwargs_override_env(self, workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XCPARSE__LOGGING__LEVEL", "INFO")

        config = load_config(cwd=workdir, logging={"level": "ERROR"})

        assert config.logging.level == "ERROR"

    def test_missing_explicit_file_raises(self, workdir: Path, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "nope.yaml", cwd=workdir)
        assert exc_info.value.code is ErrorCode.CONFIG_PARSE_ERROR

    def test_invalid_value_raises(self, workdir: Path) -> None:
        """Validation failures surface as CONFIG_INVALID_VALUE with the field path."""
        (workdir / LOCAL_CONFIG_NAME).write_text("reader:\n  timeout_sec: -5\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(cwd=workdir)
        assert exc_info.value.code is ErrorCode.CONFIG_INVALID_VALUE
        assert "timeout_sec" in exc_info.value.details["field"]
