"""CLI test fixtures."""

from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run every command in an empty directory with no global config."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setattr("xcparse.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global.yaml")
    monkeypatch.chdir(workdir)
    yield workdir
