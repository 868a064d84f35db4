# tests/conftest.py

"""Shared pytest fixtures for the aTrace test suite."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point every data/log path at a per-test temp directory."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr(Settings, "DATA_DIR", data_dir)
    monkeypatch.setattr(
        Settings, "STORAGE_PATH", data_dir / "local_storage.json"
    )
    monkeypatch.setattr(Settings, "EXPORTS_DIR", data_dir / "exports")
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield data_dir
