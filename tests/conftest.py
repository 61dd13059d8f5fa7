from __future__ import annotations

from pathlib import Path

import pytest

from models import Configuration


@pytest.fixture
def config() -> Configuration:
    """Thresholds used by most pipeline tests."""
    return Configuration(warn=100, error=10)


@pytest.fixture
def write_file(tmp_path: Path):
    """Write a file under tmp_path, creating parent directories."""

    def _write(relative: str, content: str = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
