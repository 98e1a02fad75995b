from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from verbdoc import core


@pytest.fixture(autouse=True)
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run every test inside an empty project directory with a fresh runtime."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(core, "_runtime", core.Runtime())
    monkeypatch.setattr("verbdoc.config.git_info", lambda cwd: {})
    yield tmp_path
    logging.getLogger("verbdoc").setLevel(logging.NOTSET)


@pytest.fixture
def write(project: Path):
    def _write(rel: str, text: str) -> Path:
        path = project / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
