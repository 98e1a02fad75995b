"""
paths.py

Responsibility: Small path helpers shared by the drivers and the logs.

Paths shown to users (log lines, generated mappings) are relative to the
current working directory and always use forward slashes so output is stable
across platforms.
"""

from __future__ import annotations

import os
from pathlib import Path


def normalize_slash(path: str | os.PathLike[str]) -> str:
    return os.fspath(path).replace("\\", "/")


def relative(*segments: str | os.PathLike[str]) -> str:
    """
    Join `segments` and return the result relative to the current working directory.
    """
    if not segments:
        return "."
    joined = os.path.join(*(os.fspath(s) for s in segments))
    try:
        rel = os.path.relpath(joined, os.getcwd())
    except ValueError:
        # Different drive on Windows.
        rel = os.path.abspath(joined)
    return normalize_slash(rel)


def has_ext(path: str | os.PathLike[str]) -> bool:
    return bool(Path(os.fspath(path)).suffix)


def resolve(base: str | os.PathLike[str] | None, path: str | os.PathLike[str]) -> Path:
    p = Path(path)
    if p.is_absolute():
        return p
    return (Path(base) if base is not None else Path.cwd()) / p
