"""
data.py

Responsibility: Collect user data for the template context.

Two sources exist:
- providers: callables passed in `Options.providers`, each returning a mapping;
- data files: JSON/YAML/TOML files matched by the `Options.data` globs. Each
  file is exposed under its stem, so `data/site.yml` becomes `{{ site.* }}`.
"""

from __future__ import annotations

import glob
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from verbdoc.config import load_config_file
from verbdoc.options import Options

logger = logging.getLogger(__name__)


def init_providers(options: Options) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for provider in options.providers:
        result = provider(options)
        if result is None:
            continue
        if not isinstance(result, Mapping):
            raise TypeError(f"Data provider {provider!r} must return a mapping, got {type(result).__name__}")
        out.update(result)
    return out


def _data_files(options: Options) -> list[Path]:
    files: list[Path] = []
    seen: set[Path] = set()
    for pattern in options.data:
        matches = sorted(glob.glob(pattern, root_dir=options.base, recursive=True))
        for match in matches:
            path = options.base / match
            if path in seen or not path.is_file():
                continue
            seen.add(path)
            files.append(path)
    return files


def init_data(options: Options) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for path in _data_files(options):
        logger.debug("Loading data file %s", path)
        loaded = load_config_file(path)
        current = out.get(path.stem)
        if isinstance(current, dict):
            current.update(loaded)
        else:
            out[path.stem] = loaded
    return out
