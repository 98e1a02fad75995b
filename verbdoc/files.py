"""
files.py

Responsibility: Filesystem reads/writes and glob expansion into src -> dest mappings.

Expansion rules:
- Patterns are processed in the order given; matches of one pattern are sorted
  so output does not depend on directory listing order.
- A pattern starting with `!` removes earlier matches.
- A pattern without glob magic is kept literally, even when the file does not
  exist, so the caller can report it.
- Each source maps to `dest_base / <path relative to src_base>` with its
  extension (everything from the first dot of the basename) replaced by `ext`,
  so `README.tmpl.md` becomes `README.md`. `flatten` keeps only the basename.
"""

from __future__ import annotations

import glob
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_MAGIC = ("*", "?", "[")


@dataclass(frozen=True)
class FileMapping:
    src: tuple[Path, ...]
    dest: Path


def read_text(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def write_text(path: str | Path, text: str) -> Path:
    """
    Write `text` to `path`, creating parent directories as needed.
    """
    dst = Path(path)
    dst.parent.mkdir(parents=True, exist_ok=True)
    # LF on every platform.
    dst.write_text(text, encoding="utf-8", newline="\n")
    return dst


def has_magic(pattern: str) -> bool:
    return any(ch in pattern for ch in _MAGIC)


def _match(pattern: str, cwd: Path, glob_options: Mapping[str, Any]) -> list[str]:
    if not has_magic(pattern):
        return [os.path.normpath(pattern)]
    matches = glob.glob(
        pattern,
        root_dir=cwd,
        recursive=True,
        include_hidden=bool(glob_options.get("dot", False)),
    )
    if glob_options.get("filter", "isFile") == "isFile":
        matches = [m for m in matches if (cwd / m).is_file()]
    return sorted(os.path.normpath(m) for m in matches)


def match_patterns(
    patterns: str | Iterable[str], cwd: Path, glob_options: Mapping[str, Any] | None = None
) -> list[str]:
    if isinstance(patterns, str):
        patterns = [patterns]
    glob_options = glob_options or {}
    result: list[str] = []
    for pattern in patterns:
        if pattern.startswith("!"):
            excluded = set(_match(pattern[1:], cwd, glob_options))
            result = [m for m in result if m not in excluded]
            continue
        for match in _match(pattern, cwd, glob_options):
            if match not in result:
                result.append(match)
    return result


def strip_ext(name: str) -> str:
    # A leading dot names a dotfile, not an extension.
    dot = name.find(".", 1)
    return name if dot == -1 else name[:dot]


def _dest_relative(src: Path, src_base: Path, ext: str | None, flatten: bool) -> Path:
    if flatten:
        rel = Path(src.name)
    else:
        try:
            rel = src.relative_to(src_base)
        except ValueError:
            rel = Path(src.name)
    if ext:
        rel = rel.with_name(strip_ext(rel.name) + (ext if ext.startswith(".") else "." + ext))
    return rel


def expand_mapping(
    patterns: str | Iterable[str],
    dest: str | Path,
    *,
    cwd: str | Path,
    ext: str | None = None,
    dest_base: str | Path | None = None,
    src_base: str | Path | None = None,
    flatten: bool = False,
    glob_options: Mapping[str, Any] | None = None,
) -> list[FileMapping]:
    cwd = Path(cwd)
    src_root = cwd / src_base if src_base is not None else cwd
    dest_root = Path(dest_base) if dest_base is not None else Path(dest)

    grouped: dict[Path, list[Path]] = {}
    for match in match_patterns(patterns, cwd, glob_options):
        src = cwd / match
        target = dest_root / _dest_relative(src, src_root, ext, flatten)
        grouped.setdefault(target, []).append(src)

    return [FileMapping(src=tuple(srcs), dest=target) for target, srcs in grouped.items()]
