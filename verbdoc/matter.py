"""
matter.py

Responsibility: Split a source string into front matter and template body.

Front matter is a YAML mapping delimited by `---` lines at the very top of the
source. Sources without it are returned untouched with an empty context.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import yaml


class MatterError(ValueError):
    pass


_FRONT_MATTER = re.compile(
    r"\A---[ \t]*\r?\n(?:(?P<yaml>.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


@dataclass(frozen=True)
class Page:
    """Front matter values (`context`) and the remaining template (`content`)."""

    context: dict[str, Any] = field(default_factory=dict)
    content: str = ""


def parse_matter(src: str | None) -> Page:
    src = src or ""
    match = _FRONT_MATTER.match(src)
    if match is None:
        return Page(context={}, content=src)

    try:
        data = yaml.safe_load(match.group("yaml") or "") or {}
    except yaml.YAMLError as e:
        raise MatterError("Front matter is not valid YAML.") from e
    if not isinstance(data, dict):
        raise MatterError("Front matter must be a mapping/object at the top level.")
    return Page(context=data, content=src[match.end() :])
