"""
template.py

Responsibility: Synchronous Jinja2 rendering of a page body against a context.

Rules:
- No autoescaping: output is Markdown, not HTML.
- Undefined names fail loudly (StrictUndefined) unless `settings` says otherwise.
- `settings` is passed through to `jinja2.Environment` untouched.
- Filters come from `filters.FILTERS` plus the mixins installed by `init`.

This module intentionally does NOT know about front matter, tags or files on disk
beyond the loader search path used by native `{% include %}`.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from verbdoc.filters import FILTERS


class RenderError(RuntimeError):
    pass


def build_environment(
    *,
    settings: Mapping[str, Any] | None = None,
    filters: Mapping[str, Callable[..., Any]] | None = None,
    search_path: str | Path | None = None,
) -> Environment:
    kwargs: dict[str, Any] = {
        "autoescape": False,
        "undefined": StrictUndefined,
        "keep_trailing_newline": True,
    }
    if search_path is not None:
        kwargs["loader"] = FileSystemLoader(str(search_path))
    kwargs.update(settings or {})

    try:
        env = Environment(**kwargs)
    except TypeError as e:
        raise RenderError(f"Invalid template settings: {sorted(settings or {})}") from e
    env.filters.update(FILTERS)
    env.filters.update(filters or {})
    return env


def render(content: str, context: Mapping[str, Any], env: Environment, *, name: str = "<string>") -> str:
    try:
        template = env.from_string(content)
        return template.render(**context)
    except Exception as e:  # noqa: BLE001 - surface as RenderError
        raise RenderError(f"Failed rendering template: {name}") from e
