"""
tags.py

Responsibility: Custom tags that cannot be resolved during the synchronous render.

During rendering, `{{ include("usage") }}` and `{{ docs("api") }}` only leave a
marker in the output. `resolve` is the second pass: it reads the referenced
files off the event loop thread, renders them with the same context, and
substitutes them for the markers. Included files may include other files, up to
`MAX_DEPTH` levels.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable
from urllib.parse import quote, unquote

from jinja2 import Environment

from verbdoc.files import read_text
from verbdoc.matter import MatterError, parse_matter
from verbdoc.options import Options
from verbdoc.paths import relative
from verbdoc.template import RenderError, render

logger = logging.getLogger(__name__)

MAX_DEPTH = 10
DEFAULT_INCLUDE_DIRS = ("docs", ".")
DOCS_DIRS = ("docs",)

_MARKER = re.compile(r"<!--verbdoc:(?P<kind>include|docs):(?P<name>[^\s>]+?)-->")


class TagError(RuntimeError):
    pass


class TagTimeoutError(TagError):
    pass


def marker(kind: str, name: str) -> str:
    return f"<!--verbdoc:{kind}:{quote(str(name), safe='/.')}-->"


def init_tags(options: Options) -> dict[str, Callable[..., str]]:
    def include(name: str) -> str:
        return marker("include", name)

    def docs(name: str) -> str:
        return marker("docs", name)

    return {"include": include, "docs": docs}


def _candidates(name: str) -> list[str]:
    if Path(name).suffix:
        return [name]
    return [name + ".md", name]


def locate(kind: str, name: str, options: Options) -> Path:
    dirs = DOCS_DIRS if kind == "docs" else (options.includes or DEFAULT_INCLUDE_DIRS)
    for directory in dirs:
        root = options.base / directory
        for candidate in _candidates(name):
            path = root / candidate
            if path.is_file():
                return path
    searched = ", ".join(relative(options.base, d) for d in dirs)
    raise TagError(f"Cannot find {kind} '{name}' (searched: {searched})")


def _render_included(path: Path, text: str, context: Mapping[str, Any], env: Environment) -> str:
    try:
        page = parse_matter(text)
        return render(page.content, {**context, **page.context}, env, name=str(path)).rstrip("\r\n")
    except (MatterError, RenderError) as e:
        raise TagError(f"Failed rendering included file: {relative(path)}") from e


async def resolve(content: str, context: Mapping[str, Any], options: Options, env: Environment) -> str:
    """
    Replace every tag marker in `content` with the rendered file it names.
    """
    for _depth in range(MAX_DEPTH + 1):
        found = [(m.group("kind"), unquote(m.group("name"))) for m in _MARKER.finditer(content)]
        if not found:
            return content

        paths = {key: locate(key[0], key[1], options) for key in dict.fromkeys(found)}
        unique = list(dict.fromkeys(paths.values()))
        logger.debug("Resolving %d tag(s) from %d file(s)", len(found), len(unique))
        try:
            texts = await asyncio.gather(*(asyncio.to_thread(read_text, p) for p in unique))
        except OSError as e:
            raise TagError(f"Failed reading included file: {e}") from e

        by_path = {p: _render_included(p, t, context, env) for p, t in zip(unique, texts)}

        def _substitute(m: re.Match[str]) -> str:
            return by_path[paths[(m.group("kind"), unquote(m.group("name")))]]

        content = _MARKER.sub(_substitute, content)

    raise TagError(f"Includes nested deeper than {MAX_DEPTH} levels")
