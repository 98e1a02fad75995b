"""
filters.py

Responsibility: Jinja2 filters and context helpers available to every template.

`FILTERS` are installed on the Jinja2 environment (`{{ repo.url | username }}`).
`init_filters` returns plain callables that are merged into the context
(`{{ copyright(author.name, 2014) }}`).
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from verbdoc.options import Options

_REPO_PATH = re.compile(r"github\.com[:/]+(?P<owner>[^/\s]+)/(?P<name>[^/\s]+?)(?:\.git)?/?$")


def repo_path(url: str | None) -> str:
    """`git@github.com:owner/name.git` -> `owner/name`."""
    match = _REPO_PATH.search(url or "")
    if not match:
        return ""
    return f"{match.group('owner')}/{match.group('name')}"


def username(url: str | None) -> str:
    path = repo_path(url)
    return path.split("/", 1)[0] if path else ""


def heading(text: str, level: int = 1) -> str:
    return f"{'#' * max(1, min(int(level), 6))} {text}"


def bullets(items: Iterable[Any] | None) -> str:
    return "\n".join(f"- {item}" for item in items or ())


def author_name(author: Any) -> str:
    # package.json allows "Name <mail> (url)" strings as well as objects.
    if isinstance(author, Mapping):
        return str(author.get("name") or "")
    if isinstance(author, str):
        return re.sub(r"\s*[<(].*$", "", author).strip()
    return ""


FILTERS: dict[str, Callable[..., Any]] = {
    "repo_path": repo_path,
    "username": username,
    "heading": heading,
    "bullets": bullets,
    "author_name": author_name,
}


def init_filters(options: Options) -> dict[str, Any]:
    def date(fmt: str = "%Y-%m-%d") -> str:
        return dt.date.today().strftime(fmt)

    def year() -> str:
        return str(dt.date.today().year)

    def copyright_line(author: Any = "", start: int | str | None = None) -> str:
        current = year()
        span = current if not start or str(start) == current else f"{start}-{current}"
        name = author_name(author)
        return f"Copyright (c) {span} {name}".rstrip()

    return {"date": date, "year": year, "copyright": copyright_line}
