"""
toc.py

Responsibility: Generate a Markdown table of contents and insert it at the `<!-- toc -->` marker.

Headings come from Python-Markdown's `toc` extension (`Markdown.toc_tokens`),
so ATX (`## Title`) and setext (underlined) headings are both found and headings
inside fenced code are not. The generated block is wrapped between
`<!-- toc -->` and `<!-- tocstop -->`, so running `insert` again replaces the
previous block instead of adding a second one. Anchors follow GitHub's heading
slugs, including the `-1`, `-2` suffixes for repeated headings.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import markdown
from markdown.extensions.toc import slugify_unicode

from verbdoc.options import TocOptions

TOC_OPEN = "<!-- toc -->"
TOC_CLOSE = "<!-- tocstop -->"

_BLOCK = re.compile(r"<!--\s*toc\s*-->(?:.*?<!--\s*tocstop\s*-->)?", re.DOTALL)


@dataclass(frozen=True)
class Heading:
    level: int
    title: str
    slug: str


def slugify(text: str) -> str:
    return slugify_unicode(text, "-")


def _toc_tokens(content: str) -> list[dict[str, Any]]:
    md = markdown.Markdown(extensions=["fenced_code", "toc"])
    md.convert(_BLOCK.sub("", content))
    return md.toc_tokens


def _walk(tokens: list[dict[str, Any]]) -> Iterator[dict[str, Any]]:
    for token in tokens:
        yield token
        yield from _walk(token.get("children") or [])


def headings(content: str) -> list[Heading]:
    out: list[Heading] = []
    seen: dict[str, int] = {}
    for token in _walk(_toc_tokens(content)):
        title = html.unescape(token["name"]).strip()
        base = slugify(title)
        count = seen.get(base, 0)
        seen[base] = count + 1
        slug = base if count == 0 else f"{base}-{count}"
        out.append(Heading(level=int(token["level"]), title=title, slug=slug))
    return out


def generate(content: str, options: TocOptions | None = None) -> str:
    options = options or TocOptions()
    found = headings(content)
    if not options.firsth1:
        first_h1 = next((h for h in found if h.level == 1), None)
        found = [h for h in found if h is not first_h1]
    found = [h for h in found if h.level <= options.max_depth]
    if not found:
        return ""

    top = min(h.level for h in found)
    return "\n".join(f"{'  ' * (h.level - top)}- [{h.title}](#{h.slug})" for h in found)


def insert(content: str, options: TocOptions | None = None) -> str:
    """
    Replace the first TOC marker (or previously generated block) with a fresh TOC.
    Content without a marker is returned unchanged.
    """
    if not _BLOCK.search(content):
        return content
    toc = generate(content, options)
    block = f"{TOC_OPEN}\n\n{toc}\n\n{TOC_CLOSE}" if toc else f"{TOC_OPEN}\n\n{TOC_CLOSE}"
    return _BLOCK.sub(lambda _m: block, content, count=1)
