"""
postprocess.py

Responsibility: Clean up whitespace left behind by template tags.

- CRLF/CR newlines become LF.
- Trailing whitespace is removed from every line outside fenced code blocks,
  except that two or more trailing spaces (a Markdown hard line break) become
  exactly two.
- Runs of blank lines collapse to a single blank line, again outside fences.
- Leading blank lines are dropped and non-empty output ends with exactly one newline.
"""

from __future__ import annotations

import re

FENCE_RE = re.compile(r"^[ \t]*(`{3,}|~{3,})")


def post_process(content: str) -> str:
    text = content.replace("\r\n", "\n").replace("\r", "\n")
    out: list[str] = []
    fence: str | None = None
    blank = False

    for line in text.split("\n"):
        match = FENCE_RE.match(line)
        if fence is not None:
            out.append(line)
            if match and match.group(1)[0] == fence[0] and len(match.group(1)) >= len(fence):
                fence = None
            continue
        if match:
            fence = match.group(1)

        stripped = line.rstrip()
        if stripped and line[len(stripped) :].startswith("  "):
            line = stripped + "  "
        else:
            line = stripped
        if not line:
            if blank or not out:
                continue
            blank = True
        else:
            blank = False
        out.append(line)

    result = "\n".join(out).rstrip("\n")
    return result + "\n" if result else ""
