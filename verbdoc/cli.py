"""
cli.py

Responsibility: CLI entrypoint for verbdoc.

Commands:
- `build SRC [DEST]`: render one template (or every file a glob matches) into DEST
- `render SRC`: render one template and print the result

This module only translates arguments into `Options`; all behavior lives in `core.py`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from verbdoc import core
from verbdoc.config import ConfigError
from verbdoc.files import has_magic
from verbdoc.matter import MatterError
from verbdoc.tags import TagError
from verbdoc.template import RenderError

logger = logging.getLogger(__name__)

DEFAULT_SRC = "docs/README.tmpl.md"
DEFAULT_DEST = "README.md"


class CLIError(RuntimeError):
    pass


def _options(args: argparse.Namespace) -> dict[str, Any]:
    opts: dict[str, Any] = {"verbose": bool(args.verbose)}
    if args.cwd:
        opts["cwd"] = args.cwd
    if args.verbrc:
        opts["verbrc"] = args.verbrc
    if args.config:
        opts["config"] = args.config
    if args.data:
        opts["data"] = list(args.data)
    if args.toc_depth is not None:
        opts["toc"] = {"maxDepth": args.toc_depth}
    for name in ("concat", "sep", "ext", "dest_base", "flatten"):
        value = getattr(args, name, None)
        if value is not None:
            opts[name] = value
    return opts


def build_cmd(args: argparse.Namespace) -> int:
    options = _options(args)
    if args.concat or has_magic(args.src):
        core.expand(args.src, args.dest, options)
    else:
        core.copy(args.src, args.dest, options)
    return 0


def render_cmd(args: argparse.Namespace) -> int:
    if has_magic(args.src):
        raise CLIError(f"render takes a single file, not a glob: {args.src} (use build)")
    content = core.read(args.src, _options(args))
    sys.stdout.write(content)
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--cwd", default=None, help="Base directory for sources and data (default: current dir)")
    p.add_argument("--verbrc", default=None, help="Runtime config file (default: .verbrc.yml if present)")
    p.add_argument("--config", default=None, help="Project config file (default: package.json or pyproject.toml)")
    p.add_argument("--data", action="append", default=None, metavar="GLOB", help="Data files to load. Repeatable.")
    p.add_argument("--toc-depth", type=int, default=None, help="Maximum heading depth in the TOC (default: 2)")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="verbdoc", description="verbdoc - generate Markdown docs from templates")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="Render SRC (file or glob) and write it to DEST")
    b.add_argument("src", nargs="?", default=DEFAULT_SRC, help=f"Source template or glob (default: {DEFAULT_SRC})")
    b.add_argument("dest", nargs="?", default=DEFAULT_DEST, help=f"Destination file or directory (default: {DEFAULT_DEST})")
    b.add_argument("--concat", action="store_true", default=None, help="Join all rendered files into DEST")
    b.add_argument("--sep", default=None, help="Separator between concatenated files (default: newline)")
    b.add_argument("--ext", default=None, help="Extension for generated files (default: .md)")
    b.add_argument("--dest-base", dest="dest_base", default=None, help="Base directory for generated files")
    b.add_argument("--flatten", action="store_true", default=None, help="Drop source directories from dest paths")
    _add_common(b)
    b.set_defaults(func=build_cmd)

    r = sub.add_parser("render", help="Render SRC and print the result")
    r.add_argument("src", help="Source template")
    _add_common(r)
    r.set_defaults(func=render_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        return int(args.func(args))
    except (CLIError, ConfigError, MatterError, RenderError, TagError, FileNotFoundError, UnicodeDecodeError) as e:
        logger.error("%s", e)
        if e.__cause__ is not None:
            logger.debug("Caused by: %r", e.__cause__)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
