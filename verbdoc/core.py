"""
core.py

Responsibility: The public pipeline: `init`, `process`, `read`, `copy`, `expand`.

High-level flow of `process`:
1) Merge options over the defaults
2) Split front matter from the template body
3) Build the context (see `context.MERGE_STEPS`)
4) Render the body with Jinja2
5) Resolve deferred tags (async, bounded by `Options.timeout`)
6) Post-process whitespace and insert the table of contents

Options and context are passed explicitly; the only process-wide state is the
`Runtime` set up once by `init`. Builds are sequential: `process` drives its
own event loop and must not be called from inside a running one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment

from verbdoc import toc
from verbdoc.context import RUNNER, Context, build_context
from verbdoc.files import expand_mapping, read_text, write_text
from verbdoc.matter import parse_matter
from verbdoc.config import load_runtime_config
from verbdoc.options import Options, coerce
from verbdoc.paths import has_ext, normalize_slash, relative, resolve
from verbdoc.postprocess import post_process
from verbdoc.tags import TagTimeoutError
from verbdoc.tags import resolve as resolve_tags
from verbdoc.template import build_environment, render

logger = logging.getLogger(__name__)

OptionsLike = Options | Mapping[str, Any] | None


@dataclass
class Runtime:
    """Settings fixed by the first `init` call in this process."""

    initialized: bool = False
    verbose: bool = False
    filters: dict[str, Callable[..., Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class ProcessResult:
    content: str
    context: Context
    original: str
    runtime: Runtime


_runtime = Runtime()


def init(options: OptionsLike = None) -> Runtime:
    """
    Apply verbosity and install mixin filters. Only the first call has any effect.
    """
    runtime = _runtime
    if runtime.initialized:
        return runtime

    opts = coerce(options)
    runtime.initialized = True
    runtime.verbose = opts.verbose or runtime.verbose
    runtime.filters.update(opts.mixins)
    if runtime.verbose:
        logging.getLogger("verbdoc").setLevel(logging.DEBUG)
    return runtime


def _options_for(options: OptionsLike) -> Options:
    """Caller options over the defaults, then `.verbrc` option keys the caller left unset."""
    opts = Options().merged(options)
    return opts.with_runtime_config(load_runtime_config(opts))


async def _resolve_with_timeout(content: str, context: Context, opts: Options, env: Environment) -> str:
    try:
        return await asyncio.wait_for(resolve_tags(content, context, opts, env), timeout=opts.timeout)
    except TimeoutError as e:
        raise TagTimeoutError(f"Tag resolution did not finish within {opts.timeout}s") from e


def process(src: str | None, options: OptionsLike = None, *, name: str = "<string>") -> ProcessResult:
    opts = _options_for(options)
    runtime = init(opts)
    src = src or ""

    page = parse_matter(src)
    context = build_context(opts, page)

    env = build_environment(settings=opts.settings, filters=runtime.filters, search_path=opts.base)
    rendered = render(page.content, context, env, name=name)
    resolved = asyncio.run(_resolve_with_timeout(rendered, context, opts, env))

    content = toc.insert(post_process(resolved), opts.toc_options)
    return ProcessResult(content=content, context=context, original=src, runtime=runtime)


def read(src: str | Path, options: OptionsLike = None) -> str:
    opts = _options_for(options)
    init(opts)

    path = resolve(opts.base, src)
    logger.debug("processing %s", relative(path))
    content = read_text(path)
    return process(content, opts, name=relative(path)).content


def copy(src: str | Path, dest: str | Path, options: OptionsLike = None) -> None:
    opts = _options_for(options)
    init(opts)

    logger.info("reading %s", normalize_slash(src))
    dest_path = resolve(opts.base, dest)
    write_text(dest_path, read(src, opts))
    logger.info("writing %s", relative(dest_path))
    logger.info("%s [done]", RUNNER["name"])


def _existing(paths: Iterable[Path]) -> list[Path]:
    found: list[Path] = []
    for path in paths:
        if path.is_file():
            found.append(path)
        else:
            logger.warning('Source file "%s" not found.', relative(path))
    return found


def expand(src: str | Iterable[str], dest: str | Path, options: OptionsLike = None) -> None:
    """
    Render every file matched by `src` and write the results under `dest`.

    With `concat` (or when `dest` has an extension) the rendered files are joined
    with `sep`, in discovery order, and written once to `dest`. Files written
    before a failure are left in place.
    """
    opts = _options_for(options)
    init(opts)

    concat = opts.concat or has_ext(dest)
    dest_path = resolve(opts.base, dest)
    dest_base = resolve(opts.base, opts.dest_base) if opts.dest_base else dest_path

    logger.info("Expanding files: %s", src)
    mappings = expand_mapping(
        src,
        dest_path,
        cwd=opts.base,
        ext=opts.ext,
        dest_base=dest_base,
        src_base=opts.src_base,
        flatten=opts.flatten,
        glob_options=opts.glob,
    )

    deferred: list[Path] = []
    for mapping in mappings:
        for path in _existing(mapping.src):
            if concat:
                deferred.append(path)
                continue
            logger.info("reading %s", relative(path))
            write_text(mapping.dest, read(path, opts))
            logger.info("writing %s", relative(mapping.dest))

    if concat:
        parts = []
        for path in deferred:
            logger.info("reading %s", relative(path))
            parts.append(read(path, opts))
        write_text(dest_path, opts.sep.join(parts))
        logger.info("writing %s", relative(dest_path))

    logger.info("%s [done]", RUNNER["name"])
