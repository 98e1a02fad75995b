"""
context.py

Responsibility: Assemble the template context from every data source, in a fixed order.

The order in `MERGE_STEPS` is the precedence contract templates rely on: a key
set by a later step replaces the same key from an earlier one. For example user
`metadata` overrides package.json, and front matter overrides both. The runner
identity is applied after the exclusions so nothing can remove or replace it.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from verbdoc.config import load_project_config, load_runtime_config
from verbdoc.data import init_data, init_providers
from verbdoc.filters import init_filters
from verbdoc.matter import Page
from verbdoc.options import Options, is_option_key
from verbdoc.tags import init_tags

logger = logging.getLogger(__name__)

Context = dict[str, Any]

RUNNER: dict[str, str] = {
    "name": "verbdoc",
    "url": "https://github.com/verbdoc/verbdoc",
}

# The project config object is merged in, never exposed as a whole.
ALWAYS_EXCLUDED = frozenset({"config"})


def _runtime(context: Context, options: Options, page: Page) -> Context:
    # Option keys in the file were already applied to `options` by the caller.
    runtime = load_runtime_config(options)
    context.update({key: value for key, value in runtime.items() if not is_option_key(key)})
    return context


def _project(context: Context, options: Options, page: Page) -> Context:
    context.update(load_project_config(options))
    context.pop("config", None)
    return context


def _options(context: Context, options: Options, page: Page) -> Context:
    context.update(options.as_context())
    context.update(options.metadata)
    return context


def _providers(context: Context, options: Options, page: Page) -> Context:
    context.update(init_providers(options))
    return context


def _helpers(context: Context, options: Options, page: Page) -> Context:
    context.update(init_tags(options))
    context.update(init_filters(options))
    return context


def _data(context: Context, options: Options, page: Page) -> Context:
    context.update(init_data(options))
    return context


def _matter(context: Context, options: Options, page: Page) -> Context:
    context.update(page.context)
    return context


def excluded_keys(options: Options) -> frozenset[str]:
    return ALWAYS_EXCLUDED | frozenset(options.exclusions)


def apply_exclusions(context: Context, options: Options) -> Context:
    omit = excluded_keys(options)
    if "config" in context:
        logger.warning('Dropping "config" from the template context; it is reserved for project config.')
    return {key: value for key, value in context.items() if key not in omit}


def _exclusions(context: Context, options: Options, page: Page) -> Context:
    return apply_exclusions(context, options)


def _runner(context: Context, options: Options, page: Page) -> Context:
    context["runner"] = dict(RUNNER)
    return context


MergeStep = Callable[[Context, Options, Page], Context]

MERGE_STEPS: tuple[tuple[str, MergeStep], ...] = (
    ("runtime", _runtime),
    ("project", _project),
    ("options", _options),
    ("providers", _providers),
    ("helpers", _helpers),
    ("data", _data),
    ("matter", _matter),
    ("exclusions", _exclusions),
    ("runner", _runner),
)


def build_context(options: Options, page: Page) -> Context:
    context: Context = {}
    for _name, step in MERGE_STEPS:
        context = step(context, options, page)
    return context
