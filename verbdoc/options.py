"""
options.py

Responsibility: The immutable options record threaded through the whole pipeline.

Callers may hand the public API either an `Options` instance or a plain mapping;
`coerce` turns the latter into the former. Keys the pipeline does not know about
are kept in `extra` so they can still reach the template context.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

DEFAULT_TOC: dict[str, Any] = {"maxDepth": 2}

# camelCase spellings accepted for compatibility with existing config files.
_ALIASES = {
    "destBase": "dest_base",
    "srcBase": "src_base",
}

# A runtime config file cannot relocate itself.
_NOT_FROM_RUNTIME = frozenset({"verbrc", "cwd"})
_MERGED_MAPPINGS = frozenset({"metadata", "settings", "glob"})


@dataclass(frozen=True)
class TocOptions:
    max_depth: int = 2
    firsth1: bool = False

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "TocOptions":
        raw = raw or {}
        depth = raw.get("maxDepth", raw.get("max_depth", 2))
        return cls(max_depth=int(depth), firsth1=bool(raw.get("firsth1", False)))


@dataclass(frozen=True)
class Options:
    """Options recognized by `process`, `read`, `copy` and `expand`."""

    verbose: bool = False
    toc: Mapping[str, Any] = field(default_factory=lambda: dict(DEFAULT_TOC))
    verbrc: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    settings: Mapping[str, Any] = field(default_factory=dict)
    config: Any = None
    data: tuple[str, ...] = ()
    providers: tuple[Callable[["Options"], Mapping[str, Any]], ...] = ()
    exclusions: tuple[str, ...] = ()
    mixins: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    includes: tuple[str, ...] = ()
    concat: bool = False
    sep: str = "\n"
    cwd: Path | None = None
    ext: str = ".md"
    dest_base: str | None = None
    src_base: str | None = None
    flatten: bool = False
    glob: Mapping[str, Any] = field(default_factory=dict)
    timeout: float = 30.0
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls) if f.name != "extra")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "Options":
        known = set(cls.field_names())
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in (raw or {}).items():
            name = _ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            elif name == "extra" and isinstance(value, Mapping):
                extra.update(value)
            else:
                extra[key] = value
        return cls(**_normalize(kwargs), extra=extra)

    @property
    def base(self) -> Path:
        return Path(self.cwd) if self.cwd is not None else Path.cwd()

    @property
    def toc_options(self) -> TocOptions:
        return TocOptions.from_mapping(self.toc)

    def merged(self, overrides: "Options | Mapping[str, Any] | None") -> "Options":
        """
        Return a copy with `overrides` applied. Mappings only override the keys they name.
        """
        if overrides is None:
            return self
        if isinstance(overrides, Options):
            return overrides
        update = Options.from_mapping(overrides)
        given = {_ALIASES.get(k, k) for k in overrides}
        changes = {name: getattr(update, name) for name in self.field_names() if name in given}
        extra = {**self.extra, **update.extra}
        return dataclasses.replace(self, **changes, extra=extra)

    def with_runtime_config(self, raw: Mapping[str, Any] | None) -> "Options":
        """
        Fill options from a runtime config file (`.verbrc`).

        The caller's values win: a field still at its default takes the file's
        value, and `metadata`/`settings`/`glob` are merged key by key. Keys that
        are not option names are left for the context.
        """
        given = {_ALIASES.get(k, k) for k in raw or {} if is_option_key(k)} - _NOT_FROM_RUNTIME
        if not given:
            return self
        loaded = Options.from_mapping({k: v for k, v in raw.items() if _ALIASES.get(k, k) in given})
        defaults = Options()
        changes: dict[str, Any] = {}
        for name in given:
            mine, theirs = getattr(self, name), getattr(loaded, name)
            if name in _MERGED_MAPPINGS:
                changes[name] = {**theirs, **mine}
            elif mine == getattr(defaults, name):
                changes[name] = theirs
        return dataclasses.replace(self, **changes)

    def as_context(self) -> dict[str, Any]:
        """Caller keys that are not option names; these reach the template context."""
        return dict(self.extra)


def is_option_key(key: str) -> bool:
    return _ALIASES.get(key, key) in Options.field_names()


def coerce(options: "Options | Mapping[str, Any] | None") -> Options:
    if isinstance(options, Options):
        return options
    return Options.from_mapping(options)


def _normalize(kwargs: dict[str, Any]) -> dict[str, Any]:
    for name in ("data", "includes", "exclusions", "providers"):
        value = kwargs.get(name)
        if value is None:
            kwargs.pop(name, None)
        elif isinstance(value, (str, Path)):
            kwargs[name] = (str(value),)
        else:
            kwargs[name] = tuple(value)
    if kwargs.get("cwd") is not None:
        kwargs["cwd"] = Path(kwargs["cwd"])
    if kwargs.get("toc") is None:
        kwargs.pop("toc", None)
    for name in ("metadata", "settings", "glob", "mixins"):
        if name in kwargs and kwargs[name] is None:
            kwargs.pop(name)
    return kwargs
