from __future__ import annotations

from pathlib import Path

from verbdoc.options import Options, TocOptions, coerce


def test_defaults() -> None:
    opts = Options()
    assert opts.toc == {"maxDepth": 2}
    assert opts.sep == "\n"
    assert opts.ext == ".md"
    assert opts.concat is False


def test_from_mapping_keeps_unknown_keys_and_aliases() -> None:
    opts = Options.from_mapping({"destBase": "out", "cwd": "docs", "data": "data/*.yml", "author": "Jon"})
    assert opts.dest_base == "out"
    assert opts.cwd == Path("docs")
    assert opts.data == ("data/*.yml",)
    assert opts.extra == {"author": "Jon"}


def test_merged_only_overrides_given_keys() -> None:
    base = Options(sep="|", verbose=True)
    merged = base.merged({"sep": ",", "title": "x"})
    assert merged.sep == ","
    assert merged.verbose is True
    assert merged.extra == {"title": "x"}
    assert merged.toc == {"maxDepth": 2}


def test_coerce_passes_options_through() -> None:
    opts = Options(verbose=True)
    assert coerce(opts) is opts
    assert coerce(None) == Options()


def test_toc_options_accepts_both_spellings() -> None:
    assert TocOptions.from_mapping({"maxDepth": 3}).max_depth == 3
    assert TocOptions.from_mapping({"max_depth": 4, "firsth1": True}) == TocOptions(max_depth=4, firsth1=True)
    assert TocOptions.from_mapping(None).max_depth == 2


def test_runtime_config_fills_unset_fields_only() -> None:
    opts = Options(sep=",", metadata={"title": "caller"})
    merged = opts.with_runtime_config(
        {"sep": "|", "ext": ".txt", "metadata": {"title": "rc", "owner": "rc"}, "cwd": "elsewhere", "name": "x"}
    )
    assert merged.sep == ","
    assert merged.ext == ".txt"
    assert merged.metadata == {"title": "caller", "owner": "rc"}
    assert merged.cwd is None
    assert merged.extra == {}


def test_as_context_only_exposes_extra_keys() -> None:
    assert Options.from_mapping({"sep": "|", "author": "Jon"}).as_context() == {"author": "Jon"}
