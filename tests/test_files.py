from __future__ import annotations

from pathlib import Path

from verbdoc.files import expand_mapping, has_magic, match_patterns, strip_ext, write_text
from verbdoc.paths import has_ext, normalize_slash, relative


def test_has_magic() -> None:
    assert has_magic("docs/*.md")
    assert has_magic("a?.md")
    assert not has_magic("docs/README.md")


def test_match_patterns_order_and_negation(write, project) -> None:
    for name in ("b.md", "a.md", "c.txt"):
        write(f"src/{name}", name)
    assert match_patterns(["src/*.md", "src/c.txt"], project) == ["src/a.md", "src/b.md", "src/c.txt"]
    assert match_patterns(["src/*", "!src/*.md"], project) == ["src/c.txt"]


def test_match_patterns_keeps_literal_missing_paths(project) -> None:
    assert match_patterns("nope.md", project) == ["nope.md"]
    assert match_patterns("nope/*.md", project) == []


def test_expand_mapping_bases(write, project) -> None:
    write("docs/guide/intro.tmpl.md", "x")
    mappings = expand_mapping("guide/*.md", "out", cwd=project / "docs", ext=".md")
    assert [m.dest for m in mappings] == [Path("out/guide/intro.md")]
    assert mappings[0].src == (project / "docs/guide/intro.tmpl.md",)

    mappings = expand_mapping("guide/*.md", "out", cwd=project / "docs", src_base="guide", dest_base="site")
    assert [m.dest for m in mappings] == [Path("site/intro.tmpl.md")]


def test_strip_ext_cuts_at_first_dot() -> None:
    assert strip_ext("README.tmpl.md") == "README"
    assert strip_ext("LICENSE") == "LICENSE"
    assert strip_ext(".verbrc.yml") == ".verbrc"


def test_write_text_creates_parents(project) -> None:
    path = write_text(project / "a/b/c.md", "x\n")
    assert path.read_bytes() == b"x\n"


def test_path_helpers(project) -> None:
    assert relative(project / "docs", "a.md") == "docs/a.md"
    assert normalize_slash("a\\b\\c") == "a/b/c"
    assert has_ext("README.md")
    assert not has_ext("out/dir")
