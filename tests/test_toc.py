from __future__ import annotations

from verbdoc.options import TocOptions
from verbdoc.toc import TOC_CLOSE, TOC_OPEN, generate, headings, insert, slugify


def test_slugify_matches_github_anchors() -> None:
    assert slugify("Hello, World!") == "hello-world"
    assert slugify("API `process()`") == "api-process"
    assert slugify("snake_case name") == "snake_case-name"


def test_repeated_headings_get_numbered_slugs() -> None:
    found = headings("## Usage\n\n## Usage\n\n## Usage\n")
    assert [h.slug for h in found] == ["usage", "usage-1", "usage-2"]


def test_headings_inside_code_fences_are_ignored() -> None:
    content = "## Real\n\n```sh\n# not a heading\n```\n\n## Also real\n"
    assert [h.title for h in headings(content)] == ["Real", "Also real"]


def test_generate_respects_max_depth_and_skips_first_h1() -> None:
    content = "# Project\n\n## Install\n\n### Details\n\n## Usage\n"
    assert generate(content, TocOptions(max_depth=2)) == "- [Install](#install)\n- [Usage](#usage)"
    assert generate(content, TocOptions(max_depth=3)) == (
        "- [Install](#install)\n  - [Details](#details)\n- [Usage](#usage)"
    )


def test_generate_with_firsth1() -> None:
    content = "# Project\n\n## Install\n"
    assert generate(content, TocOptions(firsth1=True)) == "- [Project](#project)\n  - [Install](#install)"


def test_link_titles_are_cleaned() -> None:
    assert generate("## [Docs](http://x.y) here\n") == "- [Docs here](#docs-here)"


def test_insert_without_marker_is_a_no_op() -> None:
    assert insert("## A\n") == "## A\n"
    assert insert("") == ""


def test_insert_replaces_marker_with_one_block() -> None:
    content = "# Title\n\n<!-- toc -->\n\n## One\n\n## Two\n"
    out = insert(content)
    assert out.count(TOC_OPEN) == 1
    assert out.count(TOC_CLOSE) == 1
    assert "- [One](#one)\n- [Two](#two)" in out


def test_insert_is_idempotent() -> None:
    once = insert("<!-- toc -->\n\n## One\n")
    twice = insert(once)
    assert twice == once
    assert twice.count("- [One](#one)") == 1


def test_setext_headings_are_listed() -> None:
    content = "<!-- toc -->\n\nInstall\n-------\n\nUsage\n-----\n"
    assert generate(content) == "- [Install](#install)\n- [Usage](#usage)"
    assert "- [Install](#install)\n- [Usage](#usage)" in insert(content)
