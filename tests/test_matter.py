from __future__ import annotations

import pytest

from verbdoc.matter import MatterError, parse_matter


def test_front_matter_is_split_from_body() -> None:
    page = parse_matter("--- \ntitle: Hello\n---\nBody")
    assert page.context == {"title": "Hello"}
    assert page.content == "Body"


def test_source_without_front_matter_is_untouched() -> None:
    page = parse_matter("# Title\n\n---\n")
    assert page.context == {}
    assert page.content == "# Title\n\n---\n"


def test_empty_front_matter_block() -> None:
    page = parse_matter("---\n---\nBody\n")
    assert page.context == {}
    assert page.content == "Body\n"


def test_none_and_empty_source() -> None:
    assert parse_matter(None).content == ""
    assert parse_matter("").context == {}


def test_front_matter_must_be_a_mapping() -> None:
    with pytest.raises(MatterError):
        parse_matter("---\n- a\n- b\n---\nBody")


def test_invalid_yaml_raises_matter_error() -> None:
    with pytest.raises(MatterError):
        parse_matter("---\ntitle: [unclosed\n---\nBody")
