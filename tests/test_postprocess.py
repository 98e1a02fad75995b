from __future__ import annotations

from verbdoc.postprocess import post_process


def test_empty_stays_empty() -> None:
    assert post_process("") == ""
    assert post_process("\n\n  \n") == ""


def test_collapses_blank_lines_and_trailing_space() -> None:
    assert post_process("\n\n# A \t\n\n\n\ntext \r\n\n") == "# A\n\ntext\n"


def test_code_fences_are_left_alone() -> None:
    src = "```\nline  \n\n\n\nend\n```\n"
    assert post_process(src) == src


def test_hard_line_breaks_survive() -> None:
    assert post_process("line one  \nline two\n") == "line one  \nline two\n"
    assert post_process("line one    \nline two\n") == "line one  \nline two\n"
    assert post_process("   \nline\n") == "line\n"
