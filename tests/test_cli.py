from __future__ import annotations

import pytest

from verbdoc.cli import main


def test_build_single_file(write, project) -> None:
    write("docs/README.tmpl.md", "---\nname: demo\n---\n# {{ name }}\n")
    assert main(["build"]) == 0
    assert (project / "README.md").read_text(encoding="utf-8") == "# demo\n"


def test_build_glob(write, project) -> None:
    write("src/a.md", "A")
    write("src/b.md", "B")
    assert main(["build", "src/*.md", "out", "--flatten"]) == 0
    assert (project / "out/a.md").read_text(encoding="utf-8") == "A\n"
    assert (project / "out/b.md").read_text(encoding="utf-8") == "B\n"


def test_render_prints(write, capsys: pytest.CaptureFixture[str]) -> None:
    write("t.md", "<!-- toc -->\n\n## A\n\n### B\n")
    assert main(["render", "t.md", "--toc-depth", "3"]) == 0
    assert "  - [B](#b)" in capsys.readouterr().out


def test_errors_become_exit_code(write) -> None:
    assert main(["render", "missing.md"]) == 1
    write("bad.md", "{{ nope }}")
    assert main(["render", "bad.md"]) == 1


def test_render_rejects_globs(write, caplog: pytest.LogCaptureFixture) -> None:
    write("src/a.md", "A")
    assert main(["render", "src/*.md"]) == 1
    assert "not a glob" in caplog.text


def test_non_utf8_source_is_an_error(project) -> None:
    (project / "latin1.md").write_bytes(b"caf\xe9\n")
    assert main(["render", "latin1.md"]) == 1
