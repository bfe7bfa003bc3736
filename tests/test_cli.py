from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from docsync.cli import main

SAMPLE = '<article><title>Welcome</title><para>Hi <emphasis role="bold">there</emphasis></para></article>'


@pytest.fixture()
def doc(tmp_path: Path) -> Path:
    path = tmp_path / "doc.xml"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


def test_tokens_command_dumps_json(doc: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["tokens", str(doc)])
    tokens = json.loads(capsys.readouterr().out)

    assert tokens[0] == {"kind": "open", "tag": "article", "attributes": {}, "start": 0, "end": 9}
    assert tokens[-1]["kind"] == "close"


def test_parse_command_dumps_tree(doc: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["parse", str(doc)])
    tree = json.loads(capsys.readouterr().out)

    assert tree["tag"] == "article"
    assert tree["children"][0]["variant"] == "heading-1"
    assert tree["contentStart"] == 9


def test_parse_command_fails_on_broken_document(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "broken.xml"
    path.write_text("<article><para>x</article>", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["parse", str(path)])
    assert excinfo.value.code == 1
    assert "could not parse document" in capsys.readouterr().err


def test_locate_command(doc: Path, capsys: pytest.CaptureFixture[str]) -> None:
    offset = SAMPLE.index("there") + 2
    main(["locate", str(doc), str(offset)])
    payload = json.loads(capsys.readouterr().out)

    assert payload["item"]["type"] == "text"
    assert payload["wordSpan"] == [SAMPLE.index("there"), SAMPLE.index("there") + 5]


def test_edit_command_prints_new_source(doc: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["parse", str(doc)])
    tree = json.loads(capsys.readouterr().out)
    hi_id = tree["children"][1]["children"][0]["id"]

    main(["edit", str(doc), "--run-id", str(hi_id), "--text", "Hello "])
    assert capsys.readouterr().out == SAMPLE.replace("Hi ", "Hello ")
    assert doc.read_text(encoding="utf-8") == SAMPLE


def test_edit_command_writes_file(doc: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["parse", str(doc)])
    tree = json.loads(capsys.readouterr().out)
    there_id = tree["children"][1]["children"][1]["children"][0]["id"]

    main(["edit", str(doc), "--run-id", str(there_id), "--text", "you & me", "--write"])

    assert "you &amp; me" in doc.read_text(encoding="utf-8")
    assert "caret at run" in capsys.readouterr().out


def test_edit_command_rejects_unknown_run(doc: Path) -> None:
    with pytest.raises(SystemExit):
        main(["edit", str(doc), "--run-id", "99", "--text", "x"])


def test_render_command_writes_page(doc: Path, tmp_path: Path) -> None:
    out = tmp_path / "out" / "preview.html"
    main(["render", str(doc), "--offset", str(SAMPLE.index("there")), "--out", str(out)])

    page = out.read_text(encoding="utf-8")
    assert "<h1" in page
    assert "ds-sync-highlight" in page


def test_config_option_is_applied(doc: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "docsync.yaml"
    config.write_text("maxDepth: 1\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        main(["parse", str(doc), "--config", str(config)])
    assert "nesting deeper than 1" in capsys.readouterr().err


def test_missing_document_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["parse", str(tmp_path / "missing.xml")])


def test_cli_help_command_succeeds() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    result = subprocess.run(
        [sys.executable, "-m", "docsync", "--help"],
        capture_output=True,
        text=True,
        cwd=repo_root,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "usage: docsync" in result.stdout
