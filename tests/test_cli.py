"""Tests for the command line interface."""

import json
import tempfile
from pathlib import Path

import pytest

from slides_md.cli import build_parser, main

DOCUMENT = "---\ntitle: CLI Talk\n---\n# One\nfirst\n---\n# Two\nsecond\n"

THEMES_YAML = """
themes:
  dark:
    css: "body { background: #222; }"
    first_slide: "# Welcome"
"""


@pytest.fixture
def workspace():
    with tempfile.TemporaryDirectory() as tmp:
        tmp = Path(tmp)
        (tmp / "talk.md").write_text(DOCUMENT, encoding="utf-8")
        (tmp / "themes.yaml").write_text(THEMES_YAML, encoding="utf-8")
        yield tmp


def test_no_command_prints_help():
    assert main([]) == 1


@pytest.mark.parametrize("argv, verbose", [
    (["-v", "serve", "talk.md"], True),
    (["serve", "talk.md", "-v"], True),
    (["serve", "talk.md"], False),
    (["--verbose", "diagnose"], True),
])
def test_verbose_flag_before_or_after_command(argv, verbose):
    assert build_parser().parse_args(argv).verbose is verbose


def test_parse_summary(workspace, capsys):
    assert main(["parse", str(workspace / "talk.md")]) == 0
    out = capsys.readouterr().out
    assert "Title: CLI Talk" in out
    assert "Slides: 2" in out
    assert "1. # One" in out


def test_parse_json(workspace, capsys):
    assert main(["parse", str(workspace / "talk.md"), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["title"] == "CLI Talk"
    assert [s["number"] for s in data["slides"]] == [1, 2]


def test_parse_save(workspace):
    output = workspace / "deck.json"
    assert main(["parse", str(workspace / "talk.md"), "-o", str(output)]) == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert len(data["slides"]) == 2


def test_parse_missing_file(capsys):
    assert main(["parse", "/nonexistent/talk.md"]) == 1
    assert "Error:" in capsys.readouterr().out


def test_build(workspace):
    output = workspace / "talk.html"
    code = main([
        "build", str(workspace / "talk.md"),
        "-o", str(output),
        "--config", str(workspace / "themes.yaml"),
        "--theme", "dark",
    ])
    assert code == 0
    page = output.read_text(encoding="utf-8")
    assert "<title>CLI Talk</title>" in page
    assert "body { background: #222; }" in page
    assert "<h1>Welcome</h1>" in page
    assert 'id="slide-3"' in page


def test_build_unknown_theme(workspace, capsys):
    code = main([
        "build", str(workspace / "talk.md"),
        "--config", str(workspace / "themes.yaml"),
        "--theme", "light",
    ])
    assert code == 1
    assert "Theme 'light' not found" in capsys.readouterr().out


def test_diagnose_json(workspace, capsys):
    assert main(["diagnose", str(workspace / "talk.md"), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["slide_count"] == 2
    assert data["has_blocking_issues"] is False


def test_diagnose_strict_missing_file(capsys):
    assert main(["diagnose", "/nonexistent/talk.md", "--strict"]) == 1
    assert "DECK-001" in capsys.readouterr().out
