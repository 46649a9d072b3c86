# tests/test_cli.py

import sys
from pathlib import Path

import pytest

from mkctx import cli
from mkctx.app import MkctxApp
from mkctx.assembler import AssemblyResult
from mkctx.errors import TreeStructureError


def test_parse_args_binary_flag():
    assert cli.parse_args([]) is False
    assert cli.parse_args(["-b"]) is True


def test_parse_args_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["--help"])
    assert exc_info.value.code == 0
    assert "Usage: mkctx" in capsys.readouterr().out


def test_parse_args_rejects_unknown_flags(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["--verbose"])
    assert exc_info.value.code == 2
    assert "unknown argument" in capsys.readouterr().err


def test_build_app_filters_binaries_without_flag(tmp_path):
    (tmp_path / "code.py").write_text("print(1)\n")
    (tmp_path / "blob.bin").write_bytes(b"\0\0\0")
    ws = cli.discover_workspace(tmp_path)

    text_only = cli.build_app(ws, allow_binary=False)
    names = {n.name for n in text_only.controller.tree.nodes}
    assert "code.py" in names and "blob.bin" not in names

    with_binary = cli.build_app(ws, allow_binary=True)
    names = {n.name for n in with_binary.controller.tree.nodes}
    assert {"code.py", "blob.bin"} <= names


def test_run_assembles_confirmed_selection(tmp_path, monkeypatch):
    (tmp_path / "a.go").write_text("package main\n")
    monkeypatch.setattr(MkctxApp, "run", lambda self: ["a.go"])
    result = cli.run([], cwd=tmp_path)
    assert result.path.parent == (tmp_path / ".mkctx").resolve()
    assert result.path.read_text().startswith("## a.go\n\n```go\n")


def test_run_returns_nothing_on_abort(tmp_path, monkeypatch):
    (tmp_path / "a.go").write_text("package main\n")
    monkeypatch.setattr(MkctxApp, "run", lambda self: None)
    assert cli.run([], cwd=tmp_path) is None
    assert not (tmp_path / ".mkctx").exists()


def test_main_prints_three_lines(monkeypatch, capsys):
    result = AssemblyResult(path=Path("/work/.mkctx/out.md"), size=12345, tokens=3087)
    monkeypatch.setattr(cli, "run", lambda argv: result)
    cli.main()
    assert capsys.readouterr().out == "path=/work/.mkctx/out.md\nbytes=12345\ntokens=3087\n"


def test_main_is_silent_on_abort(monkeypatch, capsys):
    monkeypatch.setattr(cli, "run", lambda argv: None)
    cli.main()
    assert capsys.readouterr().out == ""


def test_main_reports_fatal_errors(monkeypatch, capsys):
    def boom(argv):
        raise TreeStructureError("a/b", "a")

    monkeypatch.setattr(cli, "run", boom)
    with pytest.raises(SystemExit) as exc_info:
        cli.main()
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("mkctx: malformed path 'a/b'")


def test_main_reports_unreadable_files_at_startup(tmp_path, monkeypatch, capsys):
    (tmp_path / "ok.txt").write_text("fine\n")
    (tmp_path / "dangling").symlink_to(tmp_path / "nowhere")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["mkctx"])
    with pytest.raises(SystemExit) as exc_info:
        cli.main()
    assert exc_info.value.code == 1
    assert capsys.readouterr().err.startswith("mkctx: cannot read")
