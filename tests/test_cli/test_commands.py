"""Integration tests for the ``jsonref`` CLI.

Invokes the real Typer application through CliRunner with configuration
isolated to a temporary directory.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jsonreference import __version__
from jsonreference.app import app, main
from jsonreference.exceptions import MalformedReferenceError


@pytest.fixture(autouse=True)
def _isolated(isolated_config: Path) -> Path:
    return isolated_config


@pytest.fixture
def runner(cli_runner) -> CliRunner:
    return cli_runner


class TestRoot:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"jsonref {__version__}" in result.output

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "inspect" in result.output
        assert "resolve" in result.output

    def test_invalid_project_config(self, runner: CliRunner, isolated_config: Path) -> None:
        (isolated_config / "jsonref.json").write_text("{oops", encoding="utf-8")
        result = runner.invoke(app, ["--no-color", "inspect", "#/a"])
        assert result.exit_code == 1
        assert "Invalid project config" in result.output


class TestInspect:
    def test_plain_report(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--plain", "inspect", "#/definitions/Pet"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "Property\tValue"
        assert "reference\t#/definitions/Pet" in lines
        assert "pointer\t/definitions/Pet" in lines
        assert "has_fragment_only\tyes" in lines
        assert "is_root\tno" in lines
        assert "scheme\t-" in lines

    def test_json_report(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["--json", "inspect", "HTTP://Example.com:80/schema.json#/foo"]
        )
        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report["reference"] == "http://example.com/schema.json#/foo"
        assert report["host"] == "example.com"
        assert report["pointer"] == "/foo"
        assert report["has_full_url"] is True
        assert report["is_canonical"] is True
        assert report["has_url_path_only"] is False

    def test_format_from_env(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONREF_FORMAT", "json")
        result = runner.invoke(app, ["inspect", "schema.json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["has_url_path_only"] is True

    def test_non_pointer_fragment_warns(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--plain", "--no-color", "-q", "inspect", "schema.json#foo"])
        assert result.exit_code == 0
        assert "Warning: Fragment 'foo' is not a JSON pointer" in result.output
        assert "fragment\tfoo" in result.output.splitlines()

    def test_pointer_fragment_does_not_warn(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--plain", "--no-color", "inspect", "#/a"])
        assert "Warning" not in result.output

    def test_malformed_reference(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--plain", "--no-color", "inspect", "://bad uri"])
        assert result.exit_code == 3
        assert "Malformed JSON reference" in result.output
        assert "missing protocol scheme" in result.output


class TestResolve:
    def test_with_base_option(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["--plain", "resolve", "c.json#/x", "--base", "http://example.com/a/b.json"]
        )
        assert result.exit_code == 0
        assert result.output == "http://example.com/a/c.json#/x\n"

    def test_base_from_env(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONREF_BASE", "file:///abs/root.json")
        result = runner.invoke(app, ["--plain", "resolve", "#/definitions/Pet"])
        assert result.exit_code == 0
        assert result.output == "file:///abs/root.json#/definitions/Pet\n"

    def test_base_from_project_file(self, runner: CliRunner, isolated_config: Path) -> None:
        (isolated_config / "jsonref.json").write_text(
            json.dumps({"base": "https://example.com/schemas/root.json"}), encoding="utf-8"
        )
        result = runner.invoke(app, ["--plain", "resolve", "../common.json"])
        assert result.exit_code == 0
        assert result.output == "https://example.com/common.json\n"

    def test_without_base_returns_child(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--plain", "--quiet", "resolve", "schema.json#/a"])
        assert result.exit_code == 0
        assert result.output == "schema.json#/a\n"

    def test_without_base_reports_empty_parent(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--plain", "--no-color", "resolve", "schema.json"])
        assert result.exit_code == 0
        assert "No base reference configured" in result.output
        assert result.output.endswith("schema.json\n")

    def test_json_output(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["--json", "resolve", "c.json", "-b", "http://example.com/a/b.json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "base": "http://example.com/a/b.json",
            "child": "c.json",
            "resolved": "http://example.com/a/c.json",
        }

    def test_malformed_base(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["--plain", "--no-color", "resolve", "c.json", "--base", "://bad"]
        )
        assert result.exit_code == 3
        assert "Malformed JSON reference" in result.output


class TestMain:
    """The console-script entry point."""

    @pytest.fixture(autouse=True)
    def _no_signal_handlers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("jsonreference.app._setup_signal_handlers", lambda: None)

    def test_success_exits_zero(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setattr(
            sys, "argv", ["jsonref", "--plain", "resolve", "b.json", "--base", "http://e.com/a.json"]
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 0
        assert capsys.readouterr().out == "http://e.com/b.json\n"

    def test_library_error_maps_to_exit_code(
        self, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        def _raise() -> None:
            raise MalformedReferenceError("x", "boom")

        monkeypatch.setattr("jsonreference.app.app", _raise)
        monkeypatch.setenv("NO_COLOR", "1")
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 3
        assert "boom" in capsys.readouterr().err

    def test_unexpected_error_writes_crash_log(
        self, monkeypatch: pytest.MonkeyPatch, isolated_config: Path, capsys
    ) -> None:
        def _raise() -> None:
            raise RuntimeError("kaboom")

        monkeypatch.setattr("jsonreference.app.app", _raise)
        monkeypatch.setenv("NO_COLOR", "1")
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        logs = list((isolated_config / "data" / "jsonref" / "logs").glob("crash-*.log"))
        assert len(logs) == 1
        assert "kaboom" in logs[0].read_text()
        assert "Unexpected error" in capsys.readouterr().err
