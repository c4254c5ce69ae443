from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from drafter import __version__
from drafter.cli.app import app
from drafter.cli.context import CLIContext
from drafter.core.config import Settings
from drafter.core.errors import ErrorCode
from drafter.output.console import MockConsole


def _patch(monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    import drafter.cli.commands.check as check_cmd

    console = MockConsole()
    monkeypatch.setattr(
        check_cmd,
        "build_context",
        lambda: CLIContext(settings=Settings(), console=console),
    )
    return console


def test_check_valid(monkeypatch: pytest.MonkeyPatch, rules_file: Path) -> None:
    import drafter.cli.commands.check as check_cmd

    console = _patch(monkeypatch)
    check_cmd.check(config=rules_file)

    assert console.find("valid")
    assert "🧹 Updates: <- 🧹 Updates, 🤖 Dependencies" in console.messages
    assert "✏️ Feature: minor" in console.messages
    assert "default: patch" in console.messages


def test_check_pattern_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    import drafter.cli.commands.check as check_cmd

    bad = tmp_path / "rules.yml"
    bad.write_text(
        "template: $CHANGES\n"
        "categories: [{title: Fixes, labels: [bug]}]\n"
        "version-resolver: {patch: {labels: [bug]}}\n"
        "autolabeler: [{label: bug, title: ['/(fix/i']}]\n",
        encoding="utf-8",
    )
    console = _patch(monkeypatch)
    with pytest.raises(typer.Exit) as exc:
        check_cmd.check(config=bad)
    assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)
    assert console.find("invalid autolabel pattern for 'bug'")


def test_version_flag() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
