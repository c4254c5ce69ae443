from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer

from drafter.cli.context import CLIContext
from drafter.core.config import RULES_ENV_VAR, RepositorySettings, Settings
from drafter.core.errors import ErrorCode
from drafter.output.console import MockConsole, RichConsole, Style

CHANGES_YML = """
- number: 10
  title: fix race in scheduler
  author: alice
  merged_at: "2024-05-01T12:00:00Z"
- number: 11
  title: add new feature X
  author: bob
  merged_at: "2024-05-03T12:00:00Z"
"""


def _ctx(settings: Settings | None = None) -> CLIContext:
    return CLIContext(settings=settings or Settings(), console=MockConsole())


def _run(
    monkeypatch: pytest.MonkeyPatch,
    ctx: CLIContext,
    *,
    changes: Path,
    config: Path | None,
    previous_tag: str | None = "v1.2.3",
    output: Path | None = None,
    as_json: bool = False,
) -> None:
    import drafter.cli.commands.draft_cmd as draft_cmd

    monkeypatch.delenv(RULES_ENV_VAR, raising=False)
    monkeypatch.setattr(draft_cmd, "build_context", lambda: ctx)
    draft_cmd.draft(
        changes=changes,
        config=config,
        previous_tag=previous_tag,
        owner="acme",
        repository="widgets",
        output=output,
        as_json=as_json,
    )


@pytest.fixture
def changes_file(tmp_path: Path) -> Path:
    path = tmp_path / "changes.yml"
    path.write_text(CHANGES_YML, encoding="utf-8")
    return path


def test_draft_prints_body(monkeypatch: pytest.MonkeyPatch, rules_file: Path, changes_file: Path) -> None:
    ctx = _ctx()
    _run(monkeypatch, ctx, changes=changes_file, config=rules_file)

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert "info: tag: 1.3.0" in console.messages
    body = [o.message for o in console.outputs if o.style == Style.RAW]
    assert len(body) == 1
    assert "## 🚀 New Features:" in body[0]
    assert "compare/v1.2.3...v1.3.0" in body[0]
    assert "@bob and @alice" in body[0]


def test_draft_json(monkeypatch: pytest.MonkeyPatch, rules_file: Path, changes_file: Path) -> None:
    ctx = _ctx()
    _run(monkeypatch, ctx, changes=changes_file, config=rules_file, as_json=True)

    console = ctx.console
    assert isinstance(console, MockConsole)
    data = json.loads(console.outputs[-1].message)
    assert data["resolved_version"] == "1.3.0"
    assert [s["title"] for s in data["sections"]] == ["🚀 New Features:", "🐛 Fixes:"]


def test_draft_writes_output(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, rules_file: Path, changes_file: Path
) -> None:
    ctx = _ctx()
    target = tmp_path / "draft.md"
    _run(monkeypatch, ctx, changes=changes_file, config=rules_file, output=target)

    assert "- fix race in scheduler (#10)" in target.read_text(encoding="utf-8")
    console = ctx.console
    assert isinstance(console, MockConsole)
    assert console.find("draft written to")


def test_previous_tag_from_settings(
    monkeypatch: pytest.MonkeyPatch, rules_file: Path, changes_file: Path
) -> None:
    ctx = _ctx(Settings(repository=RepositorySettings(previous_tag="v4.0.0")))
    _run(monkeypatch, ctx, changes=changes_file, config=rules_file, previous_tag=None)

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert "info: tag: 4.1.0" in console.messages


def test_missing_changes_file_exits_io_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, rules_file: Path
) -> None:
    ctx = _ctx()
    with pytest.raises(typer.Exit) as exc:
        _run(monkeypatch, ctx, changes=tmp_path / "nope.yml", config=rules_file)
    assert exc.value.exit_code == int(ErrorCode.IO_ERROR)


def test_bad_rules_exit_config_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, changes_file: Path
) -> None:
    bad = tmp_path / "rules.yml"
    bad.write_text("categories: []\n", encoding="utf-8")
    ctx = _ctx()
    with pytest.raises(typer.Exit) as exc:
        _run(monkeypatch, ctx, changes=changes_file, config=bad)
    assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert console.has_error()


def test_invalid_previous_tag_exits_user_error(
    monkeypatch: pytest.MonkeyPatch, rules_file: Path, changes_file: Path
) -> None:
    ctx = _ctx()
    with pytest.raises(typer.Exit) as exc:
        _run(monkeypatch, ctx, changes=changes_file, config=rules_file, previous_tag="latest")
    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def _rich_ctx() -> CLIContext:
    return CLIContext(settings=Settings(), console=RichConsole())


def test_stdout_carries_only_the_body(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    rules_file: Path,
    changes_file: Path,
) -> None:
    _run(monkeypatch, _rich_ctx(), changes=changes_file, config=rules_file)

    captured = capsys.readouterr()
    assert captured.out.startswith("## 🚀 New Features:\n")
    assert "name:" not in captured.out
    assert "bump:" not in captured.out
    assert "tag: 1.3.0" in captured.err


def test_printed_body_matches_written_file(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
    rules_file: Path,
) -> None:
    changes = tmp_path / "changes.yml"
    changes.write_text(
        '- number: 5\n  title: "fix\\tindented [x] title"\n  author: alice\n',
        encoding="utf-8",
    )
    target = tmp_path / "draft.md"
    _run(monkeypatch, _rich_ctx(), changes=changes, config=rules_file, output=target)
    capsys.readouterr()

    _run(monkeypatch, _rich_ctx(), changes=changes, config=rules_file)
    printed = capsys.readouterr().out

    written = target.read_text(encoding="utf-8")
    assert "- fix\tindented [x] title (#5)" in written
    assert printed == written + "\n"
