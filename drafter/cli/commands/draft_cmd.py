from __future__ import annotations

import json
from pathlib import Path

import typer

from drafter.changes.classifier import classify_all
from drafter.changes.records import load_changes
from drafter.cli.commands._helpers import exit_with_error, load_rules_or_exit
from drafter.cli.context import build_context
from drafter.core.result import Err
from drafter.draft.composer import compose_draft, write_draft


def draft(
    changes: Path = typer.Option(
        ...,
        "--changes",
        "-c",
        help="YAML or JSON file listing merged changes",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="release-drafter rule file (default: settings, then .github/release-drafter.yml)",
    ),
    previous_tag: str | None = typer.Option(
        None,
        "--previous-tag",
        help="Tag of the last release (version base and $PREVIOUS_TAG)",
    ),
    owner: str | None = typer.Option(None, "--owner", help="Value for $OWNER"),
    repository: str | None = typer.Option(None, "--repository", help="Value for $REPOSITORY"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the body to this file"),
    as_json: bool = typer.Option(False, "--json", help="Print the whole draft as JSON"),
) -> None:
    """Compose a release draft from merged changes."""
    ctx = build_context()
    rules = load_rules_or_exit(ctx, config)

    loaded = load_changes(changes)
    if isinstance(loaded, Err):
        exit_with_error(loaded.error, ctx)

    repo = ctx.settings.repository
    composed = compose_draft(
        classify_all(loaded.value, rules),
        rules,
        previous_tag=previous_tag or repo.previous_tag,
        owner=owner or repo.owner,
        repository=repository or repo.name,
    )
    if isinstance(composed, Err):
        exit_with_error(composed.error, ctx)
    result = composed.value

    if as_json:
        ctx.console.raw(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    if output is not None:
        written = write_draft(result, output)
        if isinstance(written, Err):
            exit_with_error(written.error, ctx)
        ctx.console.success(f"{result.name}: draft written to {written.value}")
        return

    ctx.console.info(f"name: {result.name}")
    ctx.console.info(f"tag: {result.tag}")
    ctx.console.info(f"bump: {result.severity}")
    ctx.console.raw(result.body)
