from __future__ import annotations

from pathlib import Path

import typer

from drafter.changes.classifier import classify
from drafter.changes.model import ChangeRecord
from drafter.cli.commands._helpers import load_rules_or_exit
from drafter.cli.context import build_context
from drafter.output.console import Style


def classify_title(
    title: str = typer.Argument(..., help="Change title to classify"),
    label: list[str] = typer.Option([], "--label", "-l", help="Label already on the change"),
    body: str = typer.Option("", "--body", help="Change description"),
    branch: str | None = typer.Option(None, "--branch", help="Head branch name"),
    file: list[str] = typer.Option([], "--file", "-f", help="Changed file path"),
    config: Path | None = typer.Option(None, "--config", help="release-drafter rule file"),
) -> None:
    """Show the labels, category and bump a change would get."""
    ctx = build_context()
    rules = load_rules_or_exit(ctx, config)

    record = ChangeRecord(
        number=0,
        title=title,
        author="",
        labels=frozenset(label),
        body=body,
        branch=branch,
        files=tuple(file),
    )
    result = classify(record, rules)

    console = ctx.console
    console.print(f"labels: {', '.join(sorted(result.labels)) or '-'}")
    if result.added_labels:
        console.print(f"autolabels: {', '.join(result.added_labels)}", Style.DIM)
    console.print(f"category: {result.category or 'uncategorized'}")
    suffix = " (default)" if result.defaulted else ""
    console.print(f"severity: {result.severity}{suffix}")
