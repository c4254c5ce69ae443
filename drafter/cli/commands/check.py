from __future__ import annotations

from pathlib import Path

import typer

from drafter.cli.commands._helpers import load_rules_or_exit
from drafter.cli.context import build_context
from drafter.core.config import resolve_rules_path
from drafter.output.console import Style


def check(
    config: Path | None = typer.Option(None, "--config", help="release-drafter rule file"),
) -> None:
    """Validate a rule file and summarize it."""
    ctx = build_context()
    path = resolve_rules_path(ctx.settings, config)
    rules = load_rules_or_exit(ctx, path)

    console = ctx.console
    console.success(f"{path}: valid")

    console.header("Categories")
    for category in rules.categories:
        console.print(f"{category.title} <- {', '.join(category.labels)}")

    console.header("Version resolver")
    for label, severity in sorted(rules.severity_by_label.items(), key=lambda kv: kv[0]):
        console.print(f"{label}: {severity}")
    console.print(f"default: {rules.default_severity}", Style.DIM)

    console.header("Autolabeler")
    for rule in rules.autolabel:
        count = len(rule.title) + len(rule.body) + len(rule.branch) + len(rule.files)
        console.print(f"{rule.label}: {count} matcher(s)")
