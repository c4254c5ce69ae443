"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import typer

from drafter.core.config import resolve_rules_path
from drafter.core.result import Err
from drafter.output.errors import AppError, error_exit_code, print_error
from drafter.rules.loader import load_rules
from drafter.rules.model import RuleSet

if TYPE_CHECKING:
    from drafter.cli.context import CLIContext


def exit_with_error(error: AppError, ctx: CLIContext) -> NoReturn:
    """Print the error and exit with its mapped code."""
    print_error(error, ctx.console)
    raise typer.Exit(code=error_exit_code(error))


def load_rules_or_exit(ctx: CLIContext, config: Path | None) -> RuleSet:
    path = resolve_rules_path(ctx.settings, config)
    result = load_rules(path)
    if isinstance(result, Err):
        exit_with_error(result.error, ctx)
    return result.value
