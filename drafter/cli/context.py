from __future__ import annotations

from dataclasses import dataclass

import typer

from drafter.core.config import Settings, find_settings_file, load_settings_or_default
from drafter.core.result import Err
from drafter.output.console import ConsoleProtocol, RichConsole
from drafter.output.errors import error_exit_code, print_error


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole()

    settings_result = load_settings_or_default(find_settings_file())
    if isinstance(settings_result, Err):
        print_error(settings_result.error, console)
        raise typer.Exit(code=error_exit_code(settings_result.error))

    return CLIContext(settings=settings_result.value, console=console)
