"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from drafter.changes.records import ChangesError
from drafter.core.config import SettingsError
from drafter.core.errors import ErrorCode
from drafter.draft.errors import DraftError
from drafter.output.console import Style
from drafter.rules.errors import ConfigError, PatternError

if TYPE_CHECKING:
    from drafter.output.console import ConsoleProtocol

__all__ = ["AppError", "error_exit_code", "print_error"]


AppError = ConfigError | PatternError | ChangesError | SettingsError | DraftError


def print_error(error: AppError, console: ConsoleProtocol) -> None:
    """Print any drafter error with its location and hint."""
    match error:
        case ConfigError(message=message, path=path, hint=hint):
            where = f"{path}: " if path is not None else ""
            console.error(f"{where}{message}")
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case PatternError(label=label, pattern=pattern, reason=reason, path=path):
            where = f"{path}: " if path is not None else ""
            console.error(f"{where}invalid autolabel pattern for {label!r}: {pattern} ({reason})")
        case ChangesError(message=message, path=path, hint=hint):
            where = f"{path}: " if path is not None else ""
            console.error(f"{where}{message}")
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case SettingsError(message=message):
            console.error(message)
        case DraftError():
            console.error(error.pretty())


def error_exit_code(error: AppError) -> int:
    match error:
        case ConfigError() | PatternError() | SettingsError():
            return int(ErrorCode.CONFIG_ERROR)
        case ChangesError():
            return int(ErrorCode.IO_ERROR)
        case DraftError(kind="write_failed"):
            return int(ErrorCode.IO_ERROR)
        case DraftError():
            return int(ErrorCode.USER_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
