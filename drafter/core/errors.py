"""Process exit codes for the drafter CLI.

The numeric values are part of the CLI contract and should remain stable:
- 0: Success
- 1: User error (bad arguments, unknown option values)
- 2: Config error (invalid rule file or autolabel pattern)
- 5: I/O error (file not found, unreadable, unwritable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
