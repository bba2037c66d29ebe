"""CLI utility functions and error handling.

Errors are printed as plain text to stderr with a non-zero exit code so CI
logs show the failure reason next to the failed step.

Example:
    from witness_action.cli.utils import error_exit, ExitCode

    if not command:
        error_exit("Input 'command' is required", exit_code=ExitCode.USAGE_ERROR)
"""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from typing import NoReturn


class ExitCode(IntEnum):
    """Exit codes produced by the wrapper itself.

    Any other code returned by ``witness-action run`` comes from witness.
    """

    SUCCESS = 0
    """Command completed successfully."""

    GENERAL_ERROR = 1
    """General error, including failure to install witness."""

    USAGE_ERROR = 2
    """Missing or invalid action input."""


def _format(prefix: str, message: str, context: dict[str, str | int | bool | None]) -> str:
    context_str = ", ".join(f"{k}={v}" for k, v in context.items() if v is not None)
    if context_str:
        return f"{prefix}: {message} ({context_str})"
    return f"{prefix}: {message}"


def error(message: str, **context: str | int | bool | None) -> None:
    """Print an error message to stderr.

    Args:
        message: Error message to display.
        **context: Optional context key-value pairs to include.

    Example:
        error("Failed to download witness", stage="download")
        # Output: Error: Failed to download witness (stage=download)
    """
    click.echo(_format("Error", message, context), err=True)


def error_exit(
    message: str,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
    **context: str | int | bool | None,
) -> NoReturn:
    """Print an error message to stderr and exit with a code.

    Args:
        message: Error message to display.
        exit_code: Exit code to use (default: GENERAL_ERROR).
        **context: Optional context key-value pairs to include.

    Raises:
        SystemExit: Always exits with the specified code.
    """
    error(message, **context)
    sys.exit(exit_code)


def info(message: str) -> None:
    """Print an informational message to stderr.

    Keeps stdout free for machine-readable output such as ``--dry-run``.
    """
    click.echo(message, err=True)


__all__ = ["ExitCode", "error", "error_exit", "info"]
