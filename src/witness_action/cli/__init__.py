"""Command-line interface for witness-action.

Commands:
    witness-action run: Run INPUT_COMMAND under `witness run`
    witness-action install: Resolve the witness binary

Exit Codes:
    0: Success
    1: General error (including witness installation failure)
    2: Invalid or missing action input
    other: Exit code of witness, forwarded unchanged
"""

from __future__ import annotations

from witness_action.cli.main import cli, main
from witness_action.cli.utils import ExitCode, error, error_exit

__all__ = ["ExitCode", "cli", "error", "error_exit", "main"]
