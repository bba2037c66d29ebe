"""Execution of the attestor binary.

The exit status of witness is data, not an error: it is returned to the
caller unchanged so the wrapper can exit with it. Note that witness may not
write an attestation when the wrapped command fails.
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


def run_witness(
    binary: Path,
    args: Sequence[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    """Run the attestor binary and return its exit code.

    Args:
        binary: Attestor executable.
        args: Argument vector from assemble_witness_args.
        cwd: Working directory for the attestor and the wrapped command.
        env: Environment for the child process. Inherits when None.

    Returns:
        The attestor's exit code.

    Raises:
        OSError: If the binary cannot be started.
    """
    logger.info("witness_run_started", binary=str(binary), argc=len(args), cwd=str(cwd or "."))
    completed = subprocess.run(  # noqa: S603 - argv built by assemble_witness_args
        [str(binary), *args],
        cwd=cwd,
        env=dict(env) if env is not None else None,
        check=False,
    )
    logger.info("witness_run_finished", exit_code=completed.returncode)
    return completed.returncode


__all__ = ["run_witness"]
