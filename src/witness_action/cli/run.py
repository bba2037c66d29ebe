"""`witness-action run` and `witness-action install` commands.

Inputs are read from the ``INPUT_*`` environment variables GitHub Actions
sets for an action step.

Example:
    $ INPUT_COMMAND='make build' INPUT_STEP=build witness-action run
    $ INPUT_WITNESS_VERSION=0.9.0 witness-action install

Environment Variables:
    INPUT_COMMAND: Command executed under witness via ``<shell> -c`` (required for run)
    INPUT_SHELL: Shell used for the command (default: /bin/sh)
    INPUT_WORKINGDIR: Working directory for witness and the command
    INPUT_WITNESS_VERSION: Explicit witness version; latest release when unset
    GITHUB_TOKEN: Optional token for the release metadata request
    GITHUB_PATH: File receiving directories for later job steps
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import TYPE_CHECKING

import click

from witness_action.attestation.arguments import (
    DEFAULT_SHELL,
    assemble_witness_args,
    parse_command_for_shell,
)
from witness_action.attestation.inputs import (
    ActionInputs,
    build_witness_options,
    requested_version,
)
from witness_action.cli.utils import ExitCode, error_exit, info
from witness_action.errors import InputError, ToolInstallError
from witness_action.runner import run_witness
from witness_action.schemas.resolver import ResolverConfig
from witness_action.tools.resolver import BinaryResolver

if TYPE_CHECKING:
    from witness_action.schemas.resolver import ResolvedBinary


def _resolver_config() -> ResolverConfig:
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return ResolverConfig.model_validate({"api_token": token})
    return ResolverConfig()


def _resolve_binary(version: str | None) -> ResolvedBinary:
    """Resolve witness and publish its directory for later lookups."""
    resolver = BinaryResolver(_resolver_config(), requested_version=version)
    try:
        binary = asyncio.run(resolver.resolve())
    except ToolInstallError as e:
        error_exit(str(e), exit_code=ExitCode(e.exit_code), stage=e.stage)

    try:
        resolver.search_path.export()
    except OSError as e:
        error_exit(f"Failed to update GITHUB_PATH: {e}")
    return binary


@click.command(
    name="run",
    help="""\b
Run the step's command under `witness run`.

The command from INPUT_COMMAND is passed verbatim to `<shell> -c`,
so pipes, redirects, multi-line scripts and $VARS behave exactly
as in a normal `run:` step. The exit code of witness is forwarded.

Examples:
    $ INPUT_COMMAND='make build' INPUT_STEP=build witness-action run
    $ INPUT_COMMAND='make test' witness-action run --dry-run
""",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the witness argument vector as JSON instead of running it.",
)
@click.pass_context
def run_command(ctx: click.Context, dry_run: bool) -> None:
    """Run the configured command under witness."""
    inputs = ActionInputs()

    command = inputs.get_raw("command")
    if command is None or not command.strip():
        error_exit("Input 'command' is required", exit_code=ExitCode.USAGE_ERROR)

    try:
        options = build_witness_options(inputs)
    except InputError as e:
        error_exit(str(e), exit_code=ExitCode.USAGE_ERROR, input=e.name)

    shell = inputs.get("shell") or DEFAULT_SHELL
    args = assemble_witness_args(options, parse_command_for_shell(command, shell))

    if dry_run:
        click.echo(json.dumps(args))
        return

    binary = _resolve_binary(requested_version(inputs))
    info(f"Using witness at {binary.path} ({binary.source.value})")

    workingdir = inputs.get("workingdir")
    cwd = Path(workingdir) if workingdir else None
    try:
        exit_code = run_witness(binary.path, args, cwd=cwd)
    except OSError as e:
        error_exit(f"Failed to start witness: {e}", path=str(binary.path))

    ctx.exit(exit_code)


@click.command(
    name="install",
    help="""\b
Resolve the witness binary without running anything.

Uses witness from PATH when present, otherwise the requested
(or latest) version from the tool cache, downloading it if needed.
Prints the executable path on stdout.
""",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--witness-version",
    type=str,
    default=None,
    help="Version to install (overrides INPUT_WITNESS_VERSION).",
)
def install_command(witness_version: str | None) -> None:
    """Resolve witness and print its path."""
    version = witness_version or requested_version(ActionInputs())
    binary = _resolve_binary(version)
    click.echo(str(binary.path))


__all__ = ["install_command", "run_command"]
