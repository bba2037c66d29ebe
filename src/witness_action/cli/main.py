"""Main entry point for the witness-action CLI.

Commands:
    witness-action run: Run the step's command under witness
    witness-action install: Resolve the witness binary and print its path

Example:
    $ witness-action --help
    $ witness-action --log-level DEBUG run --dry-run
"""

from __future__ import annotations

import sys
from importlib.metadata import version as get_version

import click

from witness_action.cli.run import install_command, run_command
from witness_action.telemetry.logging import configure_logging


def _get_version() -> str:
    """Get the witness-action package version.

    Returns:
        Version string from package metadata, or 'unknown' if not installed.
    """
    try:
        return get_version("witness-action")
    except Exception:
        return "unknown"


@click.group(
    name="witness-action",
    help="witness-action - run CI steps under the witness attestation CLI.",
    epilog="Use 'witness-action <command> --help' for command-specific help.",
    context_settings={
        "help_option_names": ["-h", "--help"],
    },
)
@click.version_option(
    version=_get_version(),
    prog_name="witness-action",
    message="%(prog)s %(version)s",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    envvar="WITNESS_ACTION_LOG_LEVEL",
    show_default=True,
    help="Minimum level of wrapper log events.",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=False,
    help="Emit wrapper log events as JSON lines.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, json_logs: bool) -> None:
    """Root command group for the witness-action CLI."""
    ctx.ensure_object(dict)
    configure_logging(log_level=log_level, json_output=json_logs)


cli.add_command(run_command)
cli.add_command(install_command)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the witness-action CLI.

    Args:
        argv: Command-line arguments (uses sys.argv if None).
    """
    try:
        rv = cli(args=argv, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    sys.exit(rv if isinstance(rv, int) else 0)


if __name__ == "__main__":
    main()
