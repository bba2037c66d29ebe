"""Assembly of the `witness run` argument vector.

The argument vector has a fixed shape:

    run [-s=<step>] [-a=<name> ...] [-o=<outfile>]
        [--signer-file-key-path=<key>] [passthrough flags ...]
        -- <payload argv ...>

The payload after ``--`` is copied element by element. It is never split,
joined, quoted or trimmed: a user command reaches the shell exactly as it
was written, including pipes, redirects, newlines and ``$VAR`` syntax.

Example:
    >>> options = WitnessOptions(step="build", outfile="attestation.json")
    >>> assemble_witness_args(options, parse_command_for_shell("make build"))
    ['run', '-s=build', '-o=attestation.json', '--', '/bin/sh', '-c', 'make build']
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from witness_action.schemas.options import WitnessOptions

SUBCOMMAND = "run"
SEPARATOR = "--"
DEFAULT_SHELL = "/bin/sh"

# Passthrough flags rendered after the key flag, in this order.
_VALUE_FLAGS: tuple[tuple[str, str], ...] = (
    ("enable_archivista", "--enable-archivista"),
    ("archivista_server", "--archivista-server"),
    ("certificate", "--certificate"),
    ("intermediates", "-i"),
    ("fulcio", "--signer-fulcio-url"),
    ("fulcio_oidc_client_id", "--signer-fulcio-oidc-client-id"),
    ("fulcio_oidc_issuer", "--signer-fulcio-oidc-issuer"),
    ("fulcio_token", "--signer-fulcio-token"),
    ("timestamp_servers", "--timestamp-servers"),
    ("spiffe_socket", "--spiffe-socket"),
    ("product_include_glob", "--attestor-product-include-glob"),
    ("product_exclude_glob", "--attestor-product-exclude-glob"),
    ("maven_pom", "--attestor-maven-pom-path"),
    ("export_link", "--attestor-link-export"),
    ("export_sbom", "--attestor-sbom-export"),
    ("export_slsa", "--attestor-slsa-export"),
    ("trace", "--trace"),
)


def _field(options: WitnessOptions | Mapping[str, Any], name: str) -> Any:
    if isinstance(options, Mapping):
        return options.get(name)
    return getattr(options, name, None)


def _render(value: Any) -> list[str]:
    """Render one option value as zero or more flag values."""
    if value is None or value is False:
        return []
    if value is True:
        return ["true"]
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, Sequence):
        return [str(item) for item in value if item is not None and item != ""]
    return [str(value)]


def _flag(options: WitnessOptions | Mapping[str, Any], name: str, flag: str) -> list[str]:
    return [f"{flag}={value}" for value in _render(_field(options, name))]


def assemble_witness_args(
    options: WitnessOptions | Mapping[str, Any],
    trailing_command: Sequence[str | None] = (),
) -> list[str]:
    """Build the argument vector for the attestor binary.

    Pure and total: missing fields, empty strings and None are tolerated and
    simply produce no flag. A mapping with the WitnessOptions field names is
    accepted in place of a WitnessOptions instance.

    Args:
        options: Witness options.
        trailing_command: Payload argv executed by witness. None elements
            become empty strings; position is preserved.

    Returns:
        Ordered argument vector, starting with ``run``, containing exactly
        one ``--`` separator, and ending with the payload.

    Examples:
        >>> assemble_witness_args({"step": "", "attestations": ["git"]}, ["go", None])
        ['run', '-a=git', '--', 'go', '']
    """
    args = [SUBCOMMAND]

    step = _field(options, "step")
    if isinstance(step, str) and step:
        args.append(f"-s={step}")

    args.extend(_flag(options, "attestations", "-a"))
    args.extend(_flag(options, "outfile", "-o"))
    args.extend(_flag(options, "key", "--signer-file-key-path"))

    for name, flag in _VALUE_FLAGS:
        args.extend(_flag(options, name, flag))

    args.append(SEPARATOR)
    args.extend("" if part is None else part for part in trailing_command)
    return args


def parse_command_for_shell(command: str, shell: str = DEFAULT_SHELL) -> list[str]:
    """Wrap a user command in a single shell invocation.

    The command is handed to ``<shell> -c`` as one argument, untouched.

    Examples:
        >>> parse_command_for_shell('echo "Date: $(date)" | tee out.txt')
        ['/bin/sh', '-c', 'echo "Date: $(date)" | tee out.txt']
    """
    return [shell, "-c", command]


__all__ = [
    "DEFAULT_SHELL",
    "SEPARATOR",
    "SUBCOMMAND",
    "assemble_witness_args",
    "parse_command_for_shell",
]
