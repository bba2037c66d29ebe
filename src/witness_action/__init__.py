"""witness-action: run CI steps under the witness attestation CLI.

This package provides:
- assemble_witness_args: Ordered `witness run` argument vector around a payload
- parse_command_for_shell: Single-shell wrapping of a user command
- WitnessOptions: Options rendered onto the witness command line
- BinaryResolver: PATH -> tool cache -> download resolution of witness
- Errors: WitnessActionError hierarchy (witness_action.errors)

Example:
    >>> from witness_action import WitnessOptions, assemble_witness_args
    >>> assemble_witness_args(WitnessOptions(step="build"), ["/bin/sh", "-c", "make"])
    ['run', '-s=build', '--', '/bin/sh', '-c', 'make']

See Also:
    - witness_action.tools: Binary resolution and tool cache
    - witness_action.cli: The `witness-action` command
"""

from __future__ import annotations

__version__ = "0.1.0"

from witness_action.attestation.arguments import assemble_witness_args, parse_command_for_shell
from witness_action.errors import (
    ToolCacheInstallError,
    ToolDownloadError,
    ToolExtractionError,
    ToolInstallError,
    WitnessActionError,
)
from witness_action.schemas.options import WitnessOptions
from witness_action.schemas.resolver import ResolvedBinary, ResolverConfig
from witness_action.tools.resolver import BinaryResolver

__all__ = [
    "BinaryResolver",
    "ResolvedBinary",
    "ResolverConfig",
    "ToolCacheInstallError",
    "ToolDownloadError",
    "ToolExtractionError",
    "ToolInstallError",
    "WitnessActionError",
    "WitnessOptions",
    "assemble_witness_args",
    "parse_command_for_shell",
]
