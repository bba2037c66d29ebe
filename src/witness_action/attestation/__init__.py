"""Construction of the witness command line.

Modules:
    arguments: assemble_witness_args, parse_command_for_shell
    inputs: ActionInputs, build_witness_options
"""

from __future__ import annotations

from witness_action.attestation.arguments import (
    SEPARATOR,
    assemble_witness_args,
    parse_command_for_shell,
)
from witness_action.attestation.inputs import (
    ActionInputs,
    build_witness_options,
    requested_version,
)

__all__ = [
    "SEPARATOR",
    "ActionInputs",
    "assemble_witness_args",
    "build_witness_options",
    "parse_command_for_shell",
    "requested_version",
]
