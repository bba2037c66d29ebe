"""Pydantic schemas for witness-action.

Models:
    WitnessOptions: Options rendered onto the `witness run` command line
    ResolverConfig: Release endpoints, fallback version and platform mapping
    PlatformTarget: Release OS/arch tokens for one host
    ResolvedBinary: Path and origin of the resolved attestor binary
"""

from __future__ import annotations

from witness_action.schemas.options import WitnessOptions
from witness_action.schemas.resolver import (
    BinarySource,
    PlatformTarget,
    ResolvedBinary,
    ResolverConfig,
)

__all__ = [
    "BinarySource",
    "PlatformTarget",
    "ResolvedBinary",
    "ResolverConfig",
    "WitnessOptions",
]
