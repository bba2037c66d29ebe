"""Locating, downloading and caching the witness binary.

Modules:
    resolver: BinaryResolver (PATH -> tool cache -> download)
    host: ToolHost protocol and SystemToolHost
    cache: ToolCache, the versioned runner tool cache
    search_path: SearchPath, directories exported for later lookups
"""

from __future__ import annotations

from witness_action.tools.cache import ToolCache
from witness_action.tools.host import SystemToolHost, ToolHost
from witness_action.tools.resolver import BinaryResolver
from witness_action.tools.search_path import SearchPath

__all__ = [
    "BinaryResolver",
    "SearchPath",
    "SystemToolHost",
    "ToolCache",
    "ToolHost",
]
