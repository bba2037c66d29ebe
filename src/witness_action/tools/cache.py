"""Versioned local cache of downloaded tool binaries.

The layout matches the runner tool cache used by GitHub Actions, so a
binary cached here is also found by other actions sharing RUNNER_TOOL_CACHE:

Cache Structure:
    $RUNNER_TOOL_CACHE/
    └── witness/
        ├── 0.10.1/
        │   ├── amd64/
        │   │   └── witness           # Cached executable
        │   └── amd64.complete        # Marker written after the copy succeeds
        └── 0.9.0/
            └── ...

An entry is only visible once its ``.complete`` marker exists, so a copy
interrupted half way is treated as a miss. The cache does not lock:
concurrent installs of the same (tool, version, arch) write identical
content and the last writer wins.

Example:
    >>> cache = ToolCache(Path("/opt/hostedtoolcache"))
    >>> directory = cache.find("witness", "0.10.1", "amd64")
    >>> if directory is None:
    ...     directory = cache.cache_file(extracted, "witness", "witness", "0.10.1", "amd64")
"""

from __future__ import annotations

import shutil
from pathlib import Path

import structlog

from witness_action.errors import ToolCacheError

logger = structlog.get_logger(__name__)

_COMPLETE_SUFFIX = ".complete"


class ToolCache:
    """File-based cache keyed by (tool, version, arch).

    Attributes:
        root: Cache root directory.
    """

    def __init__(self, root: Path) -> None:
        """Initialize ToolCache.

        Args:
            root: Cache root. Created lazily on the first write.
        """
        self._root = Path(root)

    @property
    def root(self) -> Path:
        """Return the cache root directory."""
        return self._root

    def entry_dir(self, tool: str, version: str, arch: str) -> Path:
        """Return the directory holding a cached tool version."""
        return self._root / tool / version / arch

    def _marker(self, tool: str, version: str, arch: str) -> Path:
        return self._root / tool / version / f"{arch}{_COMPLETE_SUFFIX}"

    def find(self, tool: str, version: str, arch: str) -> Path | None:
        """Look up a cached tool version.

        Args:
            tool: Tool name.
            version: Exact version (without 'v' prefix). Empty is a miss.
            arch: Architecture token.

        Returns:
            Entry directory if present and complete, None otherwise.
        """
        if not version:
            return None

        directory = self.entry_dir(tool, version, arch)
        if directory.is_dir() and self._marker(tool, version, arch).is_file():
            logger.debug("tool_cache_hit", tool=tool, version=version, arch=arch)
            return directory

        logger.debug("tool_cache_miss", tool=tool, version=version, arch=arch)
        return None

    def cache_file(
        self,
        source: Path,
        target_name: str,
        tool: str,
        version: str,
        arch: str,
    ) -> Path:
        """Copy a single file into the cache.

        Any existing entry for the same key is replaced.

        Args:
            source: File to cache.
            target_name: Filename inside the entry directory.
            tool: Tool name.
            version: Version (without 'v' prefix).
            arch: Architecture token.

        Returns:
            Entry directory containing ``target_name``.

        Raises:
            ToolCacheError: If the source is missing or the copy fails.
        """
        source = Path(source)
        if not source.is_file():
            raise ToolCacheError("cache_file", "source file not found", str(source))

        directory = self.entry_dir(tool, version, arch)
        marker = self._marker(tool, version, arch)

        try:
            marker.unlink(missing_ok=True)
            if directory.exists():
                shutil.rmtree(directory)
            directory.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, directory / target_name)
            marker.touch()
        except OSError as e:
            raise ToolCacheError("cache_file", str(e), str(directory)) from e

        logger.info(
            "tool_cache_put",
            tool=tool,
            version=version,
            arch=arch,
            path=str(directory),
        )
        return directory


__all__ = ["ToolCache"]
