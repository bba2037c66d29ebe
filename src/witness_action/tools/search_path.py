"""Directories made available for executable lookups within a job.

The resolver records directories here instead of mutating the process
environment. ``SearchPath.export`` is the single place that performs the
process-wide side effect: it prepends the directories to ``PATH`` for this
process and appends them to the file named by ``GITHUB_PATH`` so later
steps of the same job see them too.
"""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class SearchPath:
    """Ordered set of directories added for executable lookups.

    Most recently added directories come first, matching how runners
    prepend entries written to GITHUB_PATH.

    Example:
        >>> search_path = SearchPath()
        >>> search_path.add(Path("/opt/hostedtoolcache/witness/0.10.1/amd64"))
        >>> search_path.as_path_env("/usr/bin")
        '/opt/hostedtoolcache/witness/0.10.1/amd64:/usr/bin'
    """

    def __init__(self, entries: list[Path] | None = None) -> None:
        self._entries: list[Path] = []
        for entry in entries or []:
            self.add(entry)

    @property
    def entries(self) -> tuple[Path, ...]:
        """Return directories in lookup order."""
        return tuple(self._entries)

    def add(self, directory: Path) -> None:
        """Put a directory at the front of the lookup order."""
        directory = Path(directory)
        if directory in self._entries:
            self._entries.remove(directory)
        self._entries.insert(0, directory)

    def as_path_env(self, base: str | None = None) -> str:
        """Render a PATH string with the added directories ahead of ``base``.

        Args:
            base: Existing PATH value. Defaults to the process PATH.
        """
        base = os.environ.get("PATH", "") if base is None else base
        parts = [str(entry) for entry in self._entries]
        if base:
            parts.append(base)
        return os.pathsep.join(parts)

    def export(self, environ: MutableMapping[str, str] | None = None) -> None:
        """Publish the added directories to this process and later job steps.

        Args:
            environ: Environment to update. Defaults to os.environ.

        Raises:
            OSError: If the GITHUB_PATH file cannot be written.
        """
        environ = os.environ if environ is None else environ
        if not self._entries:
            return

        github_path = environ.get("GITHUB_PATH")
        if github_path:
            with Path(github_path).open("a", encoding="utf-8") as fh:
                for entry in reversed(self._entries):
                    fh.write(f"{entry}\n")

        environ["PATH"] = self.as_path_env(environ.get("PATH", ""))
        logger.info(
            "search_path_exported",
            entries=[str(entry) for entry in self._entries],
            github_path=github_path or None,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SearchPath({[str(entry) for entry in self._entries]!r})"


__all__ = ["SearchPath"]
