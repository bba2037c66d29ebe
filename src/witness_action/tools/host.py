"""Host capabilities used by the binary resolver.

The resolver never touches the network, the filesystem or PATH directly.
It goes through a ToolHost, which groups four capabilities:

    1. PATH probe           which()
    2. Release metadata     fetch_json()
    3. Archive handling     download(), extract()
    4. Tool cache           find_cached(), cache_file()

SystemToolHost is the production implementation. Tests substitute a fake
that records calls, so "no network call happened" is directly assertable.
"""

from __future__ import annotations

import asyncio
import shutil
import tarfile
import zipfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlparse

import httpx
import structlog

from witness_action.tools.cache import ToolCache

logger = structlog.get_logger(__name__)

_DOWNLOAD_CHUNK_SIZE = 64 * 1024


@runtime_checkable
class ToolHost(Protocol):
    """Capabilities the resolver needs from its environment."""

    async def which(self, name: str, path: str | None = None) -> str | None:
        """Return the executable path for ``name`` on ``path``, or None."""
        ...

    async def fetch_json(self, url: str, headers: Mapping[str, str] | None = None) -> Any:
        """GET ``url`` and return the decoded JSON body. Raises on non-2xx."""
        ...

    async def download(self, url: str, dest_dir: Path) -> Path:
        """Download ``url`` into ``dest_dir`` and return the file path."""
        ...

    async def extract(self, archive: Path, dest_dir: Path) -> Path:
        """Extract ``archive`` into ``dest_dir`` and return the directory."""
        ...

    async def find_cached(self, tool: str, version: str, arch: str) -> Path | None:
        """Return the cache directory for a tool version, or None."""
        ...

    async def cache_file(
        self,
        source: Path,
        target_name: str,
        tool: str,
        version: str,
        arch: str,
    ) -> Path:
        """Install ``source`` into the cache and return its directory."""
        ...


def _check_member(dest_dir: Path, name: str) -> None:
    target = (dest_dir / name).resolve()
    if not target.is_relative_to(dest_dir.resolve()):
        raise ValueError(f"Archive member escapes extraction directory: {name}")


def _extract_tar(archive: Path, dest_dir: Path) -> None:
    with tarfile.open(archive, "r:*") as tar:
        for member in tar.getmembers():
            _check_member(dest_dir, member.name)
        if hasattr(tarfile, "data_filter"):
            tar.extractall(dest_dir, filter="data")
        else:
            tar.extractall(dest_dir)  # noqa: S202 - members checked above


def _extract_zip(archive: Path, dest_dir: Path) -> None:
    with zipfile.ZipFile(archive) as zf:
        for name in zf.namelist():
            _check_member(dest_dir, name)
        zf.extractall(dest_dir)


class SystemToolHost:
    """ToolHost backed by the real system.

    Args:
        cache: Tool cache for installed binaries.
        timeout: HTTP timeout in seconds.
        transport: Optional httpx transport (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        cache: ToolCache,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._cache = cache
        self._timeout = timeout
        self._transport = transport

    @property
    def cache(self) -> ToolCache:
        """Return the tool cache."""
        return self._cache

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    async def which(self, name: str, path: str | None = None) -> str | None:
        return await asyncio.to_thread(shutil.which, name, path=path)

    async def fetch_json(self, url: str, headers: Mapping[str, str] | None = None) -> Any:
        async with self._client() as client:
            response = await client.get(url, headers=dict(headers or {}))
            response.raise_for_status()
            return response.json()

    async def download(self, url: str, dest_dir: Path) -> Path:
        filename = Path(urlparse(url).path).name or "download"
        destination = dest_dir / filename

        async with self._client() as client, client.stream("GET", url) as response:
            response.raise_for_status()
            with destination.open("wb") as fh:
                async for chunk in response.aiter_bytes(_DOWNLOAD_CHUNK_SIZE):
                    fh.write(chunk)

        logger.debug("archive_downloaded", url=url, path=str(destination))
        return destination

    async def extract(self, archive: Path, dest_dir: Path) -> Path:
        if archive.name.endswith(".zip"):
            await asyncio.to_thread(_extract_zip, archive, dest_dir)
        else:
            await asyncio.to_thread(_extract_tar, archive, dest_dir)
        return dest_dir

    async def find_cached(self, tool: str, version: str, arch: str) -> Path | None:
        return await asyncio.to_thread(self._cache.find, tool, version, arch)

    async def cache_file(
        self,
        source: Path,
        target_name: str,
        tool: str,
        version: str,
        arch: str,
    ) -> Path:
        return await asyncio.to_thread(
            self._cache.cache_file, source, target_name, tool, version, arch
        )


__all__ = ["SystemToolHost", "ToolHost"]
