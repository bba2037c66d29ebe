"""Unit test fixtures for witness-action.

Unit tests:
- Run without network access or a real witness binary
- Use FakeToolHost in place of SystemToolHost for resolver tests
- Execute quickly (< 1s per test)

For shared fixtures across all tests, see ../conftest.py.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from witness_action.schemas.resolver import PlatformTarget, ResolverConfig

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

CACHE_ROOT = Path("/opt/hostedtoolcache")


class FakeToolHost:
    """In-memory ToolHost that records every capability call.

    Args:
        which_result: Value returned by which().
        which_error: Exception raised by which().
        release: JSON returned by fetch_json().
        fetch_error: Exception raised by fetch_json().
        cached: Mapping of version -> cache directory for find_cached().
        download_error: Exception raised by download().
        extract_error: Exception raised by extract().
        cache_error: Exception raised by cache_file().
    """

    def __init__(
        self,
        *,
        which_result: str | None = None,
        which_error: Exception | None = None,
        release: Any = None,
        fetch_error: Exception | None = None,
        cached: Mapping[str, Path] | None = None,
        download_error: Exception | None = None,
        extract_error: Exception | None = None,
        cache_error: Exception | None = None,
    ) -> None:
        self.which_result = which_result
        self.which_error = which_error
        self.release = release
        self.fetch_error = fetch_error
        self.cached = dict(cached or {})
        self.download_error = download_error
        self.extract_error = extract_error
        self.cache_error = cache_error
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def called(self, name: str) -> list[tuple[Any, ...]]:
        """Return the arguments of every call to capability ``name``."""
        return [args for call, args in self.calls if call == name]

    @property
    def call_names(self) -> list[str]:
        """Return capability names in call order."""
        return [call for call, _ in self.calls]

    async def which(self, name: str, path: str | None = None) -> str | None:
        self.calls.append(("which", (name, path)))
        if self.which_error is not None:
            raise self.which_error
        return self.which_result

    async def fetch_json(self, url: str, headers: Mapping[str, str] | None = None) -> Any:
        self.calls.append(("fetch_json", (url, dict(headers or {}))))
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.release

    async def download(self, url: str, dest_dir: Path) -> Path:
        self.calls.append(("download", (url, dest_dir)))
        if self.download_error is not None:
            raise self.download_error
        return dest_dir / Path(url).name

    async def extract(self, archive: Path, dest_dir: Path) -> Path:
        self.calls.append(("extract", (archive, dest_dir)))
        if self.extract_error is not None:
            raise self.extract_error
        return dest_dir

    async def find_cached(self, tool: str, version: str, arch: str) -> Path | None:
        self.calls.append(("find_cached", (tool, version, arch)))
        return self.cached.get(version)

    async def cache_file(
        self,
        source: Path,
        target_name: str,
        tool: str,
        version: str,
        arch: str,
    ) -> Path:
        self.calls.append(("cache_file", (source, target_name, tool, version, arch)))
        if self.cache_error is not None:
            raise self.cache_error
        return CACHE_ROOT / tool / version / arch


@pytest.fixture
def fake_host() -> Callable[..., FakeToolHost]:
    """Factory fixture creating FakeToolHost instances.

    Usage:
        def test_probe(fake_host: Callable[..., FakeToolHost]) -> None:
            host = fake_host(which_result="/usr/local/bin/witness")
    """
    return FakeToolHost


@pytest.fixture
def linux_target() -> PlatformTarget:
    """Release tokens for a linux/amd64 runner."""
    return PlatformTarget(os="linux", arch="amd64")


@pytest.fixture
def resolver_config(tmp_path: Path) -> ResolverConfig:
    """Resolver configuration with the tool cache under tmp_path."""
    return ResolverConfig(tool_cache_root=tmp_path / "toolcache")
