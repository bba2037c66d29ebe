"""Resolution of the witness binary.

Resolution order (never reversed):

    1. witness already on PATH            -> use it as is
    2. requested version in tool cache    -> use the cached copy
    3. requested version not cached       -> download, extract, cache
    4. no version requested               -> latest release (steps 2-3),
                                             falling back to FALLBACK_VERSION
                                             when the latest release cannot
                                             be looked up

A binary on PATH is an operator's deliberate choice and is never shadowed
by a cached copy, and an implicit default version never outranks "latest".

Each stage completes before the next begins. Probe and metadata failures
degrade to the next stage; download, extraction and cache-install failures
are raised as ToolDownloadError, ToolExtractionError and
ToolCacheInstallError respectively.

Example:
    >>> resolver = BinaryResolver(ResolverConfig(), requested_version="0.9.0")
    >>> binary = await resolver.resolve()
    >>> binary.source
    <BinarySource.CACHE: 'cache'>
"""

from __future__ import annotations

import shutil
import stat
import tempfile
from pathlib import Path

import structlog
from opentelemetry import trace

from witness_action.errors import (
    ReleaseMetadataError,
    ToolCacheInstallError,
    ToolDownloadError,
    ToolExtractionError,
)
from witness_action.schemas.resolver import (
    BinarySource,
    PlatformTarget,
    ResolvedBinary,
    ResolverConfig,
    strip_version_prefix,
)
from witness_action.tools.cache import ToolCache
from witness_action.tools.host import SystemToolHost, ToolHost
from witness_action.tools.search_path import SearchPath

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)

_EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class BinaryResolver:
    """Resolve a ready-to-execute path to the attestor binary.

    Args:
        config: Resolver configuration.
        requested_version: Explicit version (``0.9.0`` or ``v0.9.0``); None
            or empty means the latest release.
        host: Host capabilities. Defaults to SystemToolHost over the
            configured tool cache.
        search_path: Context that receives directories made available for
            later lookups. A new empty context is created when omitted.
        target: Release platform tokens. Defaults to the running host.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        requested_version: str | None = None,
        host: ToolHost | None = None,
        search_path: SearchPath | None = None,
        target: PlatformTarget | None = None,
    ) -> None:
        self._config = config or ResolverConfig()
        self._requested_version = (
            strip_version_prefix(requested_version) if requested_version else None
        )
        self._host = host or SystemToolHost(
            ToolCache(self._config.tool_cache_root),
            timeout=self._config.http_timeout_seconds,
        )
        self._search_path = search_path if search_path is not None else SearchPath()
        self._target = target or self._config.target_for()

    @property
    def config(self) -> ResolverConfig:
        """Return the resolver configuration."""
        return self._config

    @property
    def search_path(self) -> SearchPath:
        """Return the search path context updated by resolution."""
        return self._search_path

    @property
    def target(self) -> PlatformTarget:
        """Return the release platform this resolver downloads for."""
        return self._target

    @property
    def requested_version(self) -> str | None:
        """Return the explicitly requested version, without 'v' prefix."""
        return self._requested_version

    async def resolve(self) -> ResolvedBinary:
        """Resolve the attestor binary.

        Returns:
            ResolvedBinary describing the executable and its origin.

        Raises:
            ToolDownloadError: If the release archive cannot be downloaded.
            ToolExtractionError: If the archive cannot be extracted.
            ToolCacheInstallError: If the binary cannot be cached.
        """
        tool = self._config.tool_name
        with tracer.start_as_current_span("witness_action.resolve") as span:
            span.set_attribute("witness_action.tool", tool)

            system_path = await self.probe_system_path()
            if system_path:
                logger.info("witness_found_in_path", path=system_path)
                span.set_attribute("witness_action.source", BinarySource.SYSTEM.value)
                return ResolvedBinary(path=Path(system_path), source=BinarySource.SYSTEM)

            version = self._requested_version or await self.fetch_latest_version()
            logger.info("witness_version_selected", version=version)
            span.set_attribute("witness_action.version", version)

            cached_dir = await self._host.find_cached(tool, version, self._target.arch)
            if cached_dir is not None:
                executable = Path(cached_dir) / tool
                self._search_path.add(Path(cached_dir))
                logger.info("witness_found_in_cache", path=str(executable), version=version)
                span.set_attribute("witness_action.source", BinarySource.CACHE.value)
                return ResolvedBinary(path=executable, source=BinarySource.CACHE, version=version)

            logger.info("witness_not_cached", version=version)
            executable = await self.download_and_install(version)
            span.set_attribute("witness_action.source", BinarySource.DOWNLOAD.value)
            return ResolvedBinary(path=executable, source=BinarySource.DOWNLOAD, version=version)

    async def probe_system_path(self) -> str | None:
        """Look for the tool on PATH.

        Best effort: any failure is treated as "not found".

        Returns:
            Executable path, or None.
        """
        tool = self._config.tool_name
        with tracer.start_as_current_span("witness_action.resolve.probe"):
            try:
                found = await self._host.which(tool, self._search_path.as_path_env() or None)
            except Exception as e:
                logger.debug("witness_path_probe_failed", error=str(e))
                return None
        if not found or not found.strip():
            return None
        return found.strip()

    async def fetch_latest_version(self) -> str:
        """Return the latest released version without 'v' prefix.

        Falls back to the configured fallback version when the release
        metadata cannot be fetched or does not carry a tag name.
        """
        url = self._config.latest_release_url
        headers = {"Accept": "application/vnd.github+json"}
        if self._config.api_token is not None:
            headers["Authorization"] = f"Bearer {self._config.api_token.get_secret_value()}"

        with tracer.start_as_current_span("witness_action.resolve.fetch_latest") as span:
            try:
                data = await self._host.fetch_json(url, headers)
                tag_name = data.get("tag_name") if isinstance(data, dict) else None
                if not isinstance(tag_name, str) or not tag_name:
                    raise ReleaseMetadataError(url, "response has no tag_name")
            except Exception as e:
                span.record_exception(e)
                fallback = self._config.fallback_version
                logger.warning(
                    "witness_latest_version_unavailable",
                    error=str(e),
                    fallback_version=fallback,
                )
                return fallback

        version = strip_version_prefix(tag_name)
        logger.info("witness_latest_version", version=version)
        return version

    async def download_and_install(self, version: str) -> Path:
        """Download a release, extract it and install the binary in the cache.

        Temporary download and extraction directories are removed whether or
        not installation succeeds.

        Args:
            version: Version to install, without 'v' prefix.

        Returns:
            Path of the cached executable.

        Raises:
            ToolDownloadError: If the download fails.
            ToolExtractionError: If extraction fails.
            ToolCacheInstallError: If the cache copy fails.
        """
        tool = self._config.tool_name
        url = self._config.download_url(version, self._target)

        with tracer.start_as_current_span("witness_action.resolve.install") as span:
            span.set_attribute("witness_action.download_url", url)
            logger.info("witness_download_started", url=url, version=version)

            work_dir = Path(tempfile.mkdtemp(prefix=f"{tool}-install-"))
            try:
                download_dir = work_dir / "download"
                extract_dir = work_dir / "extract"
                download_dir.mkdir()
                extract_dir.mkdir()

                try:
                    archive = await self._host.download(url, download_dir)
                except Exception as e:
                    span.record_exception(e)
                    raise ToolDownloadError(version, e, tool=tool) from e
                logger.info("witness_downloaded", path=str(archive))

                try:
                    extracted = await self._host.extract(Path(archive), extract_dir)
                except Exception as e:
                    span.record_exception(e)
                    raise ToolExtractionError(version, e, tool=tool) from e
                logger.info("witness_extracted", path=str(extracted))

                executable = Path(extracted) / tool
                _make_executable(executable)

                try:
                    cached_path = await self._host.cache_file(
                        executable, tool, tool, version, self._target.arch
                    )
                except Exception as e:
                    span.record_exception(e)
                    raise ToolCacheInstallError(version, e, tool=tool) from e
            finally:
                _remove_tree(work_dir)

        cached_path = Path(cached_path)
        cached_executable = cached_path if cached_path.name == tool else cached_path / tool
        self._search_path.add(cached_executable.parent)
        logger.info("witness_installed", path=str(cached_executable), version=version)
        return cached_executable


def _make_executable(path: Path) -> None:
    try:
        path.chmod(path.stat().st_mode | _EXECUTABLE_BITS)
    except OSError as e:
        logger.warning("witness_chmod_failed", path=str(path), error=str(e))


def _remove_tree(path: Path) -> None:
    try:
        shutil.rmtree(path)
    except OSError as e:
        logger.warning("temp_dir_cleanup_failed", path=str(path), error=str(e))


__all__ = ["BinaryResolver"]
