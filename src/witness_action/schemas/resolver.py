"""Schemas for locating, downloading and caching the attestor binary.

Key Components:
    BinarySource: Where a resolved binary came from
    PlatformTarget: Release OS/arch/archive tokens for one host
    ResolverConfig: Release endpoints, fallback version, platform mapping
    ResolvedBinary: Result of a resolution

Release archives follow the naming convention used by the witness project:

    <download_base>/<repository>/releases/download/v<version>/<tool>_<version>_<os>_<arch>.<archive_ext>

Example:
    >>> config = ResolverConfig()
    >>> target = PlatformTarget(os="linux", arch="amd64")
    >>> config.download_url("0.10.1", target)
    'https://github.com/in-toto/witness/releases/download/v0.10.1/witness_0.10.1_linux_amd64.tar.gz'
"""

from __future__ import annotations

import os
import platform
import sys
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_TOOL_NAME = "witness"
DEFAULT_REPOSITORY = "in-toto/witness"

FALLBACK_VERSION = "0.10.1"
"""Last known good release, used only when the latest release cannot be looked up."""

_DEFAULT_PLATFORMS: dict[str, str] = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
}

_DEFAULT_ARCHITECTURES: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def strip_version_prefix(version: str) -> str:
    """Remove a single leading 'v' from a version or tag name.

    Examples:
        >>> strip_version_prefix("v0.10.1")
        '0.10.1'
        >>> strip_version_prefix("0.9.0")
        '0.9.0'
    """
    return version[1:] if version.startswith("v") else version


def default_tool_cache_root() -> Path:
    """Return the tool cache root for this host.

    GitHub-hosted and self-hosted runners export RUNNER_TOOL_CACHE; outside a
    runner a per-user cache directory is used.
    """
    runner_cache = os.environ.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache)
    return Path.home() / ".cache" / "witness-action" / "tools"


class BinarySource(str, Enum):
    """Origin of a resolved attestor binary."""

    SYSTEM = "system"
    CACHE = "cache"
    DOWNLOAD = "download"


class PlatformTarget(BaseModel):
    """Release tokens identifying the archive for one host.

    Examples:
        >>> PlatformTarget(os="darwin", arch="arm64").archive_name("witness", "0.9.0")
        'witness_0.9.0_darwin_arm64.tar.gz'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    os: str = Field(..., min_length=1, description="Release OS token (linux, darwin, windows)")
    arch: str = Field(..., min_length=1, description="Release architecture token (amd64, arm64)")
    archive_ext: str = Field(
        default="tar.gz",
        description="Archive extension published for this platform",
    )

    def archive_name(self, tool: str, version: str) -> str:
        """Return the release archive filename for a tool version."""
        return f"{tool}_{version}_{self.os}_{self.arch}.{self.archive_ext}"


class ResolverConfig(BaseModel):
    """Configuration for resolving the attestor binary.

    Platform and architecture mappings are data: hosts whose platform is
    not listed fall back to linux, and unknown machine types fall back to
    ``default_arch``.

    Examples:
        >>> config = ResolverConfig(fallback_version="0.9.0")
        >>> config.latest_release_url
        'https://api.github.com/repos/in-toto/witness/releases/latest'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tool_name: str = Field(
        default=DEFAULT_TOOL_NAME,
        min_length=1,
        description="Executable and tool cache name",
    )
    repository: str = Field(
        default=DEFAULT_REPOSITORY,
        description="GitHub owner/name publishing the releases",
    )
    api_base_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    download_base_url: str = Field(
        default="https://github.com",
        description="Host serving release downloads",
    )
    fallback_version: str = Field(
        default=FALLBACK_VERSION,
        min_length=1,
        description="Version used when the latest release cannot be determined",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for metadata and download requests",
    )
    api_token: SecretStr | None = Field(
        default=None,
        description="Optional GitHub token for the release metadata request",
    )
    tool_cache_root: Path = Field(
        default_factory=default_tool_cache_root,
        description="Root directory of the versioned tool cache",
    )
    platforms: dict[str, str] = Field(
        default_factory=lambda: dict(_DEFAULT_PLATFORMS),
        description="sys.platform value -> release OS token",
    )
    architectures: dict[str, str] = Field(
        default_factory=lambda: dict(_DEFAULT_ARCHITECTURES),
        description="platform.machine() value (lower-cased) -> release arch token",
    )
    default_arch: str = Field(
        default="amd64",
        min_length=1,
        description="Release arch token used for unlisted machine types",
    )
    archive_ext: str = Field(
        default="tar.gz",
        description="Archive extension of published releases",
    )

    @field_validator("api_base_url", "download_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended."""
        return v.rstrip("/")

    @property
    def latest_release_url(self) -> str:
        """Return the endpoint describing the latest tagged release."""
        return f"{self.api_base_url}/repos/{self.repository}/releases/latest"

    def download_url(self, version: str, target: PlatformTarget) -> str:
        """Return the canonical archive URL for a version on a target."""
        archive = target.archive_name(self.tool_name, version)
        return f"{self.download_base_url}/{self.repository}/releases/download/v{version}/{archive}"

    def target_for(
        self,
        system_platform: str | None = None,
        machine: str | None = None,
    ) -> PlatformTarget:
        """Map a host platform and machine type to release tokens.

        Args:
            system_platform: sys.platform value. Defaults to the running host.
            machine: platform.machine() value. Defaults to the running host.

        Returns:
            PlatformTarget for the archive to download.
        """
        system_platform = system_platform if system_platform is not None else sys.platform
        machine = (machine if machine is not None else platform.machine()).lower()
        return PlatformTarget(
            os=self.platforms.get(system_platform, "linux"),
            arch=self.architectures.get(machine, self.default_arch),
            archive_ext=self.archive_ext,
        )


class ResolvedBinary(BaseModel):
    """Result of resolving the attestor binary.

    Attributes:
        path: Executable path.
        source: Where the binary came from.
        version: Version installed from cache or download; None for a
            system binary whose version was not inspected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Path
    source: BinarySource
    version: str | None = None


__all__ = [
    "DEFAULT_REPOSITORY",
    "DEFAULT_TOOL_NAME",
    "FALLBACK_VERSION",
    "BinarySource",
    "PlatformTarget",
    "ResolvedBinary",
    "ResolverConfig",
    "default_tool_cache_root",
    "strip_version_prefix",
]
