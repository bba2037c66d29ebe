"""Exception hierarchy for witness-action.

All exceptions inherit from WitnessActionError, the base exception class.

Exception Hierarchy:
    WitnessActionError (base)
    ├── InputError                 # Action input could not be interpreted
    ├── ReleaseMetadataError       # Latest-release lookup failed (always recovered)
    ├── ToolCacheError             # Local tool cache operation failed
    └── ToolInstallError           # Binary could not be installed
        ├── ToolDownloadError      # Archive download failed
        ├── ToolExtractionError    # Archive extraction failed
        └── ToolCacheInstallError  # Copy into the tool cache failed

Exit Codes:
    0 - Success
    1 - General error (WitnessActionError, ToolInstallError)
    2 - Invalid input (InputError)

Any other non-zero exit status of `witness-action run` is the attestor's own
exit code, forwarded unchanged.

Example:
    >>> from witness_action.errors import ToolDownloadError
    >>> raise ToolDownloadError("0.9.0", ConnectionError("reset"))
    Traceback (most recent call last):
        ...
    ToolDownloadError: Failed to download witness 0.9.0: reset
"""

from __future__ import annotations


class WitnessActionError(Exception):
    """Base exception for all witness-action errors.

    Attributes:
        exit_code: CLI exit code for this error type (default: 1).
    """

    exit_code: int = 1

    pass


class InputError(WitnessActionError):
    """Raised when an action input has a value that cannot be interpreted.

    Attributes:
        name: Input name as declared by the action (e.g. ``enable-sigstore``).
        value: The offending raw value.
        exit_code: CLI exit code (2).
    """

    exit_code: int = 2

    def __init__(self, name: str, value: str, reason: str) -> None:
        """Initialize InputError.

        Args:
            name: Input name.
            value: Raw input value.
            reason: Why the value was rejected.
        """
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid input '{name}': {reason} (got {value!r})")


class ReleaseMetadataError(WitnessActionError):
    """Raised when the latest release cannot be determined.

    The resolver never lets this escape: it logs a warning and falls back
    to the last known good version.
    """

    def __init__(self, url: str, reason: str) -> None:
        """Initialize ReleaseMetadataError.

        Args:
            url: Metadata endpoint that was queried.
            reason: Description of the failure.
        """
        self.url = url
        self.reason = reason
        super().__init__(f"Release metadata lookup failed for {url}: {reason}")


class ToolCacheError(WitnessActionError):
    """Raised when a tool cache operation fails.

    Attributes:
        operation: Cache operation that failed (find, cache_file).
        path: Cache path involved, if any.
    """

    def __init__(self, operation: str, reason: str, path: str | None = None) -> None:
        """Initialize ToolCacheError.

        Args:
            operation: Cache operation that failed.
            reason: Description of the failure.
            path: Cache path involved, if any.
        """
        self.operation = operation
        self.reason = reason
        self.path = path

        msg = f"Tool cache {operation} failed: {reason}"
        if path:
            msg += f" (path: {path})"
        super().__init__(msg)


class ToolInstallError(WitnessActionError):
    """Raised when the attestor binary cannot be installed.

    The stage attribute tells which step failed; the underlying exception is
    kept on ``cause`` and chained as ``__cause__``.

    Attributes:
        stage: Installation stage (download, extract, cache).
        version: Version being installed.
        cause: Underlying exception.
    """

    stage: str = "install"
    verb: str = "install"

    def __init__(self, version: str, cause: BaseException, tool: str = "witness") -> None:
        """Initialize ToolInstallError.

        Args:
            version: Version being installed.
            cause: Underlying exception.
            tool: Tool name, used in the message.
        """
        self.version = version
        self.cause = cause
        self.tool = tool
        super().__init__(f"Failed to {self.verb} {tool} {version}: {cause}")


class ToolDownloadError(ToolInstallError):
    """Raised when the release archive cannot be downloaded."""

    stage = "download"
    verb = "download"


class ToolExtractionError(ToolInstallError):
    """Raised when the release archive cannot be extracted."""

    stage = "extract"
    verb = "extract"


class ToolCacheInstallError(ToolInstallError):
    """Raised when the extracted binary cannot be copied into the tool cache."""

    stage = "cache"
    verb = "cache"


__all__ = [
    "InputError",
    "ReleaseMetadataError",
    "ToolCacheError",
    "ToolCacheInstallError",
    "ToolDownloadError",
    "ToolExtractionError",
    "ToolInstallError",
    "WitnessActionError",
]
