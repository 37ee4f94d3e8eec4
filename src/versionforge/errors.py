"""Custom exceptions for versionforge.

This module defines the exception hierarchy for version parsing, configuration
and enforcement errors. Every error carries a human-readable message and a
machine-readable code so callers can decide whether to abort or report.
"""

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from versionforge.versioning.version import ReleaseVersion, SemanticVersion


class VersioningError(Exception):
    """Base exception for all versionforge errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
    """

    def __init__(self, message: str, code: str) -> None:
        """Initialize versioning error.

        Args:
            message: Human-readable error description
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code


class VersionParseError(VersioningError):
    """Raised when a string is not a recognized semantic version."""

    def __init__(self, value: str, reason: str = "") -> None:
        """Initialize version parse error.

        Args:
            value: The offending input
            reason: Optional detail about what was wrong
        """
        message = f"Invalid semantic version '{value}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message=message, code="version_parse_error")
        self.value = value


class DirtyVersionError(VersioningError):
    """Raised when a release version is required but the version is dirty or a snapshot."""

    def __init__(self, value: str) -> None:
        super().__init__(
            message=f"Version '{value}' is dirty or a snapshot, expected a clean release version",
            code="dirty_version",
        )
        self.value = value


class DirtyVersionOverrideError(VersioningError):
    """Raised when a version override carries a dirty or snapshot marker.

    An override must denote an exact, reproducible release.
    """

    def __init__(self, value: str) -> None:
        super().__init__(
            message=f"cannot parse version_override={value} as clean release version",
            code="dirty_version_override",
        )
        self.value = value


class UnrecognizedReleaseTypeError(VersioningError):
    """Raised when a release type is not one of major, minor or patch."""

    def __init__(self, value: str) -> None:
        super().__init__(
            message=f"Unrecognized release type '{value}', expected one of: major, minor, patch",
            code="unrecognized_release_type",
        )
        self.value = value


class VersionDowngradeError(VersioningError):
    """Raised when a previous release is not strictly less than the current version.

    This indicates the version source (e.g. git tags) moved backward or stalled
    relative to history.

    Attributes:
        current: The newly computed version
        prev: The previously released version
    """

    def __init__(self, current: "SemanticVersion", prev: "ReleaseVersion") -> None:
        """Initialize version downgrade error.

        Args:
            current: The newly computed version
            prev: The previously released version
        """
        super().__init__(
            message=f"prev.version={prev} cannot be equal or greater than curr.version={current}",
            code="version_downgrade",
        )
        self.current = current
        self.prev = prev


class GitError(VersioningError):
    """Raised when a git command required to read history fails."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str) -> None:
        command = " ".join(["git", *args])
        super().__init__(
            message=f"'{command}' failed with exit code {returncode}: {stderr.strip()}",
            code="git_error",
        )
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
