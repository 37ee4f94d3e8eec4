"""Versioning configuration.

The configuration is an explicit, immutable object handed to the version
computation. Only ``load_config_from_env`` reads process state; everything
else receives the resulting VersioningConfig.
"""

import os
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator

from versionforge.errors import DirtyVersionError, DirtyVersionOverrideError
from versionforge.versioning.release_type import SemVerReleaseType
from versionforge.versioning.version import LowerBound, ReleaseVersion, SemanticVersion

DEFAULT_AUTO_FETCH_REMOTES = ["upstream", "origin"]

_TRUE_VALUES = ("true", "1", "yes")


class VersioningConfig(BaseModel):
    """Options controlling how the version is computed.

    Attributes:
        version_override: Exact release version to use instead of git history
        snapshot_lower_bound: Minimum major.minor.patch for versions from git;
            has no effect when version_override is present
        release_type: Bump the version from git as a major, minor or patch release
        ignore_dirty: Never mark the version as dirty
        enforce_after_version: Allow major changes until the version passes this release
        auto_fetch: Fetch tags from git remotes before reading history
        auto_fetch_remotes: Names of the git remotes to fetch tags from
        auto_fetch_timeout: Timeout for fetching tags, in seconds

    Example:
        >>> config = VersioningConfig(release_type="minor", snapshot_lower_bound="2.0.0")
        >>> config.release_type
        <SemVerReleaseType.MINOR: 'minor'>
    """

    model_config = ConfigDict(frozen=True)

    version_override: Optional[InstanceOf[ReleaseVersion]] = Field(
        default=None, description="Clean release version overriding git history"
    )
    snapshot_lower_bound: Optional[InstanceOf[LowerBound]] = Field(
        default=None, description="Floor for major.minor.patch of versions from git"
    )
    release_type: Optional[SemVerReleaseType] = Field(
        default=None, description="Release bump applied to the version from git"
    )
    ignore_dirty: bool = Field(default=False, description="Never add the dirty marker")
    enforce_after_version: Optional[InstanceOf[ReleaseVersion]] = Field(
        default=None, description="Allow major changes until this version"
    )
    auto_fetch: bool = Field(default=False, description="Fetch tags from remotes first")
    auto_fetch_remotes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_AUTO_FETCH_REMOTES),
        description="Git remotes to fetch tags from",
    )
    auto_fetch_timeout: int = Field(
        default=15, ge=1, le=600, description="Tag fetch timeout in seconds (1s-10min)"
    )

    @field_validator("version_override", mode="before")
    @classmethod
    def parse_version_override(cls, value: Any) -> Any:
        """Parse an override string, rejecting dirty and snapshot versions.

        Raises:
            VersionParseError: If the override is not a version
            DirtyVersionOverrideError: If the override is dirty or a snapshot
        """
        if isinstance(value, str):
            try:
                return ReleaseVersion.parse(value.strip())
            except DirtyVersionError as e:
                raise DirtyVersionOverrideError(value) from e
        if isinstance(value, SemanticVersion) and not isinstance(value, ReleaseVersion):
            if value.is_dirty:
                raise DirtyVersionOverrideError(str(value))
            return ReleaseVersion.from_version(value)
        return value

    @field_validator("enforce_after_version", mode="before")
    @classmethod
    def parse_enforce_after_version(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ReleaseVersion.parse(value.strip())
        if isinstance(value, SemanticVersion):
            return ReleaseVersion.from_version(value)
        return value

    @field_validator("snapshot_lower_bound", mode="before")
    @classmethod
    def parse_snapshot_lower_bound(cls, value: Any) -> Any:
        if isinstance(value, str):
            return LowerBound.parse(value.strip())
        return value

    @field_validator("release_type", mode="before")
    @classmethod
    def parse_release_type(cls, value: Any) -> Any:
        """Accept release type names case-insensitively.

        Raises:
            UnrecognizedReleaseTypeError: If the name is not major, minor or patch
        """
        if isinstance(value, str) and not isinstance(value, SemVerReleaseType):
            return SemVerReleaseType.from_string(value)
        return value

    @field_validator("auto_fetch_remotes")
    @classmethod
    def validate_auto_fetch_remotes(cls, value: list[str]) -> list[str]:
        """Drop blank remote names.

        Raises:
            ValueError: If a remote name contains whitespace
        """
        remotes = [remote.strip() for remote in value if remote.strip()]
        for remote in remotes:
            if any(c.isspace() for c in remote):
                raise ValueError(f"invalid git remote name: {remote!r}")
        return remotes


def _get_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


def load_config_from_env(**overrides: Any) -> VersioningConfig:
    """Load versioning configuration from environment variables.

    Automatically loads variables from a .env file if present.

    Reads configuration from:
    - VERSIONFORGE_VERSION_OVERRIDE: Clean release version to use
    - VERSIONFORGE_SNAPSHOT_LOWER_BOUND: Lower bound, e.g. "2.0.0"
    - VERSIONFORGE_RELEASE: Release type (major, minor, patch)
    - VERSIONFORGE_IGNORE_DIRTY: Ignore uncommitted changes (true/false)
    - VERSIONFORGE_ENFORCE_AFTER_VERSION: Allow major changes until this version
    - VERSIONFORGE_AUTO_FETCH: Fetch tags from remotes (true/false)
    - VERSIONFORGE_AUTO_FETCH_REMOTES: Comma-separated remote names
    - VERSIONFORGE_AUTO_FETCH_TIMEOUT: Fetch timeout in seconds

    Args:
        **overrides: Values taking precedence over the environment (None values are ignored)

    Returns:
        VersioningConfig loaded from environment

    Raises:
        VersionParseError: If a version or bound is malformed
        DirtyVersionOverrideError: If the override is dirty or a snapshot
        UnrecognizedReleaseTypeError: If the release type is not recognized
    """
    load_dotenv()

    values: dict[str, Any] = {
        "version_override": os.getenv("VERSIONFORGE_VERSION_OVERRIDE") or None,
        "snapshot_lower_bound": os.getenv("VERSIONFORGE_SNAPSHOT_LOWER_BOUND") or None,
        "release_type": os.getenv("VERSIONFORGE_RELEASE") or None,
        "ignore_dirty": _get_bool("VERSIONFORGE_IGNORE_DIRTY"),
        "enforce_after_version": os.getenv("VERSIONFORGE_ENFORCE_AFTER_VERSION") or None,
        "auto_fetch": _get_bool("VERSIONFORGE_AUTO_FETCH"),
        "auto_fetch_timeout": int(os.getenv("VERSIONFORGE_AUTO_FETCH_TIMEOUT", "15")),
    }

    remotes_str = os.getenv("VERSIONFORGE_AUTO_FETCH_REMOTES", "")
    if remotes_str.strip():
        values["auto_fetch_remotes"] = [r.strip() for r in remotes_str.split(",") if r.strip()]

    values.update({key: value for key, value in overrides.items() if value is not None})
    return VersioningConfig(**values)
