"""Semantic version value types.

Versions come in two shapes:

- clean releases such as ``1.2.3`` or ``2.0.0-rc1`` (``ReleaseVersion``)
- builds that are not an exact release tag, marked with ``-SNAPSHOT``:
  ``1.2.4-3-abcdef0-SNAPSHOT`` (3 commits after a release, at commit abcdef0),
  ``1.2.3-dirty-SNAPSHOT`` (uncommitted changes on top of a release) and
  ``1.2.4-3-abcdef0-dirty-SNAPSHOT``

All values are immutable; every transform returns a new instance.
"""

import dataclasses
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from versionforge.errors import DirtyVersionError, VersionParseError
from versionforge.versioning.release_type import SemVerReleaseType

if TYPE_CHECKING:
    from versionforge.versioning.branch_state import GitBranchState

_NUMBER = r"0|[1-9][0-9]*"
_VERSION_PATTERN = re.compile(
    rf"(?P<major>{_NUMBER})\.(?P<minor>{_NUMBER})\.(?P<patch>{_NUMBER})"
    r"(?P<suffix>(?:-[0-9A-Za-z.]+)*)"
)
_NUMBER_PATTERN = re.compile(_NUMBER)
_IDENTIFIER_PATTERN = re.compile(r"[0-9A-Za-z]+(?:\.[0-9A-Za-z]+)*")
_HASH_PATTERN = re.compile(r"[0-9a-f]{7,40}")

SNAPSHOT_MARKER = "SNAPSHOT"
DIRTY_MARKER = "dirty"
_RESERVED_IDENTIFIERS = frozenset({SNAPSHOT_MARKER, DIRTY_MARKER})


class VersionQualifier(str, Enum):
    """Build qualifier of a version."""

    CLEAN = "clean"
    SNAPSHOT = "snapshot"
    DIRTY = "dirty"
    DIRTY_SNAPSHOT = "dirty_snapshot"


def _validate_identifier(identifier: str) -> None:
    if not _IDENTIFIER_PATTERN.fullmatch(identifier):
        raise ValueError(f"malformed pre-release identifier '{identifier}'")
    if identifier in _RESERVED_IDENTIFIERS:
        raise ValueError(f"'{identifier}' is reserved and cannot be a pre-release identifier")
    for part in identifier.split("."):
        if part.isdigit() and not _NUMBER_PATTERN.fullmatch(part):
            raise ValueError(f"numeric identifier '{part}' has a leading zero")


def _looks_like_commit_info(identifiers: tuple[str, ...]) -> bool:
    return (
        len(identifiers) >= 2
        and bool(_NUMBER_PATTERN.fullmatch(identifiers[-2]))
        and bool(_HASH_PATTERN.fullmatch(identifiers[-1]))
    )


def _identifier_key(identifier: str) -> tuple[tuple[int, int, str], ...]:
    # Numeric parts sort numerically and below alphanumeric parts
    return tuple((0, int(part), "") if part.isdigit() else (1, 0, part) for part in identifier.split("."))


@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """Semantic version (MAJOR.MINOR.PATCH) with pre-release identifiers and build qualifier.

    Attributes:
        major: Major version (breaking changes)
        minor: Minor version (backward-compatible features)
        patch: Patch version (backward-compatible fixes)
        identifiers: Pre-release identifiers, e.g. ("rc1",)
        dirty: Whether the build has uncommitted changes
        snapshot: Whether the build is not an exact release
        commits_since_release: Commits since the previous release (snapshots only)
        commit_hash: Abbreviated hash of the built commit (snapshots only)
    """

    major: int
    minor: int
    patch: int
    identifiers: tuple[str, ...] = ()
    dirty: bool = False
    snapshot: bool = False
    commits_since_release: Optional[int] = None
    commit_hash: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", tuple(self.identifiers))

        for name in ("major", "minor", "patch"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        for identifier in self.identifiers:
            _validate_identifier(identifier)

        if (self.commits_since_release is None) != (self.commit_hash is None):
            raise ValueError("commits_since_release and commit_hash must be set together")
        if self.commit_hash is not None:
            if not self.snapshot:
                raise ValueError("commit information is only valid on snapshot versions")
            if self.commits_since_release is not None and self.commits_since_release < 0:
                raise ValueError("commits_since_release must be non-negative")
            if not _HASH_PATTERN.fullmatch(self.commit_hash):
                raise ValueError(f"malformed commit hash '{self.commit_hash}'")
        elif self.snapshot and _looks_like_commit_info(self.identifiers):
            raise ValueError("trailing identifiers would be read back as commit information")
        if self.dirty and not self.snapshot:
            raise ValueError("dirty versions are always snapshots")

    @classmethod
    def parse(cls, version_string: str) -> "SemanticVersion":
        """Parse a semantic version string.

        Accepts ``MAJOR.MINOR.PATCH``, optionally followed by pre-release
        identifiers and one of the suffixes ``-N-<hash>-SNAPSHOT``,
        ``-N-<hash>-dirty-SNAPSHOT``, ``-dirty-SNAPSHOT`` or ``-SNAPSHOT``.

        Args:
            version_string: Version string, e.g. "1.2.3" or "1.2.4-3-abcdef0-SNAPSHOT"

        Returns:
            SemanticVersion instance

        Raises:
            VersionParseError: If the string is not a recognized version
        """
        if not isinstance(version_string, str):
            raise VersionParseError(repr(version_string), "expected a string")

        match = _VERSION_PATTERN.fullmatch(version_string)
        if not match:
            raise VersionParseError(version_string, "expected MAJOR.MINOR.PATCH[-SUFFIX]")

        suffix = match.group("suffix")
        parts = suffix[1:].split("-") if suffix else []

        snapshot = bool(parts) and parts[-1] == SNAPSHOT_MARKER
        if snapshot:
            parts.pop()
        dirty = snapshot and bool(parts) and parts[-1] == DIRTY_MARKER
        if dirty:
            parts.pop()

        commits_since_release: Optional[int] = None
        commit_hash: Optional[str] = None
        if snapshot and _looks_like_commit_info(tuple(parts)):
            commit_hash = parts.pop()
            commits_since_release = int(parts.pop())

        try:
            return SemanticVersion(
                major=int(match.group("major")),
                minor=int(match.group("minor")),
                patch=int(match.group("patch")),
                identifiers=tuple(parts),
                dirty=dirty,
                snapshot=snapshot,
                commits_since_release=commits_since_release,
                commit_hash=commit_hash,
            )
        except ValueError as e:
            raise VersionParseError(version_string, str(e)) from e

    @property
    def numbers(self) -> tuple[int, int, int]:
        """The (major, minor, patch) triple."""
        return (self.major, self.minor, self.patch)

    @property
    def qualifier(self) -> VersionQualifier:
        if not self.snapshot:
            return VersionQualifier.CLEAN
        if self.dirty:
            if self.commit_hash is None:
                return VersionQualifier.DIRTY
            return VersionQualifier.DIRTY_SNAPSHOT
        return VersionQualifier.SNAPSHOT

    @property
    def is_dirty(self) -> bool:
        """True if this is a dirty build or a snapshot, i.e. not publishable as a release."""
        return self.dirty or self.snapshot

    @property
    def is_initial_dev_version(self) -> bool:
        """Major version zero (0.y.z) is for initial development.

        See http://semver.org/#spec-item-4
        """
        return self.major == 0

    def release(self, release_type: SemVerReleaseType) -> "ReleaseVersion":
        """Bump this version as a major, minor or patch release.

        The result is always a clean release: identifiers and the dirty/snapshot
        qualifier are dropped.

        Args:
            release_type: Kind of release to apply

        Returns:
            New ReleaseVersion
        """
        if release_type == SemVerReleaseType.MAJOR:
            return ReleaseVersion(self.major + 1, 0, 0)
        if release_type == SemVerReleaseType.MINOR:
            return ReleaseVersion(self.major, self.minor + 1, 0)
        return ReleaseVersion(self.major, self.minor, self.patch + 1)

    def lower_bound(self, bound: "LowerBound", branch_state: "GitBranchState") -> "SemanticVersion":
        """Raise this version's numbers to at least ``bound``.

        Has no effect when major.minor.patch already is at or above the bound.
        Otherwise the numbers are replaced by the bound and the identifiers and
        qualifier are kept. A snapshot without commit information picks it up
        from the branch state, since it no longer sits on a release tag.

        Args:
            bound: Minimum major.minor.patch
            branch_state: State of the branch the version was derived from

        Returns:
            This version, or a new version at the bound
        """
        if self.numbers >= bound.numbers:
            return self

        commits_since_release = self.commits_since_release
        commit_hash = self.commit_hash
        if self.snapshot and commit_hash is None and branch_state.head_commit is not None:
            commits_since_release = branch_state.commits_since_release
            commit_hash = branch_state.head_commit

        return dataclasses.replace(
            self,
            major=bound.major,
            minor=bound.minor,
            patch=bound.patch,
            commits_since_release=commits_since_release,
            commit_hash=commit_hash,
        )

    def _sort_key(self) -> tuple[Any, ...]:
        if self.identifiers:
            prerelease: tuple[Any, ...] = (0, tuple(_identifier_key(i) for i in self.identifiers))
        else:
            prerelease = (1,)
        if self.snapshot:
            commits = -1 if self.commits_since_release is None else self.commits_since_release
            build: tuple[Any, ...] = (0, commits, self.dirty, self.commit_hash or "")
        else:
            build = (1,)
        return (self.major, self.minor, self.patch, prerelease, build)

    def __str__(self) -> str:
        """Return the canonical version string."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        for identifier in self.identifiers:
            text += f"-{identifier}"
        if self.commit_hash is not None:
            text += f"-{self.commits_since_release}-{self.commit_hash}"
        if self.dirty:
            text += f"-{DIRTY_MARKER}"
        if self.snapshot:
            text += f"-{SNAPSHOT_MARKER}"
        return text

    def __hash__(self) -> int:
        """Hash consistently with equality."""
        return hash(self._sort_key())

    def __eq__(self, other: object) -> bool:
        """Compare versions for equality."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: "SemanticVersion") -> bool:
        """Compare versions for less than."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: "SemanticVersion") -> bool:
        """Compare versions for less than or equal."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: "SemanticVersion") -> bool:
        """Compare versions for greater than."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: "SemanticVersion") -> bool:
        """Compare versions for greater than or equal."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() >= other._sort_key()


@dataclass(frozen=True, eq=False)
class ReleaseVersion(SemanticVersion):
    """A clean, publishable version: never dirty and never a snapshot."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.is_dirty:
            raise DirtyVersionError(str(self))

    @classmethod
    def parse(cls, version_string: str) -> "ReleaseVersion":
        """Parse a clean release version string.

        Args:
            version_string: Version string, e.g. "1.2.3" or "2.0.0-rc1"

        Returns:
            ReleaseVersion instance

        Raises:
            VersionParseError: If the string is not a recognized version
            DirtyVersionError: If the version is dirty or a snapshot
        """
        version = SemanticVersion.parse(version_string)
        if version.is_dirty:
            raise DirtyVersionError(version_string)
        return cls(version.major, version.minor, version.patch, version.identifiers)

    @classmethod
    def from_version(cls, version: SemanticVersion) -> "ReleaseVersion":
        """Narrow a SemanticVersion to a ReleaseVersion.

        Raises:
            DirtyVersionError: If the version is dirty or a snapshot
        """
        if isinstance(version, ReleaseVersion):
            return version
        if version.is_dirty:
            raise DirtyVersionError(str(version))
        return cls(version.major, version.minor, version.patch, version.identifiers)


@dataclass(frozen=True)
class LowerBound:
    """Floor for the major.minor.patch of snapshot versions, e.g. "2.0.0"."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, bound_string: str) -> "LowerBound":
        """Parse a lower bound in MAJOR.MINOR.PATCH form.

        Raises:
            VersionParseError: If the string is not exactly MAJOR.MINOR.PATCH
        """
        match = _VERSION_PATTERN.fullmatch(bound_string) if isinstance(bound_string, str) else None
        if not match or match.group("suffix"):
            raise VersionParseError(str(bound_string), "a lower bound must be MAJOR.MINOR.PATCH")
        return cls(int(match.group("major")), int(match.group("minor")), int(match.group("patch")))

    @property
    def numbers(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
