"""Release type (major, minor, patch) used for version bumps and enforcement levels."""

from enum import Enum

from versionforge.errors import UnrecognizedReleaseTypeError


class SemVerReleaseType(str, Enum):
    """Granularity of an API change.

    Ordered PATCH < MINOR < MAJOR so the loosest permitted change can be picked
    with ``max()``.
    """

    MAJOR = "major"  # Breaking changes
    MINOR = "minor"  # Backward-compatible features
    PATCH = "patch"  # Backward-compatible fixes

    @property
    def rank(self) -> int:
        return _RANKS[self.value]

    @classmethod
    def from_string(cls, value: str) -> "SemVerReleaseType":
        """Look up a release type by name, ignoring case.

        Args:
            value: Release type name (e.g. "Major", "minor", " PATCH ")

        Returns:
            Matching SemVerReleaseType

        Raises:
            UnrecognizedReleaseTypeError: If value is not major, minor or patch
        """
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise UnrecognizedReleaseTypeError(value)

    def __str__(self) -> str:
        return self.name.capitalize()

    def __lt__(self, other: object) -> bool:
        """Compare release types for less than."""
        if not isinstance(other, SemVerReleaseType):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        """Compare release types for less than or equal."""
        if not isinstance(other, SemVerReleaseType):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        """Compare release types for greater than."""
        if not isinstance(other, SemVerReleaseType):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        """Compare release types for greater than or equal."""
        if not isinstance(other, SemVerReleaseType):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {"patch": 0, "minor": 1, "major": 2}
