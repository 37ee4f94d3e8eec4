"""Tests for downgrade and change checks."""

import pytest

from versionforge.errors import VersionDowngradeError
from versionforge.semver import (
    check_change,
    check_version_downgrade,
    default_rules,
    ensure_no_downgrade,
    strict_release_type,
)
from versionforge.versioning import ReleaseVersion, SemanticVersion, SemVerReleaseType


class TestVersionDowngrade:
    """Tests for check_version_downgrade."""

    def test_downgrade_detected(self) -> None:
        """A previous release above the current version is a downgrade."""
        current = SemanticVersion.parse("1.8.5")
        prev = ReleaseVersion.parse("1.9.0")

        error = check_version_downgrade(current, prev)

        assert isinstance(error, VersionDowngradeError)
        assert error.current == current
        assert error.prev == prev
        assert error.code == "version_downgrade"
        assert str(error) == "prev.version=1.9.0 cannot be equal or greater than curr.version=1.8.5"

    def test_equal_version_is_downgrade(self) -> None:
        """Re-releasing the previous version is not allowed."""
        assert check_version_downgrade(SemanticVersion(1, 9, 0), ReleaseVersion(1, 9, 0)) is not None

    def test_newer_version_passes(self) -> None:
        """A strictly newer version passes silently."""
        assert check_version_downgrade(SemanticVersion.parse("1.9.1"), ReleaseVersion.parse("1.9.0")) is None

    def test_snapshot_of_previous_release_is_downgrade(self) -> None:
        """A snapshot orders below the release with the same numbers."""
        current = SemanticVersion.parse("1.9.0-dirty-SNAPSHOT")

        assert check_version_downgrade(current, ReleaseVersion.parse("1.9.0")) is not None

    def test_no_previous_release(self) -> None:
        """Nothing to compare against means no downgrade."""
        assert check_version_downgrade(SemanticVersion(0, 0, 1), None) is None

    def test_ensure_no_downgrade_raises(self) -> None:
        """ensure_no_downgrade raises the error value."""
        with pytest.raises(VersionDowngradeError):
            ensure_no_downgrade(SemanticVersion.parse("1.8.5"), ReleaseVersion.parse("1.9.0"))

        ensure_no_downgrade(SemanticVersion.parse("1.9.1"), ReleaseVersion.parse("1.9.0"))


class TestStrictReleaseType:
    """Tests for strict_release_type."""

    @pytest.mark.parametrize(
        "current,prev,expected",
        [
            ("2.0.0", "1.9.3", SemVerReleaseType.MAJOR),
            ("2.0.0-3-abcdef0-SNAPSHOT", "1.9.3", SemVerReleaseType.MAJOR),
            ("1.10.0", "1.9.3", SemVerReleaseType.MINOR),
            ("1.9.4", "1.9.3", SemVerReleaseType.PATCH),
            ("1.9.4-1-abcdef0-SNAPSHOT", "1.9.3", SemVerReleaseType.PATCH),
        ],
    )
    def test_from_version_numbers(self, current: str, prev: str, expected: SemVerReleaseType) -> None:
        """The version bump determines what strict SemVer permits."""
        assert strict_release_type(SemanticVersion.parse(current), ReleaseVersion.parse(prev)) == expected

    def test_no_previous_release(self) -> None:
        """The first release may contain anything."""
        assert strict_release_type(SemanticVersion(1, 0, 0), None) == SemVerReleaseType.MAJOR


class TestCheckChange:
    """Tests for check_change."""

    def test_major_change_rejected_under_strict_semver(self) -> None:
        """A major change without a major bump is not allowed."""
        current = SemanticVersion.parse("1.9.4-1-abcdef0-SNAPSHOT")
        prev = ReleaseVersion.parse("1.9.3")

        result = check_change(SemVerReleaseType.MAJOR, current, prev, default_rules(current))

        assert not result.allowed
        assert result.permitted == SemVerReleaseType.PATCH
        assert result.level is None
        assert "Strict SemVer" in result.explanation

    def test_patch_change_allowed(self) -> None:
        """Patch changes are always allowed on a newer version."""
        current = SemanticVersion.parse("1.9.4")
        prev = ReleaseVersion.parse("1.9.3")

        result = check_change(SemVerReleaseType.PATCH, current, prev, default_rules(current))

        assert result.allowed

    def test_minor_change_allowed_after_minor_bump(self) -> None:
        """A minor bump permits minor but not major changes."""
        current = SemanticVersion.parse("1.10.0")
        prev = ReleaseVersion.parse("1.9.3")
        rules = default_rules(current)

        assert check_change(SemVerReleaseType.MINOR, current, prev, rules).allowed
        assert not check_change(SemVerReleaseType.MAJOR, current, prev, rules).allowed

    def test_enforce_after_version_allows_major(self) -> None:
        """The escape hatch permits a major change without a major bump."""
        current = SemanticVersion.parse("1.9.4-1-abcdef0-SNAPSHOT")
        prev = ReleaseVersion.parse("1.9.3")
        rules = default_rules(current, ReleaseVersion.parse("1.9.4"))

        result = check_change(SemVerReleaseType.MAJOR, current, prev, rules)

        assert result.allowed
        assert result.level is not None
        assert result.explanation == result.level.explanation

    def test_initial_development_allows_major(self) -> None:
        """Version 0.y.z permits major changes."""
        current = SemanticVersion.parse("0.4.1")
        prev = ReleaseVersion.parse("0.4.0")

        result = check_change(SemVerReleaseType.MAJOR, current, prev, default_rules(current))

        assert result.allowed
        assert result.permitted == SemVerReleaseType.MAJOR
        assert "initial development" in result.explanation

    def test_exception_not_reported_when_bump_already_permits(self) -> None:
        """A level that grants nothing beyond the bump is not surfaced."""
        current = SemanticVersion.parse("2.0.0")
        prev = ReleaseVersion.parse("1.0.0")
        rules = default_rules(current, ReleaseVersion.parse("2.0.0"))

        result = check_change(SemVerReleaseType.MAJOR, current, prev, rules)

        assert result.allowed
        assert result.level is None
