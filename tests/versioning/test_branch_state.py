"""Tests for deriving the current version from the branch state."""

from versionforge.versioning import (
    GitBranchState,
    ReleaseVersion,
    SemanticVersion,
    version_from_branch_state,
)


class TestVersionFromBranchState:
    """Tests for version_from_branch_state."""

    def test_no_commits(self) -> None:
        """An empty repository is an initial snapshot."""
        version = version_from_branch_state(GitBranchState())

        assert str(version) == "0.0.1-SNAPSHOT"

    def test_no_commits_dirty(self) -> None:
        """Staged changes in an empty repository are dirty."""
        version = version_from_branch_state(GitBranchState(dirty=True))

        assert str(version) == "0.0.1-dirty-SNAPSHOT"

    def test_no_release_tags(self) -> None:
        """Without tags the commit count covers all history."""
        state = GitBranchState(head_commit="abcdef0", commits_since_release=12)

        assert str(version_from_branch_state(state)) == "0.0.1-12-abcdef0-SNAPSHOT"

    def test_head_on_release_tag(self) -> None:
        """HEAD exactly on a tag is that release."""
        release = ReleaseVersion(1, 2, 3)
        state = GitBranchState(head_commit="abcdef0", last_release=release)

        version = version_from_branch_state(state)

        assert version == release
        assert not version.is_dirty

    def test_head_on_release_tag_dirty(self) -> None:
        """Uncommitted changes on a tag give a dirty release version."""
        state = GitBranchState(
            head_commit="abcdef0", last_release=ReleaseVersion(1, 2, 3), dirty=True
        )

        assert str(version_from_branch_state(state)) == "1.2.3-dirty-SNAPSHOT"

    def test_ignore_dirty(self) -> None:
        """ignore_dirty drops the dirty marker."""
        state = GitBranchState(
            head_commit="abcdef0", last_release=ReleaseVersion(1, 2, 3), dirty=True
        )

        assert str(version_from_branch_state(state, ignore_dirty=True)) == "1.2.3"

    def test_commits_after_release(self) -> None:
        """Commits after a release give a snapshot of the next patch."""
        state = GitBranchState(
            head_commit="abcdef0",
            last_release=ReleaseVersion(1, 2, 3),
            previous_release=ReleaseVersion(1, 2, 3),
            commits_since_release=4,
            dirty=True,
        )

        version = version_from_branch_state(state)

        assert str(version) == "1.2.4-4-abcdef0-dirty-SNAPSHOT"
        assert version > state.last_release

    def test_commits_after_prerelease(self) -> None:
        """Commits after a pre-release stay on the same numbers."""
        state = GitBranchState(
            head_commit="abcdef0",
            last_release=ReleaseVersion.parse("2.0.0-rc1"),
            commits_since_release=2,
        )

        version = version_from_branch_state(state)

        assert str(version) == "2.0.0-2-abcdef0-SNAPSHOT"
        assert version > SemanticVersion.parse("2.0.0-rc1")
        assert version < SemanticVersion.parse("2.0.0")

    def test_branch_state_properties(self) -> None:
        """has_commits and head_is_release reflect the state."""
        assert not GitBranchState().has_commits
        on_tag = GitBranchState(head_commit="abcdef0", last_release=ReleaseVersion(1, 0, 0))
        assert on_tag.has_commits
        assert on_tag.head_is_release
        assert not GitBranchState(head_commit="abcdef0", commits_since_release=0).head_is_release
