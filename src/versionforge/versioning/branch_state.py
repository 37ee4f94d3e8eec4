"""State of the git branch a version is derived from."""

from dataclasses import dataclass
from typing import Optional

from versionforge.versioning.version import ReleaseVersion, SemanticVersion

# Version used before the first release tag exists
INITIAL_VERSION = ReleaseVersion(0, 0, 1)


@dataclass(frozen=True)
class GitBranchState:
    """Snapshot of what git history says about HEAD.

    Attributes:
        head_commit: Abbreviated hash of HEAD, None if the repository has no commits
        last_release: Newest release tag reachable from HEAD
        previous_release: Newest reachable release tag that does not point at HEAD
        commits_since_release: Commits after last_release (all commits if there is none)
        dirty: Whether the working tree has uncommitted changes to tracked files
    """

    head_commit: Optional[str] = None
    last_release: Optional[ReleaseVersion] = None
    previous_release: Optional[ReleaseVersion] = None
    commits_since_release: int = 0
    dirty: bool = False

    @property
    def has_commits(self) -> bool:
        return self.head_commit is not None

    @property
    def head_is_release(self) -> bool:
        """True if HEAD is exactly a release tag."""
        return self.last_release is not None and self.commits_since_release == 0


def version_from_branch_state(state: GitBranchState, ignore_dirty: bool = False) -> SemanticVersion:
    """Derive the current version from git history.

    - No commits: ``0.0.1-SNAPSHOT``
    - No release tags: ``0.0.1-<commits>-<hash>-SNAPSHOT``
    - HEAD on a release tag: that release
    - Commits after a release: the next patch as ``-<commits>-<hash>-SNAPSHOT``.
      After a pre-release tag (e.g. 2.0.0-rc1) the numbers stay the same,
      giving 2.0.0-<commits>-<hash>-SNAPSHOT.

    A dirty working tree adds the dirty marker unless ``ignore_dirty`` is set.

    Args:
        state: Branch state read from git
        ignore_dirty: Treat the working tree as clean

    Returns:
        Version for the current HEAD
    """
    dirty = state.dirty and not ignore_dirty

    if state.head_commit is None:
        return SemanticVersion(*INITIAL_VERSION.numbers, dirty=dirty, snapshot=True)

    release = state.last_release
    if release is None:
        return SemanticVersion(
            *INITIAL_VERSION.numbers,
            dirty=dirty,
            snapshot=True,
            commits_since_release=state.commits_since_release,
            commit_hash=state.head_commit,
        )

    if state.head_is_release:
        if not dirty:
            return release
        return SemanticVersion(
            release.major,
            release.minor,
            release.patch,
            release.identifiers,
            dirty=True,
            snapshot=True,
        )

    patch = release.patch if release.identifiers else release.patch + 1
    return SemanticVersion(
        release.major,
        release.minor,
        patch,
        dirty=dirty,
        snapshot=True,
        commits_since_release=state.commits_since_release,
        commit_hash=state.head_commit,
    )
