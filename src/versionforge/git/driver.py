"""Reads branch state from git history.

Release tags are ``v``-prefixed clean versions (``v1.2.3``, ``v2.0.0-rc1``).
Tags that do not parse as a release are ignored.
"""

from typing import Optional

from versionforge.errors import VersioningError
from versionforge.git.runner import GitRunner
from versionforge.observability.logging import get_logger
from versionforge.versioning.branch_state import GitBranchState, version_from_branch_state
from versionforge.versioning.version import ReleaseVersion, SemanticVersion

logger = get_logger(__name__)

TAG_PREFIX = "v"
ABBREVIATED_HASH_LENGTH = 7


def parse_release_tag(tag: str) -> Optional[ReleaseVersion]:
    """Parse a release tag such as "v1.2.3", returning None for anything else."""
    if not tag.startswith(TAG_PREFIX):
        return None
    try:
        return ReleaseVersion.parse(tag[len(TAG_PREFIX) :])
    except VersioningError:
        return None


class GitDriver:
    """Derives versions from the git repository ``runner`` operates in."""

    def __init__(self, runner: GitRunner) -> None:
        self.runner = runner

    async def head_commit(self) -> Optional[str]:
        """Abbreviated hash of HEAD, or None if there are no commits yet."""
        result = await self.runner.run(
            "rev-parse", "--verify", "--quiet", f"--short={ABBREVIATED_HASH_LENGTH}", "HEAD"
        )
        if not result.ok or not result.stdout:
            return None
        return result.stdout.lower()

    async def is_dirty(self) -> bool:
        """Whether tracked files have uncommitted changes."""
        result = (await self.runner.run("status", "--porcelain", "--untracked-files=no")).check()
        return bool(result.stdout)

    async def release_tags(self, merged_only: bool = True) -> dict[str, ReleaseVersion]:
        """Release tags reachable from HEAD, keyed by tag name."""
        args = ["tag", "--list", f"{TAG_PREFIX}*"]
        if merged_only:
            args += ["--merged", "HEAD"]
        result = (await self.runner.run(*args)).check()

        releases: dict[str, ReleaseVersion] = {}
        for tag in result.stdout.splitlines():
            tag = tag.strip()
            if not tag:
                continue
            version = parse_release_tag(tag)
            if version is None:
                logger.debug("git_tag_ignored", tag=tag)
                continue
            releases[tag] = version
        return releases

    async def tags_at_head(self) -> set[str]:
        result = (await self.runner.run("tag", "--points-at", "HEAD")).check()
        return {line.strip() for line in result.stdout.splitlines() if line.strip()}

    async def count_commits(self, revision_range: str) -> int:
        result = (await self.runner.run("rev-list", "--count", revision_range)).check()
        return int(result.stdout)

    async def branch_state(self) -> GitBranchState:
        """Read the branch state of the working directory.

        Returns:
            GitBranchState for HEAD

        Raises:
            GitError: If the working directory is not a git work tree
        """
        (await self.runner.run("rev-parse", "--is-inside-work-tree")).check()

        dirty = await self.is_dirty()
        head = await self.head_commit()
        if head is None:
            return GitBranchState(dirty=dirty)

        releases = await self.release_tags()
        if not releases:
            return GitBranchState(
                head_commit=head,
                commits_since_release=await self.count_commits("HEAD"),
                dirty=dirty,
            )

        last_tag = max(releases, key=lambda tag: releases[tag])
        at_head = await self.tags_at_head()
        earlier = [version for tag, version in releases.items() if tag not in at_head]

        state = GitBranchState(
            head_commit=head,
            last_release=releases[last_tag],
            previous_release=max(earlier) if earlier else None,
            commits_since_release=await self.count_commits(f"{last_tag}..HEAD"),
            dirty=dirty,
        )
        logger.debug(
            "git_branch_state",
            head=head,
            last_release=str(state.last_release),
            commits_since_release=state.commits_since_release,
            dirty=dirty,
        )
        return state

    async def calc_current_version(self, ignore_dirty: bool = False) -> SemanticVersion:
        """Version as determined by git history."""
        return version_from_branch_state(await self.branch_state(), ignore_dirty)
