"""Git collaborators: branch state, remote tag fetching, command execution."""

from versionforge.git.driver import GitDriver, parse_release_tag
from versionforge.git.fetcher import FetchResult, fetch_remote_tags
from versionforge.git.runner import GitCommandResult, GitRunner

__all__ = [
    "FetchResult",
    "GitCommandResult",
    "GitDriver",
    "GitRunner",
    "fetch_remote_tags",
    "parse_release_tag",
]
