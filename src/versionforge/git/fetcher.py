"""Fetches tags from git remotes so history reflects the latest releases."""

import asyncio
from dataclasses import dataclass
from typing import Sequence

from versionforge.errors import GitError
from versionforge.git.runner import GitRunner
from versionforge.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of fetching tags from one remote.

    Attributes:
        remote: Remote name
        success: Whether the fetch completed successfully
        timed_out: Whether the fetch was killed after the timeout
        message: git output or error description
    """

    remote: str
    success: bool
    timed_out: bool = False
    message: str = ""


async def _fetch_remote(runner: GitRunner, remote: str, timeout: float) -> FetchResult:
    try:
        result = await runner.run("fetch", "--tags", remote, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("remote_fetch_timed_out", remote=remote, timeout=timeout)
        return FetchResult(remote=remote, success=False, timed_out=True, message=f"timed out after {timeout}s")
    except GitError as e:
        logger.warning("remote_fetch_failed", remote=remote, error=e.message)
        return FetchResult(remote=remote, success=False, message=e.message)

    if not result.ok:
        logger.warning("remote_fetch_failed", remote=remote, stderr=result.stderr)
        return FetchResult(remote=remote, success=False, message=result.stderr)

    logger.info("remote_fetch_succeeded", remote=remote)
    return FetchResult(remote=remote, success=True, message=result.stdout or result.stderr)


async def fetch_remote_tags(
    runner: GitRunner, remotes: Sequence[str], timeout: float
) -> list[FetchResult]:
    """Fetch tags from each configured remote that exists, concurrently.

    Failures and timeouts are reported in the results, never raised.

    Args:
        runner: Git runner for the repository
        remotes: Remote names to fetch from, e.g. ["upstream", "origin"]
        timeout: Per-remote timeout in seconds

    Returns:
        One FetchResult per existing remote, in ``remotes`` order
    """
    try:
        listing = await runner.run("remote")
    except GitError as e:
        logger.warning("remote_list_failed", error=e.message)
        return []
    if not listing.ok:
        logger.warning("remote_list_failed", stderr=listing.stderr)
        return []

    existing = set(listing.stdout.split())
    selected = [remote for remote in remotes if remote in existing]
    skipped = [remote for remote in remotes if remote not in existing]
    if skipped:
        logger.debug("remote_fetch_skipped", remotes=skipped)

    return list(await asyncio.gather(*(_fetch_remote(runner, r, timeout) for r in selected)))
