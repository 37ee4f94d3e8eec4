"""Computes the project version from configuration and git history.

Enforces Semantic Versioning, plus support for identifying "x.y.z-SNAPSHOT"
and "x.y.z-dirty-SNAPSHOT" builds.

The version is built in three steps:

1. Start with the version from git history.
2. Apply the configured major/minor/patch release.
3. Apply the snapshot lower bound.

A ``version_override`` replaces all three steps.
"""

from dataclasses import dataclass, field

from versionforge.config import VersioningConfig
from versionforge.git.driver import GitDriver
from versionforge.git.fetcher import FetchResult, fetch_remote_tags
from versionforge.observability.logging import get_logger
from versionforge.versioning.branch_state import GitBranchState, version_from_branch_state
from versionforge.versioning.version import SemanticVersion

logger = get_logger(__name__)


def compute_semantic_version(
    config: VersioningConfig,
    version_from_history: SemanticVersion,
    branch_state: GitBranchState,
) -> SemanticVersion:
    """Apply the configured override, release and lower bound.

    Args:
        config: Versioning configuration
        version_from_history: Version as determined by git history
        branch_state: Branch state the history version was derived from

    Returns:
        The version to build
    """
    if config.version_override is not None:
        return config.version_override

    version = version_from_history
    if config.release_type is not None:
        version = version.release(config.release_type)
    if config.snapshot_lower_bound is not None:
        version = version.lower_bound(config.snapshot_lower_bound, branch_state)
    return version


def is_clean_release(version: SemanticVersion) -> bool:
    """Whether ``version`` is a clean release, i.e. neither dirty nor a snapshot."""
    return not version.is_dirty


def render_version_report(
    config: VersioningConfig,
    version_from_history: SemanticVersion,
    version: SemanticVersion,
) -> str:
    """Human-readable summary of how the version was determined."""
    lines = [f"Version as determined by git history: {version_from_history}"]
    if config.version_override is not None:
        lines.append(f"Version as determined by override: {config.version_override}")
    if config.release_type is not None:
        lines.append(f"Release type: {config.release_type}")
    if config.snapshot_lower_bound is not None:
        lines.append(f"Snapshot lower bound: {config.snapshot_lower_bound}")
    lines.append(f"Successfully determined version: {version}")
    return "\n".join(lines)


@dataclass(frozen=True)
class VersionResolution:
    """Everything learned while resolving the version of a repository.

    Attributes:
        config: Configuration used
        branch_state: Branch state read from git
        version_from_history: Version as determined by git history
        semantic_version: Final version
        fetch_results: Results of fetching remote tags (empty if not enabled)
    """

    config: VersioningConfig
    branch_state: GitBranchState
    version_from_history: SemanticVersion
    semantic_version: SemanticVersion
    fetch_results: list[FetchResult] = field(default_factory=list)

    @property
    def is_clean_release(self) -> bool:
        return is_clean_release(self.semantic_version)

    def report(self) -> str:
        return render_version_report(self.config, self.version_from_history, self.semantic_version)


async def resolve_version(config: VersioningConfig, driver: GitDriver) -> VersionResolution:
    """Resolve the version of the repository ``driver`` reads.

    Fetches remote tags first when ``config.auto_fetch`` is set; the fetch
    outcome is only logged.

    Args:
        config: Versioning configuration
        driver: Git driver for the repository

    Returns:
        VersionResolution with the final version

    Raises:
        GitError: If git history cannot be read
    """
    fetch_results: list[FetchResult] = []
    if config.auto_fetch:
        logger.info("fetching_remote_tags", remotes=config.auto_fetch_remotes)
        fetch_results = await fetch_remote_tags(
            driver.runner, config.auto_fetch_remotes, config.auto_fetch_timeout
        )
    else:
        logger.info("skipping_remote_tag_fetch", hint="set VERSIONFORGE_AUTO_FETCH=true to enable")

    branch_state = await driver.branch_state()
    version_from_history = version_from_branch_state(branch_state, config.ignore_dirty)
    logger.info("version_from_git", version=str(version_from_history))

    if config.version_override is not None:
        logger.info("version_override_set", version_override=str(config.version_override))
    if config.release_type is not None:
        logger.info("release_type_set", release=config.release_type.value)
    if config.snapshot_lower_bound is not None:
        logger.info("snapshot_lower_bound_set", bound=str(config.snapshot_lower_bound))

    semantic_version = compute_semantic_version(config, version_from_history, branch_state)
    resolution = VersionResolution(
        config=config,
        branch_state=branch_state,
        version_from_history=version_from_history,
        semantic_version=semantic_version,
        fetch_results=fetch_results,
    )
    logger.info(
        "version_resolved",
        version=str(semantic_version),
        is_clean_release=resolution.is_clean_release,
    )
    return resolution
