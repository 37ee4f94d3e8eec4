"""Checks run before publishing: version downgrades and declared API changes."""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from versionforge.errors import VersionDowngradeError
from versionforge.observability.logging import get_logger
from versionforge.semver.level import SemVerEnforcementLevel
from versionforge.semver.rules import SemVerLevelRule, calc_enforcement_level
from versionforge.versioning.release_type import SemVerReleaseType
from versionforge.versioning.version import ReleaseVersion, SemanticVersion

logger = get_logger(__name__)


class SemVerCheckResult(BaseModel):
    """Outcome of checking a declared change against the current version.

    Attributes:
        declared: Kind of change being made
        permitted: Loosest kind of change currently permitted
        allowed: Whether the declared change is permitted
        explanation: Why ``permitted`` is what it is
        level: Exception level that raised ``permitted`` above strict SemVer, if any
    """

    model_config = ConfigDict(frozen=True)

    declared: SemVerReleaseType
    permitted: SemVerReleaseType
    allowed: bool
    explanation: str
    level: Optional[SemVerEnforcementLevel] = Field(default=None)


def check_version_downgrade(
    current: SemanticVersion, prev: Optional[ReleaseVersion]
) -> Optional[VersionDowngradeError]:
    """Check that ``current`` is strictly newer than the previous release.

    Args:
        current: Newly computed version
        prev: Previously released version, if any

    Returns:
        VersionDowngradeError if prev >= current, otherwise None
    """
    if prev is not None and prev >= current:
        return VersionDowngradeError(current=current, prev=prev)
    return None


def ensure_no_downgrade(current: SemanticVersion, prev: Optional[ReleaseVersion]) -> None:
    """Raise VersionDowngradeError if ``current`` is not newer than ``prev``."""
    error = check_version_downgrade(current, prev)
    if error is not None:
        logger.error("version_downgrade", current=str(current), prev=str(prev))
        raise error


def strict_release_type(
    current: SemanticVersion, prev_release: Optional[ReleaseVersion]
) -> SemVerReleaseType:
    """What strict SemVer permits based on the version numbers alone.

    A major bump over the previous release permits major changes, a minor bump
    permits minor changes, anything else only patch changes. Without a
    previous release there is no published API to break.
    """
    if prev_release is None or current.major > prev_release.major:
        return SemVerReleaseType.MAJOR
    if current.major == prev_release.major and current.minor > prev_release.minor:
        return SemVerReleaseType.MINOR
    return SemVerReleaseType.PATCH


def _strict_explanation(
    permitted: SemVerReleaseType, current: SemanticVersion, prev_release: Optional[ReleaseVersion]
) -> str:
    if prev_release is None:
        return "No previous release to compare against; any change is permitted."
    if permitted == SemVerReleaseType.MAJOR:
        return f"{current} increments the major version of {prev_release}."
    if permitted == SemVerReleaseType.MINOR:
        return f"{current} increments the minor version of {prev_release}."
    return (
        f"Strict SemVer: {current} does not increment the major or minor version of "
        f"{prev_release}, so only patch changes are permitted."
    )


def check_change(
    declared: SemVerReleaseType,
    current: SemanticVersion,
    prev_release: Optional[ReleaseVersion],
    rules: Iterable[SemVerLevelRule],
) -> SemVerCheckResult:
    """Decide whether a declared change is currently permitted.

    The permitted change is the greater of what the version numbers allow and
    what the exception rules grant.

    Args:
        declared: Kind of change being made
        current: Current version
        prev_release: Previous release, if any
        rules: Exception rules in configuration order

    Returns:
        SemVerCheckResult describing the decision
    """
    permitted = strict_release_type(current, prev_release)
    explanation = _strict_explanation(permitted, current, prev_release)

    level = calc_enforcement_level(rules)
    if level is not None and level.release_type > permitted:
        permitted = level.release_type
        explanation = level.explanation
    else:
        level = None

    result = SemVerCheckResult(
        declared=declared,
        permitted=permitted,
        allowed=declared <= permitted,
        explanation=explanation,
        level=level,
    )
    logger.info(
        "semver_change_checked",
        declared=declared.value,
        permitted=permitted.value,
        allowed=result.allowed,
        current=str(current),
        prev=str(prev_release) if prev_release else None,
    )
    return result
