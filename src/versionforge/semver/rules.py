"""Rules that grant exceptions to strict SemVer enforcement, and their composition.

Each rule inspects the current version and optionally yields a
SemVerEnforcementLevel. ``calc_enforcement_level`` evaluates all configured
rules and keeps the most permissive result; ``None`` means strict SemVer
applies with no exception.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from versionforge.observability.logging import get_logger
from versionforge.semver.level import (
    MAJOR_CHANGES_ALLOWED_FOR_INITIAL_DEVELOPMENT,
    SemVerEnforcementLevel,
    disabled_enforce_after_version,
)
from versionforge.versioning.version import ReleaseVersion, SemanticVersion

logger = get_logger(__name__)


@dataclass(frozen=True)
class InitialDevelopmentRule:
    """Allows major changes while the version is 0.y.z.

    See http://semver.org/#spec-item-4
    """

    current: SemanticVersion

    def calc_level(self) -> Optional[SemVerEnforcementLevel]:
        if self.current.is_initial_dev_version:
            return MAJOR_CHANGES_ALLOWED_FOR_INITIAL_DEVELOPMENT
        return None


@dataclass(frozen=True)
class EnforceAfterVersionRule:
    """Allows major changes until the current version passes ``enforce_after_version``."""

    current: SemanticVersion
    enforce_after_version: Optional[ReleaseVersion] = None

    def calc_level(self) -> Optional[SemVerEnforcementLevel]:
        if self.enforce_after_version is not None and self.current <= self.enforce_after_version:
            return disabled_enforce_after_version(self.enforce_after_version)
        return None


SemVerLevelRule = Union[InitialDevelopmentRule, EnforceAfterVersionRule]


def calc_level(rule: SemVerLevelRule) -> Optional[SemVerEnforcementLevel]:
    """Evaluate a single rule.

    Raises:
        TypeError: If ``rule`` is not a known rule variant
    """
    if isinstance(rule, (InitialDevelopmentRule, EnforceAfterVersionRule)):
        return rule.calc_level()
    raise TypeError(f"Unknown SemVer level rule: {type(rule).__name__}")


def default_rules(
    current: SemanticVersion, enforce_after_version: Optional[ReleaseVersion] = None
) -> list[SemVerLevelRule]:
    """Build the standard rule list for ``current`` in evaluation order."""
    return [
        InitialDevelopmentRule(current),
        EnforceAfterVersionRule(current, enforce_after_version),
    ]


def calc_enforcement_level(rules: Iterable[SemVerLevelRule]) -> Optional[SemVerEnforcementLevel]:
    """Compose rules into a single effective enforcement level.

    The level with the greatest release type wins (MAJOR > MINOR > PATCH). On a
    tie the first rule in configuration order wins. Explanations are never
    merged; only the winner's is surfaced.

    Args:
        rules: Configured rules, in configuration order

    Returns:
        Winning level, or None if no rule applies (strict SemVer)
    """
    winner: Optional[SemVerEnforcementLevel] = None
    for rule in rules:
        level = calc_level(rule)
        if level is None:
            continue
        logger.debug("semver_rule_applied", rule=type(rule).__name__, release_type=level.release_type.value)
        if winner is None or level.release_type > winner.release_type:
            winner = level
    return winner
