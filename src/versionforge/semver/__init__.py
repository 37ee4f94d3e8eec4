"""SemVer enforcement: exception rules and change checks.

Decides which class of API change (major, minor, patch) is currently permitted
and whether a declared change is allowed.
"""

from versionforge.semver.enforcement import (
    SemVerCheckResult,
    check_change,
    check_version_downgrade,
    ensure_no_downgrade,
    strict_release_type,
)
from versionforge.semver.level import (
    MAJOR_CHANGES_ALLOWED_FOR_INITIAL_DEVELOPMENT,
    SemVerEnforcementLevel,
    disabled_enforce_after_version,
)
from versionforge.semver.rules import (
    EnforceAfterVersionRule,
    InitialDevelopmentRule,
    SemVerLevelRule,
    calc_enforcement_level,
    calc_level,
    default_rules,
)

__all__ = [
    "MAJOR_CHANGES_ALLOWED_FOR_INITIAL_DEVELOPMENT",
    "EnforceAfterVersionRule",
    "InitialDevelopmentRule",
    "SemVerCheckResult",
    "SemVerEnforcementLevel",
    "SemVerLevelRule",
    "calc_enforcement_level",
    "calc_level",
    "check_change",
    "check_version_downgrade",
    "default_rules",
    "disabled_enforce_after_version",
    "ensure_no_downgrade",
    "strict_release_type",
]
