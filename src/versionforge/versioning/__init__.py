"""Semantic version model and version computation.

Provides semantic version parsing, ordering and transforms, plus the flow that
turns git history and configuration into the version to build.
"""

from versionforge.versioning.branch_state import (
    INITIAL_VERSION,
    GitBranchState,
    version_from_branch_state,
)
from versionforge.versioning.release_type import SemVerReleaseType
from versionforge.versioning.version import (
    LowerBound,
    ReleaseVersion,
    SemanticVersion,
    VersionQualifier,
)

__all__ = [
    "INITIAL_VERSION",
    "GitBranchState",
    "LowerBound",
    "ReleaseVersion",
    "SemVerReleaseType",
    "SemanticVersion",
    "VersionQualifier",
    "version_from_branch_state",
]
