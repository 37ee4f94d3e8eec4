"""Enforcement levels: which kind of API change is currently permitted, and why."""

from pydantic import BaseModel, ConfigDict, Field

from versionforge.versioning.release_type import SemVerReleaseType
from versionforge.versioning.version import ReleaseVersion


class SemVerEnforcementLevel(BaseModel):
    """Changes up to and including ``release_type`` are permitted for the stated reason.

    Attributes:
        release_type: Loosest kind of change currently permitted
        explanation: Human-readable reason the change is permitted
    """

    model_config = ConfigDict(frozen=True)

    release_type: SemVerReleaseType = Field(..., description="Loosest permitted change")
    explanation: str = Field(..., min_length=1, description="Why the change is permitted")


# See http://semver.org/#spec-item-4
MAJOR_CHANGES_ALLOWED_FOR_INITIAL_DEVELOPMENT = SemVerEnforcementLevel(
    release_type=SemVerReleaseType.MAJOR,
    explanation=(
        "Major version zero (0.y.z) is for initial development. Anything may change at any time. "
        "The public API should not be considered stable."
    ),
)


def disabled_enforce_after_version(enforce_after_version: ReleaseVersion) -> SemVerEnforcementLevel:
    """Level granted while the version has not passed ``enforce_after_version``."""
    return SemVerEnforcementLevel(
        release_type=SemVerReleaseType.MAJOR,
        explanation=(
            f"enforce_after_version := {enforce_after_version} was used to allow major changes "
            "until the specified version."
        ),
    )
