"""versionforge - semantic versions derived from git, with SemVer enforcement rules."""

__version__ = "0.1.0"
