"""Command line interface for versionforge."""
