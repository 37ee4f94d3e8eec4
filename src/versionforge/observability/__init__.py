"""Observability module: structured logging."""

from versionforge.observability.logging import (
    bind_repository,
    clear_repository,
    get_logger,
    setup_logging,
)

__all__ = [
    "bind_repository",
    "clear_repository",
    "get_logger",
    "setup_logging",
]
