"""Main CLI entry point for versionforge.

Provides commands for printing the computed version and checking declared
API changes against SemVer enforcement rules.
"""

import asyncio
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.table import Table

from versionforge import __version__
from versionforge.config import VersioningConfig, load_config_from_env
from versionforge.errors import VersioningError
from versionforge.git.driver import GitDriver
from versionforge.git.runner import GitRunner
from versionforge.observability.logging import bind_repository, clear_repository, setup_logging
from versionforge.semver.enforcement import check_change, check_version_downgrade
from versionforge.semver.rules import default_rules
from versionforge.versioning.release_type import SemVerReleaseType
from versionforge.versioning.service import VersionResolution, resolve_version

console = Console()


def _load_config(options: dict[str, Any]) -> VersioningConfig:
    """Load configuration from the environment with CLI flags taking precedence.

    Raises:
        click.ClickException: If the configuration is invalid
    """
    try:
        return load_config_from_env(**options)
    except VersioningError as e:
        raise click.ClickException(e.message) from e
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


def _resolve(ctx: click.Context) -> VersionResolution:
    config = _load_config(ctx.obj["options"])
    driver = GitDriver(GitRunner(ctx.obj["repo"]))
    try:
        return asyncio.run(resolve_version(config, driver))
    except VersioningError as e:
        raise click.ClickException(e.message) from e


@click.group()
@click.version_option(version=__version__, prog_name="versionforge")
@click.option(
    "--repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Git repository to version (defaults to the current directory)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Logging level",
)
@click.option("--json-logs/--console-logs", default=False, help="Log format")
@click.option("--release", "release_type", type=str, help="Release type: major, minor or patch")
@click.option("--version-override", type=str, help="Exact clean release version to use")
@click.option("--lower-bound", "snapshot_lower_bound", type=str, help="Snapshot lower bound, e.g. 2.0.0")
@click.option(
    "--enforce-after", "enforce_after_version", type=str, help="Allow major changes until this version"
)
@click.option("--ignore-dirty", is_flag=True, default=False, help="Never mark the version dirty")
@click.option("--auto-fetch", is_flag=True, default=False, help="Fetch tags from remotes first")
@click.pass_context
def cli(
    ctx: click.Context,
    repo: Path,
    log_level: str,
    json_logs: bool,
    release_type: Optional[str],
    version_override: Optional[str],
    snapshot_lower_bound: Optional[str],
    enforce_after_version: Optional[str],
    ignore_dirty: bool,
    auto_fetch: bool,
) -> None:
    """versionforge - semantic versions from git history, with SemVer enforcement."""
    setup_logging(log_level=log_level, json_logs=json_logs)
    bind_repository(str(repo))
    ctx.call_on_close(clear_repository)

    ctx.ensure_object(dict)
    ctx.obj["repo"] = repo
    ctx.obj["options"] = {
        "release_type": release_type,
        "version_override": version_override,
        "snapshot_lower_bound": snapshot_lower_bound,
        "enforce_after_version": enforce_after_version,
        # Flags only override the environment when set
        "ignore_dirty": True if ignore_dirty else None,
        "auto_fetch": True if auto_fetch else None,
    }


@cli.command(name="version")
@click.pass_context
def show_version(ctx: click.Context) -> None:
    """Print the computed version.

    Examples:
        versionforge version
        versionforge --release minor version
    """
    resolution = _resolve(ctx)
    click.echo(str(resolution.semantic_version))


@cli.command(name="print")
@click.pass_context
def print_report(ctx: click.Context) -> None:
    """Print how the version was determined."""
    resolution = _resolve(ctx)
    console.print(resolution.report(), highlight=False)


@cli.command(name="is-clean")
@click.pass_context
def is_clean(ctx: click.Context) -> None:
    """Print whether the version is a clean release; exit 1 if it is not."""
    resolution = _resolve(ctx)
    click.echo("true" if resolution.is_clean_release else "false")
    if not resolution.is_clean_release:
        ctx.exit(1)


@cli.command(name="check")
@click.option("--change", required=True, help="Kind of API change being made: major, minor or patch")
@click.pass_context
def check(ctx: click.Context, change: str) -> None:
    """Check that the version moved forward and the declared change is permitted.

    Exits with a non-zero status on a version downgrade or a disallowed change.

    Examples:
        versionforge check --change minor
        versionforge --enforce-after 2.0.0 check --change major
    """
    try:
        declared = SemVerReleaseType.from_string(change)
    except VersioningError as e:
        raise click.ClickException(e.message) from e

    resolution = _resolve(ctx)
    current = resolution.semantic_version
    prev = resolution.branch_state.previous_release

    downgrade = check_version_downgrade(current, prev)
    if downgrade is not None:
        raise click.ClickException(downgrade.message)

    rules = default_rules(current, resolution.config.enforce_after_version)
    result = check_change(declared, current, prev, rules)

    table = Table(title="SemVer check")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Version", str(current))
    table.add_row("Previous release", str(prev) if prev else "-")
    table.add_row("Declared change", str(result.declared))
    table.add_row("Permitted change", str(result.permitted))
    table.add_row("Allowed", "[green]yes[/green]" if result.allowed else "[red]no[/red]")
    table.add_row("Reason", result.explanation)
    console.print(table)

    if not result.allowed:
        ctx.exit(1)


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
