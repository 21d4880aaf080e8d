"""Command-line interface for selective NuGet package upgrades.

Purpose
-------
Expose the upgrade flow as ``nuget-upgrade`` commands. The CLI resolves the
workspace, creates the diagnostic log, picks a selector and turns the run
result into exactly one user-facing message.

Contents
--------
* ``run`` – inventory, outdated check, selection and constrained upgrade
* ``list`` – show outdated packages without changing anything
* ``config`` – show the merged configuration
* ``info`` – show package metadata

System Role
-----------
Thin adapter over :mod:`nuget_upgrade.orchestrator`. Errors raised by the
flow are reported on standard error with exit status 1; ``--traceback``
re-raises them instead.
"""

from __future__ import annotations

import json
import locale
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from . import __init__conf__
from .config import get_log_level, get_upgrade_settings
from .config_show import display_config
from .diagnostics import DiagnosticLog
from .errors import NugetUpgradeError
from .orchestrator import UpgradeOrchestrator
from .presenter import describe_versions, present_candidates
from .schemas import CandidateSchema
from .selection import preselected, prompt_selection, select_all
from .workspace import resolve_workspace

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_workspace_option = click.option(
    "--workspace",
    "-w",
    "workspaces",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Workspace root; repeatable, the first existing directory is used. Defaults to the current directory.",
)


def _configure_logging(level_name: str | None) -> None:
    """Configure the root logger once from the option or the configuration."""
    level_name = (level_name or get_log_level()).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=LOG_FORMAT)


def _apply_collation_locale() -> None:
    """Use the user's collation order when sorting package ids."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.debug("Falling back to the C collation order", exc_info=True)


@contextmanager
def _reported_errors(ctx: click.Context) -> Iterator[None]:
    """Turn a failed run into one red message and exit status 1."""
    try:
        yield
    except NugetUpgradeError as exc:
        if ctx.obj.get("traceback"):
            raise
        click.secho(str(exc), fg="red", err=True)
        raise SystemExit(1) from exc


def _workspace_roots(workspaces: tuple[Path, ...]) -> tuple[Path, ...]:
    return workspaces or (Path.cwd(),)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command)
@click.option("--traceback/--no-traceback", default=False, help="Re-raise errors with a full traceback.")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Application log level (overrides [logging].level).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, log_level: str | None) -> None:
    """Selectively upgrade outdated NuGet packages."""
    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    _configure_logging(log_level)
    _apply_collation_locale()


@cli.command("run")
@_workspace_option
@click.option(
    "--select",
    "-s",
    "selected",
    multiple=True,
    metavar="PACKAGE_ID",
    help="Upgrade this package without prompting; repeatable.",
)
@click.option("--all", "select_everything", is_flag=True, help="Upgrade every outdated package without prompting.")
@click.pass_context
def run_command(
    ctx: click.Context,
    workspaces: tuple[Path, ...],
    selected: tuple[str, ...],
    select_everything: bool,
) -> None:
    """Check for outdated packages and upgrade the ones you pick."""
    if selected and select_everything:
        raise click.UsageError("--select and --all cannot be combined.")

    if select_everything:
        selector = select_all
    elif selected:
        selector = preselected(selected)
    else:
        selector = prompt_selection

    with _reported_errors(ctx):
        workspace = resolve_workspace(_workspace_roots(workspaces))
        log = DiagnosticLog()
        click.echo("Running NuGet package checks...")
        orchestrator = UpgradeOrchestrator(workspace=workspace, log=log, settings=get_upgrade_settings())
        report = orchestrator.run(selector)

    click.echo(report.outcome.message)


@cli.command("list")
@_workspace_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format.",
)
@click.pass_context
def list_command(ctx: click.Context, workspaces: tuple[Path, ...], output_format: str) -> None:
    """Show outdated packages without upgrading anything."""
    with _reported_errors(ctx):
        workspace = resolve_workspace(_workspace_roots(workspaces))
        orchestrator = UpgradeOrchestrator(workspace=workspace, log=DiagnosticLog(), settings=get_upgrade_settings())
        candidates = orchestrator.list_candidates()

    if output_format.lower() == "json":
        payload = [CandidateSchema.from_candidate(c, describe_versions(c)).model_dump() for c in candidates]
        click.echo(json.dumps(payload, indent=2))
        return

    if not candidates:
        click.echo("No outdated packages found.")
        return
    for item in present_candidates(candidates):
        click.echo(f"{item.label}  {item.description}")
        click.echo(f"    {item.detail}")


@cli.command("config")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format.",
)
@click.option("--section", default=None, help="Only show this section.")
@click.pass_context
def config_command(ctx: click.Context, output_format: str, section: str | None) -> None:
    """Show the merged configuration from all sources."""
    with _reported_errors(ctx):
        display_config(format=output_format, section=section)


@cli.command("info")
def info_command() -> None:
    """Print package metadata."""
    __init__conf__.print_info()


def main() -> None:
    """Console script entry point."""
    cli(prog_name=__init__conf__.shell_command)


__all__ = [
    "cli",
    "main",
]
