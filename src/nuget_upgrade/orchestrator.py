"""Sequence the dotnet calls of a selective upgrade run.

Purpose
-------
Drive one run from inventory to constrained upgrade, stopping at the first
failing step:

1. ``dotnet list package`` (inventory, streamed to the diagnostic log)
2. ``dotnet list package --outdated --format json`` (captured silently)
3. extract and normalize the JSON payload
4. stop when nothing is outdated
5. ask the selector which packages to upgrade; stop when nothing is chosen
6. ensure dotnet-outdated-tool is installed
7. ``dotnet outdated --upgrade --include <id> ...``

Contents
--------
* :class:`UpgradeOrchestrator` - stateful runner bound to one workspace
* :func:`select_payload` - stdout-else-stderr payload choice
* :func:`run_upgrade` - synchronous convenience wrapper

System Role
-----------
The central component that coordinates all other modules. Fatal failures are
raised as :class:`~nuget_upgrade.errors.NugetUpgradeError` subclasses after a
matching line was written to the diagnostic log; success states are returned
as a :class:`~nuget_upgrade.models.RunReport`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from . import commands
from .config import UpgradeSettings
from .errors import CommandFailedError, PayloadEmptyError, PayloadParseError
from .inventory import parse_outdated_packages
from .models import CommandResult, RunOutcome, RunReport, UpgradeCandidate
from .presenter import filter_selection, present_candidates
from .process import ProcessRunner
from .tooling import ensure_outdated_tool

if TYPE_CHECKING:
    from .commands import CommandSpec
    from .diagnostics import DiagnosticLog
    from .process import CommandRunner
    from .selection import Selector

logger = logging.getLogger(__name__)

OUTDATED_HINT = "Update your .NET SDK or see output for details."
SEE_OUTPUT_HINT = "See output for details."


def select_payload(result: CommandResult) -> str:
    """Pick the JSON payload from the outdated-check output.

    Standard output wins when it holds anything but whitespace; otherwise
    standard error is used, because some SDK versions write the report there.

    Raises:
        PayloadEmptyError: If both streams are blank.
    """
    payload = result.stdout if result.stdout.strip() else result.stderr
    if not payload.strip():
        raise PayloadEmptyError("No JSON output received from dotnet list package --outdated.")
    return payload


@dataclass
class UpgradeOrchestrator:
    """Runs the selective upgrade flow in one workspace.

    Attributes:
        workspace: Directory every command runs in.
        log: Diagnostic log shared by all calls of the run.
        settings: Toolchain settings.
        runner: Process boundary; defaults to a :class:`ProcessRunner` on ``log``.
    """

    workspace: Path
    log: DiagnosticLog
    settings: UpgradeSettings = field(default_factory=UpgradeSettings)
    runner: CommandRunner | None = None
    _runner: CommandRunner = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Bind the default process runner to the diagnostic log."""
        if self.runner is None:
            self.runner = ProcessRunner(self.log)
        self._runner = self.runner

    async def _run(self, command: CommandSpec, **echo: bool) -> CommandResult:
        return await self._runner.run(command, self.workspace, **echo)

    async def _run_checked(self, command: CommandSpec, hint: str = SEE_OUTPUT_HINT, **echo: bool) -> CommandResult:
        result = await self._run(command, **echo)
        if not result.ok:
            self.log.append_line(f"{command.display} exited with {result.exit_code}.")
            raise CommandFailedError(command, result.exit_code, hint)
        return result

    def _parse(self, payload: str) -> list[UpgradeCandidate]:
        try:
            return parse_outdated_packages(payload)
        except PayloadParseError:
            self.log.append_line("Failed to parse JSON. Raw output:")
            self.log.append_line(payload)
            raise

    async def collect_candidates(self) -> list[UpgradeCandidate]:
        """Run the inventory and outdated check and normalize the report.

        Returns:
            Outdated packages sorted by id; empty when nothing is outdated.

        Raises:
            CommandFailedError: If either listing command fails.
            PayloadEmptyError: If the outdated check printed nothing.
            PayloadParseError: If its output is not valid JSON.
        """
        logger.info("Collecting outdated packages in %s", self.workspace)
        await self._run_checked(commands.list_packages(self.settings))

        outdated = await self._run_checked(
            commands.list_outdated(self.settings),
            OUTDATED_HINT,
            echo_stdout=False,
            echo_stderr=False,
        )
        try:
            payload = select_payload(outdated)
        except PayloadEmptyError as exc:
            self.log.append_line(str(exc))
            raise

        candidates = self._parse(payload)
        logger.info("Found %d outdated packages", len(candidates))
        return candidates

    async def run_async(self, selector: Selector) -> RunReport:
        """Run the whole flow, asking ``selector`` which packages to upgrade.

        Args:
            selector: Receives the selection items and returns the chosen
                labels, or None when the user cancelled.

        Returns:
            Report of the success state the run ended in.

        Raises:
            NugetUpgradeError: On the first failing step.
        """
        candidates = await self.collect_candidates()
        if not candidates:
            self.log.append_line(RunOutcome.NO_OUTDATED_PACKAGES.message)
            return RunReport(outcome=RunOutcome.NO_OUTDATED_PACKAGES)

        labels = selector(present_candidates(candidates))
        selected = filter_selection(candidates, labels or ())
        if not selected:
            self.log.append_line(RunOutcome.NOTHING_SELECTED.message)
            return RunReport(outcome=RunOutcome.NOTHING_SELECTED, candidates=candidates)

        outcome = await ensure_outdated_tool(self._runner, self.log, self.workspace, self.settings)
        logger.info("dotnet-outdated-tool: %s", outcome.value)

        package_ids = [candidate.id for candidate in selected]
        await self._run_checked(commands.upgrade_packages(self.settings, package_ids))
        logger.info("Upgraded %d packages", len(package_ids))
        return RunReport(outcome=RunOutcome.UPGRADED, candidates=candidates, selected=package_ids)

    def run(self, selector: Selector) -> RunReport:
        """Synchronous wrapper for run_async."""
        return asyncio.run(self.run_async(selector))

    def list_candidates(self) -> list[UpgradeCandidate]:
        """Synchronous wrapper for collect_candidates."""
        return asyncio.run(self.collect_candidates())


def run_upgrade(
    workspace: Path | str,
    selector: Selector,
    *,
    log: DiagnosticLog,
    settings: UpgradeSettings | None = None,
) -> RunReport:
    """Run a selective upgrade in ``workspace``.

    Args:
        workspace: Resolved workspace directory.
        selector: Chooses the packages to upgrade.
        log: Diagnostic log for the run.
        settings: Toolchain settings; built-in defaults when None.

    Returns:
        Report of the success state the run ended in.
    """
    orchestrator = UpgradeOrchestrator(
        workspace=Path(workspace),
        log=log,
        settings=settings or UpgradeSettings(),
    )
    return orchestrator.run(selector)


__all__ = [
    "OUTDATED_HINT",
    "UpgradeOrchestrator",
    "run_upgrade",
    "select_payload",
]
