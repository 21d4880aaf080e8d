"""Exception hierarchy for fatal upgrade-run failures.

Every class carries the single user-facing message the CLI shows when a run
aborts. Terminal success states (nothing outdated, nothing selected) are not
exceptions; see :class:`nuget_upgrade.models.RunOutcome`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .commands import CommandSpec


class NugetUpgradeError(Exception):
    """Base class for errors that terminate an upgrade run."""


class WorkspaceError(NugetUpgradeError):
    """No workspace directory is available to run the toolchain in."""


class CommandFailedError(NugetUpgradeError):
    """An external command exited with a non-zero status.

    Attributes:
        command: The command that failed.
        exit_code: Its exit status (1 when the process could not start).
    """

    def __init__(self, command: CommandSpec, exit_code: int, hint: str | None = None) -> None:
        self.command = command
        self.exit_code = exit_code
        message = f"{command.display} failed."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class PayloadEmptyError(NugetUpgradeError):
    """The outdated-check produced no output on either stream."""


class PayloadParseError(NugetUpgradeError):
    """The outdated-check output is not a parseable JSON document.

    Attributes:
        reason: The underlying decoder message.
        payload: The raw text that failed to parse.
    """

    def __init__(self, reason: str, payload: str) -> None:
        self.reason = reason
        self.payload = payload
        super().__init__(f"Failed to parse outdated package list: {reason}")


class ToolInstallError(NugetUpgradeError):
    """dotnet-outdated-tool was missing and could not be installed."""


__all__ = [
    "CommandFailedError",
    "NugetUpgradeError",
    "PayloadEmptyError",
    "PayloadParseError",
    "ToolInstallError",
    "WorkspaceError",
]
