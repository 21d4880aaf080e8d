"""The dotnet invocations an upgrade run issues.

Each builder returns a :class:`CommandSpec`; the process runner executes it
and the diagnostic log echoes :attr:`CommandSpec.display`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .config import UpgradeSettings


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Program and argument list of one external call."""

    program: str
    args: tuple[str, ...] = ()

    @property
    def display(self) -> str:
        """``"<program> <args...>"`` as echoed to the diagnostic log."""
        return " ".join((self.program, *self.args))


def list_packages(settings: UpgradeSettings) -> CommandSpec:
    """Baseline inventory: ``dotnet list package``."""
    return CommandSpec(settings.dotnet, ("list", "package"))


def list_outdated(settings: UpgradeSettings) -> CommandSpec:
    """Outdated check with a JSON report."""
    return CommandSpec(settings.dotnet, ("list", "package", "--outdated", "--format", "json"))


def probe_outdated_tool(settings: UpgradeSettings) -> CommandSpec:
    """Version query that succeeds only when dotnet-outdated-tool is installed."""
    return CommandSpec(settings.dotnet, ("outdated", "--version"))


def install_outdated_tool(settings: UpgradeSettings) -> CommandSpec:
    """Global install of dotnet-outdated-tool."""
    return CommandSpec(settings.dotnet, ("tool", "install", "--global", settings.outdated_tool_package))


def upgrade_packages(settings: UpgradeSettings, package_ids: Iterable[str]) -> CommandSpec:
    """``dotnet outdated --upgrade`` restricted by one ``--include`` per id."""
    args = ["outdated", "--upgrade"]
    for package_id in package_ids:
        args.extend(("--include", package_id))
    return CommandSpec(settings.dotnet, tuple(args))


__all__ = [
    "CommandSpec",
    "install_outdated_tool",
    "list_outdated",
    "list_packages",
    "probe_outdated_tool",
    "upgrade_packages",
]
