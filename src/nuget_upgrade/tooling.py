"""Make sure ``dotnet outdated`` is available before upgrading.

Probing and installing is an explicit step of the upgrade flow, issued only
after the user has selected packages. Running it twice is harmless: the
second call finds the tool already present.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .commands import install_outdated_tool, probe_outdated_tool
from .errors import CommandFailedError, ToolInstallError
from .models import EnsureOutcome

if TYPE_CHECKING:
    from pathlib import Path

    from .config import UpgradeSettings
    from .diagnostics import DiagnosticLog
    from .process import CommandRunner

logger = logging.getLogger(__name__)


async def ensure_outdated_tool(
    runner: CommandRunner,
    log: DiagnosticLog,
    cwd: Path | str,
    settings: UpgradeSettings,
) -> EnsureOutcome:
    """Probe for dotnet-outdated-tool and install it globally when missing.

    Args:
        runner: Process boundary.
        log: Diagnostic log for the install notice.
        cwd: Workspace directory.
        settings: Toolchain settings.

    Returns:
        ``ALREADY_PRESENT`` when the probe succeeds, ``INSTALLED`` after a
        successful install.

    Raises:
        ToolInstallError: If the install command exits non-zero.
    """
    probe = await runner.run(probe_outdated_tool(settings), cwd)
    if probe.ok:
        logger.debug("%s is already installed", settings.outdated_tool_package)
        return EnsureOutcome.ALREADY_PRESENT

    log.append_line(f"{settings.outdated_tool_package} not found. Installing globally...")
    install_command = install_outdated_tool(settings)
    install = await runner.run(install_command, cwd)
    if not install.ok:
        log.append_line(f"{install_command.display} exited with {install.exit_code}.")
        message = f"Failed to install {settings.outdated_tool_package}. See output for details."
        raise ToolInstallError(message) from CommandFailedError(install_command, install.exit_code)

    logger.info("Installed %s", settings.outdated_tool_package)
    return EnsureOutcome.INSTALLED


__all__ = ["ensure_outdated_tool"]
