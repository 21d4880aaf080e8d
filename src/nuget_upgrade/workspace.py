"""Resolve the directory the dotnet toolchain runs in."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import WorkspaceError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def resolve_workspace(roots: Iterable[Path | str]) -> Path:
    """Return the first of ``roots`` that is an existing directory.

    Args:
        roots: Candidate workspace roots in preference order.

    Returns:
        The resolved absolute path of the first usable root.

    Raises:
        WorkspaceError: If no root is an existing directory.
    """
    for root in roots:
        path = Path(root).expanduser()
        if path.is_dir():
            return path.resolve()
        logger.debug("Skipping workspace candidate %s: not a directory", path)
    raise WorkspaceError("Open a workspace folder to run NuGet Package Upgrade.")


__all__ = ["resolve_workspace"]
