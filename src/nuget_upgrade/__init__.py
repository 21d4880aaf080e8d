"""Public package surface for selective NuGet package upgrades.

This package wraps ``dotnet list package --outdated`` and
``dotnet-outdated-tool`` so that a user can pick which outdated packages to
upgrade instead of applying every available update.

Main API
--------
* :func:`parse_outdated_packages` - Normalize the outdated report into candidates
* :func:`extract_json_payload` - Cut the JSON document out of noisy output
* :func:`present_candidates` - Build the items shown in the selection prompt
* :class:`UpgradeOrchestrator` - Run the full inventory → selection → upgrade flow
* :class:`UpgradeCandidate` - One package merged across all contexts
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .config import UpgradeSettings, get_config, get_upgrade_settings
from .diagnostics import DiagnosticLog
from .errors import (
    CommandFailedError,
    NugetUpgradeError,
    PayloadEmptyError,
    PayloadParseError,
    ToolInstallError,
    WorkspaceError,
)
from .inventory import normalize_report, parse_outdated_packages
from .models import (
    CommandResult,
    EnsureOutcome,
    RunOutcome,
    RunReport,
    SelectionItem,
    UpgradeCandidate,
)
from .orchestrator import UpgradeOrchestrator, run_upgrade, select_payload
from .payload import extract_json_payload
from .presenter import describe_versions, filter_selection, present_candidates, to_selection_item

__all__ = [
    "CommandFailedError",
    "CommandResult",
    "DiagnosticLog",
    "EnsureOutcome",
    "NugetUpgradeError",
    "PayloadEmptyError",
    "PayloadParseError",
    "RunOutcome",
    "RunReport",
    "SelectionItem",
    "ToolInstallError",
    "UpgradeCandidate",
    "UpgradeOrchestrator",
    "UpgradeSettings",
    "WorkspaceError",
    "describe_versions",
    "extract_json_payload",
    "filter_selection",
    "get_config",
    "get_upgrade_settings",
    "normalize_report",
    "parse_outdated_packages",
    "present_candidates",
    "print_info",
    "run_upgrade",
    "select_payload",
    "to_selection_item",
]
