"""Domain models for selective package upgrades (dataclasses).

Purpose
-------
Define the core data structures that flow from the normalized outdated
report to the final upgrade invocation. These are pure dataclasses used for
internal business logic.

For the raw tool payload and for JSON output, use the Pydantic schemas in
schemas.py.

Contents
--------
* :class:`UpgradeCandidate` - One package merged across all contexts
* :class:`SelectionItem` - Read-only view of a candidate for the prompt
* :class:`CommandResult` - Exit status and captured streams of one call
* :class:`EnsureOutcome` - Result of ensuring dotnet-outdated-tool
* :class:`RunOutcome` - Terminal success states of an upgrade run
* :class:`RunReport` - What a successful run did

Data Flow Pattern
-----------------
Tool output → Pydantic (validate) → Dataclass (domain) → Prompt / Pydantic (serialize)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


def _empty_str_set() -> set[str]:
    """Return an empty string set for dataclass defaults."""
    return set()


@dataclass(slots=True)
class UpgradeCandidate:
    """A package eligible for upgrade, merged across every context it appears in.

    Exactly one candidate exists per distinct id in a run. Version sets hold
    more than one entry when projects pin different versions of the package.

    Attributes:
        id: Package identifier (case-sensitive).
        resolved_versions: Versions currently in use.
        latest_versions: Versions available as upgrades.
        contexts: ``"<project> (<framework>)"`` strings the package was seen in.
    """

    id: str
    resolved_versions: set[str] = field(default_factory=_empty_str_set)
    latest_versions: set[str] = field(default_factory=_empty_str_set)
    contexts: set[str] = field(default_factory=_empty_str_set)

    @property
    def is_ambiguous(self) -> bool:
        """True unless both version sets hold exactly one version."""
        return len(self.resolved_versions) != 1 or len(self.latest_versions) != 1


@dataclass(frozen=True, slots=True)
class SelectionItem:
    """What the user sees for one candidate in the selection prompt.

    Attributes:
        label: The package id.
        description: ``"<resolved> -> <latest>"`` or ``"multiple versions"``.
        detail: Contexts joined with ``"; "``.
    """

    label: str
    description: str
    detail: str


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one external call.

    Attributes:
        exit_code: Process exit status; 1 when the process could not start.
        stdout: Everything the process wrote to standard output.
        stderr: Everything the process wrote to standard error.
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """True when the process exited with status zero."""
        return self.exit_code == 0


class EnsureOutcome(str, Enum):
    """Result of making sure dotnet-outdated-tool is available.

    Attributes:
        ALREADY_PRESENT: The version probe succeeded; nothing was installed.
        INSTALLED: The probe failed and a global install succeeded.
    """

    ALREADY_PRESENT = "already present"
    INSTALLED = "installed"


class RunOutcome(str, Enum):
    """Terminal success states of an upgrade run."""

    UPGRADED = "upgraded"
    NO_OUTDATED_PACKAGES = "no outdated packages"
    NOTHING_SELECTED = "nothing selected"

    @property
    def message(self) -> str:
        """User-facing notification for this outcome."""
        return _OUTCOME_MESSAGES[self]


_OUTCOME_MESSAGES: dict[RunOutcome, str] = {
    RunOutcome.UPGRADED: "NuGet packages updated.",
    RunOutcome.NO_OUTDATED_PACKAGES: "No outdated packages found.",
    RunOutcome.NOTHING_SELECTED: "No packages selected for upgrade.",
}


def _empty_candidate_list() -> list[UpgradeCandidate]:
    """Return an empty candidate list for dataclass defaults."""
    return []


def _empty_str_list() -> list[str]:
    """Return an empty string list for dataclass defaults."""
    return []


@dataclass(frozen=True, slots=True)
class RunReport:
    """Result of an upgrade run that ended in a success state.

    Attributes:
        outcome: Which success state the run ended in.
        candidates: The normalized candidates (empty when nothing was outdated).
        selected: Ids passed to the upgrader, in selection order.
    """

    outcome: RunOutcome
    candidates: list[UpgradeCandidate] = field(default_factory=_empty_candidate_list)
    selected: list[str] = field(default_factory=_empty_str_list)


__all__ = [
    "CommandResult",
    "EnsureOutcome",
    "RunOutcome",
    "RunReport",
    "SelectionItem",
    "UpgradeCandidate",
]
