"""Present candidates to the user and filter the confirmed selection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import SelectionItem, UpgradeCandidate

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

MULTIPLE_VERSIONS = "multiple versions"
CONTEXT_SEPARATOR = "; "


def describe_versions(candidate: UpgradeCandidate) -> str:
    """Render ``"<resolved> -> <latest>"`` or the ambiguity marker.

    No representative version is picked when either set holds zero or
    several versions.
    """
    if candidate.is_ambiguous:
        return MULTIPLE_VERSIONS
    (resolved,) = candidate.resolved_versions
    (latest,) = candidate.latest_versions
    return f"{resolved} -> {latest}"


def to_selection_item(candidate: UpgradeCandidate) -> SelectionItem:
    """Build the prompt view of ``candidate``."""
    return SelectionItem(
        label=candidate.id,
        description=describe_versions(candidate),
        detail=CONTEXT_SEPARATOR.join(candidate.contexts),
    )


def present_candidates(candidates: Iterable[UpgradeCandidate]) -> list[SelectionItem]:
    """Map candidates to selection items, keeping their order."""
    return [to_selection_item(candidate) for candidate in candidates]


def filter_selection(
    candidates: Sequence[UpgradeCandidate],
    labels: Iterable[str],
) -> list[UpgradeCandidate]:
    """Return the candidates the user picked, in the order they were picked.

    Repeated labels are kept once. Labels that match no candidate are
    ignored with a warning.

    Args:
        candidates: The presented candidates.
        labels: Labels (package ids) returned by the selection prompt.

    Returns:
        Selected candidates; empty means nothing was selected.
    """
    by_id = {candidate.id: candidate for candidate in candidates}
    selected: list[UpgradeCandidate] = []
    seen: set[str] = set()
    for label in labels:
        if label in seen:
            continue
        seen.add(label)
        candidate = by_id.get(label)
        if candidate is None:
            logger.warning("Ignoring selection %r: not an outdated package", label)
            continue
        selected.append(candidate)
    return selected


__all__ = [
    "CONTEXT_SEPARATOR",
    "MULTIPLE_VERSIONS",
    "describe_versions",
    "filter_selection",
    "present_candidates",
    "to_selection_item",
]
