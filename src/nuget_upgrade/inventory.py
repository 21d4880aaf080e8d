"""Normalize the outdated-package report into upgrade candidates.

Purpose
-------
Turn the JSON report produced by ``dotnet list package --outdated --format
json`` into one :class:`UpgradeCandidate` per package id, merging the
resolved/latest versions and the project/framework contexts of every
occurrence.

Contents
--------
* :func:`parse_outdated_packages` - extract, parse, validate and normalize raw text
* :func:`normalize_report` - aggregate an already validated report
* :func:`load_report` - parse and validate without aggregating

System Role
-----------
The core of the upgrade flow. Everything before it produces text, everything
after it consumes the sorted candidate list.
"""

from __future__ import annotations

import json
import locale
import logging
from typing import TYPE_CHECKING

from .errors import PayloadParseError
from .models import UpgradeCandidate
from .payload import extract_json_payload
from .schemas import OutdatedReportSchema

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def load_report(text: str) -> OutdatedReportSchema:
    """Extract the JSON span from ``text`` and validate it as a report.

    Args:
        text: Raw output of the outdated-check command.

    Returns:
        The validated report; malformed sections are treated as empty.

    Raises:
        PayloadParseError: If the extracted span is not valid JSON or nests
            deeper than the decoder can follow.
    """
    try:
        data = json.loads(extract_json_payload(text))
    except (json.JSONDecodeError, RecursionError) as exc:
        raise PayloadParseError(str(exc), text) from exc
    return OutdatedReportSchema.model_validate(data)


def _context_label(project_name: str, framework_name: str) -> str:
    return f"{project_name} ({framework_name})"


def _sort_key(candidate: UpgradeCandidate) -> tuple[str, str, str]:
    # case-insensitive first, even under the C locale
    return (locale.strxfrm(candidate.id.casefold()), locale.strxfrm(candidate.id), candidate.id)


def sort_candidates(candidates: Iterable[UpgradeCandidate]) -> list[UpgradeCandidate]:
    """Sort candidates by id, ignoring case, using the current collation locale."""
    return sorted(candidates, key=_sort_key)


def normalize_report(report: OutdatedReportSchema) -> list[UpgradeCandidate]:
    """Merge every package entry of ``report`` into one candidate per id.

    Entries without a usable string id are skipped. The context is recorded
    even when an entry carries no version information.

    Args:
        report: Validated outdated report.

    Returns:
        Candidates sorted by id.
    """
    candidates: dict[str, UpgradeCandidate] = {}
    skipped = 0

    for project in report.projects:
        for framework in project.frameworks:
            context = _context_label(project.display_name, framework.display_name)
            for entry in framework.top_level_packages:
                package_id = entry.package_id
                if package_id is None:
                    skipped += 1
                    continue

                candidate = candidates.get(package_id)
                if candidate is None:
                    candidate = UpgradeCandidate(id=package_id)
                    candidates[package_id] = candidate

                if entry.resolved is not None:
                    candidate.resolved_versions.add(entry.resolved)
                if entry.latest is not None:
                    candidate.latest_versions.add(entry.latest)
                candidate.contexts.add(context)

    if skipped:
        logger.debug("Skipped %d package entries without a usable id", skipped)
    logger.debug("Normalized %d outdated packages", len(candidates))
    return sort_candidates(candidates.values())


def parse_outdated_packages(text: str) -> list[UpgradeCandidate]:
    """Parse raw outdated-check output into sorted, deduplicated candidates.

    Args:
        text: Raw output, possibly surrounded by log lines.

    Returns:
        One candidate per package id, sorted by id.

    Raises:
        PayloadParseError: If no valid JSON document can be parsed.

    Example:
        >>> payload = (
        ...     '{"projects":[{"name":"App","frameworks":[{"name":"net8.0",'
        ...     '"topLevelPackages":[{"id":"Newtonsoft.Json",'
        ...     '"resolvedVersion":"13.0.1","latestVersion":"13.0.3"}]}]}]}'
        ... )
        >>> [c.id for c in parse_outdated_packages(payload)]
        ['Newtonsoft.Json']
    """
    return normalize_report(load_report(text))


__all__ = [
    "load_report",
    "normalize_report",
    "parse_outdated_packages",
    "sort_candidates",
]
