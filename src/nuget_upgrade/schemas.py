"""Pydantic schemas for external data boundaries.

Purpose
-------
Define Pydantic models for data that crosses system boundaries:
- Input: the JSON report of ``dotnet list package --outdated --format json``
- Output: JSON serialization of upgrade candidates for ``nuget-upgrade list``

The input models are deliberately lenient: the report format differs between
SDK versions, so unknown keys are ignored, entries that are not objects become
empty entries and sequences that are not arrays become empty lists. Deciding
whether a value is usable (for example a package id that is not a string)
is left to the normalizer.

Data Flow Pattern
-----------------
Tool output → Pydantic (validate) → Dataclass (domain) → Pydantic (serialize) → External Output
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import UpgradeCandidate

UNKNOWN_NAME = "unknown"


def _as_list(value: Any) -> list[Any]:
    """Return ``value`` when it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []


def _render_name(value: Any) -> str:
    """Render a scalar name the way the report's JSON spelled it.

    Booleans become ``true``/``false`` and integral numbers lose their
    fractional part, so ``1.0`` and ``1`` label the same context.

    Example:
        >>> _render_name(True), _render_name(8.0), _render_name("net8.0")
        ('true', '8', 'net8.0')
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class _LenientSchema(BaseModel):
    """Base for report models: ignore extras, accept non-objects as empty."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _coerce_non_mapping(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}


class PackageEntrySchema(_LenientSchema):
    """One entry of ``topLevelPackages``."""

    id: Any = None
    name: Any = None
    resolved_version: Any = Field(default=None, alias="resolvedVersion")
    latest_version: Any = Field(default=None, alias="latestVersion")

    @property
    def package_id(self) -> str | None:
        """The id (falling back to name), or None unless it is a non-empty string."""
        ident = self.id if self.id is not None else self.name
        if not isinstance(ident, str) or not ident:
            return None
        return ident

    @property
    def resolved(self) -> str | None:
        """Resolved version when it is a non-empty string."""
        return _usable_version(self.resolved_version)

    @property
    def latest(self) -> str | None:
        """Latest version when it is a non-empty string."""
        return _usable_version(self.latest_version)


def _usable_version(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


class FrameworkSchema(_LenientSchema):
    """One target framework of a project."""

    name: Any = None
    top_level_packages: list[PackageEntrySchema] = Field(default_factory=list, alias="topLevelPackages")

    @field_validator("top_level_packages", mode="before")
    @classmethod
    def _packages_as_list(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @property
    def display_name(self) -> str:
        """Framework moniker, or ``"unknown"`` when absent."""
        return _render_name(self.name) if self.name is not None else UNKNOWN_NAME


class ProjectSchema(_LenientSchema):
    """One project of the report."""

    name: Any = None
    path: Any = None
    frameworks: list[FrameworkSchema] = Field(default_factory=list)

    @field_validator("frameworks", mode="before")
    @classmethod
    def _frameworks_as_list(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @property
    def display_name(self) -> str:
        """Project name, falling back to its path and then to ``"unknown"``."""
        if self.name is not None:
            return _render_name(self.name)
        if self.path is not None:
            return _render_name(self.path)
        return UNKNOWN_NAME


class OutdatedReportSchema(_LenientSchema):
    """Top level of the ``--outdated --format json`` report."""

    version: Any = None
    projects: list[ProjectSchema] = Field(default_factory=list)

    @field_validator("projects", mode="before")
    @classmethod
    def _projects_as_list(cls, value: Any) -> list[Any]:
        return _as_list(value)


class CandidateSchema(BaseModel):
    """Pydantic schema for serializing an upgrade candidate to JSON.

    Sets are rendered as sorted lists so the output is stable.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Package identifier")
    description: str = Field(description="Version delta or 'multiple versions'")
    resolved_versions: list[str] = Field(description="Versions currently in use")
    latest_versions: list[str] = Field(description="Versions available as upgrades")
    contexts: list[str] = Field(description="Project (framework) pairs the package appears in")

    @classmethod
    def from_candidate(cls, candidate: UpgradeCandidate, description: str) -> CandidateSchema:
        """Build the schema for ``candidate`` with its presented description."""
        return cls(
            id=candidate.id,
            description=description,
            resolved_versions=sorted(candidate.resolved_versions),
            latest_versions=sorted(candidate.latest_versions),
            contexts=sorted(candidate.contexts),
        )


__all__ = [
    "CandidateSchema",
    "FrameworkSchema",
    "OutdatedReportSchema",
    "PackageEntrySchema",
    "ProjectSchema",
    "UNKNOWN_NAME",
]
