"""Render the merged configuration for ``nuget-upgrade config``.

Purpose
-------
Show users which dotnet executable, tool package and log level a run will
use after all configuration layers are merged, either as TOML-like text or
as JSON.

Contents
--------
* :func:`display_config` – prints the configuration in the requested format
* :class:`UnknownSectionError` – raised for a missing ``--section``
"""

from __future__ import annotations

import json
from typing import Any

import click

from .config import get_config
from .errors import NugetUpgradeError


class UnknownSectionError(NugetUpgradeError):
    """The requested configuration section does not exist or is empty."""


def _render_value(value: Any) -> str:
    """Render a value the way it would appear in a TOML file."""
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def _emit_section(name: str, values: Any) -> None:
    click.echo(f"\n[{name}]")
    if not isinstance(values, dict):
        click.echo(f"  {values}")
        return
    for key, value in values.items():
        click.echo(f"  {key} = {_render_value(value)}")


def _select_sections(data: dict[str, Any], section: str | None) -> dict[str, Any]:
    if section is None:
        return data
    values = data.get(section)
    if not values:
        raise UnknownSectionError(f"Section '{section}' not found or empty")
    return {section: values}


def display_config(*, format: str = "human", section: str | None = None) -> None:
    """Print the merged configuration from all sources.

    Args:
        format: ``"human"`` for TOML-like text, ``"json"`` for JSON.
        section: Only show this section when given.

    Raises:
        UnknownSectionError: If ``section`` is missing or empty.

    Example:
        >>> display_config(section="upgrade")  # doctest: +SKIP
        <BLANKLINE>
        [upgrade]
          dotnet = "dotnet"
          outdated_tool_package = "dotnet-outdated-tool"
    """
    data: dict[str, Any] = get_config().as_dict()
    sections = _select_sections(data, section)

    if format.lower() == "json":
        click.echo(json.dumps(sections, indent=2))
        return

    for name, values in sections.items():
        _emit_section(name, values)


__all__ = [
    "UnknownSectionError",
    "display_config",
]
