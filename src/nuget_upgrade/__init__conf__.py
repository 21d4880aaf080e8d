"""Static package metadata and layered configuration identifiers.

Purpose
-------
Keep the values that describe the distribution (name, version, homepage) and
the identifiers lib_layered_config uses to locate configuration files in one
place so the CLI, the config loader and the ``info`` command agree.

Contents
--------
* ``LAYEREDCONF_VENDOR`` / ``LAYEREDCONF_APP`` / ``LAYEREDCONF_SLUG``
* :func:`print_info` - render the metadata block for ``nuget-upgrade info``
"""

from __future__ import annotations

import click

name = "nuget_upgrade"
title = "Selective NuGet package upgrades driven by dotnet-outdated-tool"
version = "0.3.0"
homepage = "https://github.com/nuget-upgrade/nuget-upgrade"
author = "nuget-upgrade contributors"
shell_command = "nuget-upgrade"

# Identifiers for lib_layered_config path discovery
LAYEREDCONF_VENDOR = "nuget-upgrade"
LAYEREDCONF_APP = "NuGet Upgrade"
LAYEREDCONF_SLUG = "nuget-upgrade"


def print_info() -> None:
    """Print the package metadata as aligned ``key = value`` lines."""
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    click.echo(f"Info for {name}:\n")
    for label, value in fields:
        click.echo(f"    {label.ljust(pad)} = {value}")


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "print_info",
]
