"""Multi-select prompt for choosing which packages to upgrade.

Purpose
-------
Provide the selectors the orchestrator calls with the presented items. A
selector returns the chosen labels, an empty list, or ``None`` when the user
cancelled; the last two both end the run without changes.

Contents
--------
* :func:`prompt_selection` - interactive numbered list driven by click
* :func:`preselected` - non-interactive selector for ``--select``
* :func:`select_all` - non-interactive selector for ``--all``
* :func:`parse_selection` - turn ``"1,3-5"`` into item indices
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .models import SelectionItem

    Selector = Callable[[Sequence[SelectionItem]], Sequence[str] | None]

ALL_KEYWORD = "all"
PLACEHOLDER = "Select packages to upgrade"


def parse_selection(answer: str, count: int) -> list[int]:
    """Parse a comma separated list of 1-based numbers and ranges.

    ``"all"`` selects every item; blank input selects nothing.

    Args:
        answer: What the user typed, e.g. ``"1, 3-4"``.
        count: Number of items offered.

    Returns:
        Zero-based indices in the order given, without repeats.

    Raises:
        ValueError: If a token is not a number or range within ``1..count``.

    Example:
        >>> parse_selection("3, 1-2, 3", 4)
        [2, 0, 1]
    """
    answer = answer.strip()
    if not answer:
        return []
    if answer.lower() == ALL_KEYWORD:
        return list(range(count))

    indices: list[int] = []
    for token in answer.replace(" ", "").split(","):
        if not token:
            continue
        start_text, sep, end_text = token.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if sep else start
        except ValueError:
            raise ValueError(f"'{token}' is not a number or range") from None
        if start > end or start < 1 or end > count:
            raise ValueError(f"'{token}' is outside 1-{count}")
        for number in range(start, end + 1):
            if number - 1 not in indices:
                indices.append(number - 1)
    return indices


def _render_items(items: Sequence[SelectionItem]) -> None:
    width = len(str(len(items)))
    label_width = max(len(item.label) for item in items)
    for number, item in enumerate(items, start=1):
        label = click.style(item.label.ljust(label_width), bold=True)
        click.echo(f"  {str(number).rjust(width)}) {label}  {item.description}")
        if item.detail:
            click.echo(f"  {' ' * width}  {click.style(item.detail, dim=True)}")


def prompt_selection(items: Sequence[SelectionItem]) -> list[str] | None:
    """Show ``items`` as a numbered list and ask which ones to upgrade.

    Invalid answers are reported and asked again. Aborting the prompt
    (Ctrl+C or end of input) cancels the selection.

    Returns:
        Labels in the order the user listed them, or None when cancelled.
    """
    click.echo(f"{PLACEHOLDER}:")
    _render_items(items)
    while True:
        try:
            answer = click.prompt(
                "Numbers or ranges (e.g. 1,3-4), 'all', or empty to cancel",
                default="",
                show_default=False,
            )
        except click.exceptions.Abort:
            click.echo()
            return None
        try:
            indices = parse_selection(answer, len(items))
        except ValueError as exc:
            click.secho(f"Invalid selection: {exc}", fg="yellow", err=True)
            continue
        return [items[index].label for index in indices]


def preselected(labels: Sequence[str]) -> Selector:
    """Return a selector that answers with ``labels`` without prompting."""

    def _select(items: Sequence[SelectionItem]) -> list[str]:
        return list(labels)

    return _select


def select_all(items: Sequence[SelectionItem]) -> list[str]:
    """Select every offered item."""
    return [item.label for item in items]


__all__ = [
    "ALL_KEYWORD",
    "parse_selection",
    "preselected",
    "prompt_selection",
    "select_all",
]
