"""Presenter stories: what the user sees and what the user picked.

Each candidate becomes a selection item whose description never invents a
single version delta when several versions are in play. The selection that
comes back is filtered to known packages in the order it was given.
"""

from __future__ import annotations

import click
import pytest
from click.testing import CliRunner

from nuget_upgrade.models import SelectionItem, UpgradeCandidate
from nuget_upgrade.presenter import (
    MULTIPLE_VERSIONS,
    describe_versions,
    filter_selection,
    present_candidates,
    to_selection_item,
)
from nuget_upgrade.selection import parse_selection, preselected, prompt_selection, select_all


def _candidate(
    package_id: str,
    resolved: set[str] | None = None,
    latest: set[str] | None = None,
    contexts: set[str] | None = None,
) -> UpgradeCandidate:
    return UpgradeCandidate(
        id=package_id,
        resolved_versions=resolved if resolved is not None else {"1.0.0"},
        latest_versions=latest if latest is not None else {"2.0.0"},
        contexts=contexts if contexts is not None else {"App (net8.0)"},
    )


# ════════════════════════════════════════════════════════════════════════════
# describe_versions: Exact delta or honest ambiguity
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_single_versions_render_as_delta() -> None:
    candidate = _candidate("Newtonsoft.Json", {"13.0.1"}, {"13.0.3"})

    assert describe_versions(candidate) == "13.0.1 -> 13.0.3"


@pytest.mark.os_agnostic
def test_two_resolved_versions_render_as_multiple_versions() -> None:
    candidate = _candidate("Newtonsoft.Json", {"13.0.1", "13.0.5"}, {"13.0.3"})

    assert describe_versions(candidate) == MULTIPLE_VERSIONS == "multiple versions"


@pytest.mark.os_agnostic
def test_two_latest_versions_render_as_multiple_versions() -> None:
    candidate = _candidate("Serilog", {"2.0.0"}, {"3.0.0", "3.1.1"})

    assert describe_versions(candidate) == "multiple versions"


@pytest.mark.os_agnostic
def test_missing_versions_render_as_multiple_versions() -> None:
    candidate = _candidate("Bare", set(), set())

    assert describe_versions(candidate) == "multiple versions"


@pytest.mark.os_agnostic
def test_missing_latest_version_renders_as_multiple_versions() -> None:
    candidate = _candidate("Half", {"1.0.0"}, set())

    assert describe_versions(candidate) == "multiple versions"


@pytest.mark.os_agnostic
def test_candidate_reports_ambiguity() -> None:
    assert _candidate("A").is_ambiguous is False
    assert _candidate("A", {"1.0", "1.1"}).is_ambiguous is True


# ════════════════════════════════════════════════════════════════════════════
# to_selection_item / present_candidates
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_selection_item_uses_id_as_label_and_joins_contexts() -> None:
    candidate = _candidate("Dapper", contexts={"Api (net8.0)", "Worker (net8.0)"})

    item = to_selection_item(candidate)

    assert item.label == "Dapper"
    assert item.description == "1.0.0 -> 2.0.0"
    assert sorted(item.detail.split("; ")) == ["Api (net8.0)", "Worker (net8.0)"]


@pytest.mark.os_agnostic
def test_selection_item_is_immutable() -> None:
    item = to_selection_item(_candidate("Dapper"))

    with pytest.raises(AttributeError):
        item.label = "Other"  # type: ignore[misc]


@pytest.mark.os_agnostic
def test_present_candidates_keeps_order() -> None:
    candidates = [_candidate("B"), _candidate("A"), _candidate("C")]

    items = present_candidates(candidates)

    assert [item.label for item in items] == ["B", "A", "C"]


@pytest.mark.os_agnostic
def test_present_candidates_does_not_modify_candidates() -> None:
    candidate = _candidate("A", {"1.0", "1.1"})

    present_candidates([candidate])

    assert candidate.resolved_versions == {"1.0", "1.1"}


# ════════════════════════════════════════════════════════════════════════════
# filter_selection: What the user confirmed
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_filter_selection_follows_selection_order() -> None:
    candidates = [_candidate("A"), _candidate("B"), _candidate("C")]

    selected = filter_selection(candidates, ["C", "A"])

    assert [c.id for c in selected] == ["C", "A"]


@pytest.mark.os_agnostic
def test_filter_selection_of_nothing_is_empty() -> None:
    assert filter_selection([_candidate("A")], []) == []


@pytest.mark.os_agnostic
def test_filter_selection_ignores_unknown_labels(caplog: pytest.LogCaptureFixture) -> None:
    candidates = [_candidate("A")]

    with caplog.at_level("WARNING", logger="nuget_upgrade.presenter"):
        selected = filter_selection(candidates, ["Missing", "A"])

    assert [c.id for c in selected] == ["A"]
    assert "Missing" in caplog.text


@pytest.mark.os_agnostic
def test_filter_selection_drops_repeated_labels() -> None:
    candidates = [_candidate("A"), _candidate("B")]

    selected = filter_selection(candidates, ["B", "A", "B"])

    assert [c.id for c in selected] == ["B", "A"]


@pytest.mark.os_agnostic
def test_filter_selection_matches_ids_case_sensitively() -> None:
    assert filter_selection([_candidate("Foo")], ["foo"]) == []


# ════════════════════════════════════════════════════════════════════════════
# parse_selection: Numbers and ranges typed at the prompt
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_parse_selection_reads_numbers_and_ranges_in_given_order() -> None:
    assert parse_selection("3, 1-2", 4) == [2, 0, 1]


@pytest.mark.os_agnostic
def test_parse_selection_drops_repeats() -> None:
    assert parse_selection("2,2,1-2", 3) == [1, 0]


@pytest.mark.os_agnostic
@pytest.mark.parametrize("answer", ["", "   "])
def test_parse_selection_blank_means_nothing(answer: str) -> None:
    assert parse_selection(answer, 3) == []


@pytest.mark.os_agnostic
def test_parse_selection_all_selects_everything() -> None:
    assert parse_selection("ALL", 3) == [0, 1, 2]


@pytest.mark.os_agnostic
@pytest.mark.parametrize("answer", ["0", "4", "2-1", "x", "1-y", "-1"])
def test_parse_selection_rejects_invalid_tokens(answer: str) -> None:
    with pytest.raises(ValueError):
        parse_selection(answer, 3)


# ════════════════════════════════════════════════════════════════════════════
# Selectors
# ════════════════════════════════════════════════════════════════════════════

ITEMS = [
    SelectionItem(label="Dapper", description="2.0.0 -> 2.1.35", detail="Api (net8.0)"),
    SelectionItem(label="Serilog", description="multiple versions", detail="Api (net8.0); Worker (net8.0)"),
]


@pytest.mark.os_agnostic
def test_select_all_returns_every_label() -> None:
    assert select_all(ITEMS) == ["Dapper", "Serilog"]


@pytest.mark.os_agnostic
def test_preselected_returns_given_labels() -> None:
    selector = preselected(("Serilog", "Dapper"))

    assert selector(ITEMS) == ["Serilog", "Dapper"]


def _run_prompt(answers: str) -> tuple[list[str] | None, str]:
    result: dict[str, list[str] | None] = {}

    @click.command()
    def prompt() -> None:
        result["labels"] = prompt_selection(ITEMS)

    outcome = CliRunner().invoke(prompt, input=answers)
    return result["labels"], outcome.output


@pytest.mark.os_agnostic
def test_prompt_selection_returns_labels_for_typed_numbers() -> None:
    labels, output = _run_prompt("2,1\n")

    assert labels == ["Serilog", "Dapper"]
    assert "multiple versions" in output
    assert "Api (net8.0); Worker (net8.0)" in output


@pytest.mark.os_agnostic
def test_prompt_selection_empty_answer_selects_nothing() -> None:
    labels, _ = _run_prompt("\n")

    assert labels == []


@pytest.mark.os_agnostic
def test_prompt_selection_asks_again_after_invalid_answer() -> None:
    labels, _ = _run_prompt("9\n1\n")

    assert labels == ["Dapper"]


@pytest.mark.os_agnostic
def test_prompt_selection_end_of_input_cancels() -> None:
    labels, _ = _run_prompt("")

    assert labels is None
