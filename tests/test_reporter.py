"""
Test listing views and outcome summaries.
"""

import pytest

from mcp_patterns.core import lister
from mcp_patterns.core.exceptions import UnknownPatternError
from mcp_patterns.core.models import AddOutcome, Prerequisite, RemoveOutcome
from mcp_patterns.core.reporter import NOTHING_TO_DO, summarize, summarize_add, summarize_remove


class TestLister:
    """Test read-only registry views."""

    def test_list_all(self, registry):
        rows = lister.list_all(registry)

        assert [(r.pattern, r.server_count) for r in rows] == [("P1", 2), ("P2", 3)]
        assert rows[0].description == "First pattern"

    def test_list_pattern_any_case(self, registry):
        rows = lister.list_pattern("p2", registry)

        assert [r.server for r in rows] == ["s-shared", "s-docker", "s-npx"]
        assert rows[1].prerequisite == Prerequisite.DOCKER

    def test_list_unknown_pattern(self, registry):
        with pytest.raises(UnknownPatternError):
            lister.list_pattern("nope", registry)


class TestReporter:
    """Test summary lines."""

    def test_add_summary(self):
        outcome = AddOutcome(
            installed=["a", "b", "c"],
            skipped_already_installed=["d"],
            failed=["e"],
        )

        assert summarize_add(outcome) == "3 installed, 1 skipped (already installed), 1 failed"

    def test_add_summary_with_docker_skips(self):
        outcome = AddOutcome(installed=["a"], skipped_unavailable=["t", "c"])

        assert summarize_add(outcome) == "1 installed, 2 skipped (Docker unavailable)"

    def test_empty_add(self):
        assert summarize_add(AddOutcome()) == NOTHING_TO_DO

    def test_remove_summary(self):
        outcome = RemoveOutcome(removed=["a", "b"], not_installed=["c"])

        assert summarize_remove(outcome) == "2 removed, 1 not installed"

    def test_summarize_dispatches_on_type(self):
        assert summarize(RemoveOutcome(removed=["a"])) == "1 removed"
        assert summarize(AddOutcome(failed=["a"])) == "1 failed"

    def test_outcome_flags(self):
        assert AddOutcome(skipped_already_installed=["a"]).nothing_to_do
        assert not AddOutcome(failed=["a"]).succeeded
        assert RemoveOutcome(not_installed=["a"]).exit_code == 0
