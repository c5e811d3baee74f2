"""
Test the add/remove reconciliation loop.
"""

from mcp_patterns.core.models import ServerOutcome
from mcp_patterns.core.reconciler import Reconciler

from conftest import FakeClient

WORKING_SET = ["s-alpha", "s-shared", "s-docker", "s-npx"]


class TestReconcilerAdd:
    """Test installing the missing delta."""

    def test_installs_everything_when_nothing_installed(self, registry):
        client = FakeClient()
        outcome = Reconciler(client, registry).add(WORKING_SET, frozenset())

        assert client.names("add") == WORKING_SET
        assert outcome.installed == WORKING_SET
        assert outcome.exit_code == 0

    def test_skips_already_installed(self, registry):
        client = FakeClient()
        outcome = Reconciler(client, registry).add(WORKING_SET, {"s-shared", "unrelated"})

        assert client.names("add") == ["s-alpha", "s-docker", "s-npx"]
        assert outcome.skipped_already_installed == ["s-shared"]

    def test_failure_does_not_stop_the_loop(self, registry):
        client = FakeClient(fail_add={"s-shared"})
        outcome = Reconciler(client, registry).add(WORKING_SET, frozenset())

        assert client.names("add") == WORKING_SET
        assert outcome.failed == ["s-shared"]
        assert outcome.installed == ["s-alpha", "s-docker", "s-npx"]
        assert outcome.exit_code == 1

    def test_second_run_is_a_no_op(self, registry):
        client = FakeClient()
        reconciler = Reconciler(client, registry)
        first = reconciler.add(WORKING_SET, frozenset())

        client.calls.clear()
        second = reconciler.add(WORKING_SET, frozenset(first.installed))

        assert client.calls == []
        assert second.nothing_to_do
        assert second.skipped_already_installed == WORKING_SET

    def test_progress_positions_count_invoked_servers(self, registry):
        events = []
        Reconciler(FakeClient(fail_add={"s-npx"}), registry).add(
            WORKING_SET, {"s-alpha"}, progress=events.append
        )

        assert [(e.server, e.outcome, e.position, e.total) for e in events] == [
            ("s-alpha", ServerOutcome.ALREADY_INSTALLED, None, None),
            ("s-shared", ServerOutcome.INSTALLED, 1, 3),
            ("s-docker", ServerOutcome.INSTALLED, 2, 3),
            ("s-npx", ServerOutcome.FAILED, 3, 3),
        ]


class TestReconcilerRemove:
    """Test permissive removal."""

    def test_removes_every_server(self, registry):
        client = FakeClient()
        outcome = Reconciler(client, registry).remove(WORKING_SET)

        assert client.names("remove") == WORKING_SET
        assert outcome.removed == WORKING_SET

    def test_failed_removal_counts_as_not_installed(self, registry):
        client = FakeClient(fail_remove={"s-alpha", "s-npx"})
        outcome = Reconciler(client, registry).remove(WORKING_SET)

        assert client.names("remove") == WORKING_SET
        assert outcome.removed == ["s-shared", "s-docker"]
        assert outcome.not_installed == ["s-alpha", "s-npx"]
        assert outcome.exit_code == 0

    def test_remove_never_lists(self, registry):
        client = FakeClient()
        Reconciler(client, registry).remove(["s-alpha"])

        assert ("list",) not in client.calls

    def test_progress_events(self, registry):
        events = []
        Reconciler(FakeClient(fail_remove={"s-shared"}), registry).remove(
            ["s-alpha", "s-shared"], progress=events.append
        )

        assert [(e.outcome, e.position, e.total) for e in events] == [
            (ServerOutcome.REMOVED, 1, 2),
            (ServerOutcome.NOT_INSTALLED, 2, 2),
        ]
