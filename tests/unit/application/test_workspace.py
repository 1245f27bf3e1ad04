"""
Unit tests for per-estimate edit serialization.
"""

import threading

import pytest

from scope_estimator.domain.exceptions import InvalidInputError, OutOfRangeError
from scope_estimator.domain.models import EstimateBreakdownLine, GeneratedEstimate
from scope_estimator.domain.models.config import AppConfig
from scope_estimator.infrastructure.factory import create_workspace


@pytest.fixture
def workspace():
    return create_workspace(AppConfig.for_testing())


@pytest.fixture
def estimate():
    return GeneratedEstimate.from_lines(
        100,
        [
            EstimateBreakdownLine.priced("Auth", 15, 100),
            EstimateBreakdownLine.priced("Dashboard", 20, 100),
        ],
    )


class TestEstimateWorkspace:
    """Test EstimateWorkspace"""

    def test_put_and_get(self, workspace, estimate):
        workspace.put("est-1", estimate)
        assert "est-1" in workspace
        assert len(workspace) == 1
        assert workspace.get("est-1") is estimate

    def test_edits_replace_snapshot(self, workspace, estimate):
        workspace.put("est-1", estimate)
        workspace.add_line("est-1", "Reports", 20)
        updated = workspace.remove_line("est-1", 0)

        assert [line.feature for line in updated.breakdown] == ["Dashboard", "Reports"]
        assert workspace.get("est-1") is updated
        assert estimate.line_count == 2  # original snapshot untouched

    def test_unknown_estimate(self, workspace):
        with pytest.raises(InvalidInputError):
            workspace.add_line("missing", "Reports", 5)
        with pytest.raises(InvalidInputError):
            workspace.get("missing")

    def test_failed_edit_keeps_snapshot(self, workspace, estimate):
        workspace.put("est-1", estimate)
        with pytest.raises(OutOfRangeError):
            workspace.remove_line("est-1", 7)
        assert workspace.get("est-1") is estimate

    def test_discard(self, workspace, estimate):
        workspace.put("est-1", estimate)
        workspace.discard("est-1")
        workspace.discard("est-1")
        assert "est-1" not in workspace

    def test_concurrent_adds_are_not_lost(self, workspace, estimate):
        workspace.put("est-1", estimate)
        barrier = threading.Barrier(20)

        def add(i: int):
            barrier.wait()
            workspace.add_line("est-1", f"Item {i}", 1)

        threads = [threading.Thread(target=add, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        final = workspace.get("est-1")
        assert final.line_count == 22
        assert final.total_hours == 55
        assert final.total_cost == 5500

    def test_discard_waits_for_edit_in_flight(self, workspace, estimate, monkeypatch):
        workspace.put("est-1", estimate)
        entered, release = threading.Event(), threading.Event()
        original_add = workspace.aggregator.with_line_added

        def slow_add(*args):
            entered.set()
            release.wait(5)
            return original_add(*args)

        monkeypatch.setattr(workspace.aggregator, "with_line_added", slow_add)

        editor = threading.Thread(target=workspace.add_line, args=("est-1", "Reports", 5))
        editor.start()
        assert entered.wait(5)

        discarder = threading.Thread(target=workspace.discard, args=("est-1",))
        discarder.start()
        discarder.join(0.1)
        assert discarder.is_alive()

        release.set()
        editor.join(5)
        discarder.join(5)

        assert not discarder.is_alive()
        assert "est-1" not in workspace
        assert len(workspace) == 0
        with pytest.raises(InvalidInputError):
            workspace.get("est-1")
        with pytest.raises(InvalidInputError):
            workspace.add_line("est-1", "Reports", 5)

    def test_put_after_discard_starts_fresh(self, workspace, estimate):
        workspace.put("est-1", estimate)
        workspace.discard("est-1")
        workspace.put("est-1", estimate)

        updated = workspace.add_line("est-1", "Reports", 5)

        assert updated.line_count == 3
        assert workspace.get("est-1") is updated
