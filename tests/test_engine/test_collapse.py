"""Tests for collapsing rule runs into contiguous ranges."""

import pytest

from zonewatch.engine.collapse import collapse_runs


class TestCollapseRuns:
    """Test collapse_runs."""

    def test_overlapping_runs_merge(self):
        """Overlapping windows become one range."""
        runs = [list(range(0, 7)), list(range(1, 8))]
        assert collapse_runs(runs) == [list(range(0, 8))]

    def test_adjacent_runs_merge(self):
        """Touching runs (gap of exactly one) merge."""
        assert collapse_runs([[1, 2, 3], [4, 5, 6]]) == [[1, 2, 3, 4, 5, 6]]

    def test_gap_starts_new_range(self):
        """A gap of two or more splits ranges."""
        assert collapse_runs([[1, 2], [4, 5], [5, 6]]) == [[1, 2], [4, 5, 6]]

    def test_bare_indices(self):
        """Single-point runs (bare indices) collapse too."""
        assert collapse_runs([46]) == [[46]]
        assert collapse_runs([3, 4, 9]) == [[3, 4], [9]]

    def test_unsorted_input(self):
        """Input order does not matter."""
        assert collapse_runs([[10, 11], [0, 1], [2]]) == [[0, 1, 2], [10, 11]]

    def test_duplicates_removed(self):
        """Repeated indices appear once."""
        assert collapse_runs([[5, 6], [5, 6], 6]) == [[5, 6]]

    def test_empty(self):
        """No runs, no ranges."""
        assert collapse_runs([]) == []

    def test_idempotent(self):
        """Collapsing collapsed ranges is a no-op."""
        runs = [[0, 1, 2, 3, 4], [1, 2, 3, 4, 5], [9, 10, 11, 12, 13], 20]
        once = collapse_runs(runs)
        assert collapse_runs(once) == once

    @pytest.mark.parametrize(
        "runs",
        [
            [[42, 43, 44, 45, 46], [43, 44, 45, 46, 47], [48, 49, 50, 51, 52]],
            [[0, 1, 2], [7, 8, 9], [8, 9, 10]],
            [1, 3, 5, 7],
        ],
    )
    def test_coverage_preserved(self, runs):
        """Collapse never adds or loses indices."""
        flat = set()
        for run in runs:
            flat.update(run if isinstance(run, list) else [run])
        collapsed = collapse_runs(runs)
        assert {i for span in collapsed for i in span} == flat
        assert sum(len(span) for span in collapsed) == len(flat)
