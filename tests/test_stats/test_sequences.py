"""Tests for repeated-sequence analysis.

Test Coverage:
    - Cluster keys and window count
    - Frequency ordering and dropping clusters seen once
    - strict_duplicates count
    - Partial matches: counts, coefficient rounding, unequal lengths
    - Parameter validation
"""

import json

import pytest

from zonewatch.exceptions import ConfigurationError, InvalidInputError
from zonewatch.stats.sequences import (
    PartialMatch,
    clusters_of,
    partial_matches,
    sequence_analysis,
)


class TestClusters:
    """Test clusters_of."""

    def test_full_windows_only(self):
        assert clusters_of([1, 2, 3, 4, 5], cluster_size=4) == ["1,2,3,4", "2,3,4,5"]

    def test_float_keys(self):
        """Whole numbers print without a decimal point, others keep full precision."""
        assert clusters_of([0.5, 2.0, 0.1], cluster_size=3) == ["0.5,2,0.1"]

    def test_shorter_than_cluster(self):
        assert clusters_of([1, 2, 3], cluster_size=4) == []


class TestSequenceAnalysis:
    """Test sequence_analysis."""

    def test_frequency_ordering(self):
        """Most frequent first, ties in order of first appearance."""
        result = sequence_analysis([1, 2, 3, 4] * 3)
        assert list(result.sequences.items()) == [
            ("1,2,3,4", 3),
            ("2,3,4,1", 2),
            ("3,4,1,2", 2),
            ("4,1,2,3", 2),
        ]
        assert result.strict_duplicates == 4

    def test_singletons_dropped(self):
        """Clusters that occur once are not reported."""
        result = sequence_analysis([1, 2, 3, 4, 5, 6])
        assert result.sequences == {}
        assert result.strict_duplicates == 0

    def test_cluster_size(self):
        result = sequence_analysis([1, 2, 1, 2, 1, 2], cluster_size=2)
        assert result.sequences == {"1,2": 3, "2,1": 2}
        assert result.cluster_size == 2

    def test_no_threshold_no_partials(self):
        result = sequence_analysis([1, 2, 3, 4, 1, 2, 3, 5])
        assert result.partials == {}
        assert result.threshold is None

    def test_with_threshold(self):
        """A threshold adds partial matches between distinct clusters."""
        result = sequence_analysis([1, 2, 3, 4, 1, 2, 3, 5], threshold=0.75)
        assert result.threshold == 0.75
        assert result.partials == {
            "1,2,3,4": {"1,2,3,5": PartialMatch(count=1, coeff=0.75)},
            "1,2,3,5": {"1,2,3,4": PartialMatch(count=1, coeff=0.75)},
        }

    def test_to_dict_json_safe(self):
        result = sequence_analysis([1, 2, 3, 4, 1, 2, 3, 5], threshold=0.75)
        data = json.loads(json.dumps(result.to_dict()))
        assert data["partials"]["1,2,3,4"]["1,2,3,5"] == {"count": 1, "coeff": 0.75}
        assert data["strict_duplicates"] == 0

    @pytest.mark.parametrize("cluster_size", [0, -2, 2.5, True, "4"])
    def test_invalid_cluster_size(self, cluster_size):
        with pytest.raises(ConfigurationError, match="cluster_size"):
            sequence_analysis([1, 2, 3, 4], cluster_size=cluster_size)

    @pytest.mark.parametrize("threshold", [0, -0.5, 1.5, float("nan"), "high"])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(ConfigurationError):
            sequence_analysis([1, 2, 3, 4], threshold=threshold)

    def test_invalid_sample(self):
        with pytest.raises(InvalidInputError):
            sequence_analysis([])


class TestPartialMatches:
    """Test partial_matches."""

    def test_threshold_inclusive(self):
        """A coefficient equal to the threshold matches."""
        result = partial_matches(["1,2,3,4", "1,2,3,5", "9,9,9,9"], threshold=0.75)
        assert set(result) == {"1,2,3,4", "1,2,3,5"}
        assert result["1,2,3,4"]["1,2,3,5"].coeff == 0.75

    def test_counts_every_occurrence_pair(self):
        """Identical clusters are skipped, repeated ones add to the count."""
        result = partial_matches(["1,2,3,4", "1,2,3,5", "1,2,3,5"], threshold=0.75)
        assert result["1,2,3,4"]["1,2,3,5"].count == 2
        assert result["1,2,3,5"]["1,2,3,4"].count == 2
        assert "1,2,3,5" not in result["1,2,3,5"]

    def test_coefficient_rounding(self):
        """Coefficients are rounded to three decimals."""
        result = partial_matches(["1,2,3", "1,2,4"], threshold=0.6)
        assert result["1,2,3"]["1,2,4"].coeff == 0.667

    def test_unequal_lengths(self):
        """The longer cluster sets the denominator."""
        result = partial_matches(["1,2", "1,2,3"], threshold=0.5)
        assert result["1,2"]["1,2,3"].coeff == 0.667

    def test_below_threshold(self):
        assert partial_matches(["1,2,3,4", "1,2,5,6"], threshold=0.75) == {}

    def test_default_threshold(self):
        assert partial_matches(["1,2,3,4", "1,2,3,5"]) != {}

    @pytest.mark.parametrize("threshold", [0, 2, None])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(ConfigurationError):
            partial_matches(["1,2"], threshold=threshold)
