"""Tests for descriptive statistics."""

import math

import numpy as np
import pytest

from zonewatch.exceptions import ConfigurationError
from zonewatch.stats.descriptive import (
    describe,
    is_constant,
    median_absolute_deviation,
    sigma_ranges,
    subgroup_means,
    z_score,
)


class TestDescribe:
    """Test describe()."""

    def test_small_sample(self):
        """Known values for 1, 2, 3, 4."""
        stats = describe(np.array([1.0, 2.0, 3.0, 4.0]))

        assert stats.count == 4
        assert stats.mean == 2.5
        assert stats.median == 2.5
        assert stats.standard_deviation == pytest.approx(math.sqrt(1.25))
        assert stats.median_absolute_deviation == 1.0
        assert stats.mode == 1.0
        assert stats.min == 1.0
        assert stats.max == 4.0
        assert stats.spread == 3.0
        assert stats.skewness == pytest.approx(0.0, abs=1e-12)
        assert stats.kurtosis == pytest.approx(-1.2)
        assert stats.sample_correlation == pytest.approx(1.0)
        assert stats.z_score_max == pytest.approx(1.5 / math.sqrt(1.25))
        assert stats.z_score_min == pytest.approx(-1.5 / math.sqrt(1.25))

    def test_population_deviation(self):
        """σ uses ddof = 0."""
        values = np.array([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        assert describe(values).standard_deviation == pytest.approx(2.0)

    def test_mode_smallest_on_ties(self):
        """Ties resolve to the smallest value."""
        assert describe(np.array([3.0, 1.0, 3.0, 1.0, 2.0])).mode == 1.0

    def test_constant_sample(self):
        """Undefined quantities are None, never NaN."""
        stats = describe(np.array([7.0] * 10))
        assert stats.standard_deviation == 0.0
        assert stats.sample_correlation is None
        assert stats.z_score_max is None
        assert stats.z_score_min is None
        for value in stats.to_dict().values():
            assert value is None or not isinstance(value, float) or math.isfinite(value)

    @pytest.mark.parametrize("value,n", [(0.1, 7), (1.1, 30), (0.7, 15)])
    def test_inexact_constant_sample(self, value, n):
        """σ is exactly zero and the mean is the common value."""
        stats = describe(np.array([value] * n))
        assert stats.standard_deviation == 0.0
        assert stats.mean == value
        assert stats.z_score_max is None

    def test_single_point(self):
        """One point: no correlation, no skewness."""
        stats = describe(np.array([5.0]))
        assert stats.count == 1
        assert stats.mean == 5.0
        assert stats.skewness is None
        assert stats.sample_correlation is None

    def test_to_dict_keys(self):
        """to_dict exposes every field."""
        data = describe(np.array([1.0, 2.0, 3.0])).to_dict()
        assert "standard_deviation" in data
        assert "median_absolute_deviation" in data
        assert data["count"] == 3


class TestHelpers:
    """Test z_score, MAD and sigma ranges."""

    def test_is_constant(self):
        assert is_constant(np.array([0.1] * 7))
        assert is_constant(np.array([5.0]))
        assert not is_constant(np.array([0.1, 0.1, 0.2]))
        assert not is_constant(np.array([]))

    def test_z_score(self):
        assert z_score(12.0, 10.0, 2.0) == 1.0
        assert z_score(12.0, 10.0, 0.0) is None

    def test_mad(self):
        """MAD = median(|x − median|)."""
        assert median_absolute_deviation(np.array([1.0, 1.0, 2.0, 2.0, 4.0, 6.0, 9.0])) == 1.0

    def test_sigma_ranges(self):
        """±kσ ranges keyed 1sigma … 5sigma."""
        ranges = sigma_ranges(10.0, 2.0)
        assert list(ranges) == ["1sigma", "2sigma", "3sigma", "4sigma", "5sigma"]
        assert ranges["1sigma"] == (8.0, 12.0)
        assert ranges["5sigma"] == (0.0, 20.0)

    def test_sigma_ranges_zero_std(self):
        """σ = 0 collapses every range onto the mean."""
        assert sigma_ranges(3.0, 0.0, levels=2) == {"1sigma": (3.0, 3.0), "2sigma": (3.0, 3.0)}


class TestSubgroupMeans:
    """Test x-bar subgroup means."""

    def test_trim_back(self):
        """Surplus points are dropped from the end."""
        assert subgroup_means(np.arange(1, 8, dtype=float), size=3) == [2.0, 5.0]

    def test_trim_front(self):
        """front=True drops surplus points from the start."""
        assert subgroup_means(np.arange(1, 8, dtype=float), size=3, front=True) == [3.0, 6.0]

    def test_exact_multiple(self):
        assert subgroup_means(np.array([1.0, 3.0, 5.0, 7.0]), size=2) == [2.0, 6.0]

    def test_rounding(self):
        """Means are rounded to ``decimals`` places."""
        assert subgroup_means(np.array([1.0, 2.0, 2.0]), size=3, decimals=2) == [1.67]

    def test_too_short(self):
        """Fewer points than one subgroup yields nothing."""
        assert subgroup_means(np.array([1.0, 2.0]), size=5) == []

    @pytest.mark.parametrize("size", [0, -1, 2.5, True])
    def test_invalid_size(self, size):
        with pytest.raises(ConfigurationError):
            subgroup_means(np.array([1.0, 2.0, 3.0]), size=size)

    def test_negative_decimals(self):
        with pytest.raises(ConfigurationError):
            subgroup_means(np.array([1.0, 2.0, 3.0]), size=1, decimals=-1)
