"""Descriptive statistics for a validated sample.

Thin layer over pandas so every consumer (zone classifier, report, CLI)
computes mean, σ and median the same way:
- Standard deviation is the population form (ddof = 0)
- Skewness and kurtosis are the bias-adjusted sample estimators
- Undefined values (e.g. correlation of a constant sample) become None
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional

import numpy as np
import pandas as pd

from zonewatch.exceptions import ConfigurationError


def finite_or_none(value: float) -> Optional[float]:
    """Return value as a plain float, or None when it is NaN/inf."""
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def is_constant(sample: np.ndarray) -> bool:
    """True when every point has the same value (zero spread, zero variance).

    Decided from the data rather than from a computed σ, which can come out
    a few ulps above zero for values like 0.1 that floats cannot represent.
    """
    values = np.asarray(sample, dtype=float)
    return bool(len(values)) and bool(np.ptp(values) == 0)


def z_score(value: float, mean: float, std: float) -> Optional[float]:
    """Z-score of a single value; None when σ = 0."""
    if std == 0:
        return None
    return (value - mean) / std


@dataclass(frozen=True)
class DescriptiveStats:
    """Summary statistics for one sample.

    Attributes:
        count: Number of points
        mean: Arithmetic mean
        standard_deviation: Population standard deviation (σ)
        median: Median
        mode: Most frequent value (smallest on ties)
        skewness: Sample skewness (None if undefined)
        kurtosis: Sample excess kurtosis (None if undefined)
        min: Minimum value
        max: Maximum value
        spread: max − min
        median_absolute_deviation: median(|x − median|)
        sample_correlation: Pearson correlation of values with their index
        z_score_max: Z-score of the maximum (None when σ = 0)
        z_score_min: Z-score of the minimum (None when σ = 0)
    """

    count: int
    mean: float
    standard_deviation: float
    median: float
    mode: float
    skewness: Optional[float]
    kurtosis: Optional[float]
    min: float
    max: float
    spread: float
    median_absolute_deviation: float
    sample_correlation: Optional[float]
    z_score_max: Optional[float]
    z_score_min: Optional[float]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def median_absolute_deviation(sample: np.ndarray) -> float:
    """Median of absolute deviations from the median."""
    series = pd.Series(sample, dtype=float)
    return float((series - series.median()).abs().median())


def describe(sample: np.ndarray) -> DescriptiveStats:
    """Compute descriptive statistics for a sample.

    Args:
        sample: Validated 1-D float array (see ``validate_sample``)

    Returns:
        DescriptiveStats with every field populated

    Example:
        >>> stats = describe(np.array([1.0, 2.0, 3.0, 4.0]))
        >>> stats.mean, stats.median
        (2.5, 2.5)
    """
    series = pd.Series(sample, dtype=float)
    index = pd.Series(np.arange(len(series)), dtype=float)

    lo = float(series.min())
    hi = float(series.max())
    if is_constant(sample):
        # Summation error would leave σ a few ulps above zero and the mean
        # off the common value
        mean, std = lo, 0.0
    else:
        mean = float(series.mean())
        std = float(series.std(ddof=0))

    # Correlation is undefined for n < 2 or constant series (pandas gives NaN)
    with np.errstate(divide="ignore", invalid="ignore"):
        correlation = series.corr(index) if len(series) > 1 else np.nan

    return DescriptiveStats(
        count=int(len(series)),
        mean=mean,
        standard_deviation=std,
        median=float(series.median()),
        mode=float(series.mode().iloc[0]),
        skewness=finite_or_none(series.skew()),
        kurtosis=finite_or_none(series.kurt()),
        min=lo,
        max=hi,
        spread=hi - lo,
        median_absolute_deviation=median_absolute_deviation(sample),
        sample_correlation=finite_or_none(correlation),
        z_score_max=z_score(hi, mean, std),
        z_score_min=z_score(lo, mean, std),
    )


def sigma_ranges(mean: float, std: float, levels: int = 5) -> dict[str, tuple[float, float]]:
    """Symmetric ±kσ ranges around the mean for k = 1..levels.

    Example:
        >>> sigma_ranges(10.0, 2.0, levels=2)
        {'1sigma': (8.0, 12.0), '2sigma': (6.0, 14.0)}
    """
    return {
        f"{k}sigma": (mean - std * k, mean + std * k)
        for k in range(1, levels + 1)
    }


def subgroup_means(
    sample: np.ndarray,
    size: int = 5,
    front: bool = False,
    decimals: int = 10,
) -> list[float]:
    """Means of consecutive, non-overlapping subgroups (x-bar chart points).

    The sample is first trimmed to a multiple of ``size``: surplus points are
    removed from the end, or from the start when ``front`` is True.

    Args:
        sample: Validated 1-D float array
        size: Subgroup size (points per x-bar point)
        front: Trim surplus points from the front instead of the back
        decimals: Rounding applied to each mean

    Returns:
        List of subgroup means, oldest first

    Raises:
        ConfigurationError: If size is not a positive integer or decimals is negative

    Example:
        >>> subgroup_means(np.array([1, 2, 3, 4, 5, 6, 7.0]), size=3)
        [2.0, 5.0]
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size < 1:
        raise ConfigurationError(f"Subgroup size must be a positive integer, got {size!r}")
    if decimals < 0:
        raise ConfigurationError(f"decimals must be >= 0, got {decimals}")

    series = pd.Series(sample, dtype=float)
    remainder = len(series) % size
    if remainder:
        series = series.iloc[remainder:] if front else series.iloc[:-remainder]

    if series.empty:
        return []

    groups = np.arange(len(series)) // size
    means = series.groupby(groups).mean().round(decimals)
    return [float(m) for m in means]
