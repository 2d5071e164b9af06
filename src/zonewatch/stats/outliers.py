"""Single-pass outlier filters.

Each filter returns the offending values (not indices), in sample order
except the IQR filter, which returns them sorted ascending:
- z-score: |x − mean| / σ > threshold
- modified z-score: |0.6745 · (x − median) / MAD| > threshold
- IQR fence: x < Q1 − k·IQR or x > Q3 + k·IQR
"""

import math
from typing import Optional

import numpy as np
import pandas as pd

from zonewatch.config import Settings, settings as default_settings
from zonewatch.exceptions import ConfigurationError
from zonewatch.stats.descriptive import is_constant, median_absolute_deviation

# Consistency constant: MAD · 1/0.6745 ≈ σ for normal data
MODIFIED_Z_CONSTANT = 0.6745


def _check_positive(name: str, value: float) -> float:
    """Fail fast on an explicitly supplied but unusable parameter."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise ConfigurationError(f"A {name} was passed, but it was not a number: {value!r}")
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a finite number > 0, got {value}")
    return value


def zscore_outliers(sample: np.ndarray, threshold: float = 3.0) -> list[float]:
    """Values whose absolute z-score exceeds ``threshold``.

    A zero-variance sample has no z-score outliers.
    """
    threshold = _check_positive("threshold", threshold)
    series = pd.Series(sample, dtype=float)
    if is_constant(series):
        return []
    std = series.std(ddof=0)
    z = (series - series.mean()).abs() / std
    return series[z > threshold].tolist()


def modified_zscore_outliers(sample: np.ndarray, threshold: float = 3.5) -> list[float]:
    """Values whose modified z-score exceeds ``threshold``.

    With MAD = 0 every value off the median has an infinite score and is
    flagged; values on the median (0/0) are not.
    """
    threshold = _check_positive("threshold", threshold)
    series = pd.Series(sample, dtype=float)
    mad = median_absolute_deviation(sample)
    deviation = series - series.median()

    with np.errstate(divide="ignore", invalid="ignore"):
        scores = (MODIFIED_Z_CONSTANT * deviation / mad).abs()

    # NaN (0/0) compares False and is never flagged
    return series[scores > threshold].tolist()


def iqr_outliers(sample: np.ndarray, factor: float = 1.5) -> list[float]:
    """Values outside the Tukey fence, sorted ascending.

    Quartiles are read directly off the sorted sample at positions
    ⌊n/4⌋ and ⌊3n/4⌋ (no interpolation).
    """
    factor = _check_positive("factor", factor)
    ordered = pd.Series(sample, dtype=float).sort_values(ignore_index=True)
    n = len(ordered)
    q1 = ordered.iloc[n // 4]
    q3 = ordered.iloc[(3 * n) // 4]
    spread = q3 - q1

    lower = q1 - factor * spread
    upper = q3 + factor * spread
    return ordered[(ordered < lower) | (ordered > upper)].tolist()


def find_outliers(
    sample: np.ndarray,
    config: Optional[Settings] = None,
) -> dict[str, list[float]]:
    """Run every filter with thresholds from settings.

    Returns:
        Dict with keys 'zscore', 'modified_zscore', 'iqr'
    """
    cfg = config or default_settings
    return {
        "zscore": zscore_outliers(sample, cfg.zscore_threshold),
        "modified_zscore": modified_zscore_outliers(sample, cfg.modified_zscore_threshold),
        "iqr": iqr_outliers(sample, cfg.iqr_factor),
    }
