"""Repeated-sequence analysis.

Slides a fixed-size cluster over the sample and counts clusters that recur.
Clusters are keyed by their values joined with commas (``"1,2,3,4"``), so
they serialize directly to JSON object keys.

Partial matching compares every pair of distinct clusters position by
position:

    coeff = matching positions / max(len(a), len(b))

and keeps pairs whose coefficient meets the threshold.
"""

import logging
import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from itertools import zip_longest
from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from zonewatch.exceptions import ConfigurationError
from zonewatch.validation import validate_sample

logger = logging.getLogger(__name__)

DEFAULT_CLUSTER_SIZE = 4
DEFAULT_PARTIAL_THRESHOLD = 0.75


@dataclass(frozen=True)
class PartialMatch:
    """How often one cluster was compared with a similar one.

    Attributes:
        count: Number of (cluster, other) occurrence pairs compared
        coeff: Similarity coefficient, rounded to 3 decimals
    """

    count: int
    coeff: float


@dataclass(frozen=True)
class SequenceAnalysis:
    """Result of ``sequence_analysis``.

    Attributes:
        cluster_size: Points per cluster
        sequences: Recurring cluster → occurrences, most frequent first
        partials: Cluster → similar cluster → PartialMatch (empty without threshold)
        threshold: Similarity threshold used, None if partials were skipped
        strict_duplicates: Number of distinct clusters seen more than once
    """

    cluster_size: int
    sequences: dict[str, int]
    partials: dict[str, dict[str, PartialMatch]] = field(default_factory=dict)
    threshold: Optional[float] = None
    strict_duplicates: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def _token(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


def _check_cluster_size(cluster_size: int) -> int:
    if (
        isinstance(cluster_size, bool)
        or not isinstance(cluster_size, (int, np.integer))
        or cluster_size < 1
    ):
        raise ConfigurationError(
            f"cluster_size must be a positive integer, got {cluster_size!r}"
        )
    return int(cluster_size)


def _check_threshold(threshold: float) -> float:
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float, np.number)):
        raise ConfigurationError(f"A threshold was passed, but it was not a number: {threshold!r}")
    threshold = float(threshold)
    if not math.isfinite(threshold) or not 0 < threshold <= 1:
        raise ConfigurationError(f"threshold must be a number in (0, 1], got {threshold}")
    return threshold


def clusters_of(sample, cluster_size: int = DEFAULT_CLUSTER_SIZE) -> list[str]:
    """Every full window of ``cluster_size`` consecutive values, as keys.

    Example:
        >>> clusters_of([1, 2, 3, 4, 5], cluster_size=4)
        ['1,2,3,4', '2,3,4,5']
    """
    cluster_size = _check_cluster_size(cluster_size)
    values = validate_sample(sample)
    if len(values) < cluster_size:
        return []
    windows = sliding_window_view(values, cluster_size)
    return [",".join(_token(float(v)) for v in window) for window in windows]


def partial_matches(
    clusters: Sequence[str],
    threshold: float = DEFAULT_PARTIAL_THRESHOLD,
) -> dict[str, dict[str, PartialMatch]]:
    """Pairs of distinct clusters that agree on enough positions.

    Every occurrence is compared with every other occurrence, so a pair's
    count is the product of how often each cluster appears.

    Args:
        clusters: Cluster keys, as produced by ``clusters_of``
        threshold: Minimum similarity coefficient, in (0, 1]

    Returns:
        Nested dict: cluster → similar cluster → PartialMatch

    Raises:
        ConfigurationError: If threshold is not a number in (0, 1]
    """
    threshold = _check_threshold(threshold)
    split = [cluster.split(",") for cluster in clusters]
    counts: dict[str, dict[str, int]] = {}
    coeffs: dict[tuple[str, str], float] = {}

    for i, first in enumerate(clusters):
        for j, second in enumerate(clusters):
            if i == j or first == second:
                continue
            longest = max(len(split[i]), len(split[j]))
            same = sum(1 for a, b in zip_longest(split[i], split[j]) if a == b)
            coeff = same / longest
            if coeff >= threshold:
                row = counts.setdefault(first, {})
                row[second] = row.get(second, 0) + 1
                coeffs[(first, second)] = round(coeff, 3)

    return {
        first: {
            second: PartialMatch(count=count, coeff=coeffs[(first, second)])
            for second, count in row.items()
        }
        for first, row in counts.items()
    }


def sequence_analysis(
    sample,
    cluster_size: int = DEFAULT_CLUSTER_SIZE,
    threshold: Optional[float] = None,
) -> SequenceAnalysis:
    """Count clusters of consecutive values that occur more than once.

    Args:
        sample: Raw sample (validated and coerced here)
        cluster_size: Points per cluster
        threshold: If given, also compute partial matches at this similarity

    Returns:
        SequenceAnalysis; clusters seen only once are left out

    Raises:
        InvalidInputError: If the sample is not usable
        ConfigurationError: If cluster_size or threshold is invalid

    Example:
        >>> sequence_analysis([1, 2, 1, 2, 1, 2], cluster_size=2).sequences
        {'1,2': 3, '2,1': 2}
    """
    cluster_size = _check_cluster_size(cluster_size)
    if threshold is not None:
        threshold = _check_threshold(threshold)

    clusters = clusters_of(sample, cluster_size)
    # most_common keeps first-seen order among equal counts
    repeated = {key: n for key, n in Counter(clusters).most_common() if n > 1}
    partials = partial_matches(clusters, threshold) if threshold is not None else {}

    logger.debug(
        "%d clusters of %d, %d repeated, %d with partial matches",
        len(clusters),
        cluster_size,
        len(repeated),
        len(partials),
    )
    return SequenceAnalysis(
        cluster_size=cluster_size,
        sequences=repeated,
        partials=partials,
        threshold=threshold,
        strict_duplicates=len(repeated),
    )
