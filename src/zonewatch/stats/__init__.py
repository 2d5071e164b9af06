"""Statistics collaborators for ZONEWATCH.

Modules:
    - descriptive: Mean, σ, median, moments, sigma ranges, subgroup means
    - normality: Jarque-Bera, Shapiro-Wilk, Anderson-Darling, KS, Lilliefors
    - outliers: z-score, modified z-score, IQR filters
    - sequences: Recurring clusters of consecutive values, partial matches
"""

from zonewatch.stats.descriptive import (
    DescriptiveStats,
    describe,
    is_constant,
    median_absolute_deviation,
    sigma_ranges,
    subgroup_means,
)
from zonewatch.stats.normality import (
    NormalityResult,
    anderson_darling,
    jarque_bera,
    kolmogorov_smirnov,
    lilliefors,
    run_normality_tests,
    shapiro_wilk,
)
from zonewatch.stats.outliers import (
    find_outliers,
    iqr_outliers,
    modified_zscore_outliers,
    zscore_outliers,
)
from zonewatch.stats.sequences import (
    PartialMatch,
    SequenceAnalysis,
    clusters_of,
    partial_matches,
    sequence_analysis,
)

__all__ = [
    "DescriptiveStats",
    "describe",
    "is_constant",
    "median_absolute_deviation",
    "sigma_ranges",
    "subgroup_means",
    "NormalityResult",
    "anderson_darling",
    "jarque_bera",
    "kolmogorov_smirnov",
    "lilliefors",
    "run_normality_tests",
    "shapiro_wilk",
    "find_outliers",
    "iqr_outliers",
    "modified_zscore_outliers",
    "zscore_outliers",
    "PartialMatch",
    "SequenceAnalysis",
    "clusters_of",
    "partial_matches",
    "sequence_analysis",
]
