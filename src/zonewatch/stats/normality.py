"""Normality tests used for summary reporting.

None of these feed the zone or rule logic; they tell the reader how much
to trust the ±kσ zones, which assume an approximately normal process.

Tests:
    - Jarque-Bera: skewness/kurtosis based, χ²(2) p-value
    - Shapiro-Wilk: scipy.stats.shapiro
    - Anderson-Darling: scipy.stats.anderson (critical values, no p-value)
    - Kolmogorov-Smirnov: scipy.stats.kstest against N(mean, σ)
    - Lilliefors: statsmodels (KS with estimated parameters)
"""

import logging
import math
import warnings
from dataclasses import asdict, dataclass, field
from typing import Optional

import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.stats.diagnostic import lilliefors as sm_lilliefors

from zonewatch.exceptions import ConfigurationError
from zonewatch.stats.descriptive import finite_or_none, is_constant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalityResult:
    """Outcome of one normality test.

    Attributes:
        test: Test name (e.g. "jarque_bera")
        statistic: Test statistic, None when the test is undefined for the sample
        p_value: p-value, None when the test does not produce one or is undefined
        alpha: Significance level used for ``is_normal``
        is_normal: True if normality is not rejected at ``alpha``; None if undefined
        critical_values: Significance level (%) → critical value, where applicable
    """

    test: str
    statistic: Optional[float]
    p_value: Optional[float]
    alpha: float
    is_normal: Optional[bool]
    critical_values: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def _check_alpha(alpha: float) -> float:
    if not isinstance(alpha, (int, float)) or not math.isfinite(alpha) or not 0 < alpha < 1:
        raise ConfigurationError(f"alpha must be a finite number in (0, 1), got {alpha!r}")
    return float(alpha)


def _undefined(test: str, alpha: float, reason: str) -> NormalityResult:
    logger.debug("%s undefined: %s", test, reason)
    return NormalityResult(test=test, statistic=None, p_value=None, alpha=alpha, is_normal=None)


def _from_p_value(test: str, statistic: float, p_value: float, alpha: float) -> NormalityResult:
    statistic = finite_or_none(statistic)
    p_value = finite_or_none(p_value)
    if statistic is None or p_value is None:
        return _undefined(test, alpha, "non-finite statistic")
    return NormalityResult(
        test=test,
        statistic=statistic,
        p_value=p_value,
        alpha=alpha,
        is_normal=bool(p_value >= alpha),
    )


def jarque_bera(sample: np.ndarray, alpha: float = 0.05) -> NormalityResult:
    """Jarque-Bera test built on the bias-adjusted sample moments.

    Formula:
        JB = n/6 · (S² + K²/4)

    Where S is sample skewness and K is sample excess kurtosis, both as
    computed by pandas. p = 1 − F_χ²(2)(JB).

    Requires n ≥ 4 and σ > 0; otherwise the result is undefined.
    """
    alpha = _check_alpha(alpha)
    series = pd.Series(sample, dtype=float)
    n = len(series)
    if n < 4:
        return _undefined("jarque_bera", alpha, f"n = {n} < 4")
    if is_constant(series):
        return _undefined("jarque_bera", alpha, "zero variance")

    skewness = series.skew()
    kurtosis = series.kurt()
    statistic = (n / 6.0) * (skewness ** 2 + (kurtosis ** 2) / 4.0)
    p_value = stats.chi2.sf(statistic, 2)
    return _from_p_value("jarque_bera", statistic, p_value, alpha)


def shapiro_wilk(sample: np.ndarray, alpha: float = 0.05) -> NormalityResult:
    """Shapiro-Wilk W test (scipy). Requires n ≥ 3 and σ > 0."""
    alpha = _check_alpha(alpha)
    values = np.asarray(sample, dtype=float)
    if len(values) < 3:
        return _undefined("shapiro_wilk", alpha, f"n = {len(values)} < 3")
    if is_constant(values):
        return _undefined("shapiro_wilk", alpha, "zero variance")

    with warnings.catch_warnings():
        # scipy warns that p-values may be inaccurate for n > 5000
        warnings.simplefilter("ignore", UserWarning)
        result = stats.shapiro(values)
    return _from_p_value("shapiro_wilk", result.statistic, result.pvalue, alpha)


def anderson_darling(sample: np.ndarray, alpha: float = 0.05) -> NormalityResult:
    """Anderson-Darling A² test against the normal family (scipy).

    scipy reports critical values at 15, 10, 5, 2.5 and 1 %. Normality is
    accepted when A² is below the critical value of the tabulated level
    closest to ``alpha``.
    """
    alpha = _check_alpha(alpha)
    values = np.asarray(sample, dtype=float)
    if len(values) < 3:
        return _undefined("anderson_darling", alpha, f"n = {len(values)} < 3")
    if is_constant(values):
        return _undefined("anderson_darling", alpha, "zero variance")

    with warnings.catch_warnings():
        # newer scipy releases announce a p-value based interface
        warnings.simplefilter("ignore", FutureWarning)
        warnings.simplefilter("ignore", DeprecationWarning)
        result = stats.anderson(values, dist="norm")
    levels = [float(level) for level in result.significance_level]
    criticals = [float(cv) for cv in result.critical_values]
    critical_values = {f"{level:g}": cv for level, cv in zip(levels, criticals)}

    closest = min(range(len(levels)), key=lambda i: abs(levels[i] - alpha * 100))
    statistic = float(result.statistic)
    return NormalityResult(
        test="anderson_darling",
        statistic=statistic,
        p_value=None,
        alpha=alpha,
        is_normal=bool(statistic < criticals[closest]),
        critical_values=critical_values,
    )


def kolmogorov_smirnov(sample: np.ndarray, alpha: float = 0.05) -> NormalityResult:
    """One-sample KS test against N(mean, σ) with σ the population deviation.

    Because mean and σ are estimated from the same sample the p-value is
    conservative; prefer ``lilliefors`` for a calibrated answer.
    """
    alpha = _check_alpha(alpha)
    values = np.asarray(sample, dtype=float)
    if len(values) < 2:
        return _undefined("kolmogorov_smirnov", alpha, f"n = {len(values)} < 2")
    if is_constant(values):
        return _undefined("kolmogorov_smirnov", alpha, "zero variance")
    std = float(np.std(values))

    result = stats.kstest(values, "norm", args=(float(np.mean(values)), std))
    return _from_p_value("kolmogorov_smirnov", result.statistic, result.pvalue, alpha)


def lilliefors(sample: np.ndarray, alpha: float = 0.05) -> NormalityResult:
    """Lilliefors test (KS with estimated mean and variance), via statsmodels."""
    alpha = _check_alpha(alpha)
    values = np.asarray(sample, dtype=float)
    if len(values) < 4:
        return _undefined("lilliefors", alpha, f"n = {len(values)} < 4")
    if is_constant(values):
        return _undefined("lilliefors", alpha, "zero variance")

    statistic, p_value = sm_lilliefors(values, dist="norm", pvalmethod="table")
    return _from_p_value("lilliefors", statistic, p_value, alpha)


NORMALITY_TESTS = {
    "jarque_bera": jarque_bera,
    "shapiro_wilk": shapiro_wilk,
    "anderson_darling": anderson_darling,
    "kolmogorov_smirnov": kolmogorov_smirnov,
    "lilliefors": lilliefors,
}


def run_normality_tests(sample: np.ndarray, alpha: float = 0.05) -> dict[str, NormalityResult]:
    """Run every normality test at the same significance level.

    Returns:
        Dict of test name → NormalityResult, in a fixed order
    """
    alpha = _check_alpha(alpha)
    return {name: test(sample, alpha) for name, test in NORMALITY_TESTS.items()}
