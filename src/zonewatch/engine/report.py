"""Pattern report: zones, rule hits and summary statistics in one place.

The report is the canonical output of ZONEWATCH. It bundles:
1. Sigma ranges (±1σ … ±5σ) around the mean
2. Descriptive statistics and the Jarque-Bera normality check
3. Outliers from the single-pass filters
4. Rule hits for alpha … hotel, raw or collapsed
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

from zonewatch.config import Settings, settings as default_settings
from zonewatch.engine.collapse import collapse_runs
from zonewatch.engine.rules import RULE_DESCRIPTIONS, RuleEngine, RunList
from zonewatch.engine.zones import ZoneClassifier, ZoneResult
from zonewatch.stats.descriptive import DescriptiveStats, describe, sigma_ranges
from zonewatch.stats.normality import NormalityResult, jarque_bera
from zonewatch.stats.outliers import find_outliers
from zonewatch.validation import validate_sample

logger = logging.getLogger(__name__)

SIGMA_LEVELS = 5


@dataclass(frozen=True)
class PatternReport:
    """Complete pattern analysis of one sample.

    Attributes:
        sigma_ranges: "1sigma" … "5sigma" → (lower, upper)
        statistics: Descriptive statistics of the sample
        jarque_bera: Jarque-Bera normality result
        outliers: Filter name → outlying values
        rules: Rule name → RunList (raw) or collapsed ranges
        zones: Zone classification the rules were evaluated on
        collapsed: True if ``rules`` holds collapsed ranges
    """

    sigma_ranges: dict[str, tuple[float, float]]
    statistics: DescriptiveStats
    jarque_bera: NormalityResult
    outliers: dict[str, list[float]]
    rules: dict[str, RunList]
    zones: ZoneResult
    collapsed: bool = False

    def __getitem__(self, rule: str) -> RunList:
        """Rule hits by name, e.g. ``report["delta"]``."""
        return self.rules[rule]

    def flagged_indices(self, rule: str) -> list[int]:
        """Sorted distinct indices flagged by one rule."""
        return [i for span in collapse_runs(self.rules[rule]) for i in span]

    def triggered_rules(self) -> list[str]:
        """Names of rules with at least one hit, in rule order."""
        return [name for name, runs in self.rules.items() if runs]

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary (zone labels are not included)."""
        return {
            "sigma_ranges": {k: list(v) for k, v in self.sigma_ranges.items()},
            "statistics": self.statistics.to_dict(),
            "jarque_bera": self.jarque_bera.to_dict(),
            "outliers": {k: list(v) for k, v in self.outliers.items()},
            "rules": {k: [list(r) if isinstance(r, list) else r for r in v] for k, v in self.rules.items()},
            "degenerate": self.zones.degenerate,
            "collapsed": self.collapsed,
        }

    def format_rules(self) -> str:
        """Format rule hits, one line per rule.

        Example:
            alpha    [46]  1+ points beyond Zone A (Prob. 0.00270)
            delta    [0-7]  7+ consecutive points on one side of the average
        """
        lines = []
        for name, runs in self.rules.items():
            if not runs:
                lines.append(f"{name:<8} -")
                continue
            spans = ", ".join(
                f"{span[0]}-{span[-1]}" if len(span) > 1 else f"{span[0]}"
                for span in collapse_runs(runs)
            )
            lines.append(f"{name:<8} [{spans}]  {RULE_DESCRIPTIONS[name]}")
        return "\n".join(lines)

    def format_statistics(self) -> str:
        """Format headline statistics."""
        s = self.statistics
        lines = [
            f"n = {s.count}  mean = {s.mean:.4f}  σ = {s.standard_deviation:.4f}  "
            f"median = {s.median:.4f}",
            f"min = {s.min:.4f}  max = {s.max:.4f}  spread = {s.spread:.4f}",
        ]
        jb = self.jarque_bera
        if jb.statistic is None:
            lines.append("Jarque-Bera: N/A (insufficient data)")
        else:
            lines.append(f"Jarque-Bera: {jb.statistic:.4f} (p = {jb.p_value:.4f})")
        if self.zones.degenerate:
            lines.append("Zero variance: every point labelled zone C")
        return "\n".join(lines)

    def format_text(self) -> str:
        """Full human-readable report."""
        return f"{self.format_statistics()}\n\n{self.format_rules()}"


def collapse_report(report: PatternReport) -> PatternReport:
    """Collapse every rule's runs; statistics pass through unchanged.

    Idempotent: collapsing a collapsed report returns an equal report.
    """
    return dataclasses.replace(
        report,
        rules={name: collapse_runs(runs) for name, runs in report.rules.items()},
        collapsed=True,
    )


class ReportAssembler:
    """Builds a PatternReport from a raw sample.

    Args:
        config: Settings for outlier thresholds and degenerate policy
            (default: global settings)

    Example:
        >>> report = ReportAssembler().assemble(sample, collapse=True)
        >>> report["alpha"]
        [[46]]
    """

    def __init__(self, config: Optional[Settings] = None) -> None:
        self.config = config or default_settings
        self.classifier = ZoneClassifier(degenerate_policy=self.config.degenerate_policy)

    def assemble(self, sample, collapse: bool = False) -> PatternReport:
        """Classify, run all rules, optionally collapse, attach statistics.

        Raises:
            InvalidInputError: If the sample is not usable
            DegenerateSampleError: If σ = 0 and the policy is 'raise'
        """
        values = validate_sample(sample)
        statistics = describe(values)
        zones = self.classifier.classify_described(values, statistics)
        rules = RuleEngine(zones).detect_all()

        report = PatternReport(
            sigma_ranges=sigma_ranges(zones.mean, zones.std, SIGMA_LEVELS),
            statistics=statistics,
            jarque_bera=jarque_bera(values, self.config.normality_alpha),
            outliers=find_outliers(values, self.config),
            rules=rules,
            zones=zones,
        )
        logger.debug("Assembled report over %d points (collapse=%s)", len(values), collapse)

        if collapse:
            return collapse_report(report)
        return report


def detect_patterns(sample, collapse: bool = False) -> PatternReport:
    """Run the full pattern analysis with the configured settings."""
    return ReportAssembler().assemble(sample, collapse=collapse)
