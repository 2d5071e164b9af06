"""Control-chart engine for ZONEWATCH.

Modules:
    - zones: Zone boundaries (C/B/A) and per-point labels (C/B/A/X)
    - rules: Eight fixed-window pattern rules (alpha … hotel)
    - collapse: Merge overlapping rule runs into contiguous ranges
    - report: PatternReport assembly
"""

from zonewatch.engine.zones import (
    DISCRETE_ZONE_PROBABILITY,
    ZONE_FACTORS,
    ZONE_PROBABILITY,
    Zone,
    ZoneBoundary,
    ZoneClassifier,
    ZoneResult,
    classify_zones,
)
from zonewatch.engine.rules import (
    RULE_DESCRIPTIONS,
    RULE_NAMES,
    RULE_WINDOWS,
    Rule,
    RuleEngine,
)
from zonewatch.engine.collapse import collapse_runs
from zonewatch.engine.report import (
    PatternReport,
    ReportAssembler,
    collapse_report,
    detect_patterns,
)

__all__ = [
    "DISCRETE_ZONE_PROBABILITY",
    "ZONE_FACTORS",
    "ZONE_PROBABILITY",
    "Zone",
    "ZoneBoundary",
    "ZoneClassifier",
    "ZoneResult",
    "classify_zones",
    "RULE_DESCRIPTIONS",
    "RULE_NAMES",
    "RULE_WINDOWS",
    "Rule",
    "RuleEngine",
    "collapse_runs",
    "PatternReport",
    "ReportAssembler",
    "collapse_report",
    "detect_patterns",
]
