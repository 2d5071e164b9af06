"""ZONEWATCH: control-chart zone classifier and pattern-rule engine.

Usage:
    from zonewatch import detect_patterns

    report = detect_patterns(values, collapse=True)
    print(report["delta"])
"""

from zonewatch.engine import (
    DISCRETE_ZONE_PROBABILITY,
    RULE_DESCRIPTIONS,
    RULE_WINDOWS,
    ZONE_PROBABILITY,
    PatternReport,
    Rule,
    Zone,
    ZoneResult,
    classify_zones,
    collapse_report,
    detect_patterns,
)
from zonewatch.exceptions import (
    ConfigurationError,
    DegenerateSampleError,
    InvalidInputError,
    ZonewatchError,
)

__version__ = "0.3.0"

__all__ = [
    "DISCRETE_ZONE_PROBABILITY",
    "RULE_DESCRIPTIONS",
    "RULE_WINDOWS",
    "ZONE_PROBABILITY",
    "PatternReport",
    "Rule",
    "Zone",
    "ZoneResult",
    "classify_zones",
    "collapse_report",
    "detect_patterns",
    "ConfigurationError",
    "DegenerateSampleError",
    "InvalidInputError",
    "ZonewatchError",
]
