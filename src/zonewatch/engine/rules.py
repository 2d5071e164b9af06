"""Pattern rules: eight fixed-window detectors over zone labels and values.

Each rule slides a window of fixed length L over the sample and reports
every window whose points jointly satisfy the rule. Only full windows are
evaluated (start indices 0 … n − L); a window that would run past the end of
the sample never triggers.

Rules (names are internal labels, not textbook names):
    alpha   (L=1):  point beyond zone A (label X)
    bravo   (L=3):  2+ of 3 points in zone A or beyond
    charlie (L=5):  4+ of 5 points in zone B or beyond
    delta   (L=7):  7 points on the same side of the mean
    echo    (L=7):  7 points strictly trending up or down
    foxtrot (L=8):  8 points with none in zone C
    golf    (L=15): 15 points all in zone C
    hotel   (L=14): 14 points alternating up and down

Overlapping windows produce overlapping runs; ``collapse_runs`` merges them.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Callable, Sequence

from zonewatch.engine.zones import Zone, ZoneResult

logger = logging.getLogger(__name__)

# Single-point rules report bare indices; wider rules report index lists
Run = list[int] | int
RunList = list[Run]


class Rule(Enum):
    """Pattern rules in evaluation order."""

    ALPHA = "alpha"
    BRAVO = "bravo"
    CHARLIE = "charlie"
    DELTA = "delta"
    ECHO = "echo"
    FOXTROT = "foxtrot"
    GOLF = "golf"
    HOTEL = "hotel"

    @property
    def window(self) -> int:
        """Number of consecutive points the rule inspects."""
        return RULE_WINDOWS[self.value]

    def get_description(self) -> str:
        """Get human-readable description of the rule."""
        return RULE_DESCRIPTIONS[self.value]


RULE_WINDOWS = MappingProxyType({
    "alpha": 1,
    "bravo": 3,
    "charlie": 5,
    "delta": 7,
    "echo": 7,
    "foxtrot": 8,
    "golf": 15,
    "hotel": 14,
})

RULE_DESCRIPTIONS = MappingProxyType({
    "alpha": "1+ points beyond Zone A (Prob. 0.00270)",
    "bravo": "2 out of 3 consecutive points in Zone A or beyond (Prob. 0.00198)",
    "charlie": "4 out of 5 consecutive points in Zone B or beyond (Prob. 0.00692)",
    "delta": "7+ consecutive points on one side of the average",
    "echo": "7+ consecutive points trending up or down",
    "foxtrot": "8+ consecutive points with no points in Zone C (Prob. < 0.00010)",
    "golf": "15+ consecutive points in Zone C (Prob. < 0.00326)",
    "hotel": "14+ consecutive points alternating up and down",
})

RULE_NAMES = tuple(rule.value for rule in Rule)

_OUTER = (Zone.A, Zone.X)


def _alpha(labels: Sequence[Zone], values: Sequence[float], mean: float) -> bool:
    return labels[0] is Zone.X


def _bravo(labels: Sequence[Zone], values: Sequence[float], mean: float) -> bool:
    return sum(1 for z in labels if z in _OUTER) >= 2


def _charlie(labels: Sequence[Zone], values: Sequence[float], mean: float) -> bool:
    return sum(1 for z in labels if z is not Zone.C) >= 4


def _delta(labels: Sequence[Zone], values: Sequence[float], mean: float) -> bool:
    # Side is fixed by the first point; a point on the mean belongs to neither side
    if values[0] > mean:
        return all(v > mean for v in values)
    return all(v < mean for v in values)


def _echo(labels: Sequence[Zone], values: Sequence[float], mean: float) -> bool:
    rising = values[1] > values[0]
    for prev, cur in zip(values, values[1:]):
        if rising and not cur > prev:
            return False
        if not rising and not cur < prev:
            return False
    return True


def _foxtrot(labels: Sequence[Zone], values: Sequence[float], mean: float) -> bool:
    return all(z is not Zone.C for z in labels)


def _golf(labels: Sequence[Zone], values: Sequence[float], mean: float) -> bool:
    return all(z is Zone.C for z in labels)


def _hotel(labels: Sequence[Zone], values: Sequence[float], mean: float) -> bool:
    if values[1] == values[0]:
        return False
    rising = values[1] > values[0]
    for prev, cur in zip(values[1:], values[2:]):
        if cur == prev:
            return False
        # Each step must reverse the previous one
        if (cur > prev) == rising:
            return False
        rising = cur > prev
    return True


_CHECKS: dict[Rule, Callable[[Sequence[Zone], Sequence[float], float], bool]] = {
    Rule.ALPHA: _alpha,
    Rule.BRAVO: _bravo,
    Rule.CHARLIE: _charlie,
    Rule.DELTA: _delta,
    Rule.ECHO: _echo,
    Rule.FOXTROT: _foxtrot,
    Rule.GOLF: _golf,
    Rule.HOTEL: _hotel,
}


class RuleEngine:
    """Scans a classified sample with the eight pattern rules.

    Detection is a pure function of the sample, its zone labels and its
    mean; the engine holds no state beyond the ZoneResult it was given.

    Args:
        zones: Output of ZoneClassifier.classify

    Example:
        >>> engine = RuleEngine(classify_zones(sample))
        >>> engine.detect(Rule.ALPHA)
        [46]
        >>> hits = engine.detect_all()
        >>> list(hits)
        ['alpha', 'bravo', 'charlie', 'delta', 'echo', 'foxtrot', 'golf', 'hotel']
    """

    def __init__(self, zones: ZoneResult) -> None:
        self.zones = zones

    def detect(self, rule: Rule | str) -> RunList:
        """Run one rule over every full window.

        Args:
            rule: Rule member or its name (e.g. "delta")

        Returns:
            One run per satisfying window, ordered by window start. A run
            is the list of window indices, or the bare index for rules with
            a one-point window (alpha)
        """
        rule = Rule(rule)
        check = _CHECKS[rule]
        width = rule.window
        labels = self.zones.labels
        values = self.zones.sample
        mean = self.zones.mean

        runs: RunList = []
        for start in range(len(labels) - width + 1):
            end = start + width
            if check(labels[start:end], values[start:end], mean):
                runs.append(start if width == 1 else list(range(start, end)))
        return runs

    def detect_all(self) -> dict[str, RunList]:
        """Run every rule, keyed by rule name in evaluation order."""
        hits = {rule.value: self.detect(rule) for rule in Rule}
        logger.debug(
            "Rule hits over %d points: %s",
            len(self.zones),
            {name: len(runs) for name, runs in hits.items()},
        )
        return hits
