"""Zone classification: place every sample point in a sigma band.

Zones around the sample mean, in σ units:
    C: [mean − 1σ, mean + 1σ)
    B: [mean − 2σ, mean + 2σ)   (outside C)
    A: [mean − 3σ, mean + 3σ)   (outside B)
    X: everything else (beyond 3σ)

Membership is half-open, so a point exactly at mean + σ falls in B while a
point exactly at mean − σ stays in C.

Zone X is not a textbook control-chart zone; it names points beyond the
A band so rule alpha can test a single label.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional

import numpy as np

from zonewatch.config import DEGENERATE_POLICIES, settings
from zonewatch.exceptions import ConfigurationError, DegenerateSampleError
from zonewatch.stats.descriptive import DescriptiveStats, describe
from zonewatch.validation import validate_sample

logger = logging.getLogger(__name__)


class Zone(Enum):
    """Control-chart zones, innermost first."""

    C = "C"  # within 1σ
    B = "B"  # within 2σ
    A = "A"  # within 3σ
    X = "X"  # beyond 3σ


# σ multiplier of each band's outer edge
ZONE_FACTORS = MappingProxyType({Zone.C: 1, Zone.B: 2, Zone.A: 3})

# Share of a normal population inside each band's outer edge (informational)
ZONE_PROBABILITY = MappingProxyType({
    "A": 0.9973002039367482,  # ±3σ
    "B": 0.9544997361036420,  # ±2σ
    "C": 0.6826894921371215,  # ±1σ
})

# Share that falls in the band only (A minus B, B minus C, C)
DISCRETE_ZONE_PROBABILITY = MappingProxyType({
    "A": ZONE_PROBABILITY["A"] - ZONE_PROBABILITY["B"],
    "B": ZONE_PROBABILITY["B"] - ZONE_PROBABILITY["C"],
    "C": ZONE_PROBABILITY["C"],
})


@dataclass(frozen=True)
class ZoneBoundary:
    """Edges of one zone.

    Attributes:
        zone: Zone this boundary belongs to
        factor: σ multiplier (1 for C, 2 for B, 3 for A)
        lower: mean − factor·σ (inclusive)
        upper: mean + factor·σ (exclusive)
    """

    zone: Zone
    factor: int
    lower: float
    upper: float

    def contains(self, value: float) -> bool:
        """Half-open membership test: lower ≤ value < upper."""
        return self.lower <= value < self.upper


@dataclass(frozen=True)
class ZoneResult:
    """Zone classification of one sample.

    Attributes:
        sample: The validated sample (read-only copy)
        mean: Sample mean
        std: Population standard deviation
        median: Sample median
        boundaries: C, B and A boundaries, innermost first
        labels: One Zone per sample index
        degenerate: True when σ = 0 and every point was labelled C
    """

    sample: tuple[float, ...]
    mean: float
    std: float
    median: float
    boundaries: tuple[ZoneBoundary, ...]
    labels: tuple[Zone, ...]
    degenerate: bool = False

    def __len__(self) -> int:
        return len(self.labels)

    def boundary(self, zone: Zone) -> ZoneBoundary:
        """Look up the boundary of zone C, B or A."""
        for b in self.boundaries:
            if b.zone is zone:
                return b
        raise KeyError(f"Zone {zone.value} has no boundary")

    def label_string(self) -> str:
        """Labels as a compact string, e.g. 'CCBCAX'."""
        return "".join(label.value for label in self.labels)

    def counts(self) -> dict[str, int]:
        """Number of points per zone."""
        out = {zone.value: 0 for zone in Zone}
        for label in self.labels:
            out[label.value] += 1
        return out

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "mean": self.mean,
            "standard_deviation": self.std,
            "median": self.median,
            "degenerate": self.degenerate,
            "boundaries": {
                b.zone.value: {"factor": b.factor, "lower": b.lower, "upper": b.upper}
                for b in self.boundaries
            },
            "labels": [label.value for label in self.labels],
            "counts": self.counts(),
        }


class ZoneClassifier:
    """Assigns each point of a sample to zone C, B, A or X.

    Args:
        degenerate_policy: Handling of σ = 0. 'zone_c' labels every point C;
            'raise' raises DegenerateSampleError. Defaults to the configured
            ``settings.degenerate_policy``.

    Example:
        >>> result = ZoneClassifier().classify([1, -1, 1, -1])
        >>> result.label_string()
        'BCBC'
    """

    def __init__(self, degenerate_policy: Optional[str] = None) -> None:
        policy = degenerate_policy if degenerate_policy is not None else settings.degenerate_policy
        policy = str(policy).lower()
        if policy not in DEGENERATE_POLICIES:
            raise ConfigurationError(
                f"degenerate_policy must be 'zone_c' or 'raise', got '{degenerate_policy}'"
            )
        self.degenerate_policy = policy

    @staticmethod
    def boundaries_for(mean: float, std: float) -> tuple[ZoneBoundary, ...]:
        """Build C, B, A boundaries for a given mean and σ."""
        return tuple(
            ZoneBoundary(
                zone=zone,
                factor=factor,
                lower=mean - std * factor,
                upper=mean + std * factor,
            )
            for zone, factor in ZONE_FACTORS.items()
        )

    @staticmethod
    def which(value: float, boundaries: tuple[ZoneBoundary, ...]) -> Zone:
        """Zone of a single value: first boundary (innermost first) that contains it."""
        for boundary in boundaries:
            if boundary.contains(value):
                return boundary.zone
        return Zone.X

    def classify(self, sample) -> ZoneResult:
        """Classify every point of a sample.

        Args:
            sample: Raw sample (validated and coerced here)

        Returns:
            ZoneResult with mean, σ, median, boundaries and labels

        Raises:
            InvalidInputError: If the sample is not usable
            DegenerateSampleError: If σ = 0 and the policy is 'raise'
        """
        values = validate_sample(sample)
        return self.classify_described(values, describe(values))

    def classify_described(self, values: np.ndarray, stats: DescriptiveStats) -> ZoneResult:
        """Classify an already validated sample with its precomputed statistics.

        Args:
            values: Output of ``validate_sample``
            stats: ``describe(values)``

        Raises:
            DegenerateSampleError: If σ = 0 and the policy is 'raise'
        """
        mean, std = stats.mean, stats.standard_deviation
        boundaries = self.boundaries_for(mean, std)

        if std == 0:
            if self.degenerate_policy == "raise":
                raise DegenerateSampleError(
                    f"Standard deviation is zero (all {len(values)} values equal {mean}); "
                    "zone boundaries collapse to the mean"
                )
            logger.warning(
                "Zero standard deviation over %d points; labelling every point zone C",
                len(values),
            )
            labels = tuple(Zone.C for _ in values)
        else:
            labels = tuple(self.which(float(v), boundaries) for v in values)

        return ZoneResult(
            sample=tuple(float(v) for v in values),
            mean=mean,
            std=std,
            median=stats.median,
            boundaries=boundaries,
            labels=labels,
            degenerate=std == 0,
        )


def classify_zones(sample, degenerate_policy: Optional[str] = None) -> ZoneResult:
    """Classify a sample into zones with a one-off ZoneClassifier."""
    return ZoneClassifier(degenerate_policy=degenerate_policy).classify(sample)
