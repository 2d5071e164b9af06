"""Example 1: Basic Pattern Detection

This example shows the most basic usage of ZONEWATCH:
classifying a series into control-chart zones and running the
eight pattern rules on it.

For demonstration purposes, this uses synthetic data with a drift and
a spike injected at known positions.
"""

import json

import numpy as np

from zonewatch.engine import (
    ReportAssembler,
    RuleEngine,
    ZoneClassifier,
    collapse_report,
)
from zonewatch.stats import run_normality_tests


def generate_synthetic_series(n_points: int = 60, seed: int = 7) -> np.ndarray:
    """Generate an in-control series with a drift and one spike."""
    rng = np.random.default_rng(seed)
    series = rng.normal(loc=50.0, scale=5.0, size=n_points)
    series[20:30] += 6.0   # sustained shift above the mean
    series[45] += 30.0     # single excursion
    return series


def generate_even_series(mean: float = 0.0, spread: float = 20.0, n_points: int = 20,
                         seed: int = 7) -> np.ndarray:
    """Evenly spaced points across mean ± spread/2, each jittered by up to half a step."""
    rng = np.random.default_rng(seed)
    step = spread / (n_points - 1)
    grid = mean - spread / 2 + step * np.arange(n_points)
    return grid + step * (rng.random(n_points) - 0.5)


def main():
    """Run basic pattern example."""
    print("=" * 60)
    print("ZONEWATCH: Example 1: Basic Pattern Detection")
    print("=" * 60)
    print()

    # Step 1: Generate synthetic data
    print("Step 1: Generating synthetic series...")
    series = generate_synthetic_series()
    print(f"  ✓ Generated {len(series)} points")
    even = generate_even_series(mean=50.0, spread=30.0, n_points=len(series))
    print(f"  ✓ Generated {len(even)} evenly spread points for comparison")
    print()

    # Step 2: Classify zones
    print("Step 2: Classifying zones...")
    zones = ZoneClassifier().classify(series)
    print(f"  ✓ mean = {zones.mean:.4f}, σ = {zones.std:.4f}")
    for boundary in zones.boundaries:
        print(f"  ✓ Zone {boundary.zone.value}: [{boundary.lower:.4f}, {boundary.upper:.4f})")
    print(f"  ✓ Labels: {zones.label_string()}")
    print()

    # Step 3: Run rules directly on the classification
    print("Step 3: Running pattern rules...")
    hits = RuleEngine(zones).detect_all()
    for name, runs in hits.items():
        print(f"  ✓ {name}: {len(runs)} window(s)")
    print()

    # Step 4: Normality of the sample
    print("Step 4: Checking normality...")
    for label, sample in (("drifting", series), ("even", even)):
        for name, result in run_normality_tests(sample).items():
            print(f"  ✓ {label} {name}: is_normal = {result.is_normal}")
    print()

    # Step 5: Full report, raw then collapsed
    report = ReportAssembler().assemble(series)
    collapsed = collapse_report(report)

    print("=" * 60)
    print("PATTERN REPORT")
    print("=" * 60)
    print()
    print(collapsed.format_text())
    print()

    print("=" * 60)
    print("STRUCTURED OUTPUT (for programmatic use)")
    print("=" * 60)
    print()
    print(json.dumps(collapsed.to_dict(), indent=2))


if __name__ == '__main__':
    main()
