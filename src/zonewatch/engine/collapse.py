"""Collapse overlapping rule runs into maximal contiguous index ranges.

Example:
    >>> collapse_runs([[0, 1, 2, 3, 4, 5, 6], [1, 2, 3, 4, 5, 6, 7]])
    [[0, 1, 2, 3, 4, 5, 6, 7]]
    >>> collapse_runs([46])
    [[46]]
    >>> collapse_runs([[1, 2], [4, 5], [5, 6]])
    [[1, 2], [4, 5, 6]]
"""

from collections.abc import Iterable

from zonewatch.engine.rules import Run


def _flatten(runs: Iterable[Run]) -> set[int]:
    indices: set[int] = set()
    for run in runs:
        if isinstance(run, (list, tuple)):
            indices.update(int(i) for i in run)
        else:
            indices.add(int(run))
    return indices


def collapse_runs(runs: Iterable[Run]) -> list[list[int]]:
    """Merge runs into disjoint, sorted, maximal ranges of consecutive indices.

    Every index in the input appears in exactly one output range and no
    index is added. Already-collapsed input comes back unchanged.

    Args:
        runs: Run list of one rule (index lists and/or bare indices)

    Returns:
        Sorted list of ranges, each a list of consecutive indices
    """
    ranges: list[list[int]] = []
    for index in sorted(_flatten(runs)):
        if ranges and index == ranges[-1][-1] + 1:
            ranges[-1].append(index)
        else:
            ranges.append([index])
    return ranges
