"""
Dataset-wide order statistics used as classification thresholds.

Percentile semantics
--------------------
``percentile()`` is a nearest-rank percentile **without interpolation**:

    idx = floor(p / 100 * n), clamped to [0, n - 1]
    return sorted(nums)[idx]

So ``percentile([10, 20, 30, 40], 50) == 30`` where an interpolating
implementation (numpy, ``statistics.quantiles``) would return 25.
Quadrant thresholds were tuned against this definition; do not swap it
for a library percentile.

Both functions sort a copy and never mutate their input.
"""

from __future__ import annotations

import math
from typing import Sequence


def median(nums: Sequence[float]) -> float:
    """Median of ``nums``; ``0.0`` for an empty sequence.

    Even-length input averages the two middle values.
    """
    if not nums:
        return 0.0
    ordered = sorted(nums)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def percentile(nums: Sequence[float], p: float) -> float:
    """Nearest-rank percentile of ``nums``; ``0.0`` for an empty sequence.

    Args:
        nums: Values to rank.
        p:    Percentile in [0, 100]. Out-of-range values are clamped to the
              first / last element.

    Returns:
        The element at ``floor(p / 100 * len(nums))`` of the sorted copy.
    """
    if not nums:
        return 0.0
    ordered = sorted(nums)
    idx = math.floor((p / 100) * len(ordered))
    idx = min(len(ordered) - 1, max(0, idx))
    return ordered[idx]
