from typing import List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger
from numba import njit

from lifeline.declutter.points import (
    Observer,
    SpacingAdjustment,
    TimelinePoint,
    notify,
    times_of,
    with_times,
)

# --- Constants ---
SAME_TIME_SPACING = 0.2  # step between points fanned out from a shared time


@njit
def same_time_groups_numba(times: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Find each point's same-time group size and its rank inside that group.

    Parameters
    ----------
    times : np.ndarray
        Original (pre-spacing) time coordinates (float64).

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Zero-based ranks in sequence order and group sizes, both int64.
    """
    n = len(times)
    ranks = np.zeros(n, dtype=np.int64)
    sizes = np.zeros(n, dtype=np.int64)

    for i in range(n):
        size = 0
        rank = 0
        for j in range(n):
            if times[j] == times[i]:
                if j < i:
                    rank += 1
                size += 1
        ranks[i] = rank
        sizes[i] = size

    return ranks, sizes


def space_same_time(
    points: Sequence[TimelinePoint],
    spacing: float = SAME_TIME_SPACING,
    observer: Optional[Observer] = None,
) -> List[TimelinePoint]:
    """
    Fan out points that share a time coordinate into a symmetric group.

    A group of `n` equal-time points at `T` is placed at
    `T - (n-1)*spacing/2, ..., T + (n-1)*spacing/2` in sequence order, so the
    deviations sum to zero. Points with a unique time are left untouched.

    Parameters
    ----------
    points : Sequence[TimelinePoint]
        Points sorted ascending by time.
    spacing : float, default=0.2
        Distance between neighbouring points of one group.
    observer : Optional[Observer], default=None
        Called with a `SpacingAdjustment` for every point that moved.

    Returns
    -------
    List[TimelinePoint]
        New points, index-aligned with `points`.
    """
    if len(points) == 0:
        return []

    original = times_of(points)
    ranks, sizes = same_time_groups_numba(original)

    spaced = original.copy()
    for i in range(len(original)):
        n = int(sizes[i])
        if n <= 1:
            continue
        offset_total = (n - 1) * spacing / 2
        spaced[i] = original[i] - offset_total + ranks[i] * spacing

        if spaced[i] != original[i]:
            notify(
                observer,
                SpacingAdjustment(
                    index=i,
                    label=points[i].label,
                    original_time=float(original[i]),
                    new_time=float(spaced[i]),
                    rank=int(ranks[i]),
                    group_size=n,
                ),
            )

    grouped = int(np.sum(sizes > 1))
    if grouped:
        logger.debug(f"Spaced {grouped} points sharing a time coordinate")

    return with_times(points, spaced)
