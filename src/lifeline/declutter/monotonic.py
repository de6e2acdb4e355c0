from typing import List, Optional, Sequence

import numpy as np
from loguru import logger
from numba import njit

from lifeline.declutter.points import (
    MonotonicCorrection,
    Observer,
    TimelinePoint,
    notify,
    times_of,
    with_times,
)

# --- Constants ---
MONOTONIC_STEP = 0.1  # forward nudge for a point that is not after its predecessor


@njit
def enforce_monotonic_numba(times: np.ndarray, step: float) -> np.ndarray:
    """Single forward pass making `times` strictly increasing."""
    out = times.copy()
    for i in range(1, len(out)):
        if out[i] <= out[i - 1]:
            out[i] = out[i - 1] + step
    return out


def enforce_monotonic(
    points: Sequence[TimelinePoint],
    step: float = MONOTONIC_STEP,
    observer: Optional[Observer] = None,
) -> List[TimelinePoint]:
    """
    Push every point that is not strictly after its predecessor forward.

    Corrections cascade: a pushed point becomes the reference for the next
    one. This can override the proportional spacing of the density rescaler.

    Parameters
    ----------
    points : Sequence[TimelinePoint]
        Rescaled points.
    step : float, default=0.1
        Distance placed after the predecessor when a correction fires.
    observer : Optional[Observer], default=None
        Called with a `MonotonicCorrection` for every point that moved.

    Returns
    -------
    List[TimelinePoint]
        New points, index-aligned with `points`.
    """
    if len(points) == 0:
        return []
    if step <= 0:
        logger.warning(
            f"Validation Warning: Monotonic step must be positive, got {step}. This may lead to unexpected behaviour."
        )

    before = times_of(points)
    after = enforce_monotonic_numba(before, np.float64(step))

    changed = (after != before) & ~(np.isnan(after) & np.isnan(before))
    corrected = np.flatnonzero(changed)
    for i in corrected:
        notify(
            observer,
            MonotonicCorrection(
                index=int(i),
                label=points[i].label,
                before=float(before[i]),
                after=float(after[i]),
            ),
        )
    if len(corrected):
        logger.debug(f"Monotonic pass corrected {len(corrected)} points")

    return with_times(points, after)
