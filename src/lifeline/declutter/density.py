from typing import List, Sequence

import numpy as np
from loguru import logger
from numba import njit

from lifeline.declutter.points import TimelinePoint, times_of, with_times

# --- Constants ---
DENSITY_WINDOW = 3.0  # half-width of the neighbourhood counted around each point
DENSITY_AMPLIFICATION = 1.5  # gap growth per unit of extra density


@njit
def count_neighbours_numba(times: np.ndarray, window: float) -> np.ndarray:
    """
    Count, for every point, the points within `window` of it (itself included).

    Parameters
    ----------
    times : np.ndarray
        Time coordinates (float64).
    window : float
        Inclusive half-width of the neighbourhood.

    Returns
    -------
    np.ndarray
        Neighbour counts as float64.
    """
    n = len(times)
    counts = np.zeros(n, dtype=np.float64)

    for i in range(n):
        count = 0
        for j in range(n):
            if abs(times[j] - times[i]) <= window:
                count += 1
        counts[i] = count

    return counts


def compute_densities(times: np.ndarray, window: float = DENSITY_WINDOW) -> np.ndarray:
    """Local density of every point: neighbours within +/- `window`."""
    times = np.asarray(times, dtype=np.float64)
    return count_neighbours_numba(times, np.float64(window))


def scaled_gaps(
    times: np.ndarray,
    densities: np.ndarray,
    amplification: float = DENSITY_AMPLIFICATION,
) -> np.ndarray:
    """
    Stretch each gap between consecutive points by their average density.

    Parameters
    ----------
    times : np.ndarray
        Time coordinates, sorted.
    densities : np.ndarray
        Per-point densities, same length as `times`.
    amplification : float, default=1.5
        Extra stretch per unit of average density above 1.

    Returns
    -------
    np.ndarray
        Scaled gaps; element `i` is the gap between points `i-1` and `i`,
        element 0 is always 0.
    """
    times = np.asarray(times, dtype=np.float64)
    densities = np.asarray(densities, dtype=np.float64)
    if len(times) != len(densities):
        raise ValueError(
            f"Density array length ({len(densities)}) must match time array length ({len(times)})."
        )

    gaps = np.zeros(len(times), dtype=np.float64)
    if len(times) < 2:
        return gaps

    actual = np.diff(times)
    avg_density = (densities[1:] + densities[:-1]) / 2
    scale_factor = 1.0 + (avg_density - 1.0) * amplification
    gaps[1:] = actual * scale_factor
    return gaps


def rescale_by_density(
    points: Sequence[TimelinePoint],
    window: float = DENSITY_WINDOW,
    amplification: float = DENSITY_AMPLIFICATION,
) -> List[TimelinePoint]:
    """
    Redistribute points so dense neighbourhoods get more of the time axis.

    The first and last times are anchors: the scaled gaps are normalised back
    into the original span, so only the interior points move. When the total
    scaled distance is not positive (single point, all points coinciding) the
    input times are kept.

    Parameters
    ----------
    points : Sequence[TimelinePoint]
        Output of the same-time spacer.
    window : float, default=3.0
        Density window half-width.
    amplification : float, default=1.5
        Gap stretch per unit of extra density.

    Returns
    -------
    List[TimelinePoint]
        New points, index-aligned with `points`.
    """
    if len(points) == 0:
        return []

    times = times_of(points)
    densities = compute_densities(times, window)
    gaps = scaled_gaps(times, densities, amplification)

    min_time = times[0]
    span = times[-1] - min_time
    cumulative = np.cumsum(gaps)
    total = cumulative[-1]

    rescaled = times.copy()
    if total > 0:
        with np.errstate(invalid="ignore", over="ignore"):
            rescaled[1:] = min_time + (cumulative[1:] / total) * span
    elif len(times) > 1:
        logger.debug(
            f"Total scaled distance is {total}; keeping unscaled times for {len(times)} points"
        )

    logger.debug(
        f"Density: min={np.min(densities):.0f}, max={np.max(densities):.0f}, mean={np.mean(densities):.2f}"
    )
    return with_times(points, rescaled)
