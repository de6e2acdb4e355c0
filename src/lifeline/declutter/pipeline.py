from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
from loguru import logger

from lifeline.declutter.density import (
    DENSITY_AMPLIFICATION,
    DENSITY_WINDOW,
    compute_densities,
    rescale_by_density,
)
from lifeline.declutter.monotonic import MONOTONIC_STEP, enforce_monotonic
from lifeline.declutter.points import (
    AdjustmentRecord,
    DensityAdjustment,
    Observer,
    TimelinePoint,
    times_of,
)
from lifeline.declutter.spacer import SAME_TIME_SPACING, space_same_time


@dataclass
class DeclutterResult:
    """Output of every declutter stage, plus the adjustment trace."""

    points: List[TimelinePoint]
    spaced: List[TimelinePoint]
    rescaled: List[TimelinePoint]
    densities: np.ndarray
    records: List[AdjustmentRecord] = field(default_factory=list)


def _validate_declutter_inputs(points: Sequence[TimelinePoint]) -> None:
    """
    Warn about precondition violations that the loader should have caught.

    Nothing here raises: the stages stay total over any input.
    """
    if len(points) == 0:
        logger.warning(
            "Validation Warning: No points to declutter. This may lead to unexpected behaviour."
        )
        return

    times = times_of(points)
    if not np.all(np.isfinite(times)):
        logger.warning(
            "Validation Warning: time coordinates contain NaN or infinite values. This may lead to unexpected behaviour."
        )
    elif len(times) > 1 and np.any(np.diff(times) < 0):
        problematic = np.flatnonzero(np.diff(times) < 0) + 1
        logger.warning(
            f"Validation Warning: points are not sorted by time (first out-of-order indices: {problematic[:10]}). "
            "This may lead to unexpected behaviour."
        )


def declutter(
    points: Sequence[TimelinePoint],
    spacing: float = SAME_TIME_SPACING,
    window: float = DENSITY_WINDOW,
    amplification: float = DENSITY_AMPLIFICATION,
    step: float = MONOTONIC_STEP,
    observer: Optional[Observer] = None,
) -> DeclutterResult:
    """
    Spread out a sorted timeline so that labels overlap less.

    Runs the same-time spacer, the density rescaler and the monotonicity
    enforcer in that order. Each stage returns a new list; `value` and
    `label` pass through untouched and index `i` of every output is index
    `i` of `points`.

    Parameters
    ----------
    points : Sequence[TimelinePoint]
        Points sorted ascending by time.
    spacing : float, default=0.2
        Step between points sharing a time coordinate.
    window : float, default=3.0
        Density window half-width.
    amplification : float, default=1.5
        Gap stretch per unit of extra density.
    step : float, default=0.1
        Forward nudge used by the monotonicity enforcer.
    observer : Optional[Observer], default=None
        Receives every adjustment record as it is produced, in addition to
        the records collected on the result.

    Returns
    -------
    DeclutterResult
        Final points and the intermediate stage outputs.
    """
    _validate_declutter_inputs(points)

    records: List[AdjustmentRecord] = []

    def collect(record: AdjustmentRecord) -> None:
        records.append(record)
        if observer is not None:
            observer(record)

    if len(points) == 0:
        return DeclutterResult(
            points=[], spaced=[], rescaled=[], densities=np.zeros(0), records=records
        )

    spaced = space_same_time(points, spacing=spacing, observer=collect)
    densities = compute_densities(times_of(spaced), window)
    rescaled = rescale_by_density(spaced, window=window, amplification=amplification)
    final = enforce_monotonic(rescaled, step=step, observer=collect)

    for i, (original, spaced_point, final_point) in enumerate(
        zip(points, spaced, final)
    ):
        collect(
            DensityAdjustment(
                index=i,
                label=original.label,
                original_time=original.time,
                spaced_time=spaced_point.time,
                final_time=final_point.time,
                density=float(densities[i]),
            )
        )

    logger.info(f"Decluttered {len(final)} points")
    return DeclutterResult(
        points=final,
        spaced=spaced,
        rescaled=rescaled,
        densities=densities,
        records=records,
    )
