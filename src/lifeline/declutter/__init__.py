"""
Point-declutter pipeline for lifeline.

Pure transformations over sorted timeline points: same-time spacing,
density-driven rescaling of the time axis and a monotonicity pass.
"""

from lifeline.declutter.density import (
    compute_densities,
    rescale_by_density,
    scaled_gaps,
)
from lifeline.declutter.monotonic import enforce_monotonic
from lifeline.declutter.pipeline import DeclutterResult, declutter
from lifeline.declutter.points import (
    DensityAdjustment,
    MonotonicCorrection,
    SpacingAdjustment,
    TimelinePoint,
)
from lifeline.declutter.spacer import space_same_time

__all__ = [
    "TimelinePoint",
    "SpacingAdjustment",
    "MonotonicCorrection",
    "DensityAdjustment",
    "space_same_time",
    "compute_densities",
    "scaled_gaps",
    "rescale_by_density",
    "enforce_monotonic",
    "declutter",
    "DeclutterResult",
]
