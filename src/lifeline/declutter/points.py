from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence, Union

import numpy as np


class TimelinePoint(NamedTuple):
    """
    A single labeled point on the timeline.

    Stages never mutate a point; they return new points built with `_replace`,
    so only `time` ever differs between a stage's input and output.
    """

    time: float
    value: float
    label: str


@dataclass(frozen=True)
class SpacingAdjustment:
    """A point moved by the same-time spacer."""

    index: int
    label: str
    original_time: float
    new_time: float
    rank: int
    group_size: int


@dataclass(frozen=True)
class MonotonicCorrection:
    """A point pushed forward by the monotonicity enforcer."""

    index: int
    label: str
    before: float
    after: float


@dataclass(frozen=True)
class DensityAdjustment:
    """Summary of one point's journey through the full pipeline."""

    index: int
    label: str
    original_time: float
    spaced_time: float
    final_time: float
    density: float


AdjustmentRecord = Union[SpacingAdjustment, MonotonicCorrection, DensityAdjustment]
Observer = Callable[[AdjustmentRecord], None]


def times_of(points: Sequence[TimelinePoint]) -> np.ndarray:
    """Time coordinates of `points` as a float64 array."""
    return np.array([p.time for p in points], dtype=np.float64)


def with_times(
    points: Sequence[TimelinePoint], times: np.ndarray
) -> List[TimelinePoint]:
    """Copy `points` with their time coordinates replaced, index for index."""
    if len(points) != len(times):
        raise ValueError(
            f"Time array length ({len(times)}) must match number of points ({len(points)})."
        )
    return [p._replace(time=float(t)) for p, t in zip(points, times)]


def notify(observer: Optional[Observer], record: AdjustmentRecord) -> None:
    if observer is not None:
        observer(record)
