"""
lifeline: labeled timeline charts with automatic point decluttering.

Points sharing a year are fanned out, crowded stretches of the time axis are
widened, and the result is drawn as a line chart with per-point labels.
"""

# Import from declutter subpackage
from lifeline.declutter import (
    DeclutterResult,
    TimelinePoint,
    declutter,
    enforce_monotonic,
    rescale_by_density,
    space_same_time,
)

# Import from timeline subpackage
from lifeline.timeline import (
    TimelinePlot,
    configure_logging,
    process_file,
    read_points,
    sort_points,
)

__all__ = [
    # Declutter pipeline
    "TimelinePoint",
    "DeclutterResult",
    "declutter",
    "space_same_time",
    "rescale_by_density",
    "enforce_monotonic",
    # Timeline input/output
    "read_points",
    "sort_points",
    "TimelinePlot",
    "configure_logging",
    "process_file",
]
