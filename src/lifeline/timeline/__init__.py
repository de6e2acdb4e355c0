"""
Timeline input and output for lifeline.

This package reads CSV points, renders decluttered points with matplotlib and
ties both ends to the declutter pipeline.
"""

from lifeline.timeline.analysis import configure_logging, log_adjustment, process_file
from lifeline.timeline.io import read_points, sort_points
from lifeline.timeline.plot import TimelinePlot

__all__ = [
    "read_points",
    "sort_points",
    "TimelinePlot",
    "configure_logging",
    "log_adjustment",
    "process_file",
]
