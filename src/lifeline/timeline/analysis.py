import sys
import time
from typing import List

import matplotlib.pyplot as plt
from loguru import logger

from lifeline.declutter.density import DENSITY_AMPLIFICATION, DENSITY_WINDOW
from lifeline.declutter.monotonic import MONOTONIC_STEP
from lifeline.declutter.pipeline import DeclutterResult, declutter
from lifeline.declutter.points import (
    AdjustmentRecord,
    DensityAdjustment,
    MonotonicCorrection,
    SpacingAdjustment,
    TimelinePoint,
)
from lifeline.declutter.spacer import SAME_TIME_SPACING
from lifeline.timeline.io import read_points, sort_points
from lifeline.timeline.plot import TimelinePlot, output_format

# A density-stage move smaller than this is reported as "no change"
REPORT_TOLERANCE = 0.1


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure loguru logging with specified level.

    Parameters
    ----------
    log_level : str, default="INFO"
        Logging level: DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        colorize=True,
    )


def log_adjustment(record: AdjustmentRecord) -> None:
    """Observer that writes each declutter adjustment to the log."""
    if isinstance(record, SpacingAdjustment):
        logger.info(
            f"Same-year adjustment: '{record.label}' {record.original_time:.0f} -> {record.new_time:.1f} "
            f"(event {record.rank + 1} of {record.group_size} in year {record.original_time:.0f})"
        )
    elif isinstance(record, MonotonicCorrection):
        logger.info(
            f"Order correction: '{record.label}' {record.before:.2f} -> {record.after:.2f}"
        )
    elif isinstance(record, DensityAdjustment):
        if abs(record.final_time - record.spaced_time) > REPORT_TOLERANCE:
            logger.info(
                f"Density scaling: '{record.label}' | Original: {record.original_time:.1f} "
                f"-> After same-year: {record.spaced_time:.1f} -> After density: {record.final_time:.1f} "
                f"| Density: {record.density:.0f}"
            )
        else:
            logger.info(
                f"No density change: '{record.label}' | Year: {record.final_time:.1f} "
                f"| Density: {record.density:.0f}"
            )


def load_points(input_path: str) -> List[TimelinePoint]:
    """
    Stage 1: Load points from CSV and sort them chronologically.

    Parameters
    ----------
    input_path : str
        CSV file with `year,value[,label]` rows.

    Returns
    -------
    List[TimelinePoint]
        Points sorted by time, ties in file order.
    """
    points = sort_points(read_points(input_path))
    logger.debug(
        f"Time range: {points[0].time:.1f} .. {points[-1].time:.1f} over {len(points)} points"
    )
    return points


def process_file(
    input_path: str,
    output_path: str,
    title: str = TimelinePlot.DEFAULT_TITLE,
    show_years: bool = False,
    spacing: float = SAME_TIME_SPACING,
    density_window: float = DENSITY_WINDOW,
    density_amplification: float = DENSITY_AMPLIFICATION,
    monotonic_step: float = MONOTONIC_STEP,
    show_plot: bool = False,
) -> DeclutterResult:
    """
    Turn a CSV file of points into a timeline image.

    Parameters
    ----------
    input_path : str
        CSV file with `year,value[,label]` rows.
    output_path : str
        Image path, `.png` or `.svg`.
    title : str, default="My Life Line"
        Figure title.
    show_years : bool, default=False
        Show years on the x axis.
    spacing : float, default=0.2
        Step between points sharing a year.
    density_window : float, default=3.0
        Density window half-width in years.
    density_amplification : float, default=1.5
        Gap stretch per unit of extra density.
    monotonic_step : float, default=0.1
        Forward nudge used to keep points in order.
    show_plot : bool, default=False
        Whether to show the plot interactively after saving.

    Returns
    -------
    DeclutterResult
        The decluttered points and their adjustment trace.
    """
    output_format(output_path)
    start_time = time.time()
    logger.info(f"Processing {input_path} with parameters:")
    logger.info(f"--Same-time spacing: {spacing}")
    logger.info(f"--Density window: ±{density_window}")
    logger.info(f"--Density amplification: {density_amplification}")
    logger.info(f"--Monotonic step: {monotonic_step}")

    # Stage 1: Load Data
    points = load_points(input_path)

    # Stage 2: Declutter
    logger.info("=== Point Adjustment Process ===")
    result = declutter(
        points,
        spacing=spacing,
        window=density_window,
        amplification=density_amplification,
        step=monotonic_step,
        observer=log_adjustment,
    )
    declutter_time = time.time()
    logger.debug(f"Declutter took {declutter_time - start_time:.3f}s")

    # Stage 3: Visualization
    plot = TimelinePlot(result.points, title=title, show_years=show_years)
    plot.render()
    plot.save(output_path)
    logger.success(f"Wrote {output_path}")

    if show_plot:
        plt.show(block=True)
    else:
        plot.close()

    return result
