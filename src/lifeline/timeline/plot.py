import math
import os
from typing import List, Optional, Sequence, Tuple

import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np
from loguru import logger

from lifeline.declutter.points import TimelinePoint

SUPPORTED_FORMATS = (".png", ".svg")


def output_format(filepath: str) -> str:
    """Lower-case extension of `filepath`, checked against the supported formats."""
    ext = os.path.splitext(filepath)[1].lower()
    if ext not in SUPPORTED_FORMATS:
        raise ValueError(f"unsupported output format {ext!r} (use .png or .svg)")
    return ext


def compute_axis_limits(
    points: Sequence[TimelinePoint],
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Work out the x and y limits for a timeline.

    The x range snaps outward to whole time units. The y range always contains
    zero and +/-10, with a little padding so markers never touch the frame.

    Parameters
    ----------
    points : Sequence[TimelinePoint]
        Points to be drawn. Non-finite coordinates are ignored.

    Returns
    -------
    Tuple[Tuple[float, float], Tuple[float, float]]
        `(x_min, x_max)` and `(y_min, y_max)`.

    Raises
    ------
    ValueError
        If no point has a finite time coordinate.
    """
    times = np.array([p.time for p in points], dtype=np.float64)
    values = np.array([p.value for p in points], dtype=np.float64)
    times = times[np.isfinite(times)]
    values = values[np.isfinite(values)]
    if times.size == 0:
        raise ValueError("No finite time coordinates to plot.")

    x_limits = (float(math.floor(np.min(times))), float(math.ceil(np.max(times))))
    if x_limits[0] == x_limits[1]:
        x_limits = (x_limits[0] - 1.0, x_limits[1] + 1.0)

    min_y = min(0.0, float(np.min(values))) if values.size else 0.0
    max_y = max(0.0, float(np.max(values))) if values.size else 0.0

    y_pad = TimelinePlot.DEFAULT_Y_PAD
    if max_y - min_y < TimelinePlot.DEFAULT_NARROW_RANGE:
        y_pad = TimelinePlot.DEFAULT_NARROW_Y_PAD

    min_y = min(min_y, -TimelinePlot.DEFAULT_MIN_Y_EXTENT)
    max_y = max(max_y, TimelinePlot.DEFAULT_MIN_Y_EXTENT)
    y_limits = (float(math.floor(min_y - y_pad)), float(math.ceil(max_y + y_pad)))

    return x_limits, y_limits


def label_offset(index: int, distance: float) -> Tuple[float, float]:
    """
    Offset (in points) of the label for the `index`-th point.

    Cycles top-right, bottom-right, top-left, bottom-left so that labels of
    neighbouring points fall on different sides.
    """
    corner = index % 4
    dx = distance if corner in (0, 1) else -distance
    dy = distance if corner in (0, 2) else -distance
    return dx, dy


class TimelinePlot:
    """
    Draws decluttered timeline points as a labeled line chart.

    Only the horizontal position of a point reflects (adjusted) time; values are
    drawn against a fixed-extent, tick-free y axis.
    """

    # Figure
    DEFAULT_TITLE = "My Life Line"
    DEFAULT_FIGSIZE = (12, 8)  # inches

    # Y range
    DEFAULT_Y_PAD = 0.6
    DEFAULT_NARROW_Y_PAD = 1.0
    DEFAULT_NARROW_RANGE = 4.0
    DEFAULT_MIN_Y_EXTENT = 10.0

    # Styling
    DEFAULT_LINE_COLOR = "#6496C8"
    DEFAULT_LINE_WIDTH = 1.5
    DEFAULT_MARKER_COLOR = "#008C48"
    DEFAULT_MARKER_RADIUS = 3.0  # points
    DEFAULT_LABEL_FONTSIZE = 9
    DEFAULT_LABEL_DISTANCE = 8.0  # points
    DEFAULT_AXIS_COLOR = "#C8C8C8"
    DEFAULT_GRID_HORIZONTAL_COLOR = "#E6E6E6"
    DEFAULT_GRID_VERTICAL_COLOR = "#F5F5F5"

    def __init__(
        self,
        points: Sequence[TimelinePoint],
        title: str = DEFAULT_TITLE,
        show_years: bool = False,
        figsize: Tuple[float, float] = DEFAULT_FIGSIZE,
    ):
        """
        Initialize the plot with the points to draw.

        Parameters
        ----------
        points : Sequence[TimelinePoint]
            Decluttered points, in chronological order.
        title : str, default="My Life Line"
            Figure title.
        show_years : bool, default=False
            Label the x axis with years. When False the x ticks are hidden.
        figsize : Tuple[float, float], default=(12, 8)
            Figure size in inches.
        """
        if len(points) == 0:
            raise ValueError("Cannot plot an empty timeline.")

        self.points: List[TimelinePoint] = list(points)
        self.title = title
        self.show_years = show_years
        self.figsize = figsize

        self.fig: Optional[matplotlib.figure.Figure] = None
        self.ax = None

    def render(self) -> None:
        """Build the figure. Must be called once before saving or showing."""
        if self.fig is not None or self.ax is not None:
            logger.warning("Plot already rendered. Create a new instance to redraw.")
            return

        logger.info("Rendering timeline...")
        self.fig, self.ax = plt.subplots(figsize=self.figsize)

        x_limits, y_limits = compute_axis_limits(self.points)
        self._setup_axes(x_limits, y_limits)
        self._draw_grid()
        self._draw_series()
        self._draw_labels()
        self._draw_zero_axis(x_limits)

        logger.info(
            f"Timeline rendered: {len(self.points)} points, x={x_limits}, y={y_limits}"
        )

    def _require_axes(self) -> None:
        if self.ax is None:
            raise RuntimeError("Axes must be created before drawing plot elements.")

    def _setup_axes(
        self, x_limits: Tuple[float, float], y_limits: Tuple[float, float]
    ) -> None:
        """Set title, limits, tick visibility and spine colours."""
        self._require_axes()
        ax = self.ax

        ax.set_title(self.title)
        ax.set_xlim(x_limits)
        ax.set_ylim(y_limits)

        if self.show_years:
            ax.set_xlabel("Year")
            ax.spines["bottom"].set_color(self.DEFAULT_AXIS_COLOR)
        else:
            ax.tick_params(axis="x", labelbottom=False, length=0)
            ax.spines["bottom"].set_visible(False)

        ax.tick_params(axis="y", labelleft=False, length=0)
        for side in ("left", "top", "right"):
            ax.spines[side].set_visible(False)

    def _draw_grid(self) -> None:
        self._require_axes()
        self.ax.set_axisbelow(True)
        self.ax.grid(True, axis="y", color=self.DEFAULT_GRID_HORIZONTAL_COLOR)
        self.ax.grid(True, axis="x", color=self.DEFAULT_GRID_VERTICAL_COLOR)

    def _draw_series(self) -> None:
        """Connecting line plus one marker per point."""
        self._require_axes()
        t = [p.time for p in self.points]
        y = [p.value for p in self.points]

        self.ax.plot(
            t,
            y,
            color=self.DEFAULT_LINE_COLOR,
            linewidth=self.DEFAULT_LINE_WIDTH,
            zorder=3,
        )
        # scatter size is marker area in points^2
        self.ax.scatter(
            t,
            y,
            s=(2 * self.DEFAULT_MARKER_RADIUS) ** 2,
            color=self.DEFAULT_MARKER_COLOR,
            zorder=4,
        )

    def _draw_labels(self) -> None:
        self._require_axes()
        for i, point in enumerate(self.points):
            dx, dy = label_offset(i, self.DEFAULT_LABEL_DISTANCE)
            self.ax.annotate(
                point.label,
                xy=(point.time, point.value),
                xytext=(dx, dy),
                textcoords="offset points",
                ha="left" if dx > 0 else "right",
                va="bottom" if dy > 0 else "top",
                fontsize=self.DEFAULT_LABEL_FONTSIZE,
                zorder=5,
            )

    def _draw_zero_axis(self, x_limits: Tuple[float, float]) -> None:
        """Horizontal axis line along value 0 across the full x range."""
        self._require_axes()
        self.ax.plot(
            x_limits,
            (0.0, 0.0),
            color=self.DEFAULT_AXIS_COLOR,
            linewidth=1.0,
            zorder=2,
        )

    def save(self, filepath: str) -> None:
        """
        Save the timeline as PNG or SVG.

        Parameters
        ----------
        filepath : str
            Output path; the extension selects the format.

        Raises
        ------
        ValueError
            If the extension is neither `.png` nor `.svg`.
        """
        ext = output_format(filepath)
        if self.fig is None:
            self.render()
        self.fig.savefig(filepath, format=ext[1:])
        logger.info(f"Plot saved to {filepath}")

    def show(self) -> None:
        """Display the plot."""
        if self.fig is None:
            self.render()
        plt.show()

    def close(self) -> None:
        """Release the figure."""
        if self.fig is not None:
            plt.close(self.fig)
