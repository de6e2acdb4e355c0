import csv
import math
import os
from typing import List, Sequence

from loguru import logger

from lifeline.declutter.points import TimelinePoint


def default_label(time: float, value: float) -> str:
    """Label used for rows that do not carry one."""
    return f"{time:.0f}, {value:.2f}"


def _parse_number(field: str, kind: str, row_number: int) -> float:
    try:
        return float(field)
    except ValueError as e:
        raise ValueError(f"row {row_number}: invalid {kind} {field!r}: {e}") from e


def read_points(filepath: str) -> List[TimelinePoint]:
    """
    Read timeline points from a headerless CSV file.

    Each row is `year,value[,label]`. Fields are trimmed; a missing or blank
    label is replaced by `"<year>, <value>"`. Blank lines are skipped.

    Parameters
    ----------
    filepath : str
        Path to the CSV file.

    Returns
    -------
    List[TimelinePoint]
        Points in file order.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file is empty, a row has fewer than two fields, or a year or
        value is not a number.
    """
    rel_fp = os.path.relpath(filepath, os.getcwd()) if os.path.isabs(filepath) else filepath
    logger.info(f"Reading CSV file: {rel_fp}")

    try:
        with open(filepath, newline="", encoding="utf-8") as f:
            rows = [row for row in csv.reader(f) if row]
    except FileNotFoundError:
        raise FileNotFoundError(
            f"The file '{filepath}' was not found. "
            + "Please ensure the file is in the correct directory."
        )

    if not rows:
        raise ValueError("empty CSV")

    points = []
    for row_number, row in enumerate(rows, start=1):
        if len(row) < 2:
            raise ValueError(
                f"row {row_number}: expected 2 or 3 columns, got {len(row)}"
            )
        time = _parse_number(row[0].strip(), "year", row_number)
        value = _parse_number(row[1].strip(), "value", row_number)

        label = row[2].strip() if len(row) >= 3 else ""
        if not label:
            label = default_label(time, value)

        if not (math.isfinite(time) and math.isfinite(value)):
            logger.warning(
                f"Validation Warning: row {row_number} has a non-finite year or value ({time}, {value}). "
                "This may lead to unexpected behaviour."
            )

        points.append(TimelinePoint(time=time, value=value, label=label))

    logger.info(f"--Read {len(points)} points")
    return points


def sort_points(points: Sequence[TimelinePoint]) -> List[TimelinePoint]:
    """
    Sort points chronologically.

    The sort is stable: points sharing a time keep their input order, which
    fixes their rank in the same-time spacer.
    """
    return sorted(points, key=lambda p: p.time)
