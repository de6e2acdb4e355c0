"""Tests for CSV loading and chronological sorting."""

import pytest

from lifeline.declutter.points import TimelinePoint
from lifeline.timeline.io import default_label, read_points, sort_points


def test_reads_rows_with_and_without_labels(write_csv):
    path = write_csv("1990, 10, Born\n1995,5\n2001 , -3 ,  \n")
    points = read_points(path)

    assert points == [
        TimelinePoint(1990.0, 10.0, "Born"),
        TimelinePoint(1995.0, 5.0, "1995, 5.00"),
        TimelinePoint(2001.0, -3.0, "2001, -3.00"),
    ]


def test_blank_lines_are_skipped(write_csv):
    path = write_csv("1990,1,a\n\n1991,2,b\n")
    assert [p.label for p in read_points(path)] == ["a", "b"]


def test_empty_file(write_csv):
    with pytest.raises(ValueError, match="empty CSV"):
        read_points(write_csv(""))


def test_short_row(write_csv):
    with pytest.raises(ValueError, match="row 2: expected 2 or 3 columns, got 1"):
        read_points(write_csv("1990,1\n1991\n"))


def test_invalid_year(write_csv):
    with pytest.raises(ValueError, match="row 1: invalid year 'nineteen'"):
        read_points(write_csv("nineteen,1\n"))


def test_invalid_value(write_csv):
    with pytest.raises(ValueError, match="row 1: invalid value 'x'"):
        read_points(write_csv("1990,x,label\n"))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_points(str(tmp_path / "missing.csv"))


def test_default_label_formatting():
    assert default_label(1987.4, 3.14159) == "1987, 3.14"


def test_sort_is_stable_for_equal_times():
    """Points sharing a time keep their file order."""
    points = [
        TimelinePoint(2000.0, 0.0, "late"),
        TimelinePoint(1990.0, 1.0, "first"),
        TimelinePoint(1990.0, 2.0, "second"),
        TimelinePoint(1985.0, 3.0, "early"),
    ]
    assert [p.label for p in sort_points(points)] == ["early", "first", "second", "late"]
