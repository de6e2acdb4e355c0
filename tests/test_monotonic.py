"""Tests for the monotonicity enforcer."""

import numpy as np
import pytest

from lifeline.declutter.monotonic import enforce_monotonic
from lifeline.declutter.points import MonotonicCorrection


def test_strictly_increasing_input_is_unchanged(make_points):
    points = make_points([(1.0, 0, "a"), (1.5, 0, "b"), (4.0, 0, "c")])
    assert enforce_monotonic(points) == points


def test_ties_and_reversals_are_pushed_forward(make_points):
    """Corrections cascade from the previous, already corrected, point."""
    points = make_points([(0.0, 0, "a"), (0.0, 0, "b"), (-1.0, 0, "c"), (5.0, 0, "d")])
    times = [p.time for p in enforce_monotonic(points)]

    assert times == pytest.approx([0.0, 0.1, 0.2, 5.0])
    assert np.all(np.diff(times) > 0)


def test_custom_step(make_points):
    points = make_points([(2.0, 0, "a"), (2.0, 0, "b")])
    assert [p.time for p in enforce_monotonic(points, step=0.5)] == [2.0, 2.5]


def test_observer_receives_corrections(make_points):
    points = make_points([(3.0, 0, "a"), (2.0, 0, "b"), (7.0, 0, "c")])
    records = []
    enforce_monotonic(points, observer=records.append)

    assert len(records) == 1
    assert isinstance(records[0], MonotonicCorrection)
    assert records[0].index == 1
    assert records[0].label == "b"
    assert records[0].before == 2.0
    assert records[0].after == pytest.approx(3.1)


def test_single_point(make_points):
    points = make_points([(10.0, 1, "x")])
    assert enforce_monotonic(points) == points


def test_empty_input_returns_empty():
    assert enforce_monotonic([]) == []
