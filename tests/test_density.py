"""Tests for the density rescaler."""

import math

import numpy as np
import pytest

from lifeline.declutter.density import compute_densities, rescale_by_density, scaled_gaps


def test_density_window_is_inclusive():
    """Points exactly `window` apart count each other."""
    densities = compute_densities(np.array([0.0, 3.0, 6.5]))
    assert densities.tolist() == [2.0, 2.0, 1.0]


def test_density_counts_the_point_itself():
    assert compute_densities(np.array([42.0])).tolist() == [1.0]


def test_density_custom_window():
    densities = compute_densities(np.array([0.0, 1.0, 2.0, 10.0]), window=1.0)
    assert densities.tolist() == [2.0, 3.0, 2.0, 1.0]


def test_adding_a_neighbour_raises_density():
    """A new point inside the window strictly increases a point's density."""
    control = compute_densities(np.array([0.0, 10.0, 20.0]))
    crowded = compute_densities(np.array([0.0, 10.0, 12.0, 20.0]))
    assert crowded[1] > control[1]


def test_higher_density_stretches_both_adjacent_gaps():
    """Holding the gaps fixed, a denser middle point widens both of its gaps."""
    times = np.array([0.0, 10.0, 20.0])
    control = scaled_gaps(times, np.array([1.0, 1.0, 1.0]))
    crowded = scaled_gaps(times, np.array([1.0, 2.0, 1.0]))

    assert control.tolist() == [0.0, 10.0, 10.0]
    assert crowded.tolist() == pytest.approx([0.0, 17.5, 17.5])
    assert crowded[1] > control[1] and crowded[2] > control[2]


def test_scaled_gaps_length_mismatch():
    with pytest.raises(ValueError, match="must match"):
        scaled_gaps(np.array([0.0, 1.0]), np.array([1.0]))


def test_concrete_scenario(make_points):
    """The interior point moves proportionally; the anchors stay put."""
    spaced = make_points([(1989.9, 10, "A"), (1990.1, 20, "B"), (1995.0, 5, "C")])
    rescaled = rescale_by_density(spaced)

    # densities 2, 2, 1 -> scaled gaps 0.2 * 2.5 and 4.9 * 1.75
    expected_middle = 1989.9 + 0.5 / (0.5 + 8.575) * 5.1
    assert rescaled[0].time == 1989.9
    assert rescaled[1].time == pytest.approx(expected_middle)
    assert rescaled[2].time == pytest.approx(1995.0)


def test_anchors_preserved(make_points):
    """First and last times are unchanged by rescaling."""
    spaced = make_points(
        [(t, 0, str(t)) for t in (1950.0, 1951.0, 1952.5, 1960.0, 1961.0, 1990.0)]
    )
    rescaled = rescale_by_density(spaced)

    assert rescaled[0].time == spaced[0].time
    assert rescaled[-1].time == pytest.approx(spaced[-1].time)


def test_dense_cluster_gets_more_room(make_points):
    """Crowded neighbours end up further apart than they started."""
    spaced = make_points([(0.0, 0, "a"), (1.0, 0, "b"), (2.0, 0, "c"), (30.0, 0, "d")])
    rescaled = rescale_by_density(spaced)
    assert rescaled[1].time - rescaled[0].time > 1.0
    assert rescaled[2].time - rescaled[1].time > 1.0


def test_single_point_is_unchanged(make_points):
    points = make_points([(1999.0, 3, "only")])
    assert rescale_by_density(points) == points


def test_coinciding_points_keep_their_times(make_points):
    """A zero total scaled distance short-circuits to the input times."""
    points = make_points([(5.0, 1, "a"), (5.0, 2, "b"), (5.0, 3, "c")])
    assert [p.time for p in rescale_by_density(points)] == [5.0, 5.0, 5.0]


def test_values_and_labels_pass_through(make_points):
    points = make_points([(1.0, 4, "a"), (2.0, -3, "b"), (9.0, 7, "c")])
    rescaled = rescale_by_density(points)
    assert [(p.value, p.label) for p in rescaled] == [(4.0, "a"), (-3.0, "b"), (7.0, "c")]


def test_non_finite_input_does_not_raise(make_points):
    points = make_points([(1.0, 0, "a"), (math.nan, 0, "b"), (3.0, 0, "c")])
    rescaled = rescale_by_density(points)
    assert len(rescaled) == 3
    assert rescaled[0].time == 1.0


def test_empty_input_returns_empty():
    assert rescale_by_density([]) == []
