"""Unit tests for the PointBuffer class.

This test suite verifies the node storage underlying every path, including:
- Nearest-node queries (strict search radius, lowest-index tie break)
- Growth, insertion and removal with optional attribute arrays kept aligned
- Radius and tangent bookkeeping
- Per-node colors and values
"""

import math

import numpy as np
import pytest

from neurite_paths import (
    Calibration,
    DegenerateRadiusState,
    OutOfRangeIndex,
    PointBuffer,
    PointInImage,
    ShapeMismatch,
)


def _line(n, reserve=None, calibration=None):
    buf = PointBuffer(calibration, reserve=reserve)
    buf.extend([[float(i), 0.0, 0.0] for i in range(n)])
    return buf


def test_three_node_scenario():
    """
    Test the measurements and queries on (0,0,0) -> (1,0,0) -> (2,0,0).

    This test verifies that:
    - The length is the sum of both unit segments.
    - A query at x=1.4 within 1.0 resolves to the middle node.
    - A query at x=5 within 0.5 finds nothing.
    """
    buf = _line(3)

    assert buf.size == 3
    assert buf.length() == pytest.approx(2.0)
    assert buf.nearest_index(1.4, 0.0, 0.0, 1.0) == 1
    assert buf.nearest_index(5.0, 0.0, 0.0, 0.5) == -1
    # without a radius the closest node is always found
    assert buf.nearest_index(5.0, 0.0, 0.0) == 2


def test_nearest_index_is_strict_and_prefers_lowest_index():
    buf = PointBuffer()
    buf.extend([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])

    # equidistant: lowest index wins
    assert buf.nearest_index(1.0, 0.0, 0.0) == 0
    # exactly at the search radius does not qualify
    assert buf.nearest_index(1.0, 0.0, 0.0, 1.0) == -1


def test_nearest_index_on_empty_buffer_raises():
    with pytest.raises(OutOfRangeIndex):
        PointBuffer().nearest_index(0.0, 0.0, 0.0)


def test_growth_preserves_radii():
    """
    Test that growing past the reserved capacity keeps radii aligned.

    This test sets up a two-node buffer with radii, then appends more nodes
    than it can hold. It verifies that:
    - The capacity grows.
    - The radii array keeps one entry per node and keeps the old values.
    - Radii and tangents stay co-present.
    """
    buf = _line(2, reserve=2)
    buf.set_radii([1.0, 3.0])
    for i in range(2, 5):
        buf.append(float(i), 0.0, 0.0)

    assert buf.capacity >= 5
    assert buf.size == 5
    assert buf.has_radii
    assert buf.radii.shape == (5,)
    np.testing.assert_allclose(buf.radii[:2], [1.0, 3.0])
    assert buf.tangents.shape == (5, 3)
    buf.validate()


def test_insert_borrows_neighbour_attributes():
    buf = PointBuffer()
    buf.extend([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    buf.set_radii([1.0, 3.0])
    buf.set_node_color((1.0, 0.0, 0.0), 0)
    buf.set_node_value(5.0, 1)

    idx = buf.insert(1, (1.0, 0.0, 0.0))

    assert idx == 1
    assert buf.point(1) == PointInImage(1.0, 0.0, 0.0)
    assert buf.node_radius(1) == pytest.approx(2.0)
    assert buf.node_color(1) == (1.0, 0.0, 0.0, 1.0)
    assert buf.node_value(1) == 0.0
    assert buf.node_value(2) == 5.0


def test_out_of_range_indices_raise():
    buf = _line(3)
    with pytest.raises(OutOfRangeIndex):
        buf.point(3)
    with pytest.raises(OutOfRangeIndex):
        buf.insert(4, (0.0, 0.0, 0.0))
    with pytest.raises(OutOfRangeIndex):
        buf.remove(-1)
    with pytest.raises(OutOfRangeIndex):
        buf.move(3, (0.0, 0.0, 0.0))
    # out-of-range errors are also IndexErrors
    with pytest.raises(IndexError):
        buf.node_value(10)


def test_remove_reallocates_to_exact_size():
    buf = _line(5, reserve=16)
    buf.set_radius(1.0)

    buf.remove(2)

    assert buf.size == 4
    assert buf.capacity == 4
    np.testing.assert_array_equal(buf.xyz[:, 0], [0.0, 1.0, 3.0, 4.0])
    assert buf.radii.shape == (4,)
    buf.validate()


def test_remove_on_single_node_is_a_no_op():
    buf = _line(1)
    buf.remove(0)
    assert buf.size == 1
    with pytest.raises(OutOfRangeIndex):
        buf.remove(3)


def test_set_radius_zero_or_nan_clears_circles():
    buf = _line(3)
    buf.set_radius(2.0)
    assert buf.has_radii and buf.tangents is not None

    buf.set_radius(0.0)
    assert not buf.has_radii
    assert buf.tangents is None

    buf.set_radius(2.0)
    buf.set_radius(math.nan)
    assert not buf.has_radii
    assert buf.mean_radius() == 0.0

    with pytest.raises(ValueError):
        buf.set_radius(-1.0)


def test_set_radii_shape_mismatch_leaves_buffer_untouched():
    buf = _line(3)
    with pytest.raises(ShapeMismatch):
        buf.set_radii([1.0, 2.0])
    assert not buf.has_radii

    buf.set_radii([1.0, 2.0, 3.0])
    assert buf.mean_radius() == pytest.approx(2.0)
    buf.set_radii([])
    assert not buf.has_radii


def test_guess_tangents_requires_radii():
    buf = _line(3)
    with pytest.raises(DegenerateRadiusState):
        buf.guess_tangents()


def test_tangents_are_clamped_central_differences():
    buf = _line(5)
    buf.set_radius(1.0)
    buf.guess_tangents(2)

    np.testing.assert_allclose(
        buf.tangents,
        [[2, 0, 0], [3, 0, 0], [4, 0, 0], [3, 0, 0], [2, 0, 0]],
    )


def test_extend_validates_shapes_and_radii():
    buf = _line(2)
    with pytest.raises(ShapeMismatch):
        buf.extend([[1.0, 2.0]])
    with pytest.raises(DegenerateRadiusState):
        buf.extend([[3.0, 0.0, 0.0]], radii=[1.0])

    buf.set_radius(1.0)
    with pytest.raises(ShapeMismatch):
        buf.extend([[3.0, 0.0, 0.0]], radii=[1.0, 2.0])
    buf.extend([[3.0, 0.0, 0.0]], radii=[4.0])
    np.testing.assert_allclose(buf.radii, [1.0, 1.0, 4.0])


def test_node_index_and_contains():
    buf = _line(3, calibration=Calibration(0.5, 0.5, 0.5))
    assert buf.node_index((1.2, 0.1, 0.0)) == 1
    assert buf.node_index((1.6, 0.0, 0.0)) == 2
    assert buf.node_index((7.0, 0.0, 0.0)) == -1
    assert buf.contains((2.0, 0.0, 0.0))
    assert not buf.contains((2.0, 0.0, 1e-9))


def test_node_colors_and_values():
    """
    Test the optional per-node color and value arrays.

    This test verifies that:
    - Absent colors read as None and absent values as NaN.
    - Setting one color initializes the others to opaque white.
    - Bulk setters reject arrays of the wrong length.
    """
    buf = _line(3)
    assert buf.node_color(0) is None
    assert math.isnan(buf.node_value(0))

    buf.set_node_color((0.0, 1.0, 0.0, 0.5), 2)
    assert buf.node_color(0) == (1.0, 1.0, 1.0, 1.0)
    assert buf.node_color(2) == (0.0, 1.0, 0.0, 0.5)

    with pytest.raises(ShapeMismatch):
        buf.set_node_colors([(1.0, 0.0, 0.0)])
    with pytest.raises(ShapeMismatch):
        buf.set_node_values([1.0, 2.0])

    buf.set_node_values([1.0, 2.0, 3.0])
    assert buf.node_value(1) == pytest.approx(2.0)
    buf.set_node_values(None)
    assert not buf.has_node_values


def test_xyz_view_is_read_only():
    buf = _line(2)
    with pytest.raises(ValueError):
        buf.xyz[0, 0] = 10.0


def test_take_and_reversed():
    buf = _line(4)
    buf.set_radii([1.0, 2.0, 3.0, 4.0])

    sub = buf.take([0, 3])
    assert sub.size == 2
    assert sub.capacity == 2
    np.testing.assert_allclose(sub.radii, [1.0, 4.0])

    rev = buf.reversed()
    np.testing.assert_array_equal(rev.xyz[:, 0], [3.0, 2.0, 1.0, 0.0])
    np.testing.assert_allclose(rev.radii, [4.0, 3.0, 2.0, 1.0])

    with pytest.raises(OutOfRangeIndex):
        buf.take([0, 4])


def test_unscaled_uses_calibration():
    buf = PointBuffer(Calibration(0.5, 0.5, 2.0))
    buf.append(1.0, 1.0, 4.0)
    np.testing.assert_allclose(buf.unscaled(0), [2.0, 2.0, 2.0])
