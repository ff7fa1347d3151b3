"""Unit tests for join-preserving downsampling.

This test suite verifies:
- Douglas-Peucker simplification and its deviation bound
- Window splitting at fixed indices
- Radius averaging over absorbed nodes
- Path.downsample keeping end and join points and being stable on re-runs
"""

import math

import numpy as np
import pytest

from neurite_paths import Path, PathSet, simplify
from neurite_paths.downsampler import (
    average_radii,
    downsample_between,
    fixed_windows,
    perpendicular_distances,
)

ZIGZAG = np.array(
    [[0, 0, 0], [1, 1, 0], [2, 0, 0], [3, 1, 0], [4, 0, 0]], dtype=float
)


def _random_walk(n, seed=0):
    rng = np.random.default_rng(seed)
    return np.cumsum(rng.normal(size=(n, 3)), axis=0)


def test_perpendicular_distances_clamp_to_segment():
    pts = np.array([[1.0, 2.0, 0.0], [-3.0, 0.0, 0.0], [5.0, 0.0, 4.0]])
    d = perpendicular_distances(pts, np.zeros(3), np.array([2.0, 0.0, 0.0]))
    np.testing.assert_allclose(d, [2.0, 3.0, 5.0])
    # degenerate segment
    d = perpendicular_distances(pts[:1], np.zeros(3), np.zeros(3))
    np.testing.assert_allclose(d, [math.sqrt(5.0)])


def test_simplify_short_and_collinear_inputs():
    assert simplify(np.zeros((0, 3)), 1.0).tolist() == []
    assert simplify([[0, 0, 0]], 1.0).tolist() == [0]
    assert simplify([[0, 0, 0], [1, 1, 1]], 1.0).tolist() == [0, 1]
    line = [[float(i), 0.0, 0.0] for i in range(10)]
    assert simplify(line, 0.1).tolist() == [0, 9]


def test_simplify_zigzag():
    assert simplify(ZIGZAG, 0.1).tolist() == [0, 1, 2, 3, 4]
    assert simplify(ZIGZAG, 2.0).tolist() == [0, 4]


def test_simplify_non_positive_tolerance():
    # every off-chord point survives, on-chord points do not
    assert simplify(ZIGZAG, -1.0).tolist() == [0, 1, 2, 3, 4]
    line = [[float(i), 0.0, 0.0] for i in range(5)]
    assert simplify(line, 0.0).tolist() == [0, 4]
    assert simplify(ZIGZAG, math.nan).tolist() == [0, 4]


@pytest.mark.parametrize("eps", [0.25, 1.0, 2.5, 10.0])
def test_simplify_respects_max_deviation(eps):
    """
    Test the deviation bound on a random 3D walk.

    This test verifies that every dropped point lies within `eps` of the
    segment joining the kept points around it, and that both ends are kept.
    """
    pts = _random_walk(300)
    kept = simplify(pts, eps)

    assert kept[0] == 0 and kept[-1] == len(pts) - 1
    for lo, hi in zip(kept[:-1], kept[1:]):
        if hi - lo < 2:
            continue
        d = perpendicular_distances(pts[lo + 1 : hi], pts[lo], pts[hi])
        assert d.max() <= eps


def test_fixed_windows():
    assert fixed_windows([5, 5, 12, -1], 10) == [0, 5, 9]
    assert fixed_windows([], 1) == [0]
    assert fixed_windows([], 0) == []


def test_downsample_between_keeps_fixed_indices():
    line = [[float(i), 0.0, 0.0] for i in range(10)]
    assert downsample_between(line, [5], 0.1).tolist() == [0, 5, 9]
    assert downsample_between(line, [], 0.1).tolist() == [0, 9]
    # seams between adjacent windows are not duplicated
    assert downsample_between(line, [4, 5], 0.1).tolist() == [0, 4, 5, 9]


def test_average_radii_over_midpoints():
    radii = [1.0, 2.0, 3.0, 4.0, 5.0]
    np.testing.assert_allclose(average_radii(radii, [0, 4]), [2.0, 4.0])
    np.testing.assert_allclose(average_radii(radii, [0, 2, 4]), [1.5, 3.0, 4.5])
    # midpoints are shared, so keeping every node still blends neighbours
    np.testing.assert_allclose(
        average_radii(radii, range(5)), [1.0, 1.5, 2.5, 3.5, 4.5]
    )


@pytest.mark.parametrize("eps", [0.0, 0.005, 1.0, 100.0])
def test_path_downsample_keeps_end_and_join_points(eps, ten_node_line):
    """
    Test that Path.downsample never drops a fixed point.

    This test sets up a ten-node path A with a branch B starting on node 5.
    It verifies that:
    - Nodes 0, 5 and 9 of A survive with their exact coordinates.
    - The join still resolves to a node of A.
    """
    path_set = PathSet()
    a = Path.from_points(ten_node_line)
    b = Path.from_points([[5.0, 0.0, 0.0], [5.0, 3.0, 0.0]])
    path_set.add(a)
    path_set.add(b)
    b.set_start_join(a, a.point(5))
    fixed = [a.point(i) for i in (0, 5, 9)]

    a.downsample(eps)

    for p in fixed:
        assert a.contains(p)
    assert a.point(0) == fixed[0]
    assert a.last_point() == fixed[2]
    assert a.contains(b.start_joins_point)
    assert a.invalid_3d_view


def test_path_downsample_rerun_is_stable():
    path_set = PathSet()
    a = Path.from_points(_random_walk(200, seed=3))
    b = Path.from_points([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
    path_set.add(a)
    path_set.add(b)
    b.set_start_join(a, a.point(80))

    a.downsample(1.5)
    first = np.array(a.xyz)
    assert a.size < 200

    a.downsample(1.5)
    np.testing.assert_array_equal(a.xyz, first)
    a.downsample(0.75)
    np.testing.assert_array_equal(a.xyz, first)


def test_path_downsample_averages_radii_and_rebuilds_tangents():
    xyz = [[float(i), 0.0, 0.0] for i in range(5)]
    path = Path.from_points(xyz, radii=[1.0, 2.0, 3.0, 4.0, 5.0])
    path.set_editable_node(3)

    path.downsample(0.5)

    assert path.size == 2
    np.testing.assert_allclose(path.radii, [2.0, 4.0])
    np.testing.assert_allclose(path.tangents, [[4.0, 0.0, 0.0], [4.0, 0.0, 0.0]])
    assert path.editable_node_index == -1


def test_downsample_short_path_is_untouched():
    path = Path.from_points([[0, 0, 0], [1, 0, 0]])
    path.downsample(10.0)
    assert path.size == 2
