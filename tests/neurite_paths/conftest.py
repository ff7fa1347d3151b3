from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np
import pytest

from neurite_paths import Path, PathSet


@pytest.fixture()
def path_set() -> PathSet:
    return PathSet()


@pytest.fixture()
def make_path(path_set: PathSet) -> Callable[..., Path]:
    """
    Factory building a Path from coordinates and registering it in `path_set`.

    Usage: ``make_path([[0, 0, 0], [1, 0, 0]], radii=None)``.
    """

    def _make(
        points: Sequence[Sequence[float]],
        radii: Optional[Sequence[float]] = None,
        spacing: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> Path:
        path = Path.from_points(points, spacing=spacing, radii=radii)
        path_set.add(path)
        return path

    return _make


@pytest.fixture()
def three_node_line() -> Path:
    """
    Provides a standalone Path with three collinear nodes:
        (0, 0, 0) -> (1, 0, 0) -> (2, 0, 0)
    with unit spacing.
    """
    return Path.from_points([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 0.0, 0.0]])


@pytest.fixture()
def ten_node_line() -> np.ndarray:
    """Ten nodes along x, one unit apart, with a small wiggle in y."""
    x = np.arange(10, dtype=float)
    y = 0.01 * np.sin(x)
    return np.column_stack([x, y, np.zeros_like(x)])
