"""Polyline simplification that keeps fixed points in place.

The simplification is a Douglas-Peucker reduction in full 3D: the node
farthest from the chord joining a span's ends is kept (and the span split
there) while that distance exceeds the allowed deviation; otherwise the span
collapses to its two ends. Paths are cut at their fixed points (ends and
join locations) first, and each window is reduced on its own so the fixed
points survive unmoved.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Sequence, Union

import numpy as np
from numpy.typing import NDArray

_LOGGER = logging.getLogger(__name__)


def perpendicular_distances(
    points: NDArray[Any], a: NDArray[Any], b: NDArray[Any]
) -> NDArray[np.float64]:
    """Distances from each point to the segment ``a``-``b``.

    Projections are clamped to the segment, so points beyond either end are
    measured to that end. A degenerate segment (``a == b``) falls back to
    the distance to ``a``.

    Args:
        points (NDArray[Any]): (n, 3) query points.
        a (NDArray[Any]): (3,) first segment end.
        b (NDArray[Any]): (3,) second segment end.

    Returns:
        NDArray[np.float64]: (n,) distances.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 3)
    a = np.asarray(a, dtype=float)
    ab = np.asarray(b, dtype=float) - a
    denom = float(ab @ ab)
    if denom == 0.0:
        return np.linalg.norm(pts - a, axis=1)
    t = np.clip(((pts - a) @ ab) / denom, 0.0, 1.0)
    proj = a + t[:, None] * ab
    return np.linalg.norm(pts - proj, axis=1)


def simplify(
    points: Union[NDArray[Any], Sequence[Sequence[float]]], max_deviation: float
) -> NDArray[np.int_]:
    """Douglas-Peucker simplification of an open 3D polyline.

    Args:
        points: (n, 3) ordered coordinates.
        max_deviation (float): Largest allowed distance between a dropped
            point and the segment that replaces it. Values <= 0 keep every
            point that is off its chord.

    Returns:
        NDArray[np.int_]: Sorted indices of the kept points. The first and
        last point are always kept; spans of two points are returned as-is.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 3)
    n = pts.shape[0]
    if n <= 2:
        return np.arange(n)

    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True
    # spans still to be examined
    stack = [(0, n - 1)]
    while stack:
        lo, hi = stack.pop()
        if hi - lo < 2:
            continue
        d = perpendicular_distances(pts[lo + 1 : hi], pts[lo], pts[hi])
        i = int(np.argmax(d))  # first maximum wins ties
        if d[i] > max_deviation:
            split = lo + 1 + i
            keep[split] = True
            stack.append((split, hi))
            stack.append((lo, split))
    return np.flatnonzero(keep)


def fixed_windows(fixed: Iterable[int], n: int) -> List[int]:
    """Sorted, de-duplicated fixed indices, always including both path ends."""
    if n < 1:
        return []
    anchors = {0, n - 1}
    anchors.update(int(i) for i in fixed if 0 <= int(i) < n)
    return sorted(anchors)


def downsample_between(
    points: Union[NDArray[Any], Sequence[Sequence[float]]],
    fixed: Iterable[int],
    max_deviation: float,
) -> NDArray[np.int_]:
    """Simplify a polyline window by window between fixed indices.

    Args:
        points: (n, 3) ordered coordinates.
        fixed: Indices that must survive (ends are added automatically).
        max_deviation (float): Tolerance handed to `simplify`.

    Returns:
        NDArray[np.int_]: Sorted indices (into `points`) of the kept nodes.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 3)
    anchors = fixed_windows(fixed, pts.shape[0])
    if len(anchors) < 2:
        return np.arange(pts.shape[0])

    kept: List[int] = [anchors[0]]
    for a, b in zip(anchors[:-1], anchors[1:]):
        local = simplify(pts[a : b + 1], max_deviation) + a
        _LOGGER.debug(
            "Window [%d, %d]: %d -> %d points", a, b, b - a + 1, local.size
        )
        # local[0] == a is already the last kept index (seam)
        kept.extend(int(i) for i in local[1:])
    return np.asarray(kept, dtype=int)


def average_radii(
    radii: Union[NDArray[Any], Sequence[float]],
    kept: Union[NDArray[Any], Sequence[int]],
) -> NDArray[np.float64]:
    """Radius of each kept node as the mean over the nodes it absorbed.

    A kept node absorbs every original node from the midpoint index towards
    its previous kept neighbour up to the midpoint towards its next one
    (integer midpoints, shared by both neighbours). The first and last kept
    nodes extend only inwards.

    Args:
        radii: (n,) original radii.
        kept: Sorted indices of the surviving nodes.

    Returns:
        NDArray[np.float64]: One radius per kept index.
    """
    r = np.asarray(radii, dtype=float).reshape(-1)
    k = np.asarray(kept, dtype=int).reshape(-1)
    if k.size == 0:
        return np.zeros(0, dtype=float)
    first = k.copy()
    last = k.copy()
    if k.size > 1:
        first[1:] = (k[:-1] + k[1:]) // 2
        last[:-1] = (k[:-1] + k[1:]) // 2
    csum = np.concatenate(([0.0], np.cumsum(r)))
    return (csum[last + 1] - csum[first]) / (last - first + 1)
