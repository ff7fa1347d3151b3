"""Module defining the PointBuffer class, the node storage of a traced path.

This module provides the PointBuffer class, which stores the calibrated node
coordinates of a single polyline together with optional per-node radius,
tangent, color and scalar value arrays, and offers the nearest-node,
length and tangent computations built on them.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import cdist

from .config import config
from .exceptions import DegenerateRadiusState, OutOfRangeIndex, ShapeMismatch
from .point import Calibration, PointInImage, PointLike, as_point

_LOGGER = logging.getLogger(__name__)

ColorLike = Union[Sequence[float], NDArray[Any]]


def _as_rgba(color: ColorLike) -> NDArray[np.float64]:
    rgba = np.asarray(color, dtype=float).reshape(-1)
    if rgba.size == 3:
        rgba = np.append(rgba, 1.0)
    if rgba.size != 4:
        raise ShapeMismatch(f"Colors need 3 or 4 channels, got {rgba.size}")
    return rgba


class PointBuffer:
    """Growable, calibrated storage for the nodes of one polyline.

    Coordinates live in a single ``(capacity, 3)`` array. Radii and tangents
    are either both allocated or both absent; colors and values are allocated
    lazily. Every allocated attribute array has the same capacity as the
    coordinate array, and only the first `size` rows are meaningful.

    Attributes:
        calibration (Calibration): Spacing and unit shared by all measurements.
    """

    calibration: Calibration
    _xyz: NDArray[np.float64]
    _radii: Optional[NDArray[np.float64]]
    _tangents: Optional[NDArray[np.float64]]
    _colors: Optional[NDArray[np.float64]]
    _values: Optional[NDArray[np.float32]]

    def __init__(
        self,
        calibration: Optional[Calibration] = None,
        reserve: Optional[int] = None,
    ) -> None:
        """Create an empty buffer.

        Args:
            calibration (Optional[Calibration]): Spacing/unit; defaults to unit spacing.
            reserve (Optional[int]): Initial capacity; defaults to `config.reserve`.
        """
        self.calibration = calibration if calibration is not None else Calibration()
        capacity = config.reserve if reserve is None else max(int(reserve), 1)
        self._size = 0
        self._xyz = np.zeros((capacity, 3), dtype=float)
        self._radii = None
        self._tangents = None
        self._colors = None
        self._values = None

    # ------------------------------------------------------------------
    # Capacity management
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return int(self._xyz.shape[0])

    def _realloc(self, new_capacity: int) -> None:
        """Move every populated attribute into arrays of `new_capacity` rows."""
        n = self._size

        def moved(arr: Optional[NDArray[Any]]) -> Optional[NDArray[Any]]:
            if arr is None:
                return None
            out = np.zeros((new_capacity,) + arr.shape[1:], dtype=arr.dtype)
            out[:n] = arr[:n]
            return out

        self._xyz = moved(self._xyz)
        self._radii = moved(self._radii)
        self._tangents = moved(self._tangents)
        self._colors = moved(self._colors)
        self._values = moved(self._values)

    def _ensure_capacity(self, needed: int) -> None:
        if needed <= self.capacity:
            return
        grown = int(self.capacity * config.growth_factor + 1)
        new_capacity = max(grown, needed)
        _LOGGER.debug("Growing buffer %d -> %d rows", self.capacity, new_capacity)
        self._realloc(new_capacity)

    def _check_index(self, index: int, what: str, allow_end: bool = False) -> int:
        upper = self._size if allow_end else self._size - 1
        if not isinstance(index, (int, np.integer)) or index < 0 or index > upper:
            raise OutOfRangeIndex(
                f"{what}() asked for an out-of-range point: {index} (size={self._size})"
            )
        return int(index)

    # ------------------------------------------------------------------
    # Node mutation
    # ------------------------------------------------------------------
    def append(self, x: float, y: float, z: float) -> int:
        """Append a node and return its index."""
        return self.insert(self._size, PointInImage(float(x), float(y), float(z)))

    def extend(
        self,
        xyz: Union[NDArray[Any], Sequence[Sequence[float]]],
        radii: Optional[Union[NDArray[Any], Sequence[float]]] = None,
    ) -> None:
        """Append many nodes at once.

        Args:
            xyz: (n, 3) coordinates to append.
            radii: Optional (n,) radii for the new nodes. Without it, new nodes
                repeat the current last radius when the buffer has radii.

        Raises:
            ShapeMismatch: If `xyz` is not (n, 3) or `radii` is not (n,).
            DegenerateRadiusState: If `radii` is given but the buffer has none.
        """
        arr = np.asarray(xyz, dtype=float)
        if arr.size == 0:
            return
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ShapeMismatch(f"Expected an (n, 3) array, got shape {arr.shape}")
        new_radii = None
        if radii is not None:
            if self._radii is None:
                raise DegenerateRadiusState(
                    "extend() got radii for a buffer without radii"
                )
            new_radii = np.asarray(radii, dtype=float).reshape(-1)
            if new_radii.size != arr.shape[0]:
                raise ShapeMismatch(
                    f"extend() got {new_radii.size} radii for {arr.shape[0]} nodes"
                )
        start = self._size
        self._ensure_capacity(start + arr.shape[0])
        self._xyz[start : start + arr.shape[0]] = arr
        self._size += arr.shape[0]
        if self._radii is not None:
            if new_radii is not None:
                self._radii[start : self._size] = new_radii
            else:
                fill = self._radii[start - 1] if start > 0 else 0.0
                self._radii[start : self._size] = fill
            self._refresh_tangents(start - 1, self._size)
        if self._colors is not None:
            rgba = self._colors[start - 1] if start > 0 else np.ones(4)
            self._colors[start : self._size] = rgba
        if self._values is not None:
            self._values[start : self._size] = 0.0

    def insert(self, index: int, point: PointLike) -> int:
        """Insert a node before `index` (``index == size`` appends).

        The new node borrows optional attributes from its neighbours: its
        radius is their mean, its color is copied and its value is zero.

        Raises:
            OutOfRangeIndex: If `index` is outside ``[0, size]``.
        """
        index = self._check_index(index, "insert", allow_end=True)
        p = as_point(point)
        self._ensure_capacity(self._size + 1)
        n = self._size

        neighbours = [i for i in (index - 1, index) if 0 <= i < n]
        for arr in (self._xyz, self._radii, self._tangents, self._colors, self._values):
            if arr is not None:
                arr[index + 1 : n + 1] = arr[index:n].copy()

        self._xyz[index] = p.as_array()
        # neighbours were shifted by one if they sat at or after index
        shifted = [i + 1 if i >= index else i for i in neighbours]
        if self._radii is not None:
            self._radii[index] = (
                float(np.mean(self._radii[shifted])) if shifted else 0.0
            )
        if self._colors is not None:
            self._colors[index] = self._colors[shifted[0]] if shifted else 1.0
        if self._values is not None:
            self._values[index] = 0.0
        self._size = n + 1
        if self._tangents is not None:
            self._refresh_tangents(index - 1, index + 2)
        return index

    def remove(self, index: int) -> None:
        """Remove a node, reallocating the buffer to its exact new size.

        Does nothing (after validating `index`) when the buffer holds a
        single node.

        Raises:
            OutOfRangeIndex: If `index` is outside ``[0, size)``.
        """
        index = self._check_index(index, "remove")
        if self._size == 1:
            _LOGGER.debug("remove(%s) ignored on a single-node buffer", index)
            return
        n = self._size

        def dropped(arr: Optional[NDArray[Any]]) -> Optional[NDArray[Any]]:
            if arr is None:
                return None
            return np.delete(arr[:n], index, axis=0)

        self._xyz = dropped(self._xyz)
        self._radii = dropped(self._radii)
        self._tangents = dropped(self._tangents)
        self._colors = dropped(self._colors)
        self._values = dropped(self._values)
        self._size = n - 1
        if self._tangents is not None:
            self._refresh_tangents(index - 1, index + 1)

    def move(self, index: int, point: PointLike) -> None:
        """Assign a new location to an existing node.

        Raises:
            OutOfRangeIndex: If `index` is outside ``[0, size)``.
        """
        index = self._check_index(index, "move")
        self._xyz[index] = as_point(point).as_array()
        if self._tangents is not None:
            self._refresh_tangents(index, index + 1)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def xyz(self) -> NDArray[np.float64]:
        """Read-only ``(size, 3)`` view of the node coordinates."""
        view = self._xyz[: self._size]
        view.flags.writeable = False
        return view

    def point(self, index: int) -> PointInImage:
        index = self._check_index(index, "point")
        return PointInImage.from_array(self._xyz[index])

    def points(self) -> list[PointInImage]:
        return [PointInImage.from_array(row) for row in self._xyz[: self._size]]

    def last_point(self) -> Optional[PointInImage]:
        if self._size < 1:
            return None
        return PointInImage.from_array(self._xyz[self._size - 1])

    def nearest_index(
        self, x: float, y: float, z: float, within: float = math.inf
    ) -> int:
        """Return the index of the node closest to ``(x, y, z)``.

        Only nodes strictly closer than `within` qualify; among equally close
        nodes the lowest index wins.

        Args:
            x (float): Calibrated x coordinate.
            y (float): Calibrated y coordinate.
            z (float): Calibrated z coordinate.
            within (float): Search radius. ``math.inf`` always finds a node.

        Returns:
            int: Index of the closest node, or -1 if none lies within range.

        Raises:
            OutOfRangeIndex: If the buffer is empty.
        """
        if self._size < 1:
            raise OutOfRangeIndex("nearest_index() called on an empty buffer")
        query = np.array([[x, y, z]], dtype=float)
        d2 = cdist(query, self._xyz[: self._size], metric="sqeuclidean")[0]
        idx = int(np.argmin(d2))
        limit = float(within) * float(within)
        if d2[idx] < limit:
            return idx
        return -1

    def node_index(self, point: PointLike) -> int:
        """Index of the first node within one pixel of `point` on every axis, or -1."""
        if self._size < 1:
            return -1
        diff = np.abs(self._xyz[: self._size] - as_point(point).as_array())
        pixel = np.asarray(self.calibration.spacing)
        hits = np.flatnonzero(np.all(diff < pixel, axis=1))
        return int(hits[0]) if hits.size else -1

    def contains(self, point: PointLike) -> bool:
        """Return True if some node has exactly the coordinates of `point`."""
        target = as_point(point).as_array()
        return bool(np.any(np.all(self._xyz[: self._size] == target, axis=1)))

    def segment_lengths(self) -> NDArray[np.float64]:
        xyz = self._xyz[: self._size]
        if xyz.shape[0] < 2:
            return np.zeros(0, dtype=float)
        return np.linalg.norm(np.diff(xyz, axis=0), axis=1)

    def length(self) -> float:
        """Sum of the Euclidean distances between consecutive nodes."""
        return float(self.segment_lengths().sum())

    def unscaled(
        self, index: int, offset: Sequence[float] = (0.0, 0.0, 0.0)
    ) -> NDArray[np.float64]:
        """Pixel coordinates of a node: calibrated position / spacing + offset."""
        index = self._check_index(index, "unscaled")
        return self.calibration.unscale(self._xyz[index], offset)

    # ------------------------------------------------------------------
    # Radii and tangents
    # ------------------------------------------------------------------
    @property
    def has_radii(self) -> bool:
        return self._radii is not None

    @property
    def radii(self) -> Optional[NDArray[np.float64]]:
        if self._radii is None:
            return None
        view = self._radii[: self._size]
        view.flags.writeable = False
        return view

    @property
    def tangents(self) -> Optional[NDArray[np.float64]]:
        if self._tangents is None:
            return None
        view = self._tangents[: self._size]
        view.flags.writeable = False
        return view

    def node_radius(self, index: int) -> float:
        if self._radii is None:
            return 0.0
        index = self._check_index(index, "node_radius")
        return float(self._radii[index])

    def mean_radius(self) -> float:
        if self._radii is None or self._size == 0:
            return 0.0
        return float(np.mean(self._radii[: self._size]))

    def _create_circles(self) -> None:
        self._radii = np.zeros(self.capacity, dtype=float)
        self._tangents = np.zeros((self.capacity, 3), dtype=float)

    def _clear_circles(self) -> None:
        self._radii = None
        self._tangents = None

    def set_radius(self, r: float) -> None:
        """Assign the same radius to every node.

        Zero or NaN removes the radius (and tangent) attribute.

        Raises:
            ValueError: If `r` is negative.
        """
        r = float(r)
        if math.isnan(r) or r == 0.0:
            self._clear_circles()
            return
        if r < 0.0:
            raise ValueError(f"Radius must be >= 0, got {r}")
        if self._radii is None:
            self._create_circles()
            self.guess_tangents()
        self._radii[: self._size] = r

    def set_radii(self, radii: Optional[Union[NDArray[Any], Sequence[float]]]) -> None:
        """Assign per-node radii. ``None`` or an empty array removes them.

        Raises:
            ShapeMismatch: If the array length differs from the node count.
            ValueError: If any radius is negative.
        """
        if radii is None or len(radii) == 0:
            self._clear_circles()
            return
        arr = np.asarray(radii, dtype=float).reshape(-1)
        if arr.size != self._size:
            raise ShapeMismatch(
                f"radii array must have as many elements as nodes "
                f"({arr.size} != {self._size})"
            )
        if np.any(arr < 0):
            raise ValueError("Radii must be >= 0")
        if self._radii is None:
            self._create_circles()
            self.guess_tangents()
        self._radii[: self._size] = arr

    def _tangent_rows(self, lo: int, hi: int, k: int) -> NDArray[np.float64]:
        n = self._size
        idx = np.arange(lo, hi)
        before = np.maximum(idx - k, 0)
        after = np.minimum(idx + k, n - 1)
        return self._xyz[after] - self._xyz[before]

    def _refresh_tangents(self, lo: int, hi: int) -> None:
        """Re-guess the tangents that depend on nodes ``lo .. hi - 1``."""
        if self._tangents is None or self._size == 0:
            return
        k = config.tangent_half_window
        lo = max(lo - k, 0)
        hi = min(hi + k, self._size)
        if lo < hi:
            self._tangents[lo:hi] = self._tangent_rows(lo, hi, k)

    def guess_tangents(self, points_either_side: Optional[int] = None) -> None:
        """Recompute every tangent as a clamped central difference.

        The tangent at node ``i`` is ``p[min(i+k, n-1)] - p[max(i-k, 0)]``.

        Raises:
            DegenerateRadiusState: If tangents were never established.
        """
        if self._tangents is None:
            _LOGGER.error("guess_tangents() called on a buffer without radii")
            raise DegenerateRadiusState("Tangents requested but radii were never set")
        k = (
            config.tangent_half_window
            if points_either_side is None
            else int(points_either_side)
        )
        if self._size:
            self._tangents[: self._size] = self._tangent_rows(0, self._size, k)

    # ------------------------------------------------------------------
    # Colors and values
    # ------------------------------------------------------------------
    @property
    def has_node_colors(self) -> bool:
        return self._colors is not None

    @property
    def has_node_values(self) -> bool:
        return self._values is not None

    def set_node_colors(self, colors: Optional[Sequence[ColorLike]]) -> None:
        """Assign one RGB(A) color per node, or remove them with ``None``.

        Raises:
            ShapeMismatch: If the number of colors differs from the node count.
        """
        if colors is None:
            self._colors = None
            return
        if len(colors) != self._size:
            raise ShapeMismatch("colors array must have as many elements as nodes")
        rows = np.array([_as_rgba(c) for c in colors], dtype=float).reshape(-1, 4)
        out = np.ones((self.capacity, 4), dtype=float)
        out[: self._size] = rows
        self._colors = out

    def set_node_color(self, color: ColorLike, index: int) -> None:
        index = self._check_index(index, "set_node_color")
        rgba = _as_rgba(color)
        if self._colors is None:
            self._colors = np.ones((self.capacity, 4), dtype=float)
        self._colors[index] = rgba

    def node_color(self, index: int) -> Optional[tuple[float, ...]]:
        if self._colors is None:
            return None
        index = self._check_index(index, "node_color")
        return tuple(float(c) for c in self._colors[index])

    def set_node_values(self, values: Optional[Sequence[float]]) -> None:
        if values is None:
            self._values = None
            return
        arr = np.asarray(values, dtype=np.float32).reshape(-1)
        if arr.size != self._size:
            raise ShapeMismatch("values array must have as many elements as nodes")
        out = np.zeros(self.capacity, dtype=np.float32)
        out[: self._size] = arr
        self._values = out

    def set_node_value(self, value: float, index: int) -> None:
        index = self._check_index(index, "set_node_value")
        if self._values is None:
            self._values = np.zeros(self.capacity, dtype=np.float32)
        self._values[index] = value

    def node_value(self, index: int) -> float:
        index = self._check_index(index, "node_value")
        if self._values is None:
            return math.nan
        return float(self._values[index])

    # ------------------------------------------------------------------
    # Whole-buffer derivations
    # ------------------------------------------------------------------
    def take(
        self,
        indices: Union[Sequence[int], NDArray[Any]],
        radii: Optional[Union[Sequence[float], NDArray[Any]]] = None,
    ) -> PointBuffer:
        """Return an exact-size buffer holding the selected nodes in order.

        Args:
            indices: Node indices to keep.
            radii: Replacement radii for the kept nodes. Defaults to the
                original radii of those nodes.
        """
        idx = np.asarray(indices, dtype=int).reshape(-1)
        if idx.size and (idx.min() < 0 or idx.max() >= self._size):
            raise OutOfRangeIndex(f"take() got indices outside [0, {self._size})")
        out = PointBuffer(self.calibration, reserve=max(idx.size, 1))
        out.extend(self._xyz[idx])
        if radii is not None:
            out.set_radii(radii)
        elif self._radii is not None and idx.size:
            out.set_radii(self._radii[idx])
        if self._colors is not None and idx.size:
            out.set_node_colors(self._colors[idx])
        if self._values is not None and idx.size:
            out.set_node_values(self._values[idx])
        return out

    def reversed(self) -> PointBuffer:
        return self.take(np.arange(self._size - 1, -1, -1))

    def copy(self, reserve: Optional[int] = None) -> PointBuffer:
        out = self.take(np.arange(self._size))
        if reserve is not None and reserve > out.capacity:
            out._realloc(int(reserve))
        return out

    def validate(self) -> None:
        """Check the attribute co-presence and length invariants.

        Raises:
            ShapeMismatch: If an attribute array is inconsistent.
        """
        if (self._radii is None) != (self._tangents is None):
            raise ShapeMismatch(
                "radii and tangents must be both present or both absent"
            )
        for name in ("_radii", "_tangents", "_colors", "_values"):
            arr = getattr(self, name)
            if arr is not None and arr.shape[0] != self.capacity:
                raise ShapeMismatch(
                    f"{name} has {arr.shape[0]} rows, expected {self.capacity}"
                )

    def __repr__(self) -> str:
        return (
            f"PointBuffer(size={self._size}, capacity={self.capacity}, "
            f"radii={self.has_radii}, unit={self.calibration.unit!r})"
        )
