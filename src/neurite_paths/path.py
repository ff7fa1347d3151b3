"""Module defining the Path class, a traced neurite segment.

A Path owns the calibrated nodes of one polyline (a `PointBuffer`), its
identity and SWC classification, and its joins to sibling paths of the same
`PathSet`. It provides node editing, concatenation, reversal, measurements
(length, mean radius, frustum volume) and join-preserving downsampling.
"""

from __future__ import annotations

import logging
import math
import threading
import weakref
from collections import deque
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    List,
    Optional,
    Sequence,
    Set,
    Union,
)

import numpy as np
from numpy.typing import NDArray

from .downsampler import average_radii, downsample_between
from .exceptions import IllegalConcatenation, InvalidJoinState, OutOfRangeIndex
from .joins import JoinEnd, JoinState, direct_link
from .point import Calibration, PointInImage, PointLike, as_point
from .point_buffer import ColorLike, PointBuffer
from .swc import SWCType, coerce_swc_type, swc_type_name

if TYPE_CHECKING:
    from .path_set import PathSet

_LOGGER = logging.getLogger(__name__)


class Path:
    """A single traced polyline with optional thickness and joins to other paths.

    Attributes:
        selected (bool): Selection flag used by the owning manager.
        canvas_offset (tuple[float, float, float]): Display offset (pixels)
            added when converting nodes back to pixel coordinates.
        color (Optional[tuple[float, ...]]): Custom RGBA color, if any.
        invalid_3d_view (bool): Set when the geometry changed since a
            renderer last consumed it.
    """

    def __init__(
        self,
        x_spacing: float = 1.0,
        y_spacing: float = 1.0,
        z_spacing: float = 1.0,
        unit: Optional[str] = None,
        reserve: Optional[int] = None,
    ) -> None:
        """Create an empty path.

        Args:
            x_spacing (float): Pixel width in `unit`.
            y_spacing (float): Pixel height in `unit`.
            z_spacing (float): Pixel depth in `unit`.
            unit (Optional[str]): Physical length unit (defaults to the configured one).
            reserve (Optional[int]): Initial node capacity.
        """
        calibration = Calibration(x_spacing, y_spacing, z_spacing, unit or "")
        self._buffer = PointBuffer(calibration, reserve=reserve)
        self._joins = JoinState()
        self._set_ref: Optional[weakref.ReferenceType[PathSet]] = None
        self._own_lock = threading.RLock()

        self._id = -1
        self._name: Optional[str] = None
        self._swc_type = SWCType.UNDEFINED
        self._order = 1
        self._editable_node = -1
        self.selected = False
        self.canvas_offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self.color: Optional[tuple[float, ...]] = None
        self.invalid_3d_view = False

        self._fitted: Optional[Path] = None
        self._fitted_version_of: Optional[weakref.ReferenceType[Path]] = None
        self._use_fitted = False

        _LOGGER.debug(
            "Path created with spacing=%s unit=%s",
            calibration.spacing,
            calibration.unit,
        )

    @classmethod
    def from_calibration(
        cls, calibration: Calibration, reserve: Optional[int] = None
    ) -> Path:
        return cls(*calibration.spacing, unit=calibration.unit, reserve=reserve)

    @classmethod
    def from_points(
        cls,
        points: Union[NDArray[Any], Sequence[Sequence[float]]],
        spacing: Sequence[float] = (1.0, 1.0, 1.0),
        unit: Optional[str] = None,
        radii: Optional[Sequence[float]] = None,
    ) -> Path:
        """Build a path from an (n, 3) coordinate array and optional radii."""
        xyz = np.asarray(points, dtype=float).reshape(-1, 3)
        path = cls(*spacing, unit=unit, reserve=max(xyz.shape[0], 1))
        path._buffer.extend(xyz)
        if radii is not None:
            path.set_radii(radii)
        return path

    # ------------------------------------------------------------------
    # Identity and classification
    # ------------------------------------------------------------------
    @property
    def id(self) -> int:
        return self._id

    def set_id(self, new_id: int) -> None:
        """Assign the id. Once set it can only be re-assigned to the same value.

        Raises:
            ValueError: If the path already carries a different id.
        """
        new_id = int(new_id)
        if self._id >= 0 and new_id != self._id:
            raise ValueError(
                f"Path id already set to {self._id}; cannot change to {new_id}"
            )
        self._id = new_id

    @property
    def name(self) -> str:
        # the default follows the id, which may be assigned later
        return self._name or f"Path {self._id}"

    @name.setter
    def name(self, new_name: Optional[str]) -> None:
        # None or "" falls back to the default name
        self._name = new_name

    @property
    def calibration(self) -> Calibration:
        return self._buffer.calibration

    @property
    def unit(self) -> str:
        return self._buffer.calibration.unit

    def min_separation(self) -> float:
        return self._buffer.calibration.min_separation()

    @property
    def swc_type(self) -> SWCType:
        return self._swc_type

    def set_swc_type(
        self, new_type: Union[int, SWCType], also_set_in_fitted: bool = True
    ) -> None:
        """Set the SWC type, propagating it to the fitted version.

        Raises:
            ValueError: If the code is negative, or if this path is itself a
                fitted version and the new type would disagree with its source.
        """
        swc = coerce_swc_type(new_type)
        if also_set_in_fitted:
            source = self.fitted_version_of
            if source is not None and source.swc_type != swc:
                _LOGGER.error("set_swc_type called on a fitted path %r", self)
                raise ValueError("Only call set_swc_type on the unfitted path")
            self._apply_to_views(lambda p: setattr(p, "_swc_type", swc))
        else:
            self._swc_type = swc

    @property
    def order(self) -> int:
        """Reverse Horton-Strahler order: 1 for primary paths."""
        return self._order

    def set_order(self, order: int) -> None:
        if int(order) < 1:
            raise ValueError(f"Order must be >= 1, got {order}")
        self._apply_to_views(lambda p: setattr(p, "_order", int(order)))

    def set_is_primary(self, primary: bool) -> None:
        if primary:
            self.set_order(1)

    @property
    def is_primary(self) -> bool:
        return self._order == 1

    @property
    def has_custom_color(self) -> bool:
        return self.color is not None

    # ------------------------------------------------------------------
    # Editable node
    # ------------------------------------------------------------------
    @property
    def editable_node_index(self) -> int:
        return self._editable_node

    def set_editable_node(self, index: int) -> None:
        """Tag a node as editable; -1 clears the tag.

        Raises:
            OutOfRangeIndex: If `index` is neither -1 nor a valid node index.
        """
        if index != -1 and not 0 <= index < self.size:
            raise OutOfRangeIndex(f"set_editable_node() got out-of-range index {index}")
        self._editable_node = int(index)

    def is_being_edited(self) -> bool:
        return self._editable_node != -1

    def stop_being_edited(self) -> None:
        self._editable_node = -1

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self._buffer.size

    def __len__(self) -> int:
        return self._buffer.size

    @property
    def xyz(self) -> NDArray[np.float64]:
        return self._buffer.xyz

    def point(self, index: int) -> PointInImage:
        return self._buffer.point(index)

    def points(self) -> List[PointInImage]:
        return self._buffer.points()

    def last_point(self) -> Optional[PointInImage]:
        return self._buffer.last_point()

    def append_point(self, x: float, y: float, z: float) -> None:
        self._buffer.append(x, y, z)
        self.invalid_3d_view = True

    def add_node(self, index: int, point: PointLike) -> None:
        """Insert a node at `index` (``index == size`` appends)."""
        self._buffer.insert(index, point)
        self.invalid_3d_view = True

    def remove_node(self, index: int) -> None:
        """Remove a node; no-op on single-point paths.

        A join point that sat on the removed node is re-anchored to the new
        first (start join) or last (end join) node. The editable node keeps
        pointing at the same node, or is cleared if that node was removed.

        Raises:
            OutOfRangeIndex: If `index` is outside ``[0, size)``.
        """
        removed = self._buffer.point(index)
        if self.size == 1:
            return
        self._buffer.remove(index)
        if removed == self._joins.start_point:
            self._joins.start_point = self._buffer.point(0)
        if removed == self._joins.end_point:
            self._joins.end_point = self._buffer.point(self.size - 1)
        if index == self._editable_node:
            self._editable_node = -1
        elif index < self._editable_node:
            self._editable_node -= 1
        self.invalid_3d_view = True

    def move_node(self, index: int, destination: PointLike) -> None:
        self._buffer.move(index, destination)
        self.invalid_3d_view = True

    def nearest_index(
        self, x: float, y: float, z: float, within: float = math.inf
    ) -> int:
        return self._buffer.nearest_index(x, y, z, within)

    def node_index(self, point: PointLike) -> int:
        return self._buffer.node_index(point)

    def contains(self, point: PointLike) -> bool:
        return self._buffer.contains(point)

    def unscaled(self, index: int) -> NDArray[np.float64]:
        """Pixel coordinates of a node, including the display offset."""
        return self._buffer.unscaled(index, self.canvas_offset)

    def unscaled_rounded(self, index: int) -> tuple[int, int, int]:
        x, y, z = np.floor(self.unscaled(index) + 0.5).astype(int)
        return int(x), int(y), int(z)

    # ------------------------------------------------------------------
    # Radii, tangents, colors and values
    # ------------------------------------------------------------------
    @property
    def has_radii(self) -> bool:
        return self._buffer.has_radii

    @property
    def radii(self) -> Optional[NDArray[np.float64]]:
        return self._buffer.radii

    @property
    def tangents(self) -> Optional[NDArray[np.float64]]:
        return self._buffer.tangents

    def set_radius(self, r: float) -> None:
        self._buffer.set_radius(r)
        self.invalid_3d_view = True

    def set_radii(self, radii: Optional[Sequence[float]]) -> None:
        self._buffer.set_radii(radii)
        self.invalid_3d_view = True

    def node_radius(self, index: int) -> float:
        return self._buffer.node_radius(index)

    def guess_tangents(self, points_either_side: Optional[int] = None) -> None:
        self._buffer.guess_tangents(points_either_side)

    @property
    def has_node_colors(self) -> bool:
        return self._buffer.has_node_colors

    def set_node_colors(self, colors: Optional[Sequence[ColorLike]]) -> None:
        self._buffer.set_node_colors(colors)

    def set_node_color(self, color: ColorLike, index: int) -> None:
        self._buffer.set_node_color(color, index)

    def node_color(self, index: int) -> Optional[tuple[float, ...]]:
        return self._buffer.node_color(index)

    def set_node_value(self, value: float, index: int) -> None:
        self._buffer.set_node_value(value, index)

    def set_node_values(self, values: Optional[Sequence[float]]) -> None:
        self._buffer.set_node_values(values)

    def node_value(self, index: int) -> float:
        return self._buffer.node_value(index)

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------
    def length(self) -> float:
        return self._buffer.length()

    def real_length_string(self) -> str:
        return f"{self.length():.3f}"

    def mean_radius(self) -> float:
        """Average node radius, or 0 if the path has no thickness."""
        return self._buffer.mean_radius()

    def approximate_volume(self) -> float:
        """Estimate the volume of the path as a chain of truncated cones.

        Each segment contributes ``pi * h * (r1^2 + r2^2 + r1*r2) / 3``, where
        ``h`` is the segment length and ``r1``, ``r2`` the radii of its ends.

        Returns:
            float: Volume in cubed physical units, or -1 if the path has no radii.
        """
        radii = self._buffer.radii
        if radii is None:
            return -1.0
        h = self._buffer.segment_lengths()
        r1 = radii[:-1]
        r2 = radii[1:]
        return float(np.sum(math.pi * h * (r1 * r1 + r2 * r2 + r1 * r2) / 3.0))

    # ------------------------------------------------------------------
    # Path set membership and locking
    # ------------------------------------------------------------------
    @property
    def path_set(self) -> Optional[PathSet]:
        return self._set_ref() if self._set_ref is not None else None

    def _attach(self, path_set: PathSet) -> None:
        self._set_ref = weakref.ref(path_set)

    def _detach(self) -> None:
        self._set_ref = None

    @property
    def lock(self) -> threading.RLock:
        """The owning set's lock, or a private lock for a standalone path."""
        path_set = self.path_set
        return path_set.lock if path_set is not None else self._own_lock

    def _resolve(self, handle: Optional[int]) -> Optional[Path]:
        path_set = self.path_set
        if handle is None or path_set is None:
            return None
        return path_set.get(handle)

    def _require_peer(self, other: Optional[Path]) -> PathSet:
        if other is None:
            raise InvalidJoinState("A join should never take a null path")
        if other is self:
            raise InvalidJoinState("A path cannot be joined to itself")
        path_set = self.path_set
        if path_set is None or other.path_set is not path_set:
            raise InvalidJoinState(
                f"{self!r} and {other!r} must belong to the same PathSet to be joined"
            )
        return path_set

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------
    @property
    def start_joins(self) -> Optional[Path]:
        return self._resolve(self._joins.start)

    @property
    def start_joins_point(self) -> Optional[PointInImage]:
        return self._joins.start_point

    @property
    def end_joins(self) -> Optional[Path]:
        return self._resolve(self._joins.end)

    @property
    def end_joins_point(self) -> Optional[PointInImage]:
        return self._joins.end_point

    @property
    def join_state(self) -> str:
        return self._joins.state

    @property
    def somehow_joins(self) -> List[Path]:
        return [p for p in map(self._resolve, self._joins.somehow) if p is not None]

    @property
    def children(self) -> List[Path]:
        return [p for p in map(self._resolve, self._joins.children) if p is not None]

    def set_join(
        self, end: Union[JoinEnd, str], other: Optional[Path], point: PointLike
    ) -> None:
        """Join one end of this path onto `other` at `point`.

        The only way paths get linked: records the join, makes the two paths
        adjacent both ways and sets this path's order to ``other.order + 1``.

        Raises:
            InvalidJoinState: If `other` is None, this path, or outside this
                path's set, if `point` is None, or if the end is already joined.
        """
        end = JoinEnd.coerce(end)
        path_set = self._require_peer(other)
        if point is None:
            raise InvalidJoinState("A join needs a join point")
        anchor = as_point(point)
        with path_set.lock:
            if self._joins.target(end) is not None:
                _LOGGER.error("%s join of %r already set", end.value, self)
                raise InvalidJoinState(
                    f"set_join for {end.value.upper()} should not replace another join"
                )
            self._joins.assign(end, other.id, anchor)
            self._joins.link(other.id)
            other._joins.link(self.id)
            self.set_order(other.order + 1)
            _LOGGER.debug(
                "Path %d %s-joined to path %d at %s",
                self.id,
                end.value,
                other.id,
                anchor,
            )

    def set_start_join(self, other: Optional[Path], point: PointLike) -> None:
        self.set_join(JoinEnd.START, other, point)

    def set_end_join(self, other: Optional[Path], point: PointLike) -> None:
        self.set_join(JoinEnd.END, other, point)

    def unset_join(self, end: Union[JoinEnd, str]) -> None:
        """Remove the join at one end.

        Adjacency with the former partner survives only while some other
        directional join (in either direction) still links the two paths.
        Order is reset to 1; re-deriving orders across the tree is the
        caller's job (see `PathSet.recompute_orders`).

        Raises:
            InvalidJoinState: If that end has no join.
        """
        end = JoinEnd.coerce(end)
        with self.lock:
            handle = self._joins.target(end)
            if handle is None:
                raise InvalidJoinState(
                    f"Don't call unset_join({end.value}) "
                    "when there is no join to remove"
                )
            self._joins.clear(end)
            other = self._resolve(handle)
            if other is not None:
                if not direct_link(self._joins, self.id, other._joins, other.id):
                    self._joins.unlink(other.id)
                    other._joins.unlink(self.id)
            else:
                self._joins.unlink(handle)
            self.set_order(1)
            _LOGGER.debug("Path %d %s join to %d removed", self.id, end.value, handle)

    def unset_start_join(self) -> None:
        self.unset_join(JoinEnd.START)

    def unset_end_join(self) -> None:
        self.unset_join(JoinEnd.END)

    def disconnect_from_all(self) -> None:
        """Sever every join and adjacency this path has, in both directions."""
        with self.lock:
            for handle in list(self._joins.somehow):
                other = self._resolve(handle)
                if other is None:
                    continue
                other._joins.clear_targets(self.id)
                other._joins.unlink(self.id)
            self._joins.reset()
            self.set_order(1)
            _LOGGER.debug("Path %d disconnected from all", self.id)

    def set_children(self, remaining: Set[Path]) -> None:
        """Assign display children breadth-first from this path.

        Every adjacent path still in `remaining` becomes a child and is
        removed from it; the walk then continues from those children.

        Args:
            remaining (Set[Path]): Paths not yet placed in the tree. Mutated.
        """
        queue = deque([self])
        while queue:
            parent = queue.popleft()
            parent._joins.children.clear()
            for candidate in parent.somehow_joins:
                if candidate in remaining:
                    parent._joins.children.append(candidate.id)
                    remaining.discard(candidate)
                    queue.append(candidate)

    def find_joined_points(self) -> List[PointInImage]:
        """Points where this path joins another, or another path joins it."""
        result: List[PointInImage] = []
        if self._joins.start is not None:
            result.append(self._joins.start_point)
        if self._joins.end is not None:
            result.append(self._joins.end_point)
        for other in self.somehow_joins:
            if other._joins.start == self.id:
                result.append(other._joins.start_point)
            if other._joins.end == self.id:
                result.append(other._joins.end_point)
        return result

    def find_joined_point_indices(self) -> Set[int]:
        """Node indices closest to each of `find_joined_points`."""
        if self.size == 0:
            return set()
        return {self.nearest_index(p.x, p.y, p.z) for p in self.find_joined_points()}

    # ------------------------------------------------------------------
    # Fitted versions
    # ------------------------------------------------------------------
    @property
    def fitted(self) -> Optional[Path]:
        return self._fitted

    @property
    def fitted_version_of(self) -> Optional[Path]:
        if self._fitted_version_of is None:
            return None
        return self._fitted_version_of()

    def is_fitted_version_of_another_path(self) -> bool:
        return self.fitted_version_of is not None

    def set_fitted(self, fitted: Optional[Path]) -> None:
        """Attach (or with None, detach) the refined version of this path.

        Raises:
            ValueError: If a fitted version is already attached.
        """
        if self._fitted is not None and fitted is not None:
            raise ValueError("Trying to set a fitted path when there already is one")
        if fitted is None:
            if self._fitted is not None:
                self._fitted._fitted_version_of = None
            self._fitted = None
            self._use_fitted = False
            return
        fitted._fitted_version_of = weakref.ref(self)
        fitted._swc_type = self._swc_type
        fitted._order = self._order
        self._fitted = fitted

    @property
    def use_fitted(self) -> bool:
        return self._use_fitted

    def set_use_fitted(self, use_fitted: bool) -> None:
        if use_fitted and self._fitted is None:
            raise ValueError("set_use_fitted(True) called, but there is no fitted path")
        self._use_fitted = bool(use_fitted)

    def version_in_use(self) -> bool:
        """True if this object is the representation currently in use."""
        source = self.fitted_version_of
        if source is not None:
            return source.use_fitted
        return not self._use_fitted

    def active(self) -> Path:
        """The representation in use: the fitted version or this path."""
        if self._use_fitted and self._fitted is not None:
            return self._fitted
        return self

    def _apply_to_views(self, update: Callable[[Path], None]) -> None:
        """Apply `update` to this path and, if any, its fitted version."""
        update(self)
        if self._fitted is not None:
            update(self._fitted)

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------
    def add(self, other: Optional[Path]) -> Path:
        """Append `other`'s nodes to the end of this path.

        Leading nodes of `other` equal to this path's last node are skipped.
        If only `other` has radii, this path first gets a default radius of
        twice the minimum spacing. An end join of `other` is moved onto this
        path and `other` is disconnected from everything.

        Returns:
            Path: This path, for chaining.

        Raises:
            IllegalConcatenation: If this path already has an end join.
        """
        if other is None:
            _LOGGER.warning("Trying to add a null path")
            return self
        with self.lock:
            if self._joins.end is not None:
                _LOGGER.error("add() on %r, which already has an end join", self)
                raise IllegalConcatenation(
                    "We should never be adding to a path that already has an end join"
                )
            transfer_to = other.end_joins
            transfer_point = other.end_joins_point
            if transfer_to is not None and transfer_to is not self:
                self._require_peer(transfer_to)

            incoming = other.xyz
            skip = 0
            last = self.last_point()
            if last is not None:
                target = last.as_array()
                n_in = incoming.shape[0]
                while skip < n_in and np.array_equal(incoming[skip], target):
                    skip += 1

            if other.has_radii and not self.has_radii:
                self._buffer.set_radius(2.0 * self.min_separation())
            radii = other.radii[skip:] if (other.has_radii and self.has_radii) else None
            self._buffer.extend(incoming[skip:], radii=radii)

            if transfer_to is not None:
                other.disconnect_from_all()
                if transfer_to is not self:
                    self.set_end_join(transfer_to, transfer_point)
            if self.has_radii:
                self._buffer.guess_tangents()
            self.invalid_3d_view = True
            _LOGGER.debug(
                "Appended %d nodes of %r to %r (%d skipped)",
                incoming.shape[0] - skip,
                other,
                self,
                skip,
            )
        return self

    def reversed(self) -> Path:
        """A new path with the node order reversed. Joins are not carried over."""
        result = Path.from_calibration(self.calibration, reserve=max(self.size, 1))
        result._buffer = self._buffer.reversed()
        result._swc_type = self._swc_type
        return result

    def transform(
        self,
        transformation: Callable[[NDArray[np.float64]], Any],
        calibration: Optional[Calibration] = None,
    ) -> Path:
        """A new path whose nodes are mapped through `transformation`.

        Args:
            transformation: Maps an (n, 3) coordinate array to an (n, 3) array.
                Rows containing NaN are dropped.
            calibration: Calibration of the result; defaults to this path's.

        Returns:
            Path: The transformed copy, with id, name, selection and SWC type
            carried over. Joins and fitted versions are not.
        """
        moved = np.asarray(transformation(np.array(self.xyz)), dtype=float)
        moved = moved.reshape(-1, 3)
        if moved.shape[0] != self.size:
            raise ValueError(
                f"Transformation returned {moved.shape[0]} nodes for {self.size}"
            )
        valid = ~np.isnan(moved).any(axis=1)
        if not valid.all():
            _LOGGER.warning(
                "transform(): dropping %d node(s) mapped to NaN", int((~valid).sum())
            )
        cal = calibration if calibration is not None else self.calibration
        result = Path.from_calibration(cal, reserve=max(int(valid.sum()), 1))
        result._buffer.extend(moved[valid])
        result._id = self._id
        result._name = self._name
        result.selected = self.selected
        result._swc_type = self._swc_type
        return result

    def downsample(self, max_deviation: float) -> None:
        """Simplify the geometry while keeping every end and join point.

        The path is cut at its fixed points (both ends and every join
        location) and each window is simplified independently so that no
        dropped node lies farther than `max_deviation` from its replacing
        segment. Radii of surviving nodes become the mean of the radii they
        absorbed and tangents are recomputed.

        Args:
            max_deviation (float): Allowed deviation in calibrated units.
        """
        with self.lock:
            n = self.size
            if n < 3:
                self.invalid_3d_view = True
                return
            fixed = self.find_joined_point_indices()
            kept = downsample_between(self.xyz, fixed, max_deviation)
            radii = average_radii(self.radii, kept) if self.has_radii else None
            buffer = self._buffer.take(kept, radii=radii)
            if buffer.has_radii:
                buffer.guess_tangents()
            self._buffer = buffer
            self._editable_node = -1
            self.invalid_3d_view = True
            _LOGGER.info(
                "Downsampled %r: %d -> %d nodes (max deviation %g, %d fixed)",
                self,
                n,
                buffer.size,
                max_deviation,
                len(fixed | {0, n - 1}),
            )

    def mark_3d_view_valid(self) -> None:
        self.invalid_3d_view = False

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------
    def real_str(self) -> str:
        label = self.name
        if self.size == 1:
            label += " [Single Point]"
        if self._swc_type != SWCType.UNDEFINED:
            label += f" [{swc_type_name(self._swc_type)}]"
        return label

    def __str__(self) -> str:
        # describes the representation in use, not necessarily this object
        return self.active().real_str()

    def __repr__(self) -> str:
        return (
            f"Path(id={self._id}, size={self.size}, order={self._order}, "
            f"swc_type={self._swc_type.name})"
        )

    def __lt__(self, other: Path) -> bool:
        return self._id < other._id
