"""Calibrated point and spacing primitives.

Coordinates handled by this package are always calibrated (physical units).
`Calibration` carries the per-axis spacing needed to go back to pixel
coordinates, and `PointInImage` is the value type used for node positions
and join anchors.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .config import config

_LOGGER = logging.getLogger(__name__)

_UNIT_ALIASES = {
    "micron": "um",
    "microns": "um",
    "µm": "um",
    "μm": "um",
}


def sanitize_unit(unit: str | None) -> str:
    """Return a normalized unit label, falling back to the configured default."""
    if unit is None or not str(unit).strip():
        return config.default_unit
    label = str(unit).strip()
    return _UNIT_ALIASES.get(label.lower(), label)


@dataclass(frozen=True)
class Calibration:
    """Per-axis pixel spacing and the unit it is expressed in.

    Attributes:
        x_spacing (float): Pixel width in `unit`.
        y_spacing (float): Pixel height in `unit`.
        z_spacing (float): Pixel depth in `unit`.
        unit (str): Physical length unit (typically "um").
    """

    x_spacing: float = 1.0
    y_spacing: float = 1.0
    z_spacing: float = 1.0
    unit: str = ""

    def __post_init__(self) -> None:
        for axis, value in zip("xyz", self.spacing):
            if not math.isfinite(value) or value <= 0.0:
                _LOGGER.error("Invalid %s spacing %r", axis, value)
                raise ValueError(
                    f"{axis}_spacing must be finite and positive, got {value!r}"
                )
        object.__setattr__(self, "x_spacing", float(self.x_spacing))
        object.__setattr__(self, "y_spacing", float(self.y_spacing))
        object.__setattr__(self, "z_spacing", float(self.z_spacing))
        object.__setattr__(self, "unit", sanitize_unit(self.unit))

    @property
    def spacing(self) -> tuple[float, float, float]:
        """Return ``(x_spacing, y_spacing, z_spacing)``."""
        return (self.x_spacing, self.y_spacing, self.z_spacing)

    def min_separation(self) -> float:
        """Return the smallest spacing across the three axes."""
        return min(self.spacing)

    def unscale(
        self,
        xyz: Union[NDArray[Any], Sequence[float]],
        offset: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> NDArray[np.float64]:
        """Convert calibrated coordinates to (fractional) pixel coordinates.

        Args:
            xyz: A single (3,) coordinate or an (n, 3) array.
            offset: Display offset added after division, in pixels.

        Returns:
            Array with the same shape as `xyz`.
        """
        arr = np.asarray(xyz, dtype=float)
        return arr / np.asarray(self.spacing) + np.asarray(offset, dtype=float)


@dataclass(frozen=True)
class PointInImage:
    """An immutable calibrated 3D position. Equality is by coordinate value."""

    x: float
    y: float
    z: float

    @classmethod
    def from_array(cls, values: Union[NDArray[Any], Sequence[float]]) -> PointInImage:
        """Build a point from any length-3 sequence."""
        arr = np.asarray(values, dtype=float).reshape(-1)
        if arr.size != 3:
            raise ValueError(f"Expected 3 coordinates, got shape {arr.shape}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def as_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=float)

    def distance_to(self, other: PointLike) -> float:
        """Euclidean distance to another point."""
        return float(np.linalg.norm(self.as_array() - as_point(other).as_array()))

    def __iter__(self):
        return iter((self.x, self.y, self.z))


PointLike = Union[PointInImage, NDArray[Any], Sequence[float]]


def as_point(value: PointLike) -> PointInImage:
    """Coerce a point-like value into a `PointInImage`."""
    if isinstance(value, PointInImage):
        return value
    return PointInImage.from_array(value)
