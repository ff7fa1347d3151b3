"""The neurite_paths package models traced neurite paths and the tree they form.

This package offers:
  - Calibrated, growable node storage with optional radii, tangents,
    node colors and node values.
  - A join protocol linking paths into a tree, with branch-order tracking.
  - Measurements (length, mean radius, frustum volume) and join-preserving
    downsampling.

Submodules:
  - config: Package-wide defaults and logging level.
  - downsampler: Window-wise Douglas-Peucker simplification.
  - exceptions: Contract-violation errors.
  - joins: Join bookkeeping shared by paths.
  - path: The Path class.
  - path_set: PathSet arena owning paths and their lock.
  - point: Calibration and PointInImage value types.
  - point_buffer: Node storage.
  - swc: SWC type tags.

Classes:
  Calibration, JoinEnd, Path, PathSet, PointBuffer, PointInImage, SWCType
"""

from .config import (
    config,
    configure,
    use,
    set_log_level,
)

from neurite_paths.exceptions import (
    DegenerateRadiusState,
    IllegalConcatenation,
    InvalidJoinState,
    OutOfRangeIndex,
    PathError,
    ShapeMismatch,
)
from neurite_paths.point import Calibration, PointInImage
from neurite_paths.point_buffer import PointBuffer
from neurite_paths.swc import SWCType, swc_type_name, swc_type_names, swc_types
from neurite_paths.joins import JoinEnd
from neurite_paths.downsampler import simplify
from neurite_paths.path import Path
from neurite_paths.path_set import PathSet

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Calibration",
    "JoinEnd",
    "Path",
    "PathSet",
    "PointBuffer",
    "PointInImage",
    "SWCType",
    # Errors
    "PathError",
    "OutOfRangeIndex",
    "InvalidJoinState",
    "ShapeMismatch",
    "IllegalConcatenation",
    "DegenerateRadiusState",
    # Helpers
    "simplify",
    "swc_type_name",
    "swc_type_names",
    "swc_types",
    # Configuration
    "config",
    "configure",
    "use",
    "set_log_level",
]
