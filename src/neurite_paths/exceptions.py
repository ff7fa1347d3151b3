"""Exceptions raised when a path or join operation is misused.

Every error here signals a broken caller contract. They are raised before any
state is touched, so a rejected call leaves its paths exactly as they were.
Each class also derives from the closest builtin so callers may catch
``IndexError``/``ValueError`` generically.
"""

from __future__ import annotations


class PathError(Exception):
    """Base class for every neurite-paths contract violation."""


class OutOfRangeIndex(PathError, IndexError):
    """A node index lies outside ``[0, size)`` (``[0, size]`` for insertion)."""


class InvalidJoinState(PathError, ValueError):
    """A join end is already occupied, already empty, or the other path is invalid."""


class ShapeMismatch(PathError, ValueError):
    """A per-node array does not have one entry per node."""


class IllegalConcatenation(PathError, ValueError):
    """A path was appended onto a path whose end is already joined."""


class DegenerateRadiusState(PathError, ValueError):
    """Radius-dependent geometry was requested before radii were established."""
