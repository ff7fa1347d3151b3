"""Join bookkeeping between paths.

Each path carries one `JoinState`: at most one upstream join at its start,
at most one join at its end, the symmetric set of every path it is related
to (``somehow``), and the display children assigned by a breadth-first pass.
Other paths are referenced by integer handle (their id inside a `PathSet`),
never by object, so the state holds no reference cycles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union

from .exceptions import InvalidJoinState
from .point import PointInImage

_LOGGER = logging.getLogger(__name__)


class JoinEnd(Enum):
    """Which end of a path a join is anchored to."""

    START = "start"
    END = "end"

    @classmethod
    def coerce(cls, value: Union[JoinEnd, str]) -> JoinEnd:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as err:
            raise InvalidJoinState(f"Unknown join end {value!r}") from err


@dataclass
class JoinState:
    """Directional joins and adjacency of one path.

    Attributes:
        start (Optional[int]): Handle of the path this one starts on.
        start_point (Optional[PointInImage]): Location of the start join.
        end (Optional[int]): Handle of the path this one ends on.
        end_point (Optional[PointInImage]): Location of the end join.
        somehow (Dict[int, None]): Insertion-ordered set of adjacent handles.
        children (List[int]): Display children, filled by a breadth-first pass.
    """

    start: Optional[int] = None
    start_point: Optional[PointInImage] = None
    end: Optional[int] = None
    end_point: Optional[PointInImage] = None
    somehow: Dict[int, None] = field(default_factory=dict)
    children: List[int] = field(default_factory=list)

    @property
    def state(self) -> str:
        """One of ``unjoined``, ``start-joined``, ``end-joined``, ``both-joined``."""
        if self.start is None and self.end is None:
            return "unjoined"
        if self.end is None:
            return "start-joined"
        if self.start is None:
            return "end-joined"
        return "both-joined"

    def target(self, end: JoinEnd) -> Optional[int]:
        return self.start if end is JoinEnd.START else self.end

    def point(self, end: JoinEnd) -> Optional[PointInImage]:
        return self.start_point if end is JoinEnd.START else self.end_point

    def assign(self, end: JoinEnd, handle: int, point: PointInImage) -> None:
        if end is JoinEnd.START:
            self.start, self.start_point = handle, point
        else:
            self.end, self.end_point = handle, point

    def clear(self, end: JoinEnd) -> None:
        if end is JoinEnd.START:
            self.start, self.start_point = None, None
        else:
            self.end, self.end_point = None, None

    def clear_targets(self, handle: int) -> None:
        """Drop every directional join pointing at `handle`."""
        if self.start == handle:
            self.clear(JoinEnd.START)
        if self.end == handle:
            self.clear(JoinEnd.END)

    def direct_targets(self) -> Iterator[int]:
        for handle in (self.start, self.end):
            if handle is not None:
                yield handle

    def link(self, handle: int) -> None:
        self.somehow.setdefault(handle, None)

    def unlink(self, handle: int) -> None:
        self.somehow.pop(handle, None)
        if handle in self.children:
            self.children.remove(handle)

    def reset(self) -> None:
        self.start = self.start_point = None
        self.end = self.end_point = None
        self.somehow.clear()
        self.children.clear()


def direct_link(a: JoinState, a_handle: int, b: JoinState, b_handle: int) -> bool:
    """Return True if either path has a start or end join on the other."""
    return b_handle in (a.start, a.end) or a_handle in (b.start, b.end)
