"""Module defining the PathSet class, the caller-owned arena of joined paths.

Paths refer to each other through integer handles (their ids) resolved by the
set they belong to. The set also owns the lock taken by every join, unjoin,
concatenation and downsampling on its members, so a reader holding the lock
never sees a half-rewired join graph or a half-rebuilt node buffer.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Dict, Iterator, List, Optional, Union

from .joins import JoinEnd
from .path import Path

_LOGGER = logging.getLogger(__name__)


class PathSet:
    """Arena of paths addressed by integer handle.

    Attributes:
        lock (threading.RLock): Held while member paths are mutated together.
    """

    def __init__(self) -> None:
        self._paths: Dict[int, Path] = {}
        self._next_id = 0
        self.lock = threading.RLock()

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def add(self, path: Path, id: Optional[int] = None) -> int:
        """Register `path` and return its handle.

        The handle is `id` if given, else the id the path already carries,
        else the next free id. It becomes the path's permanent id.

        Raises:
            ValueError: If the path already belongs to a set, or the handle
                is taken.
        """
        with self.lock:
            if path.path_set is not None:
                raise ValueError(f"{path!r} already belongs to a PathSet")
            if id is not None:
                handle = int(id)
            elif path.id >= 0:
                handle = path.id
            else:
                handle = self._next_id
            if handle < 0:
                raise ValueError(f"Handles must be >= 0, got {handle}")
            if handle in self._paths:
                raise ValueError(f"Handle {handle} is already in use")
            path.set_id(handle)
            path._attach(self)
            self._paths[handle] = path
            self._next_id = max(self._next_id, handle + 1)
            _LOGGER.debug("Registered %r as handle %d", path, handle)
            return handle

    def remove(self, path: Union[Path, int]) -> Path:
        """Disconnect a path from every other member and drop it from the set.

        Raises:
            KeyError: If the path is not a member.
        """
        with self.lock:
            handle = path if isinstance(path, int) else path.id
            member = self._paths[handle]
            if isinstance(path, Path) and member is not path:
                raise KeyError(f"{path!r} is not a member of this PathSet")
            member.disconnect_from_all()
            for other in self._paths.values():
                other._joins.unlink(handle)
            del self._paths[handle]
            member._detach()
            _LOGGER.debug("Removed path %d; %d remain", handle, len(self._paths))
            return member

    def __getitem__(self, handle: int) -> Path:
        return self._paths[handle]

    def get(self, handle: Optional[int]) -> Optional[Path]:
        if handle is None:
            return None
        return self._paths.get(handle)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Path):
            return self._paths.get(item.id) is item
        return item in self._paths

    def __iter__(self) -> Iterator[Path]:
        return iter([self._paths[h] for h in sorted(self._paths)])

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"PathSet(n_paths={len(self._paths)})"

    # ------------------------------------------------------------------
    # Whole-graph derivations
    # ------------------------------------------------------------------
    def rebuild_adjacency(self) -> None:
        """Recompute every adjacency set from the directional joins alone.

        Display children are cleared as well; call `build_tree` to refill them.
        """
        with self.lock:
            for path in self._paths.values():
                path._joins.somehow.clear()
                path._joins.children.clear()
            for handle, path in self._paths.items():
                for target in path._joins.direct_targets():
                    if target not in self._paths:
                        _LOGGER.warning(
                            "Path %d joins unknown handle %d; ignored", handle, target
                        )
                        continue
                    path._joins.link(target)
                    self._paths[target]._joins.link(handle)
            _LOGGER.debug("Adjacency rebuilt for %d paths", len(self._paths))

    def primary_paths(self) -> List[Path]:
        """Members whose order is 1, sorted by id."""
        return [p for p in self if p.is_primary]

    def _parent_of(self, handle: int) -> Optional[int]:
        joins = self._paths[handle]._joins
        for end in (JoinEnd.START, JoinEnd.END):
            target = joins.target(end)
            if target is not None and target in self._paths:
                return target
        return None

    def recompute_orders(self) -> None:
        """Re-derive every branch order from the directional joins.

        A path's parent is the path its start joins, or failing that the path
        its end joins, matching the order `Path.set_join` assigns. Paths with
        no parent are roots (order 1); every other path gets its parent's
        order + 1. Paths unreachable from any root (a join cycle) are reset
        to 1.
        """
        with self.lock:
            downstream: Dict[int, List[int]] = {h: [] for h in self._paths}
            roots: List[int] = []
            for handle in sorted(self._paths):
                parent = self._parent_of(handle)
                if parent is None:
                    roots.append(handle)
                else:
                    downstream[parent].append(handle)

            seen = set(roots)
            queue = deque((h, 1) for h in roots)
            while queue:
                handle, order = queue.popleft()
                self._paths[handle].set_order(order)
                for child in downstream[handle]:
                    if child not in seen:
                        seen.add(child)
                        queue.append((child, order + 1))
            for handle in self._paths.keys() - seen:
                _LOGGER.warning(
                    "Path %d is not reachable from a root; order reset", handle
                )
                self._paths[handle].set_order(1)

    def build_tree(self) -> List[Path]:
        """Populate `children` breadth-first from the primary paths.

        Returns:
            List[Path]: The roots, sorted by id.
        """
        with self.lock:
            for path in self._paths.values():
                path._joins.children.clear()
            roots = self.primary_paths()
            remaining = set(self._paths.values()) - set(roots)
            for root in roots:
                root.set_children(remaining)
            _LOGGER.info(
                "Tree built: %d roots, %d paths not reached", len(roots), len(remaining)
            )
            return roots
