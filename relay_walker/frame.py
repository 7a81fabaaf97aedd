"""
Traversal frames.

A Frame records one step of a walk: the GID being visited, the frame it was
discovered from, and the result of querying it. ``parent`` is discovery
provenance only; a node reachable along several paths keeps the first one.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .queue import TraversalQueue


class Frame:
    """One visited node of a walk."""

    def __init__(
        self,
        queue: Optional["TraversalQueue"],
        gid: str,
        parent: Optional[Frame] = None,
    ):
        """
        Initialize a new Frame.

        Args:
            queue: The queue this frame belongs to
            gid: The node's global ID
            parent: The frame where this GID was discovered
        """
        self.queue = queue
        self.gid = gid
        self.parent = parent
        self.result: Any = None
        self.context: Dict[str, Any] = {}

    def __repr__(self) -> str:
        parent_gid = self.parent.gid if self.parent else None
        return f"Frame(gid={self.gid!r}, parent={parent_gid!r})"

    @property
    def depth(self) -> int:
        """Number of hops from the root frame."""
        depth = 0
        frame = self.parent
        while frame is not None:
            depth += 1
            frame = frame.parent
        return depth

    def path(self) -> List[str]:
        """GIDs from the root frame down to this one."""
        gids = []
        frame: Optional[Frame] = self
        while frame is not None:
            gids.append(frame.gid)
            frame = frame.parent
        gids.reverse()
        return gids

    def child(self, gid: str) -> Frame:
        """
        Make a new frame with the given GID and this frame as its parent.

        Args:
            gid: The GID to create the frame with

        Returns:
            Frame instance
        """
        return Frame(self.queue, gid, self)

    def enqueue_discovered(self) -> int:
        """
        Offer a child frame for each GID found in this frame's result.

        Returns:
            Number of frames the queue accepted
        """
        if self.queue is None:
            return 0
        return sum(1 for gid in self.discovered_gids() if self.queue.offer(self.child(gid)))

    def discovered_gids(self, result: Any = None) -> List[str]:
        """
        The GIDs in a result, in depth-first encounter order.

        Args:
            result: Nested value to scan (defaults to this frame's result)

        Returns:
            List of GID strings, duplicates included
        """
        if result is None:
            result = self.result

        gids: List[str] = []
        _collect_gids(result, gids)
        return gids


def _collect_gids(data: Any, gids: List[str]) -> None:
    if isinstance(data, Mapping):
        _collect_identifiers(data.get("id"), gids)
        for value in data.values():
            _collect_gids(value, gids)
    elif isinstance(data, (list, tuple)):
        for item in data:
            _collect_gids(item, gids)


def _collect_identifiers(value: Any, gids: List[str]) -> None:
    if value is None or isinstance(value, Mapping):
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _collect_identifiers(item, gids)
    else:
        gids.append(value if isinstance(value, str) else str(value))
