"""
Traversal frontier.

The TraversalQueue holds the frames waiting to be visited and the set of every
GID it has ever accepted. The seen-set only grows, which is what keeps a walk
over a cyclic graph finite.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Iterator, List, Optional, Set

from .frame import Frame


class TraversalQueue:
    """Frontier with deduplication and an optional size bound."""

    def __init__(
        self,
        max_size: Optional[int] = None,
        random_insertion: bool = False,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a traversal queue.

        Args:
            max_size: Maximum frontier length (None = unlimited). Bounding the
                frontier forces a large walk to go deeper instead of wider.
            random_insertion: Insert frames at random positions instead of the
                tail, so high fan-out nodes don't monopolize the frontier.
            rng: Randomness source for random insertion
        """
        self.max_size = max_size
        self.random_insertion = random_insertion
        self._rng = rng or random.Random()
        self._frames: Deque[Frame] = deque()
        self._seen: Set[str] = set()

    def __len__(self) -> int:
        return len(self._frames)

    def is_empty(self) -> bool:
        """Check if the frontier is empty."""
        return not self._frames

    def full(self) -> bool:
        """Check if the frontier has reached its maximum size."""
        return self.max_size is not None and len(self._frames) >= self.max_size

    def seen(self, gid: str) -> bool:
        """Check if a GID was ever accepted."""
        return gid in self._seen

    @property
    def seen_count(self) -> int:
        return len(self._seen)

    @property
    def frames(self) -> List[Frame]:
        """Snapshot of the pending frames, head first."""
        return list(self._frames)

    def peek(self) -> Optional[Frame]:
        """
        Peek at the next frame without removing it.

        Returns:
            Next frame or None if the frontier is empty
        """
        return self._frames[0] if self._frames else None

    def offer(self, frame: Frame) -> bool:
        """
        Add a frame unless the queue is full or its GID was already seen.

        Args:
            frame: Frame to add

        Returns:
            True if the frame was added, False otherwise
        """
        if self.full():
            return False
        if frame.gid in self._seen:
            return False

        self._seen.add(frame.gid)
        if self.random_insertion:
            idx = self._rng.randint(0, len(self._frames))
        else:
            idx = len(self._frames)
        self._frames.insert(idx, frame)
        return True

    def offer_gid(self, gid: str, parent: Optional[Frame] = None) -> bool:
        """
        Add a frame for a GID.

        Args:
            gid: GID to add
            parent: Frame where the GID was discovered (optional)

        Returns:
            True if a frame was added, False otherwise
        """
        return self.offer(Frame(self, gid, parent))

    def drain(self) -> Iterator[Frame]:
        """
        Pop and yield frames until the frontier is empty.

        Frames offered between yields are picked up by the same iteration.
        """
        while self._frames:
            yield self._frames.popleft()
