"""
Graph walker.

The Walker drives a breadth-first traversal: it pops a frame, executes the
walker query for the frame's GID, stores the result, offers every GID found in
it, and hands the frame to the caller. A failing node query never stops the
walk; the frame just ends up with an empty result.
"""

from __future__ import annotations

import inspect
import logging
import random
import time
from collections.abc import Mapping
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional, Union

from pydantic import BaseModel

from .frame import Frame
from .language import Document
from .models import WalkerOptions
from .queue import TraversalQueue

logger = logging.getLogger(__name__)

ExecuteCallable = Callable[[Any, Dict[str, Any], Any], Union[Any, Awaitable[Any]]]
VisitCallable = Callable[[Frame], Union[None, Awaitable[None]]]


class Walker:
    """
    Walk a Relay graph from a starting node.

    Examples:
        ```python
        ast, _ = build_query(schema)
        walker = Walker(ast, client.execute, WalkerOptions(max_queue_size=1000))

        async for frame in walker.frames("MDQ6VXNlcjE="):
            print(frame.depth, frame.gid)
        ```
    """

    def __init__(
        self,
        query: Union[Document, str],
        execute: ExecuteCallable,
        options: Optional[WalkerOptions] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize walker.

        Args:
            query: Walker query, passed to ``execute`` unchanged
            execute: Callable ``(query, variables, context)`` returning a
                response, or an awaitable of one
            options: Traversal options
            rng: Randomness source for random insertion
        """
        self.query = query
        self.execute = execute
        self.options = options or WalkerOptions()
        self._rng = rng or random.Random(self.options.seed)

    def _new_queue(self) -> TraversalQueue:
        return TraversalQueue(
            max_size=self.options.max_queue_size,
            random_insertion=self.options.random_insertion,
            rng=self._rng,
        )

    async def frames(self, start_gid: str) -> AsyncIterator[Frame]:
        """
        Visit every node reachable from ``start_gid``.

        Each yielded frame has its result set and its children already
        offered to the queue. Stop iterating to stop the walk.

        Args:
            start_gid: GID to start walking from

        Yields:
            Visited frames, in frontier order
        """
        queue = self._new_queue()
        queue.offer_gid(start_gid)

        for frame in queue.drain():
            await self._process(frame)
            yield frame

    async def walk(self, start_gid: str, visit: Optional[VisitCallable] = None) -> int:
        """
        Walk the graph, calling ``visit`` with each frame.

        Args:
            start_gid: GID to start walking from
            visit: Callable (or coroutine function) called with each frame

        Returns:
            Number of frames visited
        """
        logger.info("Starting walk from %s", start_gid)
        started = time.time()
        visited = 0

        async for frame in self.frames(start_gid):
            visited += 1
            if visit is not None:
                outcome = visit(frame)
                if inspect.isawaitable(outcome):
                    await outcome

        logger.info(
            "Walk from %s finished: %d frames in %.2fs",
            start_gid,
            visited,
            time.time() - started,
        )
        return visited

    async def _process(self, frame: Frame) -> None:
        """Execute the query for a frame and enqueue what it finds."""
        variables = {**self.options.extra_variables, "id": frame.gid}

        try:
            response = self.execute(self.query, variables, self.options.extra_context)
            if inspect.isawaitable(response):
                response = await response
        except Exception as e:
            logger.warning("Query for %s failed: %s", frame.gid, e)
            frame.context["error"] = e
            frame.context["response"] = None
            frame.result = {}
            return

        frame.context["response"] = response
        data, errors = response_payload(response)
        if errors:
            logger.warning("Query for %s returned %d error(s)", frame.gid, len(errors))

        frame.result = to_plain(data) if data is not None else {}
        accepted = frame.enqueue_discovered()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Visited %s at depth %d, queued %d new frame(s)", frame.gid, frame.depth, accepted
            )


def response_payload(response: Any) -> tuple:
    """
    Split a response into its data payload and error list.

    Accepts objects with ``data``/``errors`` attributes (such as
    ``GraphQLResult``) and GraphQL response envelopes as mappings.
    """
    if response is None:
        return None, []
    if isinstance(response, Mapping):
        return response.get("data"), list(response.get("errors") or [])
    return getattr(response, "data", None), list(getattr(response, "errors", None) or [])


def to_plain(value: Any) -> Any:
    """Reduce a nested value to plain dicts, lists and scalars."""
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


async def walk(
    start_gid: str,
    query: Union[Document, str],
    execute: ExecuteCallable,
    options: Optional[WalkerOptions] = None,
    visit: Optional[VisitCallable] = None,
) -> int:
    """
    Walk a graph from ``start_gid``.

    Args:
        start_gid: GID to start walking from
        query: Walker query, as built by ``build_query``
        execute: Callable ``(query, variables, context)`` returning a response
        options: Traversal options
        visit: Callable (or coroutine function) called with each frame

    Returns:
        Number of frames visited
    """
    return await Walker(query, execute, options).walk(start_gid, visit)
