"""
GraphQL client implementation.

This module provides an aiohttp-based GraphQL client whose ``execute`` method
matches the walker's execute contract, plus a ``walk`` shortcut that builds
the walker query for the client's schema and walks from a GID.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Dict, Optional, Union

import aiohttp
import graphql

from .builder import QueryBuilder
from .exceptions import GraphQLError, GraphQLExecutionError, GraphQLNetworkError
from .language import Document
from .models import GraphQLConfig, GraphQLResult, QueryBuilderOptions, WalkerOptions
from .schema import GraphQLSchema
from .walker import VisitCallable, Walker

logger = logging.getLogger(__name__)


class GraphQLClient:
    """
    GraphQL client used to execute walker queries.

    Examples:
        Walking from the viewer:
        ```python
        config = GraphQLConfig(
            endpoint="https://api.github.com/graphql",
            headers={"Authorization": f"Bearer {token}"},
        )

        async with GraphQLClient(config) as client:
            result = await client.execute("query { viewer { id } }")
            viewer_id = result.get_data("viewer.id")

            await client.walk(viewer_id, visit=lambda frame: print(frame.gid))
        ```
    """

    def __init__(
        self,
        config: GraphQLConfig,
        schema: Optional[GraphQLSchema] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize GraphQL client.

        Args:
            config: GraphQL configuration
            schema: Schema to build walker queries for (introspected when omitted)
            session: Existing aiohttp session (not closed by the client)
        """
        self.config = config
        self.schema = schema
        self._session = session
        self._owns_session = session is None
        self._walker_query: Optional[Document] = None

    async def __aenter__(self) -> GraphQLClient:
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": "relay-walker/1.0"},
                raise_for_status=False,
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def execute(
        self,
        query: Union[Document, str],
        variables: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> GraphQLResult:
        """
        Execute a GraphQL query.

        Args:
            query: Query document or text
            variables: Query variables
            context: Per-request context; a ``headers`` entry is merged into
                the request headers

        Returns:
            GraphQLResult with the response payload

        Raises:
            GraphQLNetworkError: If the request fails or the response is not JSON
            GraphQLExecutionError: If the response has errors and
                ``raise_on_errors`` is enabled
        """
        endpoint = str(self.config.endpoint)
        headers = self.config.headers.copy()
        headers["Content-Type"] = "application/json"
        if context and isinstance(context.get("headers"), dict):
            headers.update(context["headers"])

        request_data = {"query": str(query), "variables": variables or {}}
        start_time = time.time()

        try:
            session = self._get_session()
            async with session.post(endpoint, json=request_data, headers=headers) as response:
                status = response.status
                response_text = await response.text()
        except asyncio.TimeoutError as e:
            raise GraphQLNetworkError(
                f"GraphQL request timeout after {self.config.timeout}s", url=endpoint
            ) from e
        except aiohttp.ClientError as e:
            raise GraphQLNetworkError(f"GraphQL network error: {e}", url=endpoint) from e

        response_time = time.time() - start_time

        try:
            response_data = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise GraphQLNetworkError(
                f"Invalid JSON response (HTTP {status})", url=endpoint, status_code=status
            ) from e
        if not isinstance(response_data, dict):
            raise GraphQLNetworkError(
                f"Unexpected response payload (HTTP {status})", url=endpoint, status_code=status
            )

        result = GraphQLResult(
            success=200 <= status < 300 and not response_data.get("errors"),
            data=response_data.get("data"),
            errors=response_data.get("errors") or [],
            extensions=response_data.get("extensions"),
            response_time=response_time,
            status_code=status,
        )

        if result.has_errors and self.config.raise_on_errors:
            raise GraphQLExecutionError(
                f"GraphQL execution errors: {'; '.join(result.error_messages)}",
                url=endpoint,
                errors=result.errors,
            )

        return result

    async def load_schema(self, force_refresh: bool = False) -> GraphQLSchema:
        """
        Introspect the endpoint's schema.

        Args:
            force_refresh: Introspect again even if a schema is already loaded

        Returns:
            GraphQLSchema object

        Raises:
            GraphQLError: If introspection returns no data
        """
        if self.schema is not None and not force_refresh:
            return self.schema

        result = await self.execute(graphql.get_introspection_query(descriptions=False))
        if not result.has_data:
            raise GraphQLError(
                f"Schema introspection failed: {'; '.join(result.error_messages)}",
                url=str(self.config.endpoint),
            )

        self.schema = GraphQLSchema.from_introspection(result.data)
        self._walker_query = None
        logger.info("Loaded schema with %d types", len(self.schema.types))
        return self.schema

    async def walker_query(self, options: Optional[QueryBuilderOptions] = None) -> Document:
        """
        Get the walker query for this client's schema.

        The query built with default options is cached until the schema is
        reloaded.
        """
        schema = await self.load_schema()
        if options is not None:
            return QueryBuilder(schema, options).ast
        if self._walker_query is None:
            self._walker_query = QueryBuilder(schema).ast
        return self._walker_query

    async def walk(
        self,
        from_id: str,
        visit: Optional[VisitCallable] = None,
        variables: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
        options: Optional[WalkerOptions] = None,
        query_options: Optional[QueryBuilderOptions] = None,
    ) -> int:
        """
        Walk this client's graph from the given GID.

        Args:
            from_id: GID to start walking from
            visit: Callable (or coroutine function) called with each frame
            variables: Extra variables sent with every node query
            context: Extra context passed to every ``execute`` call
            options: Traversal options
            query_options: Walker query options

        Returns:
            Number of frames visited
        """
        query = await self.walker_query(query_options)

        options = options or WalkerOptions()
        overrides: Dict[str, Any] = {}
        if variables is not None:
            overrides["extra_variables"] = variables
        if context is not None:
            overrides["extra_context"] = context
        if overrides:
            options = options.model_copy(update=overrides)

        walker = Walker(query, self.execute, options)
        return await walker.walk(from_id, visit)
