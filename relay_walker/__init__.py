"""
relay_walker - walk a Relay GraphQL API node by node.

Build one generic query that selects the IDs of everything reachable from a
node, then walk the graph breadth-first by running it for every newly
discovered ID.

Examples:
    ```python
    import asyncio

    from relay_walker import GraphQLSchema, build_query, walk

    schema = GraphQLSchema.from_sdl(sdl)
    query, text = build_query(schema)

    asyncio.run(walk("UGVyc29uOjE=", query, execute, visit=print))
    ```
"""

from .builder import QueryBuilder, build_query
from .client import GraphQLClient
from .config import ConfigLoader, LoggingConfig, WalkerSettings, load_settings
from .exceptions import (
    ConfigurationError,
    GraphQLError,
    GraphQLExecutionError,
    GraphQLNetworkError,
    RelayWalkerError,
    SchemaIntrospectionError,
)
from .frame import Frame
from .language import Document, print_ast
from .logging import cleanup_logging, setup_logging
from .models import (
    GraphQLConfig,
    GraphQLResult,
    QueryBuilderOptions,
    WalkerOptions,
)
from .queue import TraversalQueue
from .schema import GraphQLSchema
from .walker import Walker, walk

__version__ = "0.1.0"

__all__ = [
    # Query synthesis
    "QueryBuilder",
    "QueryBuilderOptions",
    "build_query",
    "Document",
    "print_ast",
    "GraphQLSchema",
    # Traversal
    "Frame",
    "TraversalQueue",
    "Walker",
    "WalkerOptions",
    "walk",
    # Client
    "GraphQLClient",
    "GraphQLConfig",
    "GraphQLResult",
    # Configuration and logging
    "WalkerSettings",
    "ConfigLoader",
    "load_settings",
    "LoggingConfig",
    "setup_logging",
    "cleanup_logging",
    # Exceptions
    "RelayWalkerError",
    "SchemaIntrospectionError",
    "ConfigurationError",
    "GraphQLError",
    "GraphQLNetworkError",
    "GraphQLExecutionError",
]
