"""
Models and option containers for relay_walker.

This module defines the options accepted by the query builder and the walker,
the GraphQL client configuration, and the result type returned by the client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

TypePredicate = Callable[[Any], bool]

DEFAULT_CONNECTION_ARGUMENTS: Dict[str, Any] = {"first": 5}


@dataclass
class GraphQLResult:
    """Result of a GraphQL operation."""

    success: bool
    data: Optional[Dict[str, Any]] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)
    extensions: Optional[Dict[str, Any]] = None
    response_time: Optional[float] = None
    status_code: int = 200

    @property
    def has_data(self) -> bool:
        """Check if result carries a data payload."""
        return self.data is not None

    @property
    def has_errors(self) -> bool:
        """Check if result has errors."""
        return len(self.errors) > 0

    @property
    def error_messages(self) -> List[str]:
        """Get list of error messages."""
        return [error.get("message", "Unknown error") for error in self.errors]

    def get_data(self, path: Optional[str] = None) -> Any:
        """
        Get data from result with optional path.

        Args:
            path: Dot-separated path to data (e.g., "node.owner.id")

        Returns:
            Data at the specified path or full data if no path
        """
        if not self.data:
            return None

        if not path:
            return self.data

        current: Any = self.data
        for key in path.split("."):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return None

        return current


class QueryBuilderOptions(BaseModel):
    """Options controlling which selections the walker query contains."""

    connection_arguments: Dict[str, Any] = Field(
        default_factory=lambda: dict(DEFAULT_CONNECTION_ARGUMENTS),
        description="Arguments passed to every connection field",
    )
    type_filter: Optional[TypePredicate] = Field(
        default=None, description="Keep a type only when this returns True"
    )
    exclude: Optional[TypePredicate] = Field(
        default=None, description="Drop a type when this returns True"
    )
    only: Optional[TypePredicate] = Field(
        default=None, description="Keep a type only when this returns True"
    )
    node_interface: str = Field(default="Node", description="Identity interface name")
    alias_length: int = Field(default=12, ge=4, le=64, description="Generated alias length")
    seed: Optional[int] = Field(default=None, description="Seed for alias generation")

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")


class WalkerOptions(BaseModel):
    """Options controlling a single traversal."""

    max_queue_size: Optional[int] = Field(
        default=None, ge=0, description="Maximum frontier length (None = unbounded)"
    )
    random_insertion: bool = Field(
        default=False, description="Insert discovered frames at random positions"
    )
    extra_variables: Dict[str, Any] = Field(
        default_factory=dict, description="Variables merged into every execute call"
    )
    extra_context: Any = Field(
        default_factory=dict, description="Context passed unchanged to every execute call"
    )
    seed: Optional[int] = Field(default=None, description="Seed for random insertion")

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")


class GraphQLConfig(BaseModel):
    """Configuration for the GraphQL client."""

    endpoint: HttpUrl = Field(description="GraphQL endpoint URL")
    timeout: float = Field(default=30.0, ge=1.0, description="Request timeout in seconds")
    headers: Dict[str, str] = Field(default_factory=dict, description="Default headers for requests")
    raise_on_errors: bool = Field(default=False, description="Raise exception on GraphQL errors")

    model_config = ConfigDict(extra="forbid")
