"""
Exception hierarchy for relay_walker.

Schema problems are fatal and raised before a walk starts. Failures while
executing a node query are raised by the client but absorbed by the walker,
which records them on the frame instead of aborting the traversal.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class RelayWalkerError(Exception):
    """
    Base exception for all relay_walker errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = kwargs


class SchemaIntrospectionError(RelayWalkerError):
    """
    Raised when a schema cannot support a node walk.

    Occurs when the identity interface is missing, is not an interface,
    or one of its implementations does not expose an ``id`` field.
    """

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.type_name = type_name


class ConfigurationError(RelayWalkerError):
    """Raised when a configuration file cannot be read or parsed."""

    pass


class GraphQLError(RelayWalkerError):
    """Base exception for GraphQL client failures."""

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.url = url


class GraphQLNetworkError(GraphQLError):
    """
    Raised for transport failures.

    Covers connection errors, timeouts and non-JSON error responses.

    Attributes:
        status_code: HTTP status of the response, if one was received
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, url, **kwargs)
        self.status_code = status_code


class GraphQLExecutionError(GraphQLError):
    """Raised when a response carries GraphQL errors and raising is enabled."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, url, **kwargs)
        self.errors = errors or []
