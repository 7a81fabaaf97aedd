"""
Configuration models for relay_walker.

This module defines the settings models with validation and defaults, and
converts them into the option objects used by the builder, walker and client.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from ..models import (
    DEFAULT_CONNECTION_ARGUMENTS,
    GraphQLConfig,
    QueryBuilderOptions,
    WalkerOptions,
)


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )
    use_colors: Optional[bool] = Field(
        default=None, description="Colorize console output (auto-detect if None)"
    )

    # Component-specific log levels
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("component_levels", mode="before")
    @classmethod
    def normalize_component_levels(cls, v: Any) -> Any:
        """Accept per-component level names in any case."""
        if isinstance(v, dict):
            return {k: lvl.upper() if isinstance(lvl, str) else lvl for k, lvl in v.items()}
        return v


class QuerySettings(BaseModel):
    """Walker query settings."""

    connection_arguments: Dict[str, Any] = Field(
        default_factory=lambda: dict(DEFAULT_CONNECTION_ARGUMENTS),
        description="Arguments passed to every connection field",
    )
    page_size: Optional[int] = Field(
        default=None, ge=1, description="Shortcut for connection_arguments['first']"
    )
    node_interface: str = Field(default="Node", description="Identity interface name")
    alias_length: int = Field(default=12, ge=4, le=64, description="Generated alias length")


class WalkSettings(BaseModel):
    """Traversal settings."""

    max_queue_size: Optional[int] = Field(default=None, ge=0, description="Maximum frontier length")
    random_insertion: bool = Field(default=False, description="Insert frames at random positions")
    extra_variables: Dict[str, Any] = Field(
        default_factory=dict, description="Variables merged into every node query"
    )


class WalkerSettings(BaseModel):
    """Top-level settings container."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    query: QuerySettings = Field(default_factory=QuerySettings)
    walk: WalkSettings = Field(default_factory=WalkSettings)

    # Client settings
    endpoint: Optional[HttpUrl] = Field(default=None, description="GraphQL endpoint URL")
    timeout: float = Field(default=30.0, ge=1.0, description="Request timeout in seconds")
    headers: Dict[str, str] = Field(default_factory=dict, description="Default request headers")

    seed: Optional[int] = Field(default=None, description="Seed for all randomness")

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    def query_options(self) -> QueryBuilderOptions:
        """Build QueryBuilderOptions from these settings."""
        connection_arguments = dict(self.query.connection_arguments)
        if self.query.page_size is not None:
            connection_arguments["first"] = self.query.page_size
        return QueryBuilderOptions(
            connection_arguments=connection_arguments,
            node_interface=self.query.node_interface,
            alias_length=self.query.alias_length,
            seed=self.seed,
        )

    def walker_options(self) -> WalkerOptions:
        """Build WalkerOptions from these settings."""
        return WalkerOptions(
            max_queue_size=self.walk.max_queue_size,
            random_insertion=self.walk.random_insertion,
            extra_variables=dict(self.walk.extra_variables),
            seed=self.seed,
        )

    def graphql_config(self) -> GraphQLConfig:
        """
        Build GraphQLConfig from these settings.

        Raises:
            ValueError: If no endpoint is configured
        """
        if self.endpoint is None:
            raise ValueError("No GraphQL endpoint configured")
        return GraphQLConfig(
            endpoint=self.endpoint, timeout=self.timeout, headers=dict(self.headers)
        )
