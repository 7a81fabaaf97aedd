"""
Configuration management for relay_walker.

This module provides settings models and loading from configuration files
and environment variables.
"""

from .loader import ConfigLoader, load_settings
from .models import (
    LoggingConfig,
    LogLevel,
    QuerySettings,
    WalkerSettings,
    WalkSettings,
)

__all__ = [
    "ConfigLoader",
    "load_settings",
    "WalkerSettings",
    "LoggingConfig",
    "LogLevel",
    "QuerySettings",
    "WalkSettings",
]
