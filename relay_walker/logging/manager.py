"""
Logging manager for relay_walker.

This module provides centralized logging configuration and management.
"""

import logging
import sys
from typing import Dict, Optional

from ..config.models import LoggingConfig, LogLevel
from .filters import SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter


class LoggingManager:
    """Centralized logging manager."""

    def __init__(self) -> None:
        """Initialize logging manager."""
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}

    def setup_logging(self, config: LoggingConfig, stream=None) -> None:
        """
        Setup logging based on configuration.

        Args:
            config: Logging configuration
            stream: Console stream (defaults to stdout)
        """
        if self._configured:
            self.cleanup()

        root_logger = logging.getLogger()
        root_logger.setLevel(_level(config.level))

        handler = logging.StreamHandler(stream or sys.stdout)
        formatter: logging.Formatter
        if config.enable_structured:
            formatter = StructuredFormatter()
        else:
            formatter = ColoredFormatter(config.format, use_colors=config.use_colors)
        handler.setFormatter(formatter)
        handler.setLevel(_level(config.level))
        handler.addFilter(SensitiveDataFilter())
        self.add_handler("console", handler)

        for component, level in config.component_levels.items():
            logging.getLogger(component).setLevel(_level(level))

        self._configured = True
        logging.getLogger(__name__).debug("Logging system configured")

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Specific component (None for root logger)
        """
        log_level = _level(level)

        if component:
            logging.getLogger(component).setLevel(log_level)
        else:
            logging.getLogger().setLevel(log_level)
            for handler in self._handlers.values():
                handler.setLevel(log_level)

    def add_handler(self, name: str, handler: logging.Handler) -> None:
        """
        Add a named handler to the root logger.

        Args:
            name: Handler name
            handler: Logging handler
        """
        self.remove_handler(name)
        logging.getLogger().addHandler(handler)
        self._handlers[name] = handler

    def remove_handler(self, name: str) -> None:
        """
        Remove logging handler.

        Args:
            name: Handler name
        """
        handler = self._handlers.pop(name, None)
        if handler is not None:
            logging.getLogger().removeHandler(handler)
            handler.close()

    def cleanup(self) -> None:
        """Remove every handler this manager installed."""
        for name in list(self._handlers):
            self.remove_handler(name)
        self._configured = False

    def is_configured(self) -> bool:
        """Check if logging is configured."""
        return self._configured


def _level(level) -> int:
    if not isinstance(level, LogLevel):
        level = LogLevel(str(level).upper())
    return getattr(logging, level.value)


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config: Optional[LoggingConfig] = None, stream=None) -> None:
    """
    Setup logging with configuration.

    Args:
        config: Logging configuration (defaults apply when omitted)
        stream: Console stream (defaults to stdout)
    """
    _logging_manager.setup_logging(config or LoggingConfig(), stream)


def cleanup_logging() -> None:
    """Cleanup logging system."""
    _logging_manager.cleanup()
