"""
Configuration loader for relay_walker.

This module handles loading settings from configuration files and
environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .models import WalkerSettings


class ConfigLoader:
    """Configuration loader with support for multiple sources."""

    def __init__(self, config_paths: Optional[List[Path]] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_paths: Files searched when no file is given explicitly
        """
        if config_paths is None:
            config_paths = [
                Path("relay_walker.yaml"),
                Path("relay_walker.yml"),
                Path("relay_walker.json"),
                Path.home() / ".relay_walker" / "config.yaml",
                Path.home() / ".relay_walker" / "config.json",
            ]
        self.config_paths = config_paths

        # Environment variable prefix
        self.env_prefix = "RELAY_WALKER_"

    def load(self, config_file: Optional[Union[str, Path]] = None) -> WalkerSettings:
        """
        Load settings from all available sources.

        Environment variables override file values, which override defaults.

        Args:
            config_file: Specific config file to load

        Returns:
            WalkerSettings instance with merged configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or values are invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data.update(file_config)

        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        try:
            return WalkerSettings(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigurationError(f"Config file not found: {config_path}")
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                return self._parse_config_file(config_path)

        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigurationError(f"Unsupported config file format: {config_path.suffix}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse config file {config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        return data

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        env_mappings = {
            f"{self.env_prefix}LOG_LEVEL": ("logging", "level"),
            f"{self.env_prefix}LOG_STRUCTURED": ("logging", "enable_structured"),
            f"{self.env_prefix}PAGE_SIZE": ("query", "page_size"),
            f"{self.env_prefix}NODE_INTERFACE": ("query", "node_interface"),
            f"{self.env_prefix}MAX_QUEUE_SIZE": ("walk", "max_queue_size"),
            f"{self.env_prefix}RANDOM_INSERTION": ("walk", "random_insertion"),
            f"{self.env_prefix}ENDPOINT": ("endpoint",),
            f"{self.env_prefix}TIMEOUT": ("timeout",),
            f"{self.env_prefix}SEED": ("seed",),
        }

        for env_var, config_path in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                current = config
                for key in config_path[:-1]:
                    current = current.setdefault(key, {})
                current[config_path[-1]] = self._convert_env_value(value)

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type."""
        lower = value.lower()
        if lower in ("true", "yes", "on"):
            return True
        if lower in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_settings(config_file: Optional[Union[str, Path]] = None) -> WalkerSettings:
    """Load settings using the default search paths."""
    return ConfigLoader().load(config_file)
