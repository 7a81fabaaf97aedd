"""
Tests for settings models and the configuration loader.
"""

import json

import pytest
import yaml

from relay_walker import ConfigurationError
from relay_walker.config import ConfigLoader, LoggingConfig, WalkerSettings
from relay_walker.config.models import LogLevel

ENV_VARS = [
    "RELAY_WALKER_LOG_LEVEL",
    "RELAY_WALKER_LOG_STRUCTURED",
    "RELAY_WALKER_PAGE_SIZE",
    "RELAY_WALKER_NODE_INTERFACE",
    "RELAY_WALKER_MAX_QUEUE_SIZE",
    "RELAY_WALKER_RANDOM_INSERTION",
    "RELAY_WALKER_ENDPOINT",
    "RELAY_WALKER_TIMEOUT",
    "RELAY_WALKER_SEED",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's environment out of these tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestWalkerSettings:
    """Test settings models."""

    def test_defaults(self):
        """Test default settings."""
        settings = WalkerSettings()

        assert settings.logging.level == LogLevel.INFO
        assert settings.query.connection_arguments == {"first": 5}
        assert settings.walk.max_queue_size is None
        assert settings.endpoint is None

    def test_query_options(self):
        """Test page_size overrides the first argument."""
        settings = WalkerSettings(
            query={"connection_arguments": {"first": 5, "after": None}, "page_size": 50},
            seed=9,
        )
        options = settings.query_options()

        assert options.connection_arguments == {"first": 50, "after": None}
        assert options.seed == 9
        assert options.node_interface == "Node"

    def test_walker_options(self):
        """Test traversal settings carry over."""
        settings = WalkerSettings(
            walk={"max_queue_size": 100, "random_insertion": True, "extra_variables": {"x": 1}}
        )
        options = settings.walker_options()

        assert options.max_queue_size == 100
        assert options.random_insertion is True
        assert options.extra_variables == {"x": 1}

    def test_graphql_config(self):
        """Test client configuration."""
        settings = WalkerSettings(
            endpoint="https://api.example.com/graphql",
            timeout=5,
            headers={"Authorization": "Bearer abc"},
        )
        config = settings.graphql_config()

        assert str(config.endpoint) == "https://api.example.com/graphql"
        assert config.timeout == 5
        assert config.headers == {"Authorization": "Bearer abc"}

    def test_graphql_config_without_endpoint(self):
        """Test a missing endpoint."""
        with pytest.raises(ValueError):
            WalkerSettings().graphql_config()

    def test_unknown_keys_are_rejected(self):
        """Test typos in top-level settings fail validation."""
        with pytest.raises(ValueError):
            WalkerSettings(endpont="https://api.example.com/graphql")


class TestConfigLoader:
    """Test loading settings from files and the environment."""

    def test_load_without_sources(self):
        """Test defaults when nothing is configured."""
        settings = ConfigLoader(config_paths=[]).load()
        assert settings == WalkerSettings()

    def test_load_yaml(self, tmp_path):
        """Test a YAML file."""
        path = tmp_path / "relay_walker.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "endpoint": "https://api.example.com/graphql",
                    "query": {"page_size": 10},
                    "walk": {"max_queue_size": 500},
                    "logging": {"level": "DEBUG"},
                }
            )
        )

        settings = ConfigLoader(config_paths=[]).load(path)

        assert settings.query.page_size == 10
        assert settings.walk.max_queue_size == 500
        assert settings.logging.level == LogLevel.DEBUG

    def test_load_json_from_search_path(self, tmp_path):
        """Test the first existing search path is used."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"walk": {"random_insertion": True}}))

        settings = ConfigLoader(config_paths=[tmp_path / "missing.yaml", path]).load()

        assert settings.walk.random_insertion is True

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables take precedence."""
        path = tmp_path / "relay_walker.yaml"
        path.write_text("query:\n  page_size: 10\n  node_interface: Entity\n")
        monkeypatch.setenv("RELAY_WALKER_PAGE_SIZE", "25")
        monkeypatch.setenv("RELAY_WALKER_RANDOM_INSERTION", "yes")
        monkeypatch.setenv("RELAY_WALKER_ENDPOINT", "https://env.example.com/graphql")
        monkeypatch.setenv("RELAY_WALKER_TIMEOUT", "12.5")

        settings = ConfigLoader(config_paths=[]).load(path)

        assert settings.query.page_size == 25
        assert settings.query.node_interface == "Entity"
        assert settings.walk.random_insertion is True
        assert str(settings.endpoint) == "https://env.example.com/graphql"
        assert settings.timeout == 12.5

    def test_missing_explicit_file(self, tmp_path):
        """Test an explicit path that does not exist."""
        with pytest.raises(ConfigurationError):
            ConfigLoader(config_paths=[]).load(tmp_path / "nope.yaml")

    def test_unsupported_format(self, tmp_path):
        """Test unknown file extensions."""
        path = tmp_path / "settings.toml"
        path.write_text("x = 1")
        with pytest.raises(ConfigurationError):
            ConfigLoader(config_paths=[]).load(path)

    def test_malformed_file(self, tmp_path):
        """Test unparseable content."""
        path = tmp_path / "relay_walker.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            ConfigLoader(config_paths=[]).load(path)

    def test_non_mapping_file(self, tmp_path):
        """Test a YAML list at the top level."""
        path = tmp_path / "relay_walker.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader(config_paths=[]).load(path)

    def test_invalid_values(self, monkeypatch):
        """Test validation failures become ConfigurationError."""
        monkeypatch.setenv("RELAY_WALKER_MAX_QUEUE_SIZE", "-1")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(config_paths=[]).load()
        assert "max_queue_size" in str(exc_info.value)

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("OFF", False), ("42", 42), ("0.5", 0.5), ("Node", "Node")],
    )
    def test_convert_env_value(self, raw, expected):
        """Test environment value conversion."""
        assert ConfigLoader(config_paths=[])._convert_env_value(raw) == expected


class TestLoggingConfig:
    """Test logging settings."""

    def test_component_levels(self):
        """Test per-component levels are parsed as LogLevel."""
        config = LoggingConfig(component_levels={"relay_walker.walker": "DEBUG"})
        assert config.component_levels["relay_walker.walker"] == LogLevel.DEBUG

    def test_lowercase_levels(self):
        """Test level names are case insensitive."""
        config = LoggingConfig(level="debug", component_levels={"relay_walker.client": "error"})

        assert config.level == LogLevel.DEBUG
        assert config.component_levels["relay_walker.client"] == LogLevel.ERROR

    def test_lowercase_level_from_environment(self, monkeypatch):
        """Test RELAY_WALKER_LOG_LEVEL accepts lowercase names."""
        monkeypatch.setenv("RELAY_WALKER_LOG_LEVEL", "debug")
        settings = ConfigLoader(config_paths=[]).load()
        assert settings.logging.level == LogLevel.DEBUG


class TestPackageExports:
    """Test settings are reachable from the package root."""

    def test_load_settings_from_package_root(self, tmp_path, monkeypatch):
        """Test load_settings and the settings models re-exported by relay_walker."""
        import relay_walker

        path = tmp_path / "relay_walker.yaml"
        path.write_text("walk:\n  max_queue_size: 7\n")
        monkeypatch.chdir(tmp_path)

        settings = relay_walker.load_settings()

        assert isinstance(settings, relay_walker.WalkerSettings)
        assert settings.walker_options().max_queue_size == 7
        assert relay_walker.ConfigLoader is ConfigLoader
        assert relay_walker.LoggingConfig is LoggingConfig
