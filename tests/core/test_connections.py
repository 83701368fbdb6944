# tests/core/test_connections.py
from __future__ import annotations

import pytest

from sql_data_api.core.client import SqlDataApi
from sql_data_api.core.config import ConnectionConfig, Settings
from sql_data_api.core.connections import (
    ConnectionsRegistry,
    expand_env,
    load_and_register_connections,
    load_connections_config,
)

CONFIG_YAML = """
connections:
  warehouse:
    connection: "Warehouse"
    base_url: "${TEST_SQL_API_URL:-http://localhost:5000}"
    bearer_token: "${TEST_SQL_API_TOKEN}"
    timeout: 60
  reporting:
    user_access_token: "u-tok"
"""


@pytest.fixture
def defaults():
    return Settings(base_url="http://default", bearer_token="", user_access_token="", timeout=30)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "connections.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


class TestExpandEnv:
    def test_set_and_default(self, monkeypatch):
        monkeypatch.setenv("TEST_HOST", "db1")
        monkeypatch.delenv("MISSING_VAR_X", raising=False)

        result = expand_env(
            "http://${TEST_HOST}:${MISSING_VAR_X:-5000}", connection="w", field="base_url"
        )

        assert result == "http://db1:5000"

    def test_empty_default(self, monkeypatch):
        monkeypatch.delenv("MISSING_VAR_X", raising=False)
        assert expand_env("${MISSING_VAR_X:-}", connection="w", field="bearer_token") == ""

    def test_missing_without_default_names_field(self, monkeypatch):
        monkeypatch.delenv("MISSING_VAR_X", raising=False)
        with pytest.raises(ValueError, match="Connection 'w' field 'bearer_token'.*MISSING_VAR_X"):
            expand_env("${MISSING_VAR_X}", connection="w", field="bearer_token")


class TestLoadConnectionsConfig:
    def test_load(self, monkeypatch, config_file, defaults):
        monkeypatch.delenv("TEST_SQL_API_URL", raising=False)
        monkeypatch.setenv("TEST_SQL_API_TOKEN", "tok")

        configs = load_connections_config([str(config_file)], defaults=defaults)

        assert configs["warehouse"] == ConnectionConfig(
            base_url="http://localhost:5000",
            connection_name="Warehouse",
            bearer_token="tok",
            timeout=60.0,
        )
        assert configs["reporting"] == ConnectionConfig(
            base_url="http://default",
            connection_name="reporting",
            user_access_token="u-tok",
            timeout=30.0,
        )

    def test_missing_env_var(self, monkeypatch, config_file, defaults):
        monkeypatch.delenv("TEST_SQL_API_TOKEN", raising=False)
        with pytest.raises(ValueError, match="TEST_SQL_API_TOKEN"):
            load_connections_config([str(config_file)], defaults=defaults)

    def test_no_files(self, tmp_path):
        assert load_connections_config([str(tmp_path / "nothing*.yaml")]) == {}

    def test_later_files_override(self, tmp_path, defaults):
        (tmp_path / "a.yaml").write_text("connections:\n  x:\n    connection: A\n")
        (tmp_path / "b.yaml").write_text("connections:\n  x:\n    connection: B\n")

        configs = load_connections_config([str(tmp_path / "*.yaml")], defaults=defaults)

        assert configs["x"].connection_name == "B"

    def test_unknown_key(self, tmp_path, defaults):
        (tmp_path / "c.yaml").write_text("connections:\n  x:\n    base_uri: http://typo\n")

        with pytest.raises(ValueError, match=r"unknown keys: \['base_uri'\]"):
            load_connections_config([str(tmp_path / "c.yaml")], defaults=defaults)

    def test_bad_timeout(self, tmp_path, defaults):
        (tmp_path / "c.yaml").write_text("connections:\n  x:\n    timeout: soon\n")

        with pytest.raises(ValueError, match="timeout must be a number"):
            load_connections_config([str(tmp_path / "c.yaml")], defaults=defaults)

    def test_file_without_connections_section(self, tmp_path, defaults):
        (tmp_path / "c.yaml").write_text("other: 1\n")
        assert load_connections_config([str(tmp_path / "c.yaml")], defaults=defaults) == {}


class TestConnectionsRegistry:
    def test_register_and_get(self):
        registry = ConnectionsRegistry()
        client = SqlDataApi(ConnectionConfig(base_url="http://x", connection_name="A"))

        registry.register("a", client)

        assert registry.get("a") is client
        assert "a" in registry
        assert len(registry) == 1
        assert list(registry) == ["a"]

    def test_duplicate(self):
        registry = ConnectionsRegistry()
        client = SqlDataApi(ConnectionConfig(base_url="http://x", connection_name="A"))
        registry.register("a", client)

        with pytest.raises(ValueError, match="already registered"):
            registry.register("a", client)

    def test_missing(self):
        with pytest.raises(KeyError, match="not found"):
            ConnectionsRegistry().get("nope")

    def test_load_and_register(self, monkeypatch, config_file, defaults):
        monkeypatch.setenv("TEST_SQL_API_TOKEN", "tok")
        registry = ConnectionsRegistry()

        load_and_register_connections(
            patterns=[str(config_file)], registry=registry, defaults=defaults
        )

        assert set(registry) == {"warehouse", "reporting"}
        assert registry.get("warehouse").config.connection_name == "Warehouse"
