# sql_data_api/core/connections.py
"""
Named SQL Data API connections loaded from YAML.

Expected YAML::

    connections:
      warehouse:
        connection: "Warehouse"             # server-side name, defaults to key
        base_url: "${SQL_DATA_API_URL:-http://localhost:5000}"
        bearer_token: "${WAREHOUSE_TOKEN:-}"
        timeout: 60

String fields may reference environment variables as ``${VAR}`` or
``${VAR:-default}``. Later files override earlier ones per connection.
Values left empty fall back to the process-wide ``settings``.
"""
from __future__ import annotations

import logging
import os
import re
from glob import glob
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

import yaml

from sql_data_api.core.client import SqlDataApi
from sql_data_api.core.config import ConnectionConfig, Settings

logger = logging.getLogger(__name__)

CONNECTION_KEYS = frozenset(
    {"connection", "base_url", "bearer_token", "user_access_token", "timeout"}
)

_ENV_REF = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}")


def expand_env(text: str, *, connection: str, field: str) -> str:
    """
    Replace ``${VAR}``/``${VAR:-default}`` references in one connection field.

    Raises:
        ValueError: If a variable without default is not set
    """

    def lookup(match: re.Match) -> str:
        name, default = match["name"], match["default"]
        if name in os.environ:
            return os.environ[name]
        if default is not None:
            return default
        raise ValueError(
            f"Connection '{connection}' field '{field}': "
            f"environment variable '{name}' is not set"
        )

    return _ENV_REF.sub(lookup, text)


def _read_connection_sections(patterns: Iterable[str]) -> dict[str, Any]:
    patterns = list(patterns)
    paths = sorted({Path(m).resolve() for p in patterns for m in glob(p)})
    if not paths:
        logger.warning("No connection files match %s", patterns)
        return {}

    merged: dict[str, Any] = {}
    for path in paths:
        document = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        section = document.get("connections") if isinstance(document, dict) else None
        if section is None:
            logger.debug("No connections section in %s", path)
            continue
        if not isinstance(section, dict):
            raise ValueError(f"{path}: 'connections' must be a mapping")
        merged.update(section)
    return merged


def _parse_connection(
    name: str, raw: Any, defaults: Settings | None
) -> ConnectionConfig:
    if not isinstance(raw, Mapping):
        raise ValueError(f"Connection '{name}' must be a mapping")

    unknown = set(raw) - CONNECTION_KEYS
    if unknown:
        raise ValueError(f"Connection '{name}' has unknown keys: {sorted(unknown)}")

    values = {
        key: expand_env(value, connection=name, field=key) if isinstance(value, str) else value
        for key, value in raw.items()
    }

    timeout = values.get("timeout")
    if timeout in ("", None):
        timeout = None
    else:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            raise ValueError(
                f"Connection '{name}' timeout must be a number, got {timeout!r}"
            ) from None

    return ConnectionConfig.from_settings(
        values.get("connection") or name,
        base_url=values.get("base_url") or None,
        bearer_token=values.get("bearer_token") or None,
        user_access_token=values.get("user_access_token") or None,
        timeout=timeout,
        defaults=defaults,
    )


def load_connections_config(
    patterns: Iterable[str], *, defaults: Settings | None = None
) -> dict[str, ConnectionConfig]:
    """
    Raises:
        ValueError: On an unknown key, a bad timeout or an unset env var
    """
    configs = {
        name: _parse_connection(name, raw, defaults)
        for name, raw in _read_connection_sections(patterns).items()
    }
    logger.info("Loaded %d connection(s): %s", len(configs), list(configs))
    return configs


class ConnectionsRegistry:
    """Named registry of ``SqlDataApi`` clients."""

    def __init__(self) -> None:
        self._clients: dict[str, SqlDataApi] = {}

    def register(self, name: str, client: SqlDataApi) -> None:
        if name in self._clients:
            raise ValueError(f"Connection '{name}' already registered")
        self._clients[name] = client
        logger.info("Registered connection: %s (%s)", name, client.config.connection_name)

    def get(self, name: str) -> SqlDataApi:
        try:
            return self._clients[name]
        except KeyError:
            raise KeyError(
                f"Connection '{name}' not found. Available: {list(self._clients)}"
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._clients

    def __len__(self) -> int:
        return len(self._clients)

    def __iter__(self) -> Iterator[str]:
        return iter(self._clients)


def load_and_register_connections(
    *,
    patterns: Iterable[str],
    registry: ConnectionsRegistry,
    defaults: Settings | None = None,
) -> None:
    for name, config in load_connections_config(patterns, defaults=defaults).items():
        registry.register(name, SqlDataApi(config))
