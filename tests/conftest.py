# tests/conftest.py
from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from sql_data_api.core.config import ConnectionConfig


class RecordedRequests(list):
    """Requests seen by the mock transport, with their decoded JSON bodies."""

    def bodies(self) -> list[Any]:
        return [json.loads(r.content) if r.content else None for r in self]


@pytest.fixture
def mock_http(monkeypatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordedRequests]:
    """Route every ``httpx.AsyncClient`` through ``handler``."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> RecordedRequests:
        seen = RecordedRequests()

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording)
        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            httpx,
            "AsyncClient",
            lambda **kw: real_client(transport=transport, **kw),
        )
        return seen

    return install


@pytest.fixture
def config() -> ConnectionConfig:
    return ConnectionConfig(
        base_url="http://sql-api",
        connection_name="Warehouse",
        bearer_token="abc123",
    )
