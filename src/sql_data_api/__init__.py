"""
Async client for the SQL Data API service.

    from sql_data_api import set_base_url, sql_data_api

    set_base_url("https://api.example.com")
    api = sql_data_api("Warehouse", bearer_token="...")
    rows = await api.table("Customers c").select("c.Id, c.Name").top(10).run_query()
"""
from sql_data_api.contracts import (
    JoinType,
    QuerySpec,
    ResponseEnvelope,
    SaveMethod,
    SaveOptions,
    SaveStatus,
    TableData,
)
from sql_data_api.core.auth import authenticate
from sql_data_api.core.cancellation import CancellationToken
from sql_data_api.core.client import SqlDataApi, sql_data_api
from sql_data_api.core.config import (
    ConnectionConfig,
    Settings,
    set_base_url,
    set_bearer_token,
    set_user_access_token,
    settings,
)
from sql_data_api.core.errors import (
    InvalidArgument,
    MissingConfiguration,
    OperationCancelled,
    RemoteError,
    SqlDataApiError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "JoinType", "QuerySpec", "ResponseEnvelope", "SaveMethod", "SaveOptions",
    "SaveStatus", "TableData",
    "authenticate",
    "CancellationToken",
    "SqlDataApi", "sql_data_api",
    "ConnectionConfig", "Settings", "set_base_url", "set_bearer_token",
    "set_user_access_token", "settings",
    "InvalidArgument", "MissingConfiguration", "OperationCancelled", "RemoteError",
    "SqlDataApiError", "TransportError",
]
