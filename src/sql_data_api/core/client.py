# sql_data_api/core/client.py
"""
Async client for the SQL Data API.

Contract::

    POST {base_url}/sql-data-api/{connection}/{operation}[/{table}]
    body: JSON, see the individual operations

Every operation validates its arguments and configuration before sending,
goes through ``HttpTransport`` and converts a failed envelope into
``RemoteError`` via ``ensure_ok``.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import pandas as pd

from sql_data_api.contracts.query import JoinType, QuerySpec
from sql_data_api.contracts.save import SaveOptions, SaveStatus
from sql_data_api.core.cancellation import CancellationToken
from sql_data_api.core.coercion import to_primitive
from sql_data_api.core.config import ConnectionConfig
from sql_data_api.core.errors import InvalidArgument, RemoteError
from sql_data_api.core.persistence import BatchPersister, Rows
from sql_data_api.core.query.builder import QueryBuilder
from sql_data_api.core.query.translator import FieldsOrSpec, translate_query
from sql_data_api.core.table import from_table, records_to_dataframe
from sql_data_api.core.transport import HttpTransport, ensure_ok

logger = logging.getLogger(__name__)


class SqlDataApi:
    """Client bound to one connection of a SQL Data API service."""

    def __init__(
        self,
        config: ConnectionConfig,
        *,
        cancellation: CancellationToken | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        self._config = config
        self._cancellation = cancellation
        self._transport = transport or HttpTransport(timeout=config.timeout)

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    def _token(self, cancellation: CancellationToken | None) -> CancellationToken | None:
        return cancellation or self._cancellation

    async def _post(
        self,
        operation: str,
        table_name: str | None,
        body: Any,
        cancellation: CancellationToken | None = None,
    ) -> Any:
        token = self._token(cancellation)
        if token is not None:
            token.raise_if_cancelled()
        return await self._request(operation, table_name, body)

    async def _request(self, operation: str, table_name: str | None, body: Any) -> Any:
        self._config.validate()
        url, headers = self._config.auth(self._config.endpoint(operation, table_name))
        envelope = await self._transport.post(url, body, headers)
        return ensure_ok(envelope)

    # fluent query entry points

    def builder(self) -> QueryBuilder:
        return QueryBuilder(client=self)

    def table(self, name: str) -> QueryBuilder:
        return self.builder().table(name)

    def select(self, fields: str) -> QueryBuilder:
        return self.builder().select(fields)

    def filter(
        self, filter: str, filter_params: Mapping[str, Any] | None = None
    ) -> QueryBuilder:
        return self.builder().filter(filter, filter_params)

    def order_by(self, order_by: str) -> QueryBuilder:
        return self.builder().order_by(order_by)

    def top(self, top: int | str) -> QueryBuilder:
        return self.builder().top(top)

    def skip(self, skip: int | str) -> QueryBuilder:
        return self.builder().skip(skip)

    def join(
        self,
        join_type: JoinType | str,
        table_name: str,
        join_condition: str,
        join_condition2: str | None = None,
    ) -> QueryBuilder:
        return self.builder().join(join_type, table_name, join_condition, join_condition2)

    def inner_join(self, table_name: str, join_condition: str) -> QueryBuilder:
        return self.builder().inner_join(table_name, join_condition)

    def left_join(self, table_name: str, join_condition: str) -> QueryBuilder:
        return self.builder().left_join(table_name, join_condition)

    def right_join(self, table_name: str, join_condition: str) -> QueryBuilder:
        return self.builder().right_join(table_name, join_condition)

    def full_join(self, table_name: str, join_condition: str) -> QueryBuilder:
        return self.builder().full_join(table_name, join_condition)

    # reads

    async def query(
        self,
        table_or_view_name: str,
        fields_or_spec: FieldsOrSpec = None,
        spec: QuerySpec | Mapping[str, Any] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> list[dict[str, Any]]:
        """Rows of a table or view.

        Args:
            table_or_view_name: ``"Name"`` or ``"Name alias"``.
            fields_or_spec: Select list, or a ``QuerySpec``/mapping.
            spec: Query spec; wins over a spec passed as second argument.
            cancellation: Overrides the client's cancellation token.

        Returns:
            Rows as dicts keyed by field name.
        """
        request = translate_query(table_or_view_name, fields_or_spec, spec)
        data = await self._post(
            "query", request.table_name, request.to_payload(), cancellation
        )
        return _rows_from_response(data)

    run_query = query

    async def query_df(
        self,
        table_or_view_name: str,
        fields_or_spec: FieldsOrSpec = None,
        spec: QuerySpec | Mapping[str, Any] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> pd.DataFrame:
        rows = await self.query(
            table_or_view_name, fields_or_spec, spec, cancellation=cancellation
        )
        return records_to_dataframe(rows)

    # writes

    async def save(
        self,
        table_name: str,
        items: Rows | None,
        items_to_delete: Sequence[Mapping[str, Any]] | None = None,
        options: SaveOptions | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> SaveStatus:
        """Merge, append or bulk-insert rows, optionally deleting others.

        Large inputs are sent in several requests; the returned status is the
        sum over all of them. With a cancelled token the remaining batches are
        skipped and the status of the sent ones is returned.
        """
        _require_table(table_name)
        self._config.validate()

        async def send(endpoint: str, table: str, body: dict[str, Any]) -> Any:
            return await self._request(endpoint, table, body)

        persister = BatchPersister(send)
        return await persister.persist(
            table_name,
            items,
            items_to_delete,
            options,
            cancellation=self._token(cancellation),
        )

    async def delete(
        self,
        table_name: str,
        items: Mapping[str, Any] | Sequence[Mapping[str, Any]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> bool:
        items_to_delete = [items] if isinstance(items, Mapping) else list(items)
        await self.save(table_name, None, items_to_delete, cancellation=cancellation)
        return True

    async def update_data(
        self,
        table_name: str,
        update_properties: Mapping[str, Any],
        filter: str | None = None,
        filter_params: Mapping[str, Any] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> int:
        """Set ``update_properties`` on matching rows; returns the row count."""
        _require_table(table_name)
        body = {
            "updateProperties": to_primitive(update_properties or {}),
            "filter": {
                "filterString": filter,
                "filterParameters": to_primitive(filter_params or {}),
            },
        }
        return int(await self._post("update-data", table_name, body, cancellation) or 0)

    async def delete_from(
        self,
        table_name: str,
        filter: str | None = None,
        filter_params: Mapping[str, Any] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> int:
        _require_table(table_name)
        body = {
            "filterString": filter,
            "filterParameters": to_primitive(filter_params or {}),
        }
        return int(await self._post("delete-from", table_name, body, cancellation) or 0)

    async def save_with_auto_id(
        self,
        table_name: str,
        item: Mapping[str, Any],
        *,
        cancellation: CancellationToken | None = None,
    ) -> int:
        """Insert one record and return the identity generated by the server."""
        _require_table(table_name)
        data = await self._post("save-with-autoid", table_name, to_primitive(item), cancellation)
        try:
            return int(data)
        except (TypeError, ValueError):
            raise RemoteError("save-with-autoid did not return an id", data=data) from None

    async def sql_execute(
        self,
        sql: str,
        params: Mapping[str, Any] | None = None,
        param_directions: Mapping[str, str] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> Any:
        """Run SQL text or a stored procedure.

        A statement without spaces is treated as a stored procedure name.
        Returns the rows when the server sends a table, ``items`` when it
        sends items, otherwise the raw response (e.g. output parameters).
        """
        sql = (sql or "").strip()
        if not sql:
            raise InvalidArgument("sql text is not provided")

        body: dict[str, Any] = {
            "commandType": "Text" if " " in sql else "StoredProcedure",
            "sql": sql,
        }
        if params:
            body["params"] = to_primitive(params)
        if param_directions:
            body["paramDirections"] = dict(param_directions)

        result = await self._post("execute", None, body, cancellation)
        if isinstance(result, dict):
            if result.get("table"):
                return from_table(result["table"])
            if result.get("items") is not None:
                return result["items"]
        return result


def _require_table(table_name: str) -> None:
    if not table_name or not table_name.strip():
        raise InvalidArgument("Table Name is not specified")


def _rows_from_response(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if data.get("table") is not None:
            return from_table(data["table"])
        if data.get("items") is not None:
            return list(data["items"])
    if data is None:
        return []
    raise ValueError("Unexpected SQL Data API response shape")


def sql_data_api(
    connection_name: str,
    *,
    base_url: str | None = None,
    bearer_token: str | None = None,
    user_access_token: str | None = None,
    timeout: float | None = None,
    cancellation: CancellationToken | None = None,
) -> SqlDataApi:
    """Client for ``connection_name``; unset values come from ``settings``."""
    config = ConnectionConfig.from_settings(
        connection_name,
        base_url=base_url,
        bearer_token=bearer_token,
        user_access_token=user_access_token,
        timeout=timeout,
    )
    return SqlDataApi(config, cancellation=cancellation)
