# sql_data_api/core/query/builder.py
"""
Fluent query builder.

Every method returns a new builder, so a partially built query can be reused
as a base and nothing is left behind on the client after a call:

    base = api.table("Customers c").select("c.Id, c.Name")
    rows = await base.filter("c.Country = @c", {"c": "IE"}).top(10).run_query()
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Mapping

import pandas as pd

from sql_data_api.contracts.query import JoinType, QuerySpec
from sql_data_api.core.errors import InvalidArgument

if TYPE_CHECKING:
    from sql_data_api.core.cancellation import CancellationToken
    from sql_data_api.core.client import SqlDataApi


@dataclass(frozen=True)
class QueryBuilder:
    client: "SqlDataApi | None" = None
    table_name: str = ""
    fields: str | None = None
    filter_string: str | None = None
    filter_params: Mapping[str, Any] | None = None
    skip_rows: int | None = None
    top_rows: int | None = None
    order_by_expr: str | None = None
    joins: tuple[tuple[Any, ...], ...] = field(default_factory=tuple)

    def table(self, name: str) -> "QueryBuilder":
        return replace(self, table_name=name)

    def select(self, fields: str) -> "QueryBuilder":
        return replace(self, fields=fields)

    def filter(
        self, filter: str, filter_params: Mapping[str, Any] | None = None
    ) -> "QueryBuilder":
        return replace(self, filter_string=filter, filter_params=filter_params)

    def order_by(self, order_by: str) -> "QueryBuilder":
        return replace(self, order_by_expr=order_by)

    def top(self, top: int | str) -> "QueryBuilder":
        try:
            return replace(self, top_rows=int(top))
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"top must be a number, got {top!r}") from exc

    def skip(self, skip: int | str) -> "QueryBuilder":
        try:
            return replace(self, skip_rows=int(skip))
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"skip must be a number, got {skip!r}") from exc

    def join(
        self,
        join_type: JoinType | str,
        table_name: str,
        join_condition: str,
        join_condition2: str | None = None,
    ) -> "QueryBuilder":
        try:
            kind = JoinType(join_type)
        except ValueError as exc:
            raise InvalidArgument(f"Unknown join type {join_type!r}") from exc
        entry: tuple[Any, ...] = (kind, table_name, join_condition)
        if join_condition2:
            entry += (join_condition2,)
        return replace(self, joins=self.joins + (entry,))

    def inner_join(self, table_name: str, join_condition: str) -> "QueryBuilder":
        return self.join(JoinType.InnerJoin, table_name, join_condition)

    def left_join(self, table_name: str, join_condition: str) -> "QueryBuilder":
        return self.join(JoinType.LeftJoin, table_name, join_condition)

    def right_join(self, table_name: str, join_condition: str) -> "QueryBuilder":
        return self.join(JoinType.RightJoin, table_name, join_condition)

    def full_join(self, table_name: str, join_condition: str) -> "QueryBuilder":
        return self.join(JoinType.FullJoin, table_name, join_condition)

    def to_spec(self) -> QuerySpec:
        return QuerySpec(
            fields=self.fields,
            filter=self.filter_string,
            filter_params=dict(self.filter_params) if self.filter_params else None,
            skip=self.skip_rows,
            top=self.top_rows,
            order_by=self.order_by_expr,
            joins=self.joins or None,
        )

    def _bound_client(self) -> "SqlDataApi":
        if self.client is None:
            raise InvalidArgument("QueryBuilder is not bound to a client")
        return self.client

    async def run_query(
        self,
        table_or_view_name: str | None = None,
        *,
        cancellation: "CancellationToken | None" = None,
    ) -> list[dict[str, Any]]:
        return await self._bound_client().query(
            table_or_view_name or self.table_name,
            self.fields,
            self.to_spec(),
            cancellation=cancellation,
        )

    async def run_query_df(
        self,
        table_or_view_name: str | None = None,
        *,
        cancellation: "CancellationToken | None" = None,
    ) -> pd.DataFrame:
        return await self._bound_client().query_df(
            table_or_view_name or self.table_name,
            self.fields,
            self.to_spec(),
            cancellation=cancellation,
        )
