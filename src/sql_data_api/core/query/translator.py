# sql_data_api/core/query/translator.py
"""
Translation of a table query description into a ``WireQueryRequest``.

Accepts the same argument shapes as the client ``query`` call:

    translate_query("Customers c")
    translate_query("Customers c", "c.Id, c.Name")
    translate_query("Customers c", QuerySpec(top=10))
    translate_query("Customers c", "c.Id", {"filter": "c.Id > @id", "filterParams": {"id": 5}})
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from sql_data_api.contracts.query import JoinType, QuerySpec, TableJoin, WireQueryRequest
from sql_data_api.core.coercion import to_primitive
from sql_data_api.core.errors import InvalidArgument
from sql_data_api.core.naming import extract_name_and_alias

logger = logging.getLogger(__name__)

ALL_FIELDS = "*"

FieldsOrSpec = str | QuerySpec | Mapping[str, Any] | None


def as_query_spec(value: QuerySpec | Mapping[str, Any] | None) -> QuerySpec:
    if value is None:
        return QuerySpec()
    if isinstance(value, QuerySpec):
        return value
    try:
        return QuerySpec.model_validate(dict(value))
    except ValidationError as exc:
        raise InvalidArgument(f"Invalid query spec: {exc}") from exc


def resolve_query(
    fields_or_spec: FieldsOrSpec = None,
    spec: QuerySpec | Mapping[str, Any] | None = None,
) -> tuple[str | None, QuerySpec]:
    """Effective ``(fields, spec)`` for the call's argument combination."""
    if spec is not None:
        effective = as_query_spec(spec)
    elif fields_or_spec is not None and not isinstance(fields_or_spec, str):
        effective = as_query_spec(fields_or_spec)
    else:
        effective = QuerySpec()

    if isinstance(fields_or_spec, str) and fields_or_spec.strip() and fields_or_spec != ALL_FIELDS:
        fields = fields_or_spec
    else:
        fields = effective.fields
    return fields, effective


def build_table_joins(joins: Any) -> list[TableJoin]:
    tables_join: list[TableJoin] = []
    for entry in joins or ():
        join_type, table_with_alias, condition, *rest = entry
        name_alias = extract_name_and_alias(table_with_alias)
        tables_join.append(
            TableJoin(
                table_name=name_alias.name,
                table_alias=name_alias.alias,
                join_type=JoinType(join_type),
                join_condition=condition,
                join_condition2=rest[0] if rest else None,
            )
        )
    return tables_join


def translate_query(
    table_or_view_name: str,
    fields_or_spec: FieldsOrSpec = None,
    spec: QuerySpec | Mapping[str, Any] | None = None,
) -> WireQueryRequest:
    if not table_or_view_name or not table_or_view_name.strip():
        raise InvalidArgument("Table Name is not specified")

    fields, query_spec = resolve_query(fields_or_spec, spec)
    main_table = extract_name_and_alias(table_or_view_name)
    tables_join = build_table_joins(query_spec.joins)

    filter_params = (
        to_primitive(query_spec.filter_params) if query_spec.filter_params else None
    )

    request = WireQueryRequest(
        table_name=main_table.name,
        select=fields or None,
        filter_string=query_spec.filter or None,
        filter_parameters=filter_params or None,
        skip=query_spec.skip or None,
        top=query_spec.top or None,
        order_by=query_spec.order_by or None,
        main_table_alias=main_table.alias or query_spec.main_table_alias or None,
        tables_join=tables_join or None,
    )
    logger.debug(
        "Translated query table=%s joins=%d top=%s",
        main_table.name,
        len(tables_join),
        request.top,
    )
    return request
