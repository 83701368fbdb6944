# sql_data_api/contracts/query.py
"""
Read-query contracts.

``QuerySpec`` is the caller-facing declarative description of a table query.
``WireQueryRequest`` is the normalized JSON body posted to the ``query``
endpoint. Both accept camelCase keys as well as snake_case names.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class JoinType(str, Enum):
    InnerJoin = "InnerJoin"
    LeftJoin = "LeftJoin"
    RightJoin = "RightJoin"
    FullJoin = "FullJoin"


class QuerySpec(BaseModel):
    """Declarative query description.

    Attributes:
        fields: Comma separated select list. Empty means all fields.
        filter: Filter expression with ``@name`` style named parameters.
        filter_params: Values for the named filter parameters.
        skip: Number of rows to skip.
        top: Maximum number of rows to return.
        order_by: Order-by expression.
        main_table_alias: Alias of the main table when not given inline.
        joins: Positional ``(join_type, "Table alias", condition[, condition2])``
            tuples, emitted in order.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    fields: str | None = None
    filter: str | None = None
    filter_params: dict[str, Any] | None = None
    skip: int | None = None
    top: int | None = None
    order_by: str | None = None
    main_table_alias: str | None = None
    joins: tuple[tuple[Any, ...], ...] | None = None

    @field_validator("fields", "filter", "order_by", "main_table_alias")
    @classmethod
    def _blank_as_absent(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @field_validator("joins")
    @classmethod
    def _check_joins(
        cls, value: tuple[tuple[Any, ...], ...] | None
    ) -> tuple[tuple[Any, ...], ...] | None:
        if not value:
            return None
        for entry in value:
            if len(entry) not in (3, 4):
                raise ValueError(
                    "join entry must be (join_type, table, condition[, condition2]), "
                    f"got {len(entry)} item(s)"
                )
            JoinType(entry[0])
        return value


class TableJoin(BaseModel):
    """Wire form of a single join clause."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    table_name: str
    table_alias: str | None = None
    join_type: JoinType
    join_condition: str
    join_condition2: str | None = None


class WireQueryRequest(BaseModel):
    """Normalized body of a ``query/{table}`` request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # main table name, part of the URL rather than the body
    table_name: str = Field(exclude=True)

    select: str | None = None
    filter_string: str | None = None
    filter_parameters: dict[str, Any] | None = None
    skip: int | None = None
    top: int | None = None
    order_by: str | None = None
    main_table_alias: str | None = None
    tables_join: list[TableJoin] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
