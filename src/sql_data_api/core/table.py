# sql_data_api/core/table.py
"""
Row-oriented ⇄ column-oriented conversion.

The service exchanges tables as ``{fieldNames, rows}``; callers work with
lists of dicts or pandas DataFrames.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import pandas as pd

from sql_data_api.contracts.table import TableData

logger = logging.getLogger(__name__)


def dataframe_to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """DataFrame rows as dicts with NaN/NaT replaced by ``None``."""
    if df.empty:
        return []
    clean = df.astype(object).where(df.notna(), None)
    return clean.to_dict(orient="records")


def to_table(items: Iterable[Mapping[str, Any]] | pd.DataFrame) -> TableData:
    """
    Build a columnar table from row dicts.

    Field names are the union of all keys in first-seen order; keys missing
    from a row become ``None`` in that row.
    """
    if isinstance(items, pd.DataFrame):
        items = dataframe_to_records(items)

    records = list(items)
    field_names: list[str] = []
    seen: set[str] = set()
    for rec in records:
        for key in rec.keys():
            if key not in seen:
                seen.add(key)
                field_names.append(key)

    rows = [[rec.get(name) for name in field_names] for rec in records]
    return TableData(field_names=field_names, rows=rows)


def from_table(table: TableData | Mapping[str, Any] | None) -> list[dict[str, Any]]:
    if table is None:
        return []
    if not isinstance(table, TableData):
        table = TableData.from_dict(dict(table))

    names = table.field_names
    out: list[dict[str, Any]] = []
    for row in table.rows:
        if len(row) != len(names):
            logger.warning(
                "Row width %d does not match %d field name(s)", len(row), len(names)
            )
        out.append(dict(zip(names, row)))
    return out


def records_to_dataframe(records: list[dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(records)
