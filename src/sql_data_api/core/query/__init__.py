"""Query translation and the fluent query builder."""

from sql_data_api.core.query.builder import QueryBuilder
from sql_data_api.core.query.translator import resolve_query, translate_query

__all__ = ["QueryBuilder", "resolve_query", "translate_query"]
