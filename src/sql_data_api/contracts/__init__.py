"""Public contracts for the SQL Data API client."""
from sql_data_api.contracts.query import JoinType, QuerySpec, TableJoin, WireQueryRequest
from sql_data_api.contracts.response import ResponseEnvelope
from sql_data_api.contracts.save import BatchProgressFunc, SaveMethod, SaveOptions, SaveStatus
from sql_data_api.contracts.table import TableData

__all__ = [
    "JoinType", "QuerySpec", "TableJoin", "WireQueryRequest",
    "ResponseEnvelope",
    "BatchProgressFunc", "SaveMethod", "SaveOptions", "SaveStatus",
    "TableData",
]
