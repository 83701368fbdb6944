# sql_data_api/contracts/save.py
"""
Save contracts.

A save call is split into batches by the persistence engine; each batch
returns a ``SaveStatus`` which is summed into the call's running total.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Sequence

from sql_data_api.core.errors import InvalidArgument


class SaveMethod(str, Enum):
    Merge = "Merge"
    Append = "Append"
    BulkInsert = "BulkInsert"

    @property
    def endpoint(self) -> str:
        return _SAVE_ENDPOINTS[self]


_SAVE_ENDPOINTS = {
    SaveMethod.Merge: "save",
    SaveMethod.Append: "append-data",
    SaveMethod.BulkInsert: "bulk-insert",
}


@dataclass
class SaveStatus:
    inserted: int = 0
    updated: int = 0
    deleted: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SaveStatus":
        data = data or {}
        return cls(
            inserted=int(data.get("inserted") or 0),
            updated=int(data.get("updated") or 0),
            deleted=int(data.get("deleted") or 0),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "inserted": self.inserted,
            "updated": self.updated,
            "deleted": self.deleted,
        }

    def __add__(self, other: "SaveStatus") -> "SaveStatus":
        return SaveStatus(
            inserted=self.inserted + other.inserted,
            updated=self.updated + other.updated,
            deleted=self.deleted + other.deleted,
        )


BatchProgressFunc = Callable[[int, SaveStatus], "Awaitable[None] | None"]


@dataclass(frozen=True)
class SaveOptions:
    """Options of a single save call.

    Attributes:
        method: Server-side save semantics; selects the endpoint.
        batch_size: Maximum number of rows per request.
        primary_keys: Key columns used by the server to match rows.
        batch_progress_func: Called after every batch with the number of rows
            processed so far and that batch's status.
    """

    method: SaveMethod = SaveMethod.Merge
    batch_size: int = 10000
    primary_keys: Sequence[str] | None = None
    batch_progress_func: BatchProgressFunc | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, SaveMethod):
            object.__setattr__(self, "method", SaveMethod(self.method))
        if self.batch_size <= 0:
            raise InvalidArgument(f"batch_size must be positive, got {self.batch_size}")
