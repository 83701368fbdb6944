# sql_data_api/contracts/table.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TableData:
    """Columnar table: positional rows aligned to ``field_names``."""

    field_names: list[str] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TableData":
        return cls(
            field_names=list(data.get("fieldNames") or []),
            rows=[list(r) for r in data.get("rows") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"fieldNames": self.field_names, "rows": self.rows}

    def __len__(self) -> int:
        return len(self.rows)
