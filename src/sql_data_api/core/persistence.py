# sql_data_api/core/persistence.py
"""
Batch persistence engine.

Splits a row collection into requests bounded both by row count
(``SaveOptions.batch_size``) and by serialized size (``MAX_BATCH_BYTES``),
sends them one after another and sums the per-batch ``SaveStatus``.

Batches are strictly sequential. Cancellation is observed between batches
only; batches already sent stay applied and are counted in the result.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Mapping, Sequence

import pandas as pd

from sql_data_api.contracts.save import SaveOptions, SaveStatus
from sql_data_api.core.cancellation import CancellationToken
from sql_data_api.core.coercion import row_to_primitive, to_json, to_primitive
from sql_data_api.core.table import to_table

logger = logging.getLogger(__name__)

MAX_BATCH_BYTES = 1_500_000

# (endpoint, table_name, body) -> response data; raises on failure
SendFunc = Callable[[str, str, dict[str, Any]], Awaitable[Any]]

Rows = Sequence[Mapping[str, Any]] | pd.DataFrame


def serialized_size(row: list[Any]) -> int:
    """UTF-8 byte length of the row as it is sent."""
    return len(to_json(row).encode("utf-8"))


def _is_empty(items: Rows | None) -> bool:
    if items is None:
        return True
    if isinstance(items, pd.DataFrame):
        return items.empty
    return len(items) == 0


class BatchPersister:
    """Drives save/append/bulk-insert requests for one table."""

    def __init__(self, send: SendFunc, *, max_batch_bytes: int = MAX_BATCH_BYTES) -> None:
        self._send = send
        self._max_batch_bytes = max_batch_bytes

    async def persist(
        self,
        table_name: str,
        items: Rows | None = None,
        items_to_delete: Sequence[Mapping[str, Any]] | None = None,
        options: SaveOptions | None = None,
        cancellation: CancellationToken | None = None,
    ) -> SaveStatus:
        options = options or SaveOptions()
        endpoint = options.method.endpoint
        primary_keys = list(options.primary_keys) if options.primary_keys else None
        deletes = [to_primitive(r) for r in items_to_delete or []]

        if _is_empty(items):
            if not deletes:
                logger.debug("Nothing to save for table=%s", table_name)
                return SaveStatus()

            body: dict[str, Any] = {"itemsToDelete": deletes}
            if primary_keys:
                body["primaryKeys"] = primary_keys
            logger.debug("Delete-only request table=%s rows=%d", table_name, len(deletes))
            return SaveStatus.from_dict(await self._send(endpoint, table_name, body))

        table = to_table(items)
        total_rows = len(table.rows)
        status = SaveStatus()
        batch: list[list[Any]] = []
        batch_bytes = 0
        processed = 0
        batches_sent = 0

        for index, raw_row in enumerate(table.rows):
            row = row_to_primitive(raw_row)
            batch.append(row)
            batch_bytes += serialized_size(row)

            is_last = index + 1 >= total_rows
            if not (
                is_last
                or len(batch) >= options.batch_size
                or batch_bytes > self._max_batch_bytes
            ):
                continue

            if cancellation is not None and cancellation.cancelled:
                logger.info(
                    "Save cancelled table=%s processed=%d/%d",
                    table_name,
                    processed,
                    total_rows,
                )
                break

            body = {
                "tableData": {"fieldNames": table.field_names, "rows": batch},
            }
            # the delete set travels once, with the first batch
            if deletes and batches_sent == 0:
                body["itemsToDelete"] = deletes
            if primary_keys:
                body["primaryKeys"] = primary_keys

            logger.debug(
                "Sending batch %d table=%s rows=%d bytes=%d",
                batches_sent + 1,
                table_name,
                len(batch),
                batch_bytes,
            )
            batch_status = SaveStatus.from_dict(await self._send(endpoint, table_name, body))
            batches_sent += 1
            status = status + batch_status
            processed += len(batch)
            batch = []
            batch_bytes = 0

            if options.batch_progress_func is not None:
                result = options.batch_progress_func(processed, batch_status)
                if inspect.isawaitable(result):
                    await result

        logger.info(
            "Saved table=%s batches=%d inserted=%d updated=%d deleted=%d",
            table_name,
            batches_sent,
            status.inserted,
            status.updated,
            status.deleted,
        )
        return status
