# sql_data_api/core/cancellation.py
from __future__ import annotations

import logging

from sql_data_api.core.errors import OperationCancelled

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation flag.

    Checked between batches of a save and before single requests; a request
    already in flight is allowed to finish.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None

    def cancel(self, reason: str | None = None) -> None:
        if not self._cancelled:
            logger.info("Cancellation requested%s", f": {reason}" if reason else "")
        self._cancelled = True
        self._reason = reason

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelled(self._reason or "Operation was cancelled")
