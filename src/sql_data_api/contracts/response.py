# sql_data_api/contracts/response.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResponseEnvelope:
    """Uniform result of one network round trip.

    ``data`` is set on success, ``error_message`` on failure. ``status`` is 0
    when no HTTP response was received.
    """

    is_ok: bool
    status: int
    status_text: str = ""
    data: Any = None
    error_message: str | None = None
