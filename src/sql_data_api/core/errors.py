# sql_data_api/core/errors.py
"""
Exception hierarchy for the SQL Data API client.

Local validation errors are raised before any request is sent. Remote and
transport failures are normalized once by the transport layer and re-raised
as ``RemoteError`` by every public operation.
"""
from __future__ import annotations

from typing import Any


class SqlDataApiError(Exception):
    """Base class for all client errors."""


class InvalidArgument(SqlDataApiError, ValueError):
    """Raised when a caller passes an unusable argument (empty table name, SQL...)."""


class MissingConfiguration(InvalidArgument):
    """Raised when the base URL or connection name is not configured."""


class OperationCancelled(SqlDataApiError):
    """Raised when a single-request operation is called with a cancelled token."""


class RemoteError(SqlDataApiError):
    """Non-success outcome of a request, carrying the best-effort server message."""

    def __init__(
        self,
        message: str,
        *,
        status: int = 0,
        status_text: str = "",
        data: Any = None,
    ):
        self.message = message
        self.status = status
        self.status_text = status_text
        self.data = data
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "remote_error",
            "message": self.message,
            "status": self.status,
            "status_text": self.status_text,
        }

    def __str__(self) -> str:
        return self.message


class TransportError(RemoteError):
    """The request never produced an HTTP response (connection refused, DNS...)."""
