# sql_data_api/core/transport.py
"""
HTTP execution and result normalization.

``HttpTransport.request`` turns one httpx round trip into a
``ResponseEnvelope`` and never raises for HTTP or network failures. A body
that cannot be encoded is rejected with ``InvalidArgument`` before sending.
Logged URLs have their access token masked.
``ensure_ok`` is the single place where a failed envelope becomes an
exception.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx

from sql_data_api.contracts.response import ResponseEnvelope
from sql_data_api.core.coercion import to_json
from sql_data_api.core.errors import RemoteError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Http Connection Error"

JSON_HEADERS = {"Content-Type": "application/json"}

ACCESS_TOKEN_PATTERN = re.compile(r"(\$accessToken=)[^&\s]+")


def mask_url(url: str) -> str:
    """URL with any ``$accessToken`` value replaced by ``***``."""
    return ACCESS_TOKEN_PATTERN.sub(r"\1***", url)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def extract_error_message(body: Any, status_text: str = "") -> str:
    """Best-effort readable message from a failed response.

    Order: ``message`` field of a JSON object, then the raw body (JSON-dumped
    when structured), then the status text, then a generic fallback.
    """
    message: Any = None
    if isinstance(body, dict):
        message = body.get("message")
    if not message:
        message = body
    if not message:
        message = status_text
    if not message:
        return DEFAULT_ERROR_MESSAGE
    if isinstance(message, (dict, list)):
        return json.dumps(message)
    return str(message)


class HttpTransport:
    """Sends JSON requests with a fresh ``httpx.AsyncClient`` per call."""

    def __init__(self, *, timeout: float = 30.0) -> None:
        self._timeout = timeout

    async def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ResponseEnvelope:
        all_headers = {**JSON_HEADERS, **(headers or {})}
        content = to_json(body).encode("utf-8") if body is not None else None
        safe_url = mask_url(url)
        logger.debug("%s %s", method, safe_url)

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                resp = await client.request(
                    method,
                    url,
                    content=content,
                    headers=all_headers,
                )
            except httpx.RequestError as exc:
                logger.warning("Request failed url=%s error=%r", safe_url, exc)
                return ResponseEnvelope(
                    is_ok=False,
                    status=0,
                    status_text="",
                    error_message=str(exc) or DEFAULT_ERROR_MESSAGE,
                )

        data = _decode_body(resp)
        if resp.is_success:
            return ResponseEnvelope(
                is_ok=True,
                status=resp.status_code,
                status_text=resp.reason_phrase,
                data=data,
            )

        message = extract_error_message(data, resp.reason_phrase)
        logger.warning(
            "Request failed status=%s url=%s reason=%s", resp.status_code, safe_url, message
        )
        return ResponseEnvelope(
            is_ok=False,
            status=resp.status_code,
            status_text=resp.reason_phrase,
            data=data,
            error_message=message,
        )

    async def post(
        self, url: str, body: Any = None, headers: dict[str, str] | None = None
    ) -> ResponseEnvelope:
        return await self.request("POST", url, body, headers)


def ensure_ok(envelope: ResponseEnvelope) -> Any:
    """Return ``envelope.data`` or raise the matching ``RemoteError``."""
    if envelope.is_ok:
        return envelope.data

    error_cls = TransportError if envelope.status == 0 else RemoteError
    raise error_cls(
        envelope.error_message or DEFAULT_ERROR_MESSAGE,
        status=envelope.status,
        status_text=envelope.status_text,
        data=envelope.data,
    )
