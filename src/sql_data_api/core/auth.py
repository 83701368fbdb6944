# sql_data_api/core/auth.py
from __future__ import annotations

import logging

from sql_data_api.core.config import settings
from sql_data_api.core.errors import InvalidArgument, MissingConfiguration, RemoteError
from sql_data_api.core.transport import HttpTransport, ensure_ok

logger = logging.getLogger(__name__)

AUTHENTICATE_PATH = "/api/security/authenticate"


async def authenticate(
    username: str,
    password: str,
    *,
    base_url: str | None = None,
    transport: HttpTransport | None = None,
) -> str:
    """Log in with user credentials and store the token as default bearer.

    Clients created afterwards with ``sql_data_api()`` pick the token up;
    existing clients keep their own snapshot.
    """
    if not username:
        raise InvalidArgument("username is not provided")
    root = (base_url or settings.base_url or "").rstrip("/")
    if not root:
        raise MissingConfiguration("Base URL is not specified")

    transport = transport or HttpTransport(timeout=settings.timeout)
    data = ensure_ok(
        await transport.post(
            f"{root}{AUTHENTICATE_PATH}", {"username": username, "password": password}
        )
    )

    token = data.get("token") if isinstance(data, dict) else None
    if not token:
        raise RemoteError("Authentication response did not contain a token", data=data)

    settings.bearer_token = token
    logger.info("Authenticated user=%s", username)
    return token
