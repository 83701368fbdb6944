# sql_data_api/core/config.py
"""
Configuration for the SQL Data API client.

``settings`` holds process-wide defaults (environment variables with the
``SQL_DATA_API_`` prefix override them). Clients never read it after
construction: ``ConnectionConfig`` is an immutable snapshot taken when a
client is created.
"""
from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sql_data_api.core.errors import MissingConfiguration


class Settings(BaseSettings):
    """Environment-driven defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SQL_DATA_API_", env_file=".env", extra="ignore"
    )

    base_url: str = Field(default="", description="Service root, e.g. https://host")
    bearer_token: str = Field(default="", description="Sent as Authorization: Bearer")
    user_access_token: str = Field(
        default="", description="Sent as ?$accessToken= when no bearer token is set"
    )
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    log_level: str = "INFO"


settings = Settings()


def set_base_url(base_url: str) -> None:
    settings.base_url = base_url


def set_bearer_token(bearer_token: str) -> None:
    settings.bearer_token = bearer_token


def set_user_access_token(user_access_token: str) -> None:
    settings.user_access_token = user_access_token


@dataclass(frozen=True)
class ConnectionConfig:
    """Immutable per-client connection settings.

    Attributes:
        base_url: Service root URL, without the ``/sql-data-api`` suffix.
        connection_name: Server-side name of the database connection.
        bearer_token: Takes precedence over ``user_access_token``.
        user_access_token: Appended as the ``$accessToken`` query parameter.
        timeout: httpx timeout in seconds.
    """

    base_url: str
    connection_name: str
    bearer_token: str | None = None
    user_access_token: str | None = None
    timeout: float = 30.0

    @classmethod
    def from_settings(
        cls,
        connection_name: str,
        *,
        base_url: str | None = None,
        bearer_token: str | None = None,
        user_access_token: str | None = None,
        timeout: float | None = None,
        defaults: Settings | None = None,
    ) -> "ConnectionConfig":
        defaults = defaults or settings
        return cls(
            base_url=(base_url or defaults.base_url or "").rstrip("/"),
            connection_name=connection_name or "",
            bearer_token=bearer_token or defaults.bearer_token or None,
            user_access_token=user_access_token or defaults.user_access_token or None,
            timeout=timeout if timeout is not None else defaults.timeout,
        )

    def validate(self) -> None:
        if not self.connection_name:
            raise MissingConfiguration("Connection Name is not specified")
        if not self.base_url:
            raise MissingConfiguration("Base URL is not specified")

    def endpoint(self, operation: str, table_name: str | None = None) -> str:
        url = f"{self.base_url.rstrip('/')}/sql-data-api/{self.connection_name}/{operation}"
        if table_name:
            url += f"/{table_name}"
        return url

    def auth(self, url: str) -> tuple[str, dict[str, str]]:
        """URL and headers with authentication applied."""
        if self.bearer_token:
            return url, {"Authorization": f"Bearer {self.bearer_token}"}
        if self.user_access_token:
            return f"{url}?$accessToken={self.user_access_token}", {}
        return url, {}
