# sql_data_api/core/logging.py
from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

from sql_data_api.core.config import settings
from sql_data_api.core.transport import mask_url


class AccessTokenFilter(logging.Filter):
    """Masks ``$accessToken`` query values in logged URLs."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = record.getMessage()
            record.args = None
        if isinstance(record.msg, str):
            record.msg = mask_url(record.msg)
        return True


def configure_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
    handler.addFilter(AccessTokenFilter())

    # replace rather than append so repeated calls do not duplicate output
    root.handlers = [handler]
