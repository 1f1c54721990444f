from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(requestId)s] %(name)s - %(message)s"


class RequestIdFilter(logging.Filter):
    """Fill ``requestId`` on records logged outside a request (startup, migrations)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "requestId"):
            record.requestId = "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Send every catalog log line to stdout with the request id in it.

    Idempotent: a second call (app reload, test import) only adjusts the level.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "catalog_api")
