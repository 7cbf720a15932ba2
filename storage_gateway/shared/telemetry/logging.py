"""Logging configuration for the storage gateway.

Gateway failures are logged with ``extra={"operation", "trace_id"}``. The
handler built here prints both on every line; records without them (SDK
loggers, start and completion notices) show "-" instead.
"""

import logging
import sys
from typing import TextIO

from storage_gateway.core.config import get_settings

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[op=%(operation)s trace=%(trace_id)s] - %(message)s"
)

# SDK loggers that are noisy at INFO/DEBUG
_QUIET_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")


class GatewayContextFilter(logging.Filter):
    """Default the operation and trace_id record fields so LOG_FORMAT always renders."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in ("operation", "trace_id"):
            if getattr(record, field, None) is None:
                setattr(record, field, "-")
        return True


def build_handler(stream: TextIO | None = None) -> logging.Handler:
    """Return a stream handler using LOG_FORMAT (stdout by default)."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.addFilter(GatewayContextFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(stream: TextIO | None = None) -> None:
    """Configure process-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. SDK
    loggers stay at WARNING unless debug is on.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(level=log_level, handlers=[build_handler(stream)], force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(log_level if settings.debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)
