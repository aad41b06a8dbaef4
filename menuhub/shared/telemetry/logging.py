"""Logging configuration for the service."""

import logging
import sys

from menuhub.core.config import get_settings
from menuhub.shared.context import RequestIDLogFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def setup_logging() -> None:
    """Configure process-wide logging to stdout.

    Level is DEBUG when settings.debug is True, otherwise INFO. Records carry
    the current request ID. httpx logs every request line at INFO (including
    query strings with restaurant names), so it is held at WARNING unless
    debugging.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
    if not settings.debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
