"""Structured Logging — JSON records for the feudclient logger tree, driven by Settings.

Invariants:
    - Every record carries timestamp, level, logger name, and message
    - Request fields (path, status_code, error_code, error_type, cache, entity_id,
      content_length) are emitted only when present
    - A FeudClientError in exc_info is flattened with to_dict() instead of a bare traceback
    - setup_logging only touches the "feudclient" logger, never the root logger
    - Calling setup_logging again replaces its own handler instead of stacking a second one
    - The library never calls setup_logging itself; the embedding application does

Design Decisions:
    - Level and format come from Settings (FEUD_LOG_LEVEL, FEUD_LOG_FORMAT)
    - JSONFormatter over third-party libs: zero dependencies, full control
"""

import logging
import json
from datetime import datetime, timezone

from feudclient.config import Settings, get_settings
from feudclient.core.errors import FeudClientError

LIBRARY_LOGGER = "feudclient"
_HANDLER_NAME = "feudclient-structured"

_EXTRA_FIELDS = (
    "path", "status_code", "error_code", "error_type",
    "cache", "entity_id", "content_length",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            exc = record.exc_info[1]
            if isinstance(exc, FeudClientError):
                log["error"] = exc.to_dict()
            else:
                log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def _text_formatter() -> logging.Formatter:
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


def setup_logging(settings: Settings | None = None) -> logging.Handler:
    """Attach a stream handler to the feudclient logger per settings.log_level/log_format."""
    settings = settings or get_settings()
    library_logger = logging.getLogger(LIBRARY_LOGGER)

    for existing in list(library_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            library_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if settings.log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(_text_formatter())

    library_logger.addHandler(handler)
    library_logger.setLevel(
        getattr(logging, settings.log_level.upper(), logging.INFO),
    )
    return handler
