"""
Name: Structured Logger Configuration

Responsibilities:
  - Emit one JSON object per log line on stdout
  - Tag lines with the request context (request id, method, path, user id)
  - Redact secrets passed as extras

Collaborators:
  - context.py: Request-scoped context vars
  - Python logging module (stdlib)

Constraints:
  - Never log secrets (passwords, hashes, tokens, cookies, JWT secret)

Notes:
  - Import as: from movie_catalog.logger import logger
  - LOG_LEVEL env var overrides the default INFO level
"""

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

REDACTED = "[REDACTED]"

# R: Attributes every LogRecord has; anything else came in through `extra`
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """R: Render a LogRecord as a JSON document."""

    SENSITIVE_KEYS = frozenset(
        {
            "password",
            "password_hash",
            "secret",
            "jwt_secret",
            "token",
            "authorization",
            "cookie",
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # R: Imported lazily so context.py stays free of logging imports
        from .context import get_context_dict

        log_obj.update(get_context_dict())
        log_obj.update(self._extras(record))

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            log_obj["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "stacktrace": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        return json.dumps(log_obj, default=str)

    def _extras(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: REDACTED if key.lower() in self.SENSITIVE_KEYS else value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        }


def setup_logger(name: str = "movie-catalog") -> logging.Logger:
    """
    R: Configure and return the application logger.

    Handlers are attached once, so re-imports do not duplicate output.
    """
    log = logging.getLogger(name)
    log.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    log.propagate = False

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        log.addHandler(handler)

    return log


logger = setup_logger()
