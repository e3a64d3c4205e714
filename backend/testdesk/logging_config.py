"""
Structured JSON logging for the TestDesk backend.

Every record is emitted as one JSON object on stdout so container log
collectors can index it without a parsing step. Records are grouped into
channels (http, db, auth, scoring, client) and carry the current request
ID and, once the bearer token has been verified, the caller's user ID.
"""

import logging
import json
import uuid
from datetime import datetime, timezone
from contextvars import ContextVar
from typing import Optional

from testdesk import config

# ──────────────────────────────────────────────────────────────
# Per-request context. request_id is set by the request middleware,
# user_id by the authentication gate once a token is verified.
# ──────────────────────────────────────────────────────────────
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[Optional[int]] = ContextVar("user_id", default=None)

CHANNELS = ("http", "db", "auth", "scoring", "client")


# ──────────────────────────────────────────────────────────────
# JSON formatter and logger setup
# ──────────────────────────────────────────────────────────────
class StructuredJsonFormatter(logging.Formatter):
    """
    Render a LogRecord as a single JSON line.

    Keys: timestamp (UTC, millisecond precision), level, message, channel,
    context (request_id, user_id and any business identifiers passed by the
    caller) and extra (free-form metadata such as durations).
    """

    def format(self, record: logging.LogRecord) -> str:
        context = {"request_id": request_id_var.get("")}
        user_id = user_id_var.get(None)
        if user_id is not None:
            context["user_id"] = user_id
        context.update(getattr(record, "context", None) or {})

        entry = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "channel": getattr(record, "channel", record.name.rsplit(".", 1)[-1]),
            "context": context,
            "extra": getattr(record, "extra_data", None) or {},
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = None) -> logging.Logger:
    """Install the JSON formatter on the root logger and register the channels."""
    level_value = getattr(logging, (level or config.LOG_LEVEL), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level_value)
    root_logger.handlers = [handler]

    for channel in CHANNELS:
        logging.getLogger(f"testdesk.{channel}").setLevel(level_value)

    return root_logger


def get_logger(channel: str) -> logging.Logger:
    """Channel logger (http, db, auth, scoring, client) under the testdesk namespace."""
    return logging.getLogger(f"testdesk.{channel}")


def log_with_context(logger: logging.Logger, level: str, message: str,
                     context: dict = None, extra_data: dict = None,
                     exc_info: bool = False):
    """
    Log `message` on `logger` with business context and metadata attached.

    Args:
        logger: Channel logger from get_logger()
        level: Level name (DEBUG, INFO, WARNING, ERROR)
        message: Human-readable message
        context: Identifiers such as test_id or submission_id
        extra_data: Additional metadata such as duration_ms
        exc_info: Attach the active exception's traceback
    """
    logger.log(
        getattr(logging, level.upper(), logging.INFO),
        message,
        exc_info=exc_info,
        extra={
            "context": context or {},
            "extra_data": extra_data or {},
            "channel": logger.name.rsplit(".", 1)[-1],
        },
    )


def generate_request_id() -> str:
    """New UUID4 string used as the X-Request-ID of one request."""
    return str(uuid.uuid4())
