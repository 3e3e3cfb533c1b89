"""Structured logging: JSON lines on disk, readable lines on the console.

Every module logs through ``get_logger`` so records land under the
``spendwell`` namespace configured here. Records emitted while a request is
being served carry its method and path.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from flask import has_request_context, request

from .config import BaseConfig

LOGGER_NAMESPACE = "spendwell"
LOG_FILENAME = "spendwell.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

_DEV_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
_PROD_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# LogRecord attributes that are not caller-supplied ``extra`` fields.
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "exc_info",
        "exc_text", "stack_info", "taskName", "asctime",
    }
)


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        extra = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        }
        if extra:
            payload["extra"] = extra

        if has_request_context():
            payload["request"] = {"method": request.method, "path": request.path}

        return json.dumps(payload, default=str)


def _console_handler(config: BaseConfig) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO if config.DEV_MODE else logging.WARNING)
    handler.setFormatter(
        logging.Formatter(
            fmt=_DEV_FORMAT if config.DEV_MODE else _PROD_FORMAT,
            datefmt="%H:%M:%S" if config.DEV_MODE else "%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach console and rotating JSON file handlers to the ``spendwell`` logger.

    Safe to call once per app factory: handlers from a previous call are
    closed and replaced.

    Args:
        config: Application configuration with DATA_DIR and DEV_MODE

    Returns:
        The configured ``spendwell`` logger
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / LOG_FILENAME

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(config))
    logger.addHandler(_file_handler(log_file))

    logger.info(
        "Logging initialized",
        extra={
            "dev_mode": config.DEV_MODE,
            "log_file": str(log_file),
            "data_dir": config.DATA_DIR,
        },
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``spendwell`` namespace, e.g. ``services.savings``."""

    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
