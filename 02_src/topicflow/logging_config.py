"""Structured logging configuration for topicflow."""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Agent/topic context attached by ContextAdapter
        if hasattr(record, "context"):
            log_data["context"] = record.context

        return json.dumps(log_data, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches a fixed context dict to every record."""

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        return msg, kwargs


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Setup structured logging for the process.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/app.log.
                  An empty string disables the file handler.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = str(DEFAULT_LOG_PATH)

    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    }

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10 MB
            "backupCount": 5,
            "formatter": "json",
            "encoding": "utf-8",
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "topicflow.logging_config.JSONFormatter",
            },
        },
        "handlers": handlers,
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
    }

    logging.config.dictConfig(logging_config)


def get_logger(name: str, **context) -> logging.Logger | ContextAdapter:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module)
        **context: Optional fields (agent, topic, ...) added to every record

    Returns:
        Logger instance, wrapped in a ContextAdapter when context is given
    """
    logger = logging.getLogger(name)
    if context:
        return ContextAdapter(logger, context)
    return logger
