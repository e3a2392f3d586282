"""
Structured logging for the generic server.

Log calls take keyword context (``logger.info("Entity created",
entity="Book", entity_id=...)``). The entity context that repositories and
controllers attach is rendered as first-class fields: top-level keys in
JSON output, a ``[Book 3f2a9c1e]`` tag in the console output. Any other
keywords travel as free-form data.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from crud_shared.config.settings import settings

# Context keys promoted out of the free-form data
ENTITY_KEYS = ("entity", "entity_id", "operation")

NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "aiosqlite": logging.WARNING,
    "httpx": logging.WARNING,
}


def split_context(record: logging.LogRecord) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a record's keyword context into (entity context, remaining data)."""
    data = dict(getattr(record, "extra_data", None) or {})
    entity = {key: data.pop(key) for key in ENTITY_KEYS if data.get(key) is not None}
    for key in ENTITY_KEYS:
        data.pop(key, None)
    return entity, data


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    return request_id if request_id and request_id != "-" else None


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for log aggregation."""

    def __init__(self, include_source: bool = False):
        super().__init__()
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        entity, data = split_context(record)
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **entity,
        }

        request_id = _request_id(record)
        if request_id:
            log_data["request_id"] = request_id
        if data:
            log_data["data"] = data
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        if self.include_source:
            log_data["source"] = f"{record.pathname}:{record.lineno} ({record.funcName})"

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Coloured single-line console output."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{self.RESET}" if self.use_color else text

    def format(self, record: logging.LogRecord) -> str:
        entity, data = split_context(record)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        level = self._paint(
            f"{record.levelname:8}", self.LEVEL_COLORS.get(record.levelno, self.RESET)
        )

        parts = [f"[{timestamp}] {level}"]
        request_id = _request_id(record)
        if request_id:
            parts.append(self._paint(f"<{request_id[:8]}>", self.DIM))
        parts.append(f"{record.name}:")
        if "entity" in entity:
            tag = entity["entity"]
            if "entity_id" in entity:
                tag += f" {str(entity['entity_id'])[:8]}"
            if "operation" in entity:
                tag += f" {entity['operation']}"
            parts.append(f"[{tag}]")
        parts.append(record.getMessage())

        message = " ".join(parts)
        if data:
            message += " (" + ", ".join(f"{k}={v}" for k, v in data.items()) + ")"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


class StructuredLogger(logging.Logger):
    """
    Logger whose level methods accept keyword context.

    Usage:
        logger.info("Entity created", entity="Book", entity_id=book.id)
        logger.error("Commit failed", entity="Book", exc_info=exc)
    """

    def _log_with_data(
        self,
        level: int,
        msg: str,
        args: tuple,
        exc_info: Any = None,
        stacklevel: int = 1,
        **context: Any,
    ) -> None:
        if not self.isEnabledFor(level):
            return
        # Skip this frame and the level method so records point at the caller
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra={"extra_data": context or None},
            stacklevel=stacklevel + 2,
        )

    def debug(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_data(logging.DEBUG, msg, args, **context)

    def info(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_data(logging.INFO, msg, args, **context)

    def warning(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_data(logging.WARNING, msg, args, **context)

    def error(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_data(logging.ERROR, msg, args, **context)

    def critical(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_data(logging.CRITICAL, msg, args, **context)


logging.setLoggerClass(StructuredLogger)


def build_formatter() -> logging.Formatter:
    """Pick the output format from settings ("json", "text" or "auto")."""
    log_format = settings.log_format
    if log_format == "auto":
        log_format = "json" if settings.environment == "production" else "text"
    if log_format == "json":
        return StructuredFormatter(include_source=settings.debug)
    return DevelopmentFormatter(use_color=sys.stdout.isatty())


def setup_logging() -> None:
    """Install the stdout handler on the root logger. Called from the lifespan."""
    from crud_shared.infrastructure.correlation import CorrelationIdFilter

    level = settings.log_level or ("DEBUG" if settings.debug else "INFO")

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(build_formatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )


def get_logger(name: str) -> StructuredLogger:
    """
    Get a logger instance with the given name.

    Usage:
        from crud_shared.config.logging import get_logger
        logger = get_logger(__name__)

        logger.info("Entity deleted", entity="Author", entity_id=author_id)
    """
    return logging.getLogger(name)  # type: ignore


# Application-level messages (startup, shutdown, configuration)
api_logger = get_logger("generic_server")
