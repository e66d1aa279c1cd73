"""Logging configuration using structlog."""

import logging
import sys
import time
from typing import Any, Dict, Optional

import structlog

from .config import settings


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None):
    """Configure structured logging.

    Falls back to ``settings.LOG_LEVEL`` / ``settings.LOG_JSON`` when the
    arguments are omitted.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    if json_output is None:
        json_output = settings.LOG_JSON

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level_name, logging.INFO),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Get a configured logger instance."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)


def _elapsed_ms(context: Dict[str, Any]) -> Optional[int]:
    started = context.get("started_at")
    if started is None:
        return None
    return int((time.perf_counter() - started) * 1000)


class LoggerMixin:
    """Adds a class-named logger and timed operation logging.

    ``log_start`` returns a context that ``log_success`` or ``log_error``
    closes out; both repeat the start fields and add ``duration_ms``.
    """

    @property
    def logger(self) -> structlog.BoundLogger:
        logger = self.__dict__.get("_logger")
        if logger is None:
            logger = self._logger = get_logger(type(self).__name__)
        return logger

    def log_start(self, event: str, **fields: Any) -> Dict[str, Any]:
        self.logger.info(f"{event} started", **fields)
        return {"event": event, "started_at": time.perf_counter(), **fields}

    @staticmethod
    def _closing_fields(context: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
        closing = {k: v for k, v in context.items() if k not in ("event", "started_at")}
        elapsed = _elapsed_ms(context)
        if elapsed is not None:
            closing["duration_ms"] = elapsed
        closing.update(fields)
        return closing

    def log_success(self, context: Dict[str, Any], **fields: Any):
        event = context.get("event", "operation")
        self.logger.info(f"{event} completed", **self._closing_fields(context, fields))

    def log_error(self, context: Dict[str, Any], error: Exception, **fields: Any):
        event = context.get("event", "operation")
        self.logger.error(
            f"{event} failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._closing_fields(context, fields),
        )
