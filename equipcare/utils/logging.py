"""Structured logging utilities with correlation IDs, bound fields and performance timing."""

import logging
import time
import uuid
from typing import Any, Optional, Dict, Callable
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from datetime import datetime, timezone

from equipcare.utils.logging_config import LoggingConfig, get_logger


_correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracing."""
    return f"req_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> Optional[str]:
    return _correlation_id_var.get()


@contextmanager
def correlation_context(correlation_id: Optional[str] = None):
    """Run a block under ``correlation_id`` (a fresh one when None); yields the id."""
    token = _correlation_id_var.set(correlation_id or generate_correlation_id())
    try:
        yield _correlation_id_var.get()
    finally:
        _correlation_id_var.reset(token)


def preview_text(text: Optional[str], max_length: int = 80) -> Optional[str]:
    """Shorten free text (descriptions, notes, data URIs) for log fields."""
    if not text:
        return None
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


class StructuredLogger:
    """
    Logger that takes structured fields as keyword arguments.

    Fields end up as attributes on the LogRecord (and as keys in JSON output).
    Fields given to ``bind`` are attached to every record; fields whose value
    is None are dropped.
    """

    def __init__(self, logger: logging.Logger, bound: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self.bound = dict(bound or {})

    def bind(self, **fields: Any) -> "StructuredLogger":
        """Child logger that adds ``fields`` to every record."""
        return StructuredLogger(self.logger, {**self.bound, **fields})

    def _get_extra(self, **kwargs: Any) -> Dict[str, Any]:
        extra = {"timestamp": datetime.now(timezone.utc).isoformat()}

        correlation_id = get_correlation_id()
        if correlation_id:
            extra["correlation_id"] = correlation_id

        for key, value in {**self.bound, **kwargs}.items():
            if value is not None:
                extra[key] = value
        return extra

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, message, extra=self._get_extra(**kwargs), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)


def get_structured_logger(name: str) -> StructuredLogger:
    return StructuredLogger(get_logger(name))


@contextmanager
def log_timing(operation_name: str, logger: Optional[StructuredLogger] = None,
               threshold_ms: Optional[float] = None, **context: Any):
    """
    Time a block and log its duration.

    A WARNING is added when the block takes longer than ``threshold_ms``
    (default LOG_SLOW_OPERATION_THRESHOLD_MS).
    """
    log = logger or get_structured_logger(__name__)
    limit = LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS if threshold_ms is None else threshold_ms

    start_time = time.perf_counter()
    log.debug(f"Starting {operation_name}", operation=operation_name, **context)
    try:
        yield
    finally:
        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        log.info(f"Completed {operation_name}", operation=operation_name, processing_time_ms=elapsed_ms, **context)
        if elapsed_ms > limit:
            log.warning(
                f"Slow operation detected: {operation_name}",
                operation=operation_name,
                processing_time_ms=elapsed_ms,
                threshold_ms=limit,
                **context
            )


def timed(operation_name: Optional[str] = None, logger: Optional[StructuredLogger] = None):
    """Decorator form of ``log_timing``."""
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or f"{func.__module__}.{func.__name__}"
        log = logger or get_structured_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            with log_timing(op_name, logger=log):
                return func(*args, **kwargs)

        return wrapper

    return decorator


def setup_logging() -> logging.Logger:
    """Set up structured logging and return the package logger."""
    LoggingConfig.setup_logging()
    return get_logger("equipcare")
