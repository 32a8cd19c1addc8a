"""Centralized logging configuration with environment variable support."""

import os
import logging
import sys
from pythonjsonlogger import jsonlogger

# Marks the handler installed by LoggingConfig so reconfiguring replaces only it.
_HANDLER_FLAG = "_equipcare_handler"

# Third-party loggers that are noisy below WARNING.
QUIET_LOGGERS = ("reportlab", "PIL")


class LoggingConfig:
    """Centralized logging configuration."""

    # Environment variable defaults
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json").lower()
    LOG_SLOW_OPERATION_THRESHOLD_MS = int(os.environ.get("LOG_SLOW_OPERATION_THRESHOLD_MS", "1000"))

    @classmethod
    def build_formatter(cls) -> logging.Formatter:
        if cls.LOG_FORMAT == "json":
            return jsonlogger.JsonFormatter(
                "%(timestamp)s %(levelname)s %(name)s %(message)s",
                timestamp=True
            )
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    @classmethod
    def setup_logging(cls) -> logging.Handler:
        """
        Install the stdout handler on the root logger.

        Safe to call more than once: a handler installed by an earlier call is
        replaced, handlers added by anything else are left alone.
        """
        level = getattr(logging, cls.LOG_LEVEL, logging.INFO)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        for existing in [h for h in root_logger.handlers if getattr(h, _HANDLER_FLAG, False)]:
            root_logger.removeHandler(existing)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(cls.build_formatter())
        setattr(handler, _HANDLER_FLAG, True)
        root_logger.addHandler(handler)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
