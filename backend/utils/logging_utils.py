"""
Structured Logging Utilities

Provides logging setup plus utilities for adding structured context to log
messages, improving observability and debugging.
"""

import inspect
import logging
import sys
from contextvars import ContextVar
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from exceptions import InternalError, ApplicationError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger with a console handler and an optional
    rotating file handler (10MB per file, keep 5 backups).

    Calling it again replaces the handlers it installed before.
    """
    log_formatter = logging.Formatter(LOG_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    for handler in list(root_logger.handlers):
        if getattr(handler, "_movies_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._movies_handler = True
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(log_formatter)
        file_handler._movies_handler = True
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).info(f"Logging initialized (level={level.upper()}, file={log_file or '-'})")


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Movie created", extra={"movie_id": movie.id})
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def _format(self, message: str, context: Dict[str, Any]) -> str:
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} [{pairs}]"

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with structured context."""
        context = self._add_context(extra)
        self.logger.debug(self._format(message, context))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with structured context."""
        context = self._add_context(extra)
        self.logger.info(self._format(message, context))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with structured context."""
        context = self._add_context(extra)
        self.logger.warning(self._format(message, context))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log error message with structured context."""
        context = self._add_context(extra)
        self.logger.error(self._format(message, context), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    This context will be automatically included in all log messages
    within the current context (typically a request).

    Example:
        set_logging_context(request_id="abc-123", method="GET", path="/resource")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def log_operation(operation_name: str):
    """
    Decorator to automatically log operation start/end with structured context.

    Client-caused failures (ApplicationError other than InternalError) are
    logged as warnings without a traceback; everything else as errors.

    Example:
        @log_operation("delete_movie")
        def delete(self, movie_id: int):
            ...
    """
    def decorator(func):
        signature = inspect.signature(func)

        def _context(args, kwargs) -> Dict[str, Any]:
            context = {"operation": operation_name}
            try:
                bound = signature.bind_partial(*args, **kwargs).arguments
            except TypeError:
                bound = kwargs
            for key in ["movie_id", "page", "page_size"]:
                if bound.get(key) is not None:
                    context[key] = bound[key]
            return context

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _context(args, kwargs)

            logger.debug(f"Starting {operation_name}", extra=context)
            try:
                result = func(*args, **kwargs)
            except ApplicationError as e:
                context["error_type"] = type(e).__name__
                if isinstance(e, InternalError):
                    logger.error(f"Failed {operation_name}: {e.message}", extra=context, exc_info=True)
                else:
                    logger.warning(f"Rejected {operation_name}: {e.message}", extra=context)
                raise
            except Exception as e:
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}: {e}", extra=context, exc_info=True)
                raise
            logger.debug(f"Completed {operation_name}", extra=context)
            return result

        return sync_wrapper

    return decorator
