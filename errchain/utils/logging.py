"""
Structured logging for error chains.

This module provides:
- JSON formatted log output that understands ErrorChain exceptions
- Context injection via LoggerAdapter
- A helper that logs a chain with its depth and root cause
"""

import logging
import json
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional, MutableMapping
from logging import LogRecord

from errchain.chain import ErrorChain, cause
from errchain.config import settings

_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON with standard fields:
    - timestamp: ISO 8601 formatted timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - context: Additional context fields
    - error: Error details when the record carries exception info
    """

    def format(self, record: LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_data["context"] = extra_fields

        if record.exc_info and record.exc_info[1] is not None:
            log_data["error"] = self._format_error(record.exc_info)

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName
        }

        return json.dumps(log_data, default=str)

    @staticmethod
    def _format_error(exc_info) -> Dict[str, Any]:
        exc_type, exc, _ = exc_info
        if isinstance(exc, ErrorChain):
            root = cause(exc)
            return {
                "type": exc_type.__name__,
                "message": str(exc),
                "depth": exc.depth(),
                "cause": str(root) if root is not None else None,
            }
        return {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc),
            "stack_trace": "".join(traceback.format_exception(*exc_info)),
        }


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that injects context fields into all log records.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextLoggerAdapter":
        """
        Create a new logger adapter with additional context.

        Args:
            **context: Additional context fields

        Returns:
            New logger adapter with merged context
        """
        new_extra = self.extra.copy()
        new_extra.update(context)
        return ContextLoggerAdapter(self.logger, new_extra)


def setup_logging(log_level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configure logging for an application that reports error chains.

    Args:
        log_level: Log level, defaults to settings.log_level
        json_logs: Use JSONFormatter, defaults to settings.log_json
    """
    level = (log_level or settings.log_level).upper()
    if json_logs is None:
        json_logs = settings.log_json

    if json_logs:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)


def get_logger(name: str, **context: Any) -> ContextLoggerAdapter:
    """
    Get a context-aware logger for a module.

    Example:
        logger = get_logger(__name__, request_id="abc")
        logger.error("Request failed: %s", err)
    """
    base_logger = logging.getLogger(name)
    return ContextLoggerAdapter(base_logger, context)


def log_error_chain(
    logger: logging.LoggerAdapter,
    message: str,
    error: BaseException,
    **context: Any
) -> None:
    """
    Log an error together with its chain and root cause.

    Args:
        logger: Logger to use
        message: Log message
        error: Error chain or any other exception
        **context: Additional context fields, logged under "error_context"
            so they cannot clash with LogRecord attributes
    """
    root = cause(error)
    extra: Dict[str, Any] = {"error_context": dict(context)}
    extra["error_chain"] = str(error)
    extra["error_depth"] = error.depth() if isinstance(error, ErrorChain) else 1
    extra["root_cause"] = str(root) if root is not None else None

    logger.error(message, extra=extra)
