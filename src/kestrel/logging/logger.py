"""
Logger implementation for kestrel.

This module provides the default logger implementation based on Python's
standard logging module, enhanced with structured logging capabilities.
"""

from __future__ import annotations

import contextlib
import datetime
import enum
import json
import logging
import sys
import uuid
from collections.abc import Generator
from logging import StreamHandler
from typing import Any, NoReturn

from kestrel.logging.config import LoggingSettings
from kestrel.logging.level import LogLevel

# LogRecord attribute carrying the structured context of a message
CONTEXT_ATTR = "kestrel_context"


class StructuredFormatter(logging.Formatter):
    """Formatter that supports structured logging with context data."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Initialize a structured formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
            include_level: Whether to include log level in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        fmt = "%(message)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        if include_level and not json_format:
            fmt = fmt + " [%(levelname)s]"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with structured data.

        Args:
            record: The log record to format

        Returns:
            Formatted log string
        """
        extra: dict[str, Any] = dict(getattr(record, CONTEXT_ATTR, None) or {})

        if self.json_format:
            return self._format_json(record, extra)
        message = super().format(record)
        return self._format_text(message, extra)

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "name": record.name,
            **extra,
        }

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["error"] = str(record.exc_info[1])

        return json.dumps(log_data, cls=KestrelJsonEncoder, ensure_ascii=False)

    def _format_text(self, message: str, extra: dict[str, Any]) -> str:
        if not extra:
            return message

        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return f"{message} {ctx_str}"

    def _format_value(self, value: Any) -> str:
        """Format a value for text output."""
        if isinstance(value, str):
            # Quote strings that contain spaces
            if " " in value:
                return f'"{value}"'
            return value
        if isinstance(value, type):
            return value.__qualname__
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, enum.Enum):
            return value.name
        if isinstance(value, BaseException):
            return f'"{value}"'
        try:
            return json.dumps(value, cls=KestrelJsonEncoder)
        except (TypeError, ValueError):
            return str(value)


class KestrelJsonEncoder(json.JSONEncoder):
    """JSON encoder that converts special types found in log context."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime.datetime | datetime.date):
            return obj.isoformat()
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, enum.Enum):
            return obj.value
        if isinstance(obj, type):
            return obj.__qualname__
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if hasattr(obj, "model_dump"):  # Pydantic v2 models
            return obj.model_dump()
        return str(obj)


class KestrelLogger:
    """Default logger implementation for kestrel.

    Wraps a standard library logger and attaches keyword context to every
    record so ``StructuredFormatter`` can render it.
    """

    def __init__(
        self,
        name: str,
        level: str | None = None,
        settings: LoggingSettings | None = None,
    ) -> None:
        """
        Initialize a new logger.

        Args:
            name: Logger name
            level: Log level override; defaults to the settings level
            settings: Optional logger settings (loads from environment if None)
        """
        self.name = name
        self._settings = settings or LoggingSettings.load()
        self._logger = logging.getLogger(name)
        self._configure(level or self._settings.level)

        # Bound context values for this logger instance
        self._bound_context: dict[str, Any] = {}
        self._context: dict[str, Any] = {}

    @property
    def settings(self) -> LoggingSettings:
        return self._settings

    def _configure(self, level: str) -> None:
        self._logger.setLevel(LogLevel.from_string(level).to_stdlib_level())

        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)

        formatter = StructuredFormatter(
            json_format=self._settings.json_format,
            include_timestamp=self._settings.include_timestamp,
            include_level=self._settings.include_level,
        )

        if self._settings.console_enabled:
            console = StreamHandler(sys.stdout)
            console.setFormatter(formatter)
            self._logger.addHandler(console)

        if self._settings.file_enabled and self._settings.file_path:
            file_handler = logging.FileHandler(self._settings.file_path)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)

        # Without any handler the records go to the root logger
        self._logger.propagate = not self._logger.handlers

    def _log(self, level: int, msg: str, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return

        combined_context = {**self._bound_context, **self._context, **kwargs}
        self._logger.log(
            level,
            msg,
            extra={CONTEXT_ATTR: combined_context},
            stacklevel=3,
        )

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, **kwargs)

    def fatal(self, message: str, exit_code: int = 1, **kwargs: Any) -> NoReturn:
        """Log a critical message and terminate the process.

        Args:
            message: Log message
            exit_code: Process exit status
            **kwargs: Additional context data

        Raises:
            SystemExit: Always
        """
        self._log(logging.CRITICAL, message, **kwargs)
        sys.exit(exit_code)

    def set_level(self, level: LogLevel) -> None:
        self._logger.setLevel(level.to_stdlib_level())

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._logger.isEnabledFor(level.to_stdlib_level())

    @contextlib.contextmanager
    def context(self, **kwargs: Any) -> Generator[None]:
        """
        Context manager for adding contextual information to log messages.

        Args:
            **kwargs: Context key-value pairs to add to log messages
        """
        original_context = self._context.copy()
        self._context.update(kwargs)
        try:
            yield
        finally:
            self._context = original_context

    def bind(self, **kwargs: Any) -> KestrelLogger:
        """Create a new logger with bound context values.

        Args:
            **kwargs: Context values to bind

        Returns:
            New logger instance with bound context
        """
        logger = KestrelLogger(
            self.name,
            level=logging.getLevelName(self._logger.level),
            settings=self._settings,
        )
        logger._bound_context = {**self._bound_context, **kwargs}
        return logger


def get_logger(name: str, level: LogLevel | None = None) -> KestrelLogger:
    """Get a logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    logger = KestrelLogger(name, settings=LoggingSettings.load())

    if level is not None:
        logger.set_level(level)

    return logger
