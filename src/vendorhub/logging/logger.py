# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Logger implementation for vendorhub.

This module provides the default logger implementation based on Python's
standard logging module, enhanced with structured logging capabilities.
"""

from __future__ import annotations

import copy
import datetime
import enum
import json
import logging
import sys
import uuid
from logging import StreamHandler
from typing import Any, TextIO

from vendorhub.logging.config import LoggingSettings
from vendorhub.logging.level import LogLevel
from vendorhub.logging.protocols import LoggerProtocol

_CONTEXT_ATTR = "vendorhub_context"


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
        extra: dict[str, Any] = dict(getattr(record, _CONTEXT_ATTR, None) or {})
        if self.json_format:
            return self._format_json(record, extra)
        message = super().format(record)
        return self._format_text(message, extra)

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "logger": record.name,
            **extra,
        }
        if self.include_level:
            log_data["level"] = record.levelname
        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, cls=VendorHubJsonEncoder, ensure_ascii=False)

    def _format_text(self, message: str, extra: dict[str, Any]) -> str:
        if not extra:
            return message
        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return f"{message} {ctx_str}"

    def _format_value(self, value: Any) -> str:
        """Format a value for text output."""
        if isinstance(value, enum.Enum):
            value = value.value
        if isinstance(value, str):
            # Quote strings that contain spaces
            if " " in value:
                return f'"{value}"'
            return value
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        if isinstance(value, uuid.UUID):
            return str(value)
        try:
            return json.dumps(value, cls=VendorHubJsonEncoder, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)


class VendorHubJsonEncoder(json.JSONEncoder):
    """JSON encoder that handles dates, enums, UUIDs and pydantic models."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, enum.Enum):
            return obj.value
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        if isinstance(obj, BaseException):
            return str(obj)
        return str(obj)


class VendorHubLogger(LoggerProtocol):
    """Default logger implementation for vendorhub."""

    def __init__(
        self,
        name: str,
        settings: LoggingSettings | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """
        Initialize a new logger.

        Args:
            name: Logger name
            settings: Optional logger settings (loads from environment if None)
            stream: Console stream, defaults to stdout
        """
        self.name = name
        self._settings = settings or LoggingSettings.load()
        self._stream = stream
        self._logger = logging.getLogger(name)
        self._bound_context: dict[str, Any] = {}
        self._configure()

    def _configure(self) -> None:
        self._logger.setLevel(self._settings.level.upper())

        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        formatter = StructuredFormatter(
            json_format=self._settings.json_format,
            include_timestamp=self._settings.include_timestamp,
            include_level=self._settings.include_level,
        )

        if self._settings.console_enabled:
            console = StreamHandler(self._stream or sys.stdout)
            console.setFormatter(formatter)
            self._logger.addHandler(console)

        if self._settings.file_enabled and self._settings.file_path:
            file_handler = logging.FileHandler(self._settings.file_path)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)

        self._logger.propagate = False

    def _log(self, level: int, msg: str, **kwargs: Any) -> None:
        combined_context = {**self._bound_context, **kwargs}
        self._logger.log(level, msg, extra={_CONTEXT_ATTR: combined_context})

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, msg, **kwargs)

    def set_level(self, level: LogLevel) -> None:
        self._logger.setLevel(level.to_stdlib_level())

    def bind(self, **kwargs: Any) -> VendorHubLogger:
        """Create a new logger with bound context values.

        The new logger shares the stdlib logger of the original, so its
        handlers and level are left as they are.
        """
        logger = copy.copy(self)
        logger._bound_context = {**self._bound_context, **kwargs}
        return logger


def get_logger(
    name: str,
    level: LogLevel | None = None,
    settings: LoggingSettings | None = None,
) -> VendorHubLogger:
    """Get a logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override
        settings: Optional settings, loaded from the environment if omitted

    Returns:
        Configured logger instance
    """
    logger = VendorHubLogger(name, settings=settings or LoggingSettings.load())
    if level is not None:
        logger.set_level(level)
    return logger
