# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub

"""
Logging interface definitions for vendorhub.
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """
    Protocol defining the interface for loggers in vendorhub.

    Components receive a logger through their constructor and only rely on
    this surface.
    """

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log a debug message."""
        ...

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log an info message."""
        ...

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log a warning message."""
        ...

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log an error message."""
        ...

    def critical(self, msg: str, **kwargs: Any) -> None:
        """Log a critical message."""
        ...

    def bind(self, **kwargs: Any) -> LoggerProtocol:
        """Return a logger with extra context bound to every message."""
        ...
