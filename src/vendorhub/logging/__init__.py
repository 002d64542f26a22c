# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub

"""
Public API for the vendorhub logging system.
"""

from __future__ import annotations

from vendorhub.logging.config import LoggingSettings
from vendorhub.logging.level import LogLevel
from vendorhub.logging.logger import StructuredFormatter, VendorHubLogger, get_logger
from vendorhub.logging.protocols import LoggerProtocol

__all__ = [
    "LoggerProtocol",
    "LogLevel",
    "LoggingSettings",
    "StructuredFormatter",
    "VendorHubLogger",
    "get_logger",
]
