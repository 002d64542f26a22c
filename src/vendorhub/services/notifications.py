# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
User-facing notifications and the simulated confirmation email.
"""

from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from vendorhub.domain import VendorRecord
from vendorhub.logging import LoggerProtocol


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class Notification(BaseModel):
    """Non-blocking message shown to the user after an action."""

    level: NotificationLevel
    message: str


@runtime_checkable
class Notifier(Protocol):
    async def registration_confirmed(self, record: VendorRecord) -> None: ...


class LoggingNotifier:
    """Records the confirmation email in the log instead of sending it."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def registration_confirmed(self, record: VendorRecord) -> None:
        self._logger.info(
            "Email notification sent",
            to=record.email,
            vendor_id=record.id,
            plan=record.plan,
        )
