# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Admin session gate.

The gate only tracks whether the admin console is unlocked; the credential
check itself is an external collaborator.
"""

import hmac
from typing import Protocol, runtime_checkable

from vendorhub.logging import LoggerProtocol


@runtime_checkable
class CredentialCheck(Protocol):
    def check(self, username: str, password: str) -> bool: ...


class StaticCredentialCheck:
    """Compares against one fixed username/password pair (demo only)."""

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    def check(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode(), self._username.encode())
        password_ok = hmac.compare_digest(password.encode(), self._password.encode())
        return user_ok and password_ok


class SessionGate:
    """Boolean admin session driven by a credential check."""

    def __init__(self, credential_check: CredentialCheck, logger: LoggerProtocol) -> None:
        self._check = credential_check
        self._logger = logger
        self._authenticated = False

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def login(self, username: str, password: str) -> bool:
        """Unlock the session if the credential check passes.

        A failed attempt leaves the current session flag untouched.
        """
        if self._check.check(username, password):
            self._authenticated = True
            self._logger.info("Admin login succeeded", username=username)
            return True
        self._logger.warning("Admin login rejected", username=username)
        return False

    def logout(self) -> None:
        self._authenticated = False
        self._logger.info("Admin logged out")
