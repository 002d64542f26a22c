# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Public API for vendorhub errors.
"""

from vendorhub.errors.base import (
    CONFLICT,
    EXTERNAL,
    INTERNAL,
    NOT_FOUND,
    PERSISTENCE,
    VALIDATION,
    WORKFLOW,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    VendorHubError,
)
from vendorhub.errors.definitions import (
    AuthenticationError,
    DuplicateIdError,
    GeolocationError,
    InvalidTransitionError,
    PaymentError,
    PersistenceError,
    RegistrationValidationError,
    UnknownPlanError,
    VendorNotFoundError,
)
from vendorhub.errors.result import Failure, Result, Success

__all__ = [
    # Base
    "VendorHubError",
    "ErrorCategory",
    "ErrorCode",
    "ErrorSeverity",
    # Categories
    "CONFLICT",
    "EXTERNAL",
    "INTERNAL",
    "NOT_FOUND",
    "PERSISTENCE",
    "VALIDATION",
    "WORKFLOW",
    # Concrete errors
    "AuthenticationError",
    "DuplicateIdError",
    "GeolocationError",
    "InvalidTransitionError",
    "PaymentError",
    "PersistenceError",
    "RegistrationValidationError",
    "UnknownPlanError",
    "VendorNotFoundError",
    # Result
    "Result",
    "Success",
    "Failure",
]
