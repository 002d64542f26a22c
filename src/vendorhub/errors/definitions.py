# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Concrete error types raised by vendorhub components.

Validation and external-dependency errors are recovered by the workflow
(state is kept, the user may retry). Not-found, duplicate and persistence
errors are surfaced to the caller of the registry.
"""

from typing import Any, Final

from vendorhub.errors.base import (
    CONFLICT,
    EXTERNAL,
    NOT_FOUND,
    PERSISTENCE,
    VALIDATION,
    WORKFLOW,
    ErrorCode,
    ErrorSeverity,
    VendorHubError,
)

REGISTRATION_INVALID: Final = ErrorCode("REGISTRATION_INVALID", VALIDATION)
UNKNOWN_PLAN: Final = ErrorCode("UNKNOWN_PLAN", VALIDATION)
VENDOR_NOT_FOUND: Final = ErrorCode("VENDOR_NOT_FOUND", NOT_FOUND)
DUPLICATE_ID: Final = ErrorCode("DUPLICATE_ID", CONFLICT)
INVALID_TRANSITION: Final = ErrorCode("INVALID_TRANSITION", WORKFLOW)
PAYMENT_FAILED: Final = ErrorCode("PAYMENT_FAILED", EXTERNAL)
GEOLOCATION_FAILED: Final = ErrorCode("GEOLOCATION_FAILED", EXTERNAL)
AUTHENTICATION_FAILED: Final = ErrorCode("AUTHENTICATION_FAILED", EXTERNAL)
STORE_UNAVAILABLE: Final = ErrorCode("STORE_UNAVAILABLE", PERSISTENCE)


class RegistrationValidationError(VendorHubError):
    """A draft failed one or more field rules.

    Attributes:
        errors: Mapping of field name to the first failing message for it.
    """

    def __init__(self, errors: dict[str, str], **kwargs: Any) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(
            f"Registration is invalid: {fields}",
            code=REGISTRATION_INVALID,
            severity=ErrorSeverity.WARNING,
            context={"errors": self.errors},
            **kwargs,
        )


class UnknownPlanError(VendorHubError):
    def __init__(self, plan_id: str, **kwargs: Any) -> None:
        self.plan_id = plan_id
        super().__init__(
            f"Unknown plan: {plan_id}",
            code=UNKNOWN_PLAN,
            severity=ErrorSeverity.WARNING,
            context={"plan_id": plan_id},
            **kwargs,
        )


class VendorNotFoundError(VendorHubError):
    def __init__(self, vendor_id: str, **kwargs: Any) -> None:
        self.vendor_id = vendor_id
        super().__init__(
            f"Vendor not found: {vendor_id}",
            code=VENDOR_NOT_FOUND,
            context={"vendor_id": vendor_id},
            **kwargs,
        )


class DuplicateIdError(VendorHubError):
    """A record with the same id is already in the registry.

    This indicates an id-generation fault; the record is not re-added.
    """

    def __init__(self, vendor_id: str, **kwargs: Any) -> None:
        self.vendor_id = vendor_id
        super().__init__(
            f"Vendor id already exists: {vendor_id}",
            code=DUPLICATE_ID,
            severity=ErrorSeverity.CRITICAL,
            context={"vendor_id": vendor_id},
            **kwargs,
        )


class InvalidTransitionError(VendorHubError):
    def __init__(self, state: str, event: str, **kwargs: Any) -> None:
        self.state = state
        self.event = event
        super().__init__(
            f"Cannot {event} from {state}",
            code=INVALID_TRANSITION,
            severity=ErrorSeverity.WARNING,
            context={"state": state, "event": event},
            **kwargs,
        )


class PaymentError(VendorHubError):
    def __init__(self, message: str = "Payment failed. Please try again.", **kwargs: Any) -> None:
        super().__init__(message, code=PAYMENT_FAILED, severity=ErrorSeverity.WARNING, **kwargs)


class GeolocationError(VendorHubError):
    def __init__(
        self,
        message: str = "Failed to get location. Please enable location services.",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=GEOLOCATION_FAILED, severity=ErrorSeverity.WARNING, **kwargs)


class AuthenticationError(VendorHubError):
    def __init__(self, message: str = "Invalid credentials", **kwargs: Any) -> None:
        super().__init__(message, code=AUTHENTICATION_FAILED, severity=ErrorSeverity.WARNING, **kwargs)


class PersistenceError(VendorHubError):
    """The key-value store could not be read or written."""

    def __init__(self, message: str = "Could not save", **kwargs: Any) -> None:
        super().__init__(message, code=STORE_UNAVAILABLE, **kwargs)
