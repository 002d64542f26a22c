# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Mapping of vendorhub errors to HTTP responses.
"""

from typing import Final

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from vendorhub.errors import (
    AuthenticationError,
    DuplicateIdError,
    GeolocationError,
    InvalidTransitionError,
    PaymentError,
    PersistenceError,
    RegistrationValidationError,
    UnknownPlanError,
    VendorHubError,
    VendorNotFoundError,
)
from vendorhub.logging import LoggerProtocol

STATUS_BY_ERROR: Final[dict[type[VendorHubError], int]] = {
    RegistrationValidationError: 422,
    UnknownPlanError: 422,
    GeolocationError: 422,
    VendorNotFoundError: 404,
    DuplicateIdError: 409,
    InvalidTransitionError: 409,
    AuthenticationError: 401,
    PaymentError: 402,
    PersistenceError: 503,
}


def status_for(error: VendorHubError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status_code
    return 500


def register_error_handlers(app: FastAPI, logger: LoggerProtocol) -> None:
    """Install the handler that renders every ``VendorHubError`` as JSON.

    The body carries the error's ``to_dict()`` form and any notifications
    the failed action produced.
    """

    @app.exception_handler(VendorHubError)
    async def vendorhub_error_handler(request: Request, exc: VendorHubError) -> JSONResponse:
        status_code = status_for(exc)
        logger.warning(
            "Request failed",
            path=request.url.path,
            code=exc.code.code,
            status_code=status_code,
        )
        controller = getattr(request.app.state, "controller", None)
        notifications = controller.drain_notifications() if controller is not None else []
        return JSONResponse(
            status_code=status_code,
            content={
                "error": exc.to_dict(),
                "notifications": [n.model_dump(mode="json") for n in notifications],
            },
        )
