# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
"""
Tests for the vendorhub error hierarchy and Result types.
"""

import pytest

from vendorhub.errors import (
    PERSISTENCE,
    DuplicateIdError,
    ErrorSeverity,
    Failure,
    InvalidTransitionError,
    PersistenceError,
    RegistrationValidationError,
    Success,
    VendorHubError,
    VendorNotFoundError,
)


def test_base_error_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        VendorHubError("boom")


def test_error_to_dict() -> None:
    error = VendorNotFoundError("v-9", requested_by="admin")
    data = error.to_dict()
    assert data["code"] == "VENDOR_NOT_FOUND"
    assert data["category"] == "NOT_FOUND"
    assert data["severity"] == "error"
    assert data["context"] == {"vendor_id": "v-9", "requested_by": "admin"}
    assert str(error) == "VENDOR_NOT_FOUND: Vendor not found: v-9"


def test_duplicate_id_is_critical() -> None:
    assert DuplicateIdError("v-1").severity is ErrorSeverity.CRITICAL


def test_persistence_error_category() -> None:
    error = PersistenceError()
    assert error.message == "Could not save"
    assert error.category == PERSISTENCE
    assert error.to_dict()["code"] == "STORE_UNAVAILABLE"


def test_invalid_transition_message() -> None:
    error = InvalidTransitionError("home", "pay")
    assert error.message == "Cannot pay from home"


def test_validation_error_carries_field_errors() -> None:
    error = RegistrationValidationError({"phone": "invalid phone", "email": "email required"})
    assert error.errors == {"phone": "invalid phone", "email": "email required"}
    assert error.message == "Registration is invalid: email, phone"


def test_success_and_failure() -> None:
    ok = Success(2)
    assert ok.is_success and not ok.is_failure
    assert ok.unwrap() == 2
    assert ok.error is None

    error = VendorNotFoundError("v-1")
    err = Failure(error)
    assert err.is_failure and not err.is_success
    assert err.value is None
    assert str(err) == "Failure(VENDOR_NOT_FOUND: Vendor not found: v-1)"


def test_failure_unwrap_raises_stored_error() -> None:
    error = InvalidTransitionError("home", "pay")
    with pytest.raises(InvalidTransitionError) as excinfo:
        Failure(error).unwrap()
    assert excinfo.value is error
