# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Field-level validation for registration drafts.

Every rule runs independently; the first failing condition for a field is
recorded. Validation has no side effects and is deterministic.

Usage:
    errors = validate(draft)
    if errors:
        ...  # show errors[field] next to each input
"""

import math
import re
from typing import Final

from vendorhub.domain.draft import VendorDraft
from vendorhub.errors import RegistrationValidationError

PHONE_PATTERN: Final = re.compile(r"^[6-9]\d{9}$", re.ASCII)
EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DECIMAL_PATTERN: Final = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)

INVALID_PHONE: Final = "invalid phone"
INVALID_EMAIL: Final = "invalid email"
IDENTIFICATION_REQUIRED: Final = "identification required"
INVALID_LATITUDE: Final = "invalid latitude"
INVALID_LONGITUDE: Final = "invalid longitude"
SHOP_IMAGE_REQUIRED: Final = "shop image required"

_REQUIRED_TEXT: Final = {
    "name": "name required",
    "shop_name": "shop name required",
    "phone": "phone required",
    "email": "email required",
    "gst_number": "gst number required",
    "address": "address required",
}


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def parse_bounded(value: str, limit: float) -> float | None:
    """Parse ``value`` as a finite real number within [-limit, limit]."""
    if value is None or DECIMAL_PATTERN.fullmatch(value.strip()) is None:
        return None
    number = float(value)
    if not math.isfinite(number) or not -limit <= number <= limit:
        return None
    return number


def is_valid_phone(phone: str) -> bool:
    return PHONE_PATTERN.fullmatch(phone) is not None


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate(draft: VendorDraft) -> dict[str, str]:
    """Check a draft against every field rule.

    Args:
        draft: The registration draft to check

    Returns:
        Mapping of field name to error message; empty when the draft is valid
    """
    errors: dict[str, str] = {}

    for field, message in _REQUIRED_TEXT.items():
        if _blank(getattr(draft, field)):
            errors[field] = message

    if "phone" not in errors and not is_valid_phone(draft.phone):
        errors["phone"] = INVALID_PHONE
    if "email" not in errors and not is_valid_email(draft.email):
        errors["email"] = INVALID_EMAIL

    if _blank(draft.aadhaar_number) and _blank(draft.pan_number):
        errors["aadhaar_number"] = IDENTIFICATION_REQUIRED

    if draft.location is None and draft.has_manual_location:
        # A coordinate entered on one axis only is rejected on the missing axis.
        if parse_bounded(draft.manual_latitude, 90) is None:
            errors["manual_latitude"] = INVALID_LATITUDE
        if parse_bounded(draft.manual_longitude, 180) is None:
            errors["manual_longitude"] = INVALID_LONGITUDE

    if draft.shop_image is None:
        errors["shop_image"] = SHOP_IMAGE_REQUIRED

    return errors


def ensure_valid(draft: VendorDraft) -> VendorDraft:
    """Return the draft unchanged if it is valid.

    Raises:
        RegistrationValidationError: With the full error mapping otherwise
    """
    errors = validate(draft)
    if errors:
        raise RegistrationValidationError(errors)
    return draft
