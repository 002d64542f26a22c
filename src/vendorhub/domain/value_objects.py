# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Value objects for the vendor domain: Coordinate, DocumentRef, VendorStatus.

Value objects are immutable and compared by their attributes.

Example:
    Coordinate(latitude=28.6139, longitude=77.2090)
    Coordinate(latitude=95, longitude=0)  # Raises ValidationError
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class ValueObject(BaseModel):
    """Base class for value objects.

    Features:
    - Immutable after creation
    - Value-based equality
    - Hashable for use in sets and dictionaries
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash((type(self),) + tuple(self.model_dump().values()))

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.model_dump().items())
        return f"{self.__class__.__name__}({attrs})"


class Coordinate(ValueObject):
    """A geographic position in decimal degrees."""

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)


class DocumentRef(ValueObject):
    """Reference to an uploaded attachment (identity, PAN or shop image).

    Only metadata is kept; the binary content stays with the upload handler.
    """

    filename: str = Field(min_length=1)
    content_type: str = Field(default="application/octet-stream", alias="contentType")
    size: int = Field(default=0, ge=0)

    @classmethod
    def from_upload(
        cls, filename: str, content: bytes, content_type: str | None = None
    ) -> "DocumentRef":
        return cls(
            filename=filename,
            content_type=content_type or "application/octet-stream",
            size=len(content),
        )


class VendorStatus(str, Enum):
    """Admin-assigned vendor status. Any value may follow any other."""

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"

    @classmethod
    def parse(cls, value: Any) -> "VendorStatus":
        """Parse a status from user input (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"Invalid status: {value!r} (expected one of {allowed})")
