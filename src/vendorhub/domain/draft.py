# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
In-flight vendor registration draft.

A draft holds raw user input between the Registration and Payment screens.
It is never persisted; it becomes a VendorRecord only at payment time.
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from vendorhub.domain.value_objects import Coordinate, DocumentRef


class VendorDraft(BaseModel):
    """
    Registration form data.

    Location is either captured automatically (``location``) or entered by
    hand (``manual_latitude`` / ``manual_longitude``), never both: use
    ``set_auto_location`` and ``set_manual_location`` to change it.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str = ""
    shop_name: str = ""
    phone: str = ""
    email: str = ""
    aadhaar_number: str = ""
    pan_number: str = ""
    gst_number: str = ""
    address: str = ""
    location: Coordinate | None = None
    manual_latitude: str = ""
    manual_longitude: str = ""
    aadhaar_image: DocumentRef | None = None
    pan_image: DocumentRef | None = None
    shop_image: DocumentRef | None = None

    @model_validator(mode="after")
    def _auto_location_wins(self) -> Self:
        # Raw input carrying both forms keeps the captured coordinate.
        if self.location is not None:
            self.manual_latitude = ""
            self.manual_longitude = ""
        return self

    def set_auto_location(self, coordinate: Coordinate) -> None:
        """Store a captured coordinate and clear any manual entry."""
        self.location = coordinate
        self.manual_latitude = ""
        self.manual_longitude = ""

    def set_manual_location(self, latitude: str, longitude: str) -> None:
        """Store manually typed coordinates and clear any captured location."""
        self.location = None
        self.manual_latitude = latitude
        self.manual_longitude = longitude

    def clear_location(self) -> None:
        self.location = None
        self.manual_latitude = ""
        self.manual_longitude = ""

    @property
    def has_manual_location(self) -> bool:
        return bool(self.manual_latitude.strip() or self.manual_longitude.strip())

    def resolved_location(self) -> Coordinate | None:
        """Collapse the two location forms into one coordinate.

        Manual strings are parsed here; call only on a validated draft.

        Raises:
            ValueError: If the manual values do not form a valid coordinate
        """
        if self.location is not None:
            return self.location
        if self.manual_latitude.strip() and self.manual_longitude.strip():
            return Coordinate(
                latitude=float(self.manual_latitude),
                longitude=float(self.manual_longitude),
            )
        return None
