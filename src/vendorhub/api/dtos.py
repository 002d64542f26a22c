# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Request and response DTOs for the vendorhub HTTP API.

Payloads use camelCase keys, matching the persisted record layout.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vendorhub.domain import DEFAULT_PLAN, Coordinate, DocumentRef, VendorStatus
from vendorhub.services import ApplicationState, Notification


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DraftInputDTO(CamelModel):
    """
    Partial registration form. Only the fields present in the request are
    applied to the draft.
    """

    name: str | None = None
    shop_name: str | None = None
    phone: str | None = None
    email: str | None = None
    aadhaar_number: str | None = None
    pan_number: str | None = None
    gst_number: str | None = None
    address: str | None = None
    location: Coordinate | None = None
    manual_latitude: str | None = None
    manual_longitude: str | None = None
    aadhaar_image: DocumentRef | None = None
    pan_image: DocumentRef | None = None
    shop_image: DocumentRef | None = None

    def to_fields(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_unset=True)
        # location stays a value object so the controller can route it
        if self.location is not None:
            fields["location"] = self.location
        return fields


class ManualLocationDTO(BaseModel):
    latitude: str
    longitude: str


class PayDTO(BaseModel):
    plan: str = DEFAULT_PLAN.value


class LoginDTO(BaseModel):
    username: str
    password: str


class StatusUpdateDTO(BaseModel):
    status: VendorStatus


class WorkflowDTO(CamelModel):
    """Snapshot of the application state returned after every workflow call."""

    screen: str
    draft: dict[str, Any] | None = None
    admin_authenticated: bool = False
    processing_payment: bool = False
    last_record: dict[str, Any] | None = None
    notifications: list[Notification] = Field(default_factory=list)

    @classmethod
    def from_state(
        cls, state: ApplicationState, notifications: list[Notification]
    ) -> "WorkflowDTO":
        return cls(
            screen=state.screen.value,
            draft=state.draft.model_dump(mode="json", by_alias=True) if state.draft else None,
            admin_authenticated=state.admin_authenticated,
            processing_payment=state.processing_payment,
            last_record=state.last_record.to_storage() if state.last_record else None,
            notifications=notifications,
        )
