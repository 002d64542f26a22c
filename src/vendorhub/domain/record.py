# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Persisted vendor record.
"""

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vendorhub.domain.draft import VendorDraft
from vendorhub.domain.plans import PlanId, get_plan
from vendorhub.domain.value_objects import Coordinate, DocumentRef, VendorStatus


def new_vendor_id() -> str:
    """Generate a vendor id. Ids are random and never reused."""
    return uuid.uuid4().hex


class VendorRecord(BaseModel):
    """
    One registered vendor, as stored in the registry.

    Records are immutable; a status change produces a new instance through
    ``with_status``. Serialized with camelCase keys.

    Attributes:
        id: Unique identifier assigned at creation
        plan: Chosen subscription plan
        registration_date: Date of creation
        status: Admin-assigned status, initially pending
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: str = Field(min_length=1)
    name: str
    shop_name: str
    phone: str
    email: str
    aadhaar_number: str = ""
    pan_number: str = ""
    gst_number: str
    address: str
    location: Coordinate | None = None
    aadhaar_image: DocumentRef | None = None
    pan_image: DocumentRef | None = None
    shop_image: DocumentRef | None = None
    plan: PlanId
    registration_date: date
    status: VendorStatus = VendorStatus.PENDING

    @classmethod
    def from_draft(
        cls,
        draft: VendorDraft,
        plan_id: str | PlanId,
        vendor_id: str,
        registration_date: date,
    ) -> "VendorRecord":
        """Build a pending record from a validated draft.

        Raises:
            UnknownPlanError: If ``plan_id`` is not in the catalog
        """
        plan = get_plan(plan_id)
        return cls(
            id=vendor_id,
            name=draft.name.strip(),
            shop_name=draft.shop_name.strip(),
            phone=draft.phone.strip(),
            email=draft.email.strip(),
            aadhaar_number=draft.aadhaar_number.strip(),
            pan_number=draft.pan_number.strip(),
            gst_number=draft.gst_number.strip(),
            address=draft.address.strip(),
            location=draft.resolved_location(),
            aadhaar_image=draft.aadhaar_image,
            pan_image=draft.pan_image,
            shop_image=draft.shop_image,
            plan=plan.id,
            registration_date=registration_date,
            status=VendorStatus.PENDING,
        )

    def with_status(self, status: VendorStatus) -> "VendorRecord":
        return self.model_copy(update={"status": status})

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
