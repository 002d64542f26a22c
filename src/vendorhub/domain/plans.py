# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Static subscription plan catalog.

The catalog is bundled reference data; it is never persisted.
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict

from vendorhub.errors import UnknownPlanError


class PlanId(str, Enum):
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class Plan(BaseModel):
    """A subscription offering shown on the payment screen.

    Attributes:
        id: Catalog identifier
        name: Display name
        price: Price in rupees
        duration: Human-readable billing period
        features: Feature bullet list
        popular: Whether the plan is highlighted as most popular
        savings: Optional savings label
    """

    model_config = ConfigDict(frozen=True)

    id: PlanId
    name: str
    price: int
    duration: str
    features: tuple[str, ...]
    popular: bool = False
    savings: str | None = None


PLAN_CATALOG: Final[tuple[Plan, ...]] = (
    Plan(
        id=PlanId.BASIC,
        name="Basic Plan",
        price=999,
        duration="1 Month",
        features=(
            "Basic vendor profile",
            "Product listing (up to 50 items)",
            "Basic analytics",
            "Email support",
            "Mobile app access",
        ),
    ),
    Plan(
        id=PlanId.PREMIUM,
        name="Premium Plan",
        price=2499,
        duration="3 Months",
        popular=True,
        savings="Save ₹1,498",
        features=(
            "Enhanced vendor profile",
            "Product listing (up to 200 items)",
            "Advanced analytics",
            "Priority support",
            "Mobile app access",
            "Featured shop placement",
            "Bulk product upload",
            "Customer insights",
        ),
    ),
    Plan(
        id=PlanId.ENTERPRISE,
        name="Enterprise Plan",
        price=4999,
        duration="6 Months",
        savings="Save ₹3,995",
        features=(
            "Premium vendor profile",
            "Unlimited product listings",
            "Comprehensive analytics",
            "24/7 dedicated support",
            "Mobile app access",
            "Top shop placement",
            "Bulk operations",
            "Advanced customer insights",
            "Marketing tools",
            "API access",
            "Custom branding",
        ),
    ),
)

DEFAULT_PLAN: Final = PlanId.PREMIUM


def list_plans() -> list[Plan]:
    return list(PLAN_CATALOG)


def get_plan(plan_id: str | PlanId) -> Plan:
    """Look up a plan by id.

    Raises:
        UnknownPlanError: If the id is not in the catalog
    """
    key = plan_id.value if isinstance(plan_id, PlanId) else str(plan_id).strip().lower()
    for plan in PLAN_CATALOG:
        if plan.id.value == key:
            return plan
    raise UnknownPlanError(str(plan_id))
