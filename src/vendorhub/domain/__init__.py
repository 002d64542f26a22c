from .draft import VendorDraft
from .plans import DEFAULT_PLAN, PLAN_CATALOG, Plan, PlanId, get_plan, list_plans
from .record import VendorRecord, new_vendor_id
from .validation import ensure_valid, validate
from .value_objects import Coordinate, DocumentRef, ValueObject, VendorStatus

__all__ = [
    "Coordinate",
    "DEFAULT_PLAN",
    "DocumentRef",
    "PLAN_CATALOG",
    "Plan",
    "PlanId",
    "ValueObject",
    "VendorDraft",
    "VendorRecord",
    "VendorStatus",
    "ensure_valid",
    "get_plan",
    "list_plans",
    "new_vendor_id",
    "validate",
]
