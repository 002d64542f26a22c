# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
"""
Unit tests for WorkflowController.
Covers the vendor and admin paths, Result-based recoverable failures and
rejected transitions.
"""

import asyncio
from datetime import UTC, datetime

import pytest

from vendorhub.domain import Coordinate, Plan, PlanId, VendorDraft, VendorStatus
from vendorhub.errors import (
    AuthenticationError,
    Failure,
    GeolocationError,
    InvalidTransitionError,
    PaymentError,
    PersistenceError,
    RegistrationValidationError,
    Success,
    UnknownPlanError,
    VendorNotFoundError,
)
from vendorhub.persistence import VendorRegistry
from vendorhub.services import (
    LoggingNotifier,
    NotificationLevel,
    PaymentReceipt,
    Screen,
    SessionGate,
    SimulatedPaymentGateway,
    StaticCredentialCheck,
    StaticGeolocationProvider,
    WorkflowController,
)


class GatedGeolocation:
    """Provider that answers only once ``release`` is set."""

    def __init__(self) -> None:
        self.release = asyncio.Event()

    async def locate(self) -> Coordinate:
        await self.release.wait()
        return Coordinate(latitude=12.9716, longitude=77.5946)


class GatedPayment:
    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.charges = 0

    async def charge(self, plan: Plan, payer_email: str) -> PaymentReceipt:
        self.charges += 1
        await self.release.wait()
        return PaymentReceipt(
            reference="ref-1", plan_id=plan.id.value, amount=plan.price, paid_at=datetime.now(UTC)
        )


def build(registry: VendorRegistry, logger, *, geolocation=None, payment=None) -> WorkflowController:
    return WorkflowController(
        registry=registry,
        session=SessionGate(StaticCredentialCheck("admin", "admin123"), logger),
        payment=payment or SimulatedPaymentGateway(logger, delay=0),
        geolocation=geolocation or StaticGeolocationProvider(),
        notifier=LoggingNotifier(logger),
        logger=logger,
        geolocation_timeout=5,
    )


async def register(controller: WorkflowController, draft: VendorDraft, plan: str = "premium"):
    controller.start_registration()
    assert controller.submit(draft).is_success
    return await controller.pay(plan)


def messages(controller: WorkflowController) -> list[str]:
    return [n.message for n in controller.drain_notifications()]


# --- Vendor path ---


async def test_scenario_a_registration_creates_pending_record(
    controller: WorkflowController, valid_draft: VendorDraft, registry: VendorRegistry, notifier, today
) -> None:
    result = await register(controller, valid_draft, "premium")

    assert isinstance(result, Success)
    record = result.value
    assert record.status is VendorStatus.PENDING
    assert record.plan is PlanId.PREMIUM
    assert record.id == "id-1"
    assert record.registration_date == today
    assert controller.screen is Screen.SUCCESS
    assert controller.state.last_record == record
    assert controller.state.draft is None
    assert await registry.list_all() == [record]
    assert [r.email for r in notifier.confirmed] == ["asha@example.com"]
    assert "Payment successful! Registration completed." in messages(controller)


async def test_each_registration_gets_a_new_id(
    controller: WorkflowController, valid_draft: VendorDraft, registry: VendorRegistry
) -> None:
    first = (await register(controller, valid_draft.model_copy())).value
    controller.back_to_home()
    second = (await register(controller, valid_draft.model_copy(), "basic")).value
    assert first.id != second.id
    assert [r.id for r in await registry.list_all()] == [first.id, second.id]


async def test_scenario_b_manual_location_is_stored(
    controller: WorkflowController, valid_draft: VendorDraft
) -> None:
    valid_draft.set_manual_location("28.6139", "77.2090")
    record = (await register(controller, valid_draft)).value
    assert record.location == Coordinate(latitude=28.6139, longitude=77.209)


async def test_scenario_c_invalid_latitude_blocks_submit(
    controller: WorkflowController, valid_draft: VendorDraft, registry: VendorRegistry
) -> None:
    controller.start_registration()
    valid_draft.set_manual_location("95", "77.2090")

    result = controller.submit(valid_draft)

    assert isinstance(result, Failure)
    assert isinstance(result.error, RegistrationValidationError)
    assert result.error.errors == {"manual_latitude": "invalid latitude"}
    assert controller.screen is Screen.REGISTRATION
    assert controller.state.draft is valid_draft
    assert await registry.list_all() == []
    assert messages(controller) == ["Please fix the highlighted fields."]


def test_update_draft_merges_fields(controller: WorkflowController) -> None:
    controller.start_registration()
    assert controller.update_draft(name="Asha", phone="9876543210").is_success
    result = controller.update_draft(shop_name="Asha Stores")
    draft = result.unwrap()
    assert (draft.name, draft.phone, draft.shop_name) == ("Asha", "9876543210", "Asha Stores")


def test_update_draft_location_fields_are_mutually_exclusive(controller: WorkflowController) -> None:
    controller.start_registration()
    controller.update_draft(manual_latitude="28.6", manual_longitude="77.2")
    draft = controller.update_draft(location=Coordinate(latitude=1, longitude=2)).unwrap()
    assert draft.location == Coordinate(latitude=1, longitude=2)
    assert draft.manual_latitude == ""

    draft = controller.update_draft(manual_latitude="28.6").unwrap()
    assert draft.location is None
    assert draft.manual_latitude == "28.6"


async def test_update_draft_accepts_camel_case_location_fields(registry, logger) -> None:
    provider = GatedGeolocation()
    controller = build(registry, logger, geolocation=provider)
    controller.start_registration()
    controller.update_draft(location=Coordinate(latitude=1, longitude=2))

    task = asyncio.create_task(controller.capture_location())
    await asyncio.sleep(0)
    draft = controller.update_draft(
        manualLatitude="28.6", manualLongitude="77.2", shopName="Asha Stores"
    ).unwrap()
    provider.release.set()
    result = await task

    assert draft.location is None
    assert (draft.manual_latitude, draft.manual_longitude) == ("28.6", "77.2")
    assert draft.shop_name == "Asha Stores"
    assert isinstance(result.error, GeolocationError)
    assert controller.state.draft.location is None


def test_update_draft_rejects_malformed_input(controller: WorkflowController) -> None:
    controller.start_registration()
    controller.update_draft(name="Asha")
    result = controller.update_draft(shop_image={"filename": ""})
    assert isinstance(result.error, RegistrationValidationError)
    assert "shop_image" in result.error.errors
    assert controller.state.draft.name == "Asha"
    assert controller.state.draft.shop_image is None


async def test_capture_location(controller: WorkflowController) -> None:
    controller.start_registration()
    controller.set_manual_location("1", "2")

    result = await controller.capture_location()

    assert result.unwrap() == Coordinate(latitude=12.9716, longitude=77.5946)
    assert controller.state.draft.location == result.value
    assert not controller.state.draft.has_manual_location
    assert messages(controller) == ["Location captured successfully!"]


async def test_capture_location_failure_keeps_draft(registry, logger) -> None:
    controller = build(registry, logger)
    controller.start_registration()
    controller.set_manual_location("28.6", "77.2")

    result = await controller.capture_location()

    assert isinstance(result.error, GeolocationError)
    assert controller.state.draft.manual_latitude == "28.6"
    notifications = controller.drain_notifications()
    assert notifications[0].level is NotificationLevel.ERROR


async def test_manual_entry_supersedes_pending_capture(registry, logger) -> None:
    provider = GatedGeolocation()
    controller = build(registry, logger, geolocation=provider)
    controller.start_registration()

    task = asyncio.create_task(controller.capture_location())
    await asyncio.sleep(0)
    controller.set_manual_location("28.6139", "77.2090")
    provider.release.set()
    result = await task

    assert isinstance(result.error, GeolocationError)
    assert controller.state.draft.location is None
    assert controller.state.draft.manual_latitude == "28.6139"


async def test_unrelated_edit_does_not_discard_capture(registry, logger) -> None:
    provider = GatedGeolocation()
    controller = build(registry, logger, geolocation=provider)
    controller.start_registration()

    task = asyncio.create_task(controller.capture_location())
    await asyncio.sleep(0)
    controller.update_draft(name="Asha")
    provider.release.set()
    result = await task

    assert result.is_success
    assert controller.state.draft.name == "Asha"
    assert controller.state.draft.location == result.value


async def test_back_keeps_draft(controller: WorkflowController, valid_draft: VendorDraft) -> None:
    controller.start_registration()
    controller.submit(valid_draft)
    assert controller.back() is valid_draft
    assert controller.screen is Screen.REGISTRATION
    assert controller.submit().is_success


async def test_payment_failure_stays_on_payment(
    controller: WorkflowController, valid_draft: VendorDraft, payment, registry: VendorRegistry
) -> None:
    payment.should_fail = True
    result = await register(controller, valid_draft)

    assert isinstance(result.error, PaymentError)
    assert controller.screen is Screen.PAYMENT
    assert controller.state.draft is valid_draft
    assert not controller.state.processing_payment
    assert await registry.list_all() == []
    assert messages(controller) == ["Payment failed. Please try again."]

    payment.should_fail = False
    assert (await controller.pay("premium")).is_success
    assert controller.screen is Screen.SUCCESS


async def test_unknown_plan_is_rejected(controller: WorkflowController, valid_draft: VendorDraft) -> None:
    result = await register(controller, valid_draft, "gold")
    assert isinstance(result.error, UnknownPlanError)
    assert controller.screen is Screen.PAYMENT


async def test_save_failure_retries_without_charging_again(
    controller: WorkflowController, valid_draft: VendorDraft, payment, store, registry, logger
) -> None:
    store.failing = True
    result = await register(controller, valid_draft, "basic")
    assert isinstance(result.error, PersistenceError)
    assert controller.screen is Screen.PAYMENT
    assert "Could not save your registration. Please retry." in messages(controller)

    switched = await controller.pay("premium")
    assert isinstance(switched.error, PaymentError)

    # a second charge would now fail
    payment.should_fail = True
    store.failing = False
    retried = await controller.pay("basic")

    assert retried.is_success
    assert retried.value.id == "id-1"
    assert controller.screen is Screen.SUCCESS
    assert [r.id for r in await VendorRegistry(store, logger).list_all()] == ["id-1"]


async def test_unsaved_registration_cannot_be_edited(
    controller: WorkflowController, valid_draft: VendorDraft, store, registry, logger
) -> None:
    store.failing = True
    result = await register(controller, valid_draft, "basic")
    assert isinstance(result.error, PersistenceError)
    messages(controller)

    with pytest.raises(InvalidTransitionError):
        controller.back()
    assert controller.screen is Screen.PAYMENT
    assert messages(controller) == ["Finish saving your registration before editing it."]
    with pytest.raises(InvalidTransitionError):
        controller.update_draft(name="Asha Corrected")

    store.failing = False
    saved = (await controller.pay("basic")).unwrap()
    assert saved.name == controller.state.last_record.name == "Asha Rao"
    assert [r.name for r in await VendorRegistry(store, logger).list_all()] == ["Asha Rao"]


async def test_back_and_pay_are_blocked_while_paying(registry, logger, valid_draft: VendorDraft) -> None:
    payment = GatedPayment()
    controller = build(registry, logger, payment=payment)
    controller.start_registration()
    controller.submit(valid_draft)

    task = asyncio.create_task(controller.pay("basic"))
    await asyncio.sleep(0)
    assert controller.state.processing_payment
    with pytest.raises(InvalidTransitionError):
        controller.back()
    with pytest.raises(InvalidTransitionError):
        await controller.pay("basic")

    payment.release.set()
    assert (await task).is_success
    assert payment.charges == 1
    assert not controller.state.processing_payment


async def test_back_to_home_clears_draft(controller: WorkflowController, valid_draft: VendorDraft) -> None:
    await register(controller, valid_draft)
    controller.back_to_home()
    assert controller.screen is Screen.HOME
    assert controller.state.draft is None
    assert controller.state.last_record is None


@pytest.mark.parametrize(
    "event",
    [
        lambda c: c.submit(),
        lambda c: c.back(),
        lambda c: c.back_to_home(),
        lambda c: c.logout(),
        lambda c: c.login("admin", "admin123"),
        lambda c: c.set_manual_location("1", "2"),
        lambda c: c.update_draft(name="x"),
    ],
)
def test_events_rejected_on_home(controller: WorkflowController, event) -> None:
    with pytest.raises(InvalidTransitionError):
        event(controller)
    assert controller.screen is Screen.HOME


async def test_async_events_rejected_on_home(controller: WorkflowController) -> None:
    with pytest.raises(InvalidTransitionError) as exc_info:
        await controller.pay("basic")
    assert exc_info.value.context == {"state": "home", "event": "pay"}
    with pytest.raises(InvalidTransitionError):
        await controller.capture_location()
    with pytest.raises(InvalidTransitionError):
        await controller.list_vendors()


def test_start_registration_only_from_home(controller: WorkflowController) -> None:
    controller.start_registration()
    with pytest.raises(InvalidTransitionError):
        controller.start_registration()
    with pytest.raises(InvalidTransitionError):
        controller.start_admin_login()


# --- Admin path ---


async def test_admin_login_rejects_bad_credentials(controller: WorkflowController) -> None:
    controller.start_admin_login()
    result = controller.login("admin", "wrong")
    assert isinstance(result.error, AuthenticationError)
    assert controller.screen is Screen.ADMIN_LOGIN
    assert not controller.state.admin_authenticated
    assert messages(controller) == ["Invalid credentials."]


async def test_admin_dashboard(controller: WorkflowController, registry: VendorRegistry, make_record) -> None:
    pending = await registry.append(make_record(name="Asha"))
    active = await registry.append(make_record(name="Ravi", status=VendorStatus.ACTIVE))

    controller.start_admin_login()
    assert controller.login("admin", "admin123").is_success
    assert controller.screen is Screen.ADMIN_DASHBOARD
    assert controller.state.admin_authenticated

    assert await controller.list_vendors() == [pending, active]
    assert await controller.list_vendors("", "active") == [active]
    assert await controller.list_vendors("ASHA") == [pending]
    assert await controller.get_vendor(active.id) == active

    updated = await controller.set_vendor_status(pending.id, "suspended")
    assert updated.status is VendorStatus.SUSPENDED
    assert messages(controller) == ["Vendor status updated to suspended"]

    counts = await controller.vendor_counts()
    assert (counts.total, counts.pending, counts.active, counts.suspended) == (2, 0, 1, 1)

    csv_text = await controller.export_vendors("", "active")
    assert csv_text.split("\n")[1].startswith("Ravi,")
    assert messages(controller) == ["Vendor data exported successfully!"]

    controller.logout()
    assert controller.screen is Screen.HOME
    assert not controller.state.admin_authenticated
    with pytest.raises(InvalidTransitionError):
        await controller.list_vendors()


async def test_status_update_save_failure_is_surfaced(
    controller: WorkflowController, registry: VendorRegistry, store, make_record
) -> None:
    record = await registry.append(make_record())
    controller.start_admin_login()
    controller.login("admin", "admin123")

    store.failing = True
    with pytest.raises(PersistenceError):
        await controller.set_vendor_status(record.id, "active")
    assert messages(controller) == ["Could not save the status change."]


async def test_status_update_unknown_vendor(controller: WorkflowController) -> None:
    controller.start_admin_login()
    controller.login("admin", "admin123")
    with pytest.raises(VendorNotFoundError):
        await controller.set_vendor_status("missing", "active")
