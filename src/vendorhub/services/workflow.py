# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Vendor onboarding workflow.

``WorkflowController`` is the single owner of the application state: the
current screen, the in-flight draft and the admin session. Each event method
either moves to the next screen or returns a ``Failure`` and leaves the state
as it was. Events that are not allowed on the current screen raise
``InvalidTransitionError``.

    Home -> Registration -> Payment -> Success -> Home
    Home -> AdminLogin -> AdminDashboard -> Home
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from vendorhub.domain import (
    Coordinate,
    PlanId,
    VendorDraft,
    VendorRecord,
    VendorStatus,
    get_plan,
    new_vendor_id,
    validate,
)
from vendorhub.errors import (
    AuthenticationError,
    Failure,
    GeolocationError,
    InvalidTransitionError,
    PaymentError,
    PersistenceError,
    RegistrationValidationError,
    Result,
    Success,
    UnknownPlanError,
    VendorHubError,
)
from vendorhub.logging import LoggerProtocol
from vendorhub.persistence import RegistryCounts, VendorRegistry
from vendorhub.services.geolocation import GeolocationProvider, acquire_location
from vendorhub.services.notifications import Notification, NotificationLevel, Notifier
from vendorhub.services.payment import PaymentGateway
from vendorhub.services.session import SessionGate


class Screen(str, Enum):
    HOME = "home"
    REGISTRATION = "registration"
    PAYMENT = "payment"
    SUCCESS = "success"
    ADMIN_LOGIN = "admin-login"
    ADMIN_DASHBOARD = "admin-dashboard"


@dataclass
class ApplicationState:
    """Everything the presentation layer needs to render the current screen."""

    screen: Screen = Screen.HOME
    draft: VendorDraft | None = None
    admin_authenticated: bool = False
    processing_payment: bool = False
    last_record: VendorRecord | None = None
    notifications: list[Notification] = field(default_factory=list)


class WorkflowController:
    """Drives the onboarding and admin screens."""

    def __init__(
        self,
        registry: VendorRegistry,
        session: SessionGate,
        payment: PaymentGateway,
        geolocation: GeolocationProvider,
        notifier: Notifier,
        logger: LoggerProtocol,
        geolocation_timeout: float = 10.0,
        id_factory: Callable[[], str] = new_vendor_id,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.registry = registry
        self._session = session
        self._payment = payment
        self._geolocation = geolocation
        self._notifier = notifier
        self._logger = logger
        self._geolocation_timeout = geolocation_timeout
        self._id_factory = id_factory
        self._today = today
        self._state = ApplicationState()
        self._location_epoch = 0
        self._unsaved_record: VendorRecord | None = None

    # -------------------- state --------------------

    @property
    def state(self) -> ApplicationState:
        return self._state

    @property
    def screen(self) -> Screen:
        return self._state.screen

    def drain_notifications(self) -> list[Notification]:
        """Return pending notifications and clear them."""
        pending = self._state.notifications
        self._state.notifications = []
        return pending

    def _notify(self, level: NotificationLevel, message: str) -> None:
        self._state.notifications.append(Notification(level=level, message=message))

    def _require(self, event: str, *screens: Screen) -> None:
        if self._state.screen not in screens:
            self._logger.warning(
                "Rejected transition", screen=self._state.screen, event=event
            )
            raise InvalidTransitionError(self._state.screen.value, event)

    def _move(self, screen: Screen, event: str) -> None:
        self._logger.info(
            "Workflow transition",
            event=event,
            from_screen=self._state.screen,
            to_screen=screen,
        )
        self._state.screen = screen
        self._location_epoch += 1

    def _require_draft(self) -> VendorDraft:
        if self._state.draft is None:
            self._state.draft = VendorDraft()
        return self._state.draft

    # -------------------- vendor path --------------------

    def start_registration(self) -> VendorDraft:
        """Home -> Registration with a fresh draft (replaces any in-flight one)."""
        self._require("start registration", Screen.HOME)
        self._state.draft = VendorDraft()
        self._state.last_record = None
        self._unsaved_record = None
        self._move(Screen.REGISTRATION, "start registration")
        return self._state.draft

    def update_draft(self, **fields: Any) -> Result[VendorDraft, VendorHubError]:
        """Apply raw form input to the draft while on the Registration screen.

        Location fields are routed through the draft's setters so automatic
        and manual entry stay mutually exclusive.
        """
        self._require("edit draft", Screen.REGISTRATION)
        draft = self._require_draft()
        fields = {to_snake(key): value for key, value in fields.items()}
        lat = fields.pop("manual_latitude", None)
        lng = fields.pop("manual_longitude", None)
        location = fields.pop("location", None)
        try:
            merged = draft.model_dump()
            merged.update(fields)
            updated = VendorDraft.model_validate(merged)
            coordinate = Coordinate.model_validate(location) if location is not None else None
        except ValidationError as e:
            return Failure(RegistrationValidationError(_pydantic_errors(e)))
        if coordinate is not None:
            updated.set_auto_location(coordinate)
            self._location_epoch += 1
        elif lat is not None or lng is not None:
            updated.set_manual_location(
                lat if lat is not None else updated.manual_latitude,
                lng if lng is not None else updated.manual_longitude,
            )
            self._location_epoch += 1
        self._state.draft = updated
        return Success(updated)

    def set_manual_location(self, latitude: str, longitude: str) -> VendorDraft:
        """Enter coordinates by hand; abandons any pending automatic capture."""
        self._require("enter location", Screen.REGISTRATION)
        draft = self._require_draft()
        draft.set_manual_location(latitude, longitude)
        self._location_epoch += 1
        return draft

    async def capture_location(self) -> Result[Coordinate, GeolocationError]:
        """Ask the geolocation provider for the vendor's position.

        If the user enters manual coordinates or leaves the screen before the
        provider answers, the late answer is discarded.
        """
        self._require("capture location", Screen.REGISTRATION)
        epoch = self._location_epoch
        try:
            coordinate = await acquire_location(self._geolocation, self._geolocation_timeout)
        except GeolocationError as e:
            self._logger.warning("Location capture failed", error=e.message)
            self._notify(NotificationLevel.ERROR, e.message)
            return Failure(e)

        if epoch != self._location_epoch or self._state.screen is not Screen.REGISTRATION:
            self._logger.info("Discarded superseded location capture")
            return Failure(GeolocationError("Location capture was superseded."))

        self._require_draft().set_auto_location(coordinate)
        self._notify(NotificationLevel.SUCCESS, "Location captured successfully!")
        return Success(coordinate)

    def submit(
        self, draft: VendorDraft | None = None
    ) -> Result[VendorDraft, RegistrationValidationError]:
        """Registration -> Payment if the draft passes validation."""
        self._require("submit", Screen.REGISTRATION)
        if draft is not None:
            self._state.draft = draft
        current = self._require_draft()

        errors = validate(current)
        if errors:
            self._logger.info("Registration rejected", fields=sorted(errors))
            self._notify(NotificationLevel.ERROR, "Please fix the highlighted fields.")
            return Failure(RegistrationValidationError(errors))

        self._move(Screen.PAYMENT, "submit")
        return Success(current)

    def back(self) -> VendorDraft:
        """Payment -> Registration, keeping the draft.

        Refused once the plan is charged but the record is not yet saved.
        """
        self._require("go back", Screen.PAYMENT)
        if self._state.processing_payment:
            raise InvalidTransitionError(self._state.screen.value, "go back while paying")
        if self._unsaved_record is not None:
            self._notify(
                NotificationLevel.ERROR, "Finish saving your registration before editing it."
            )
            raise InvalidTransitionError(self._state.screen.value, "go back before saving")
        self._move(Screen.REGISTRATION, "back")
        return self._require_draft()

    async def pay(self, plan_id: str | PlanId) -> Result[VendorRecord, VendorHubError]:
        """Payment -> Success: charge the plan, then create and store the record.

        The record is created only after the charge succeeds. If storing it
        fails the screen stays on Payment and a later ``pay`` for the same plan
        retries the save without charging again.
        """
        self._require("pay", Screen.PAYMENT)
        if self._state.processing_payment:
            raise InvalidTransitionError(self._state.screen.value, "pay while paying")
        draft = self._require_draft()

        try:
            plan = get_plan(plan_id)
        except UnknownPlanError as e:
            self._notify(NotificationLevel.ERROR, e.message)
            return Failure(e)

        record = self._unsaved_record
        if record is not None and record.plan is not plan.id:
            error = PaymentError(
                f"Payment already captured for {record.plan.value}; retry to finish saving.",
                plan_id=record.plan.value,
            )
            self._notify(NotificationLevel.ERROR, error.message)
            return Failure(error)

        if record is None:
            self._state.processing_payment = True
            try:
                await self._payment.charge(plan, draft.email)
            except PaymentError as e:
                self._notify(NotificationLevel.ERROR, e.message)
                return Failure(e)
            finally:
                self._state.processing_payment = False
            record = VendorRecord.from_draft(
                draft,
                plan.id,
                vendor_id=self._id_factory(),
                registration_date=self._today(),
            )

        try:
            await self.registry.append(record)
        except PersistenceError as e:
            self._unsaved_record = record
            self._notify(NotificationLevel.ERROR, "Could not save your registration. Please retry.")
            return Failure(e)

        self._unsaved_record = None
        await self._notifier.registration_confirmed(record)
        self._state.last_record = record
        self._state.draft = None
        self._notify(NotificationLevel.SUCCESS, "Payment successful! Registration completed.")
        self._move(Screen.SUCCESS, "pay")
        return Success(record)

    def back_to_home(self) -> None:
        """Success -> Home, clearing the draft."""
        self._require("return home", Screen.SUCCESS)
        self._state.draft = None
        self._state.last_record = None
        self._move(Screen.HOME, "back to home")

    # -------------------- admin path --------------------

    def start_admin_login(self) -> None:
        self._require("start admin login", Screen.HOME)
        self._move(Screen.ADMIN_LOGIN, "start admin login")

    def login(self, username: str, password: str) -> Result[bool, AuthenticationError]:
        """AdminLogin -> AdminDashboard if the credentials are accepted."""
        self._require("log in", Screen.ADMIN_LOGIN)
        if not self._session.login(username, password):
            error = AuthenticationError("Invalid credentials.", username=username)
            self._notify(NotificationLevel.ERROR, error.message)
            return Failure(error)
        self._state.admin_authenticated = True
        self._move(Screen.ADMIN_DASHBOARD, "login")
        return Success(True)

    def logout(self) -> None:
        """AdminDashboard -> Home, closing the session."""
        self._require("log out", Screen.ADMIN_DASHBOARD)
        self._session.logout()
        self._state.admin_authenticated = False
        self._move(Screen.HOME, "logout")

    def _require_admin(self, event: str) -> None:
        self._require(event, Screen.ADMIN_DASHBOARD)
        if not self._session.is_authenticated:
            raise AuthenticationError("Admin session required.")

    async def list_vendors(
        self, search_term: str = "", status_filter: str | VendorStatus = "all"
    ) -> list[VendorRecord]:
        self._require_admin("list vendors")
        return await self.registry.query(search_term, status_filter)

    async def get_vendor(self, vendor_id: str) -> VendorRecord:
        self._require_admin("view vendor")
        return await self.registry.get(vendor_id)

    async def set_vendor_status(
        self, vendor_id: str, status: str | VendorStatus
    ) -> VendorRecord:
        self._require_admin("update vendor status")
        try:
            record = await self.registry.update_status(vendor_id, status)
        except PersistenceError:
            self._notify(NotificationLevel.ERROR, "Could not save the status change.")
            raise
        self._notify(
            NotificationLevel.SUCCESS, f"Vendor status updated to {record.status.value}"
        )
        return record

    async def export_vendors(
        self, search_term: str = "", status_filter: str | VendorStatus = "all"
    ) -> str:
        """Export the currently filtered vendors as CSV text."""
        records = await self.list_vendors(search_term, status_filter)
        self._notify(NotificationLevel.SUCCESS, "Vendor data exported successfully!")
        return self.registry.export_csv(records)

    async def vendor_counts(self) -> RegistryCounts:
        self._require_admin("view counts")
        return await self.registry.counts()


def _pydantic_errors(error: ValidationError) -> dict[str, str]:
    out: dict[str, str] = {}
    for item in error.errors():
        loc = item.get("loc") or ("draft",)
        out.setdefault(to_snake(str(loc[0])), item.get("msg", "invalid value"))
    return out
