"""Top-level pytest configuration for vendorhub."""

import itertools
import os
from collections.abc import Callable
from datetime import date

import pytest

from vendorhub.domain import DocumentRef, VendorDraft, VendorRecord, VendorStatus
from vendorhub.errors import PersistenceError
from vendorhub.logging import LoggingSettings, VendorHubLogger
from vendorhub.persistence import InMemoryKeyValueStore, VendorRegistry
from vendorhub.services import (
    LoggingNotifier,
    SessionGate,
    SimulatedPaymentGateway,
    StaticCredentialCheck,
    StaticGeolocationProvider,
    WorkflowController,
)

# Configure asyncio to be less verbose
os.environ["PYTHONASYNCIODEBUG"] = "0"

TODAY = date(2024, 1, 15)


class FlakyStore(InMemoryKeyValueStore):
    """In-memory store whose writes fail while ``failing`` is set."""

    def __init__(self, logger: VendorHubLogger) -> None:
        super().__init__(logger)
        self.failing = False
        self.writes = 0

    async def set(self, key: str, value: str) -> None:
        if self.failing:
            raise PersistenceError("Could not save", key=key)
        self.writes += 1
        await super().set(key, value)


class RecordingNotifier(LoggingNotifier):
    """Logging notifier that also keeps the confirmed records for assertions."""

    def __init__(self, logger: VendorHubLogger) -> None:
        super().__init__(logger)
        self.confirmed: list[VendorRecord] = []

    async def registration_confirmed(self, record: VendorRecord) -> None:
        self.confirmed.append(record)
        await super().registration_confirmed(record)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def logger() -> VendorHubLogger:
    return VendorHubLogger("vendorhub.tests", settings=LoggingSettings(console_enabled=False))


@pytest.fixture
def store(logger: VendorHubLogger) -> FlakyStore:
    return FlakyStore(logger)


@pytest.fixture
def registry(store: FlakyStore, logger: VendorHubLogger) -> VendorRegistry:
    return VendorRegistry(store, logger)


@pytest.fixture
def valid_draft() -> VendorDraft:
    return VendorDraft(
        name="Asha Rao",
        shop_name="Asha Stores",
        phone="9876543210",
        email="asha@example.com",
        aadhaar_number="123412341234",
        gst_number="GST123",
        address="12 MG Road",
        shop_image=DocumentRef(filename="shop.jpg", content_type="image/jpeg", size=2048),
    )


@pytest.fixture
def make_record() -> Callable[..., VendorRecord]:
    counter = itertools.count(1)

    def _make(**overrides) -> VendorRecord:
        n = next(counter)
        data = {
            "id": f"vendor-{n}",
            "name": f"Vendor {n}",
            "shop_name": f"Shop {n}",
            "phone": f"98765432{n:02d}",
            "email": f"vendor{n}@example.com",
            "gst_number": f"GST{n}",
            "address": f"{n} Market Street",
            "plan": "basic",
            "registration_date": TODAY,
            "status": VendorStatus.PENDING,
        }
        data.update(overrides)
        return VendorRecord(**data)

    return _make


@pytest.fixture
def payment(logger: VendorHubLogger) -> SimulatedPaymentGateway:
    return SimulatedPaymentGateway(logger, delay=0)


@pytest.fixture
def geolocation() -> StaticGeolocationProvider:
    return StaticGeolocationProvider(latitude=12.9716, longitude=77.5946)


@pytest.fixture
def notifier(logger: VendorHubLogger) -> RecordingNotifier:
    return RecordingNotifier(logger)


@pytest.fixture
def controller(
    registry: VendorRegistry,
    payment: SimulatedPaymentGateway,
    geolocation: StaticGeolocationProvider,
    notifier: RecordingNotifier,
    logger: VendorHubLogger,
) -> WorkflowController:
    ids = (f"id-{n}" for n in itertools.count(1))
    return WorkflowController(
        registry=registry,
        session=SessionGate(StaticCredentialCheck("admin", "admin123"), logger),
        payment=payment,
        geolocation=geolocation,
        notifier=notifier,
        logger=logger,
        geolocation_timeout=0.5,
        id_factory=lambda: next(ids),
        today=lambda: TODAY,
    )
