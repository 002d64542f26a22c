# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Wiring of stores, services and the workflow controller from settings.
"""

from vendorhub.config import AppSettings
from vendorhub.logging import LoggerProtocol, get_logger
from vendorhub.persistence import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    KeyValueStore,
    VendorRegistry,
)
from vendorhub.services import (
    GeolocationProvider,
    LoggingNotifier,
    SessionGate,
    SimulatedPaymentGateway,
    StaticCredentialCheck,
    StaticGeolocationProvider,
    WorkflowController,
)


def create_store(settings: AppSettings, logger: LoggerProtocol) -> KeyValueStore:
    """Build the key-value store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "redis":
        from vendorhub.persistence.redis import RedisKeyValueStore

        return RedisKeyValueStore.from_url(settings.redis_url, logger)
    if settings.storage_backend == "file":
        return FileKeyValueStore(settings.storage_path, logger)
    return InMemoryKeyValueStore(logger)


def create_registry(
    settings: AppSettings,
    logger: LoggerProtocol | None = None,
    store: KeyValueStore | None = None,
) -> VendorRegistry:
    logger = logger or get_logger("vendorhub.registry")
    return VendorRegistry(store or create_store(settings, logger), logger, key=settings.registry_key)


def create_controller(
    settings: AppSettings,
    store: KeyValueStore | None = None,
    geolocation: GeolocationProvider | None = None,
) -> WorkflowController:
    """Assemble a controller with the simulated payment and notification services."""
    logger = get_logger("vendorhub")
    return WorkflowController(
        registry=create_registry(settings, logger.bind(component="registry"), store),
        session=SessionGate(
            StaticCredentialCheck(settings.admin_username, settings.admin_password),
            logger.bind(component="session"),
        ),
        payment=SimulatedPaymentGateway(
            logger.bind(component="payment"),
            delay=settings.payment_delay_seconds,
            should_fail=settings.payment_should_fail,
        ),
        geolocation=geolocation or StaticGeolocationProvider(),
        notifier=LoggingNotifier(logger.bind(component="notifier")),
        logger=logger.bind(component="workflow"),
        geolocation_timeout=settings.geolocation_timeout_seconds,
    )
