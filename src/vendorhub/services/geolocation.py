# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Geolocation collaborator.

The platform provider may fail or never answer; ``acquire_location`` bounds
the wait so the user can fall back to manual coordinates.
"""

import asyncio
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from vendorhub.domain import Coordinate
from vendorhub.errors import GeolocationError


@runtime_checkable
class GeolocationProvider(Protocol):
    async def locate(self) -> Coordinate:
        """
        Raises:
            GeolocationError: If location is denied or unavailable
        """
        ...


class StaticGeolocationProvider:
    """Provider that reports a fixed position, or fails when it has none."""

    def __init__(self, latitude: float | None = None, longitude: float | None = None) -> None:
        self._latitude = latitude
        self._longitude = longitude

    async def locate(self) -> Coordinate:
        if self._latitude is None or self._longitude is None:
            raise GeolocationError("Geolocation is not supported by this device.")
        try:
            return Coordinate(latitude=self._latitude, longitude=self._longitude)
        except ValidationError as e:
            raise GeolocationError("Provider returned an invalid position.") from e


async def acquire_location(provider: GeolocationProvider, timeout: float) -> Coordinate:
    """Ask the provider for a position, giving up after ``timeout`` seconds.

    Raises:
        GeolocationError: On provider failure or timeout
    """
    try:
        return await asyncio.wait_for(provider.locate(), timeout=timeout)
    except TimeoutError as e:
        raise GeolocationError("Timed out waiting for location.", timeout=timeout) from e
