# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
#
# SPDX-License-Identifier: MIT

"""
Application settings for vendorhub.

Values are read from ``VENDORHUB_*`` environment variables (and an optional
``.env`` file). The demo admin credentials are not a security boundary.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VENDORHUB_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    storage_backend: Literal["memory", "file", "redis"] = "memory"
    storage_path: str = "vendorhub-store.json"
    redis_url: str = "redis://localhost:6379/0"
    registry_key: str = "registeredVendors"

    admin_username: str = "admin"
    admin_password: str = "admin123"

    payment_delay_seconds: float = Field(default=2.0, ge=0)
    payment_should_fail: bool = False
    geolocation_timeout_seconds: float = Field(default=10.0, gt=0)

    csv_filename: str = "vendors.csv"


@lru_cache
def get_settings() -> AppSettings:
    """Return the process-wide settings, loaded once."""
    return AppSettings()
