# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""Redis key-value store implementation."""

from __future__ import annotations

from redis.asyncio import Redis
from redis.exceptions import RedisError

from vendorhub.errors import PersistenceError
from vendorhub.logging import LoggerProtocol


class RedisKeyValueStore:
    """Key-value store on top of a Redis server.

    Keys are namespaced with ``key_prefix``.
    """

    def __init__(
        self,
        redis: Redis,
        logger: LoggerProtocol,
        key_prefix: str = "vendorhub:",
    ) -> None:
        """Initialize the Redis store.

        Args:
            redis: Redis client instance
            logger: Logger instance
            key_prefix: Prefix for Redis keys (default: "vendorhub:")
        """
        self._redis = redis
        self._logger = logger
        self._key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, logger: LoggerProtocol, key_prefix: str = "vendorhub:") -> RedisKeyValueStore:
        return cls(Redis.from_url(url, decode_responses=True), logger, key_prefix=key_prefix)

    def _get_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str) -> str | None:
        """Get a value.

        Raises:
            PersistenceError: If Redis cannot be reached
        """
        try:
            data = await self._redis.get(self._get_key(key))
        except RedisError as e:
            self._logger.error("Error reading key", key=key, error=str(e))
            raise PersistenceError(f"Could not read {key}", key=key) from e
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data

    async def set(self, key: str, value: str) -> None:
        """Set a value.

        Raises:
            PersistenceError: If Redis cannot be reached
        """
        try:
            await self._redis.set(self._get_key(key), value)
        except RedisError as e:
            self._logger.error("Error writing key", key=key, error=str(e))
            raise PersistenceError("Could not save", key=key) from e

    async def close(self) -> None:
        await self._redis.aclose()
