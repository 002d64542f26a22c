# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
In-memory and JSON-file key-value stores.
"""

import asyncio
import json
from pathlib import Path

from vendorhub.errors import PersistenceError
from vendorhub.logging import LoggerProtocol


class InMemoryKeyValueStore:
    """Process-local store, used for demos and tests."""

    def __init__(self, logger: LoggerProtocol, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._logger = logger
        self._logger.debug("InMemoryKeyValueStore initialized.")

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._logger.debug("Stored key", key=key, size=len(value))


class FileKeyValueStore:
    """
    Key-value store backed by a single JSON object on disk.

    Every ``set`` rewrites the whole file through a temporary file and an
    atomic rename, so a crash leaves either the old or the new content.
    """

    def __init__(self, path: str | Path, logger: LoggerProtocol) -> None:
        self._path = Path(path)
        self._logger = logger
        self._logger.debug("FileKeyValueStore initialized.", path=str(self._path))

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not read {self._path}", path=str(self._path)) from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Corrupt store file {self._path}", path=str(self._path))
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            tmp.replace(self._path)
        except OSError as e:
            raise PersistenceError("Could not save", path=str(self._path)) from e

    async def get(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        def _update() -> None:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

        await asyncio.to_thread(_update)
        self._logger.debug("Stored key", key=key, path=str(self._path))
