# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Vendor registry: the durable collection of vendor records.

The whole collection lives as one JSON array under a single key of the
key-value store. Every mutation rewrites the full array and awaits the
store before returning, so a record is durable before the caller moves on.
"""

import csv
import io
import json
from collections.abc import Iterable
from pathlib import Path
from typing import Final, Literal

from pydantic import BaseModel, ValidationError

from vendorhub.domain import VendorRecord, VendorStatus
from vendorhub.errors import DuplicateIdError, PersistenceError, VendorNotFoundError
from vendorhub.logging import LoggerProtocol
from vendorhub.persistence.protocols import KeyValueStore

DEFAULT_REGISTRY_KEY: Final = "registeredVendors"

CSV_HEADER: Final = (
    "Name",
    "Shop Name",
    "Phone",
    "Email",
    "GST Number",
    "Plan",
    "Status",
    "Registration Date",
)

StatusFilter = VendorStatus | Literal["all"]


class RegistryCounts(BaseModel):
    """Aggregate counts shown on the admin dashboard."""

    total: int = 0
    pending: int = 0
    active: int = 0
    suspended: int = 0


def parse_status_filter(value: str | VendorStatus | None) -> StatusFilter:
    """Parse ``"all"`` (or an empty value) or a single status."""
    if value is None or (isinstance(value, str) and value.strip().lower() in ("", "all")):
        return "all"
    return VendorStatus.parse(value)


def matches(record: VendorRecord, search_term: str) -> bool:
    """Case-insensitive substring match on name, shop name, email or phone."""
    term = search_term.casefold()
    if not term:
        return True
    return any(
        term in field.casefold()
        for field in (record.name, record.shop_name, record.email, record.phone)
    )


def export_csv(records: Iterable[VendorRecord]) -> str:
    """Serialize records to CSV text, one line per record, in the given order.

    Fields containing a comma, quote or line break are quoted; all other
    fields are written as-is.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for record in records:
        writer.writerow(
            (
                record.name,
                record.shop_name,
                record.phone,
                record.email,
                record.gst_number,
                record.plan.value,
                record.status.value,
                record.registration_date.isoformat(),
            )
        )
    return buffer.getvalue().removesuffix("\n")


def write_csv_file(path: str | Path, records: Iterable[VendorRecord]) -> Path:
    """Write ``export_csv`` output to ``path`` as UTF-8 and return the path."""
    target = Path(path)
    target.write_text(export_csv(records), encoding="utf-8")
    return target


class VendorRegistry:
    """
    CRUD and query layer over the persisted vendor records.

    The registry is the only writer of its key; records are cached after the
    first load and every read returns a snapshot list.
    """

    def __init__(
        self,
        store: KeyValueStore,
        logger: LoggerProtocol,
        key: str = DEFAULT_REGISTRY_KEY,
    ) -> None:
        self._store = store
        self._logger = logger
        self._key = key
        self._records: list[VendorRecord] | None = None
        self._unsaved = False

    @property
    def has_unsaved_changes(self) -> bool:
        """True when the last write to the store failed."""
        return self._unsaved

    async def _load(self) -> list[VendorRecord]:
        if self._records is not None:
            return self._records

        raw = await self._store.get(self._key)
        if not raw:
            self._records = []
            return self._records
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError("registry payload is not a list")
            records = [VendorRecord.model_validate(item) for item in items]
        except (ValueError, ValidationError) as e:
            self._logger.error("Stored registry is unreadable", key=self._key, error=str(e))
            raise PersistenceError("Could not load vendors", key=self._key) from e

        self._records = records
        self._logger.debug("Registry loaded", key=self._key, count=len(records))
        return self._records

    async def _persist(self) -> None:
        records = await self._load()
        payload = json.dumps([r.to_storage() for r in records], ensure_ascii=False)
        try:
            await self._store.set(self._key, payload)
        except PersistenceError:
            self._unsaved = True
            self._logger.error("Registry write failed", key=self._key, count=len(records))
            raise
        self._unsaved = False

    async def flush(self) -> None:
        """Write the current in-memory collection to the store again.

        Raises:
            PersistenceError: If the store is still unavailable
        """
        await self._persist()

    async def append(self, record: VendorRecord) -> VendorRecord:
        """Add one record and persist the registry.

        Re-appending a record whose previous save failed retries the save.

        Raises:
            DuplicateIdError: If another record already uses ``record.id``
            PersistenceError: If the store cannot be written
        """
        records = await self._load()
        existing = next((r for r in records if r.id == record.id), None)
        if existing is not None:
            if self._unsaved and existing == record:
                await self._persist()
                return existing
            self._logger.critical("Duplicate vendor id", vendor_id=record.id)
            raise DuplicateIdError(record.id)

        records.append(record)
        await self._persist()
        self._logger.info(
            "Vendor appended",
            vendor_id=record.id,
            plan=record.plan,
            status=record.status,
        )
        return record

    async def list_all(self) -> list[VendorRecord]:
        """Return a snapshot of all records in insertion order."""
        return list(await self._load())

    async def get(self, vendor_id: str) -> VendorRecord:
        """
        Raises:
            VendorNotFoundError: If no record has this id
        """
        for record in await self._load():
            if record.id == vendor_id:
                return record
        raise VendorNotFoundError(vendor_id)

    async def query(
        self,
        search_term: str = "",
        status_filter: str | StatusFilter | None = "all",
    ) -> list[VendorRecord]:
        """Filter records by search term and status, keeping insertion order.

        Args:
            search_term: Case-insensitive substring of name, shop name, email or phone
            status_filter: ``"all"`` or a single status

        Returns:
            Matching records
        """
        wanted = parse_status_filter(status_filter)
        term = (search_term or "").strip()
        return [
            record
            for record in await self._load()
            if matches(record, term) and (wanted == "all" or record.status == wanted)
        ]

    async def update_status(self, vendor_id: str, new_status: str | VendorStatus) -> VendorRecord:
        """Overwrite a record's status and persist the registry.

        Raises:
            VendorNotFoundError: If no record has this id
            PersistenceError: If the store cannot be written
        """
        status = VendorStatus.parse(new_status)
        records = await self._load()
        for index, record in enumerate(records):
            if record.id == vendor_id:
                break
        else:
            self._logger.warning("Vendor not found for status update", vendor_id=vendor_id)
            raise VendorNotFoundError(vendor_id)

        updated = record.with_status(status)
        records[index] = updated
        await self._persist()
        self._logger.info(
            "Vendor status updated",
            vendor_id=vendor_id,
            old_status=record.status,
            new_status=status,
        )
        return updated

    async def counts(self) -> RegistryCounts:
        """Count records in total and per status by scanning ``list_all``."""
        records = await self.list_all()
        return RegistryCounts(
            total=len(records),
            pending=sum(1 for r in records if r.status is VendorStatus.PENDING),
            active=sum(1 for r in records if r.status is VendorStatus.ACTIVE),
            suspended=sum(1 for r in records if r.status is VendorStatus.SUSPENDED),
        )

    export_csv = staticmethod(export_csv)
