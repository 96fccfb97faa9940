"""
Journal record storage for the Anger Journal service.

This module defines the record store contract and an in-memory implementation.
The design allows for easy replacement with persistent storage backends in the
future: the in-memory store already keeps rows in their encoded form.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone

from .codec import Row, decode_record, encode_record
from .models import ClassifiedEntry, JournalRecord

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """
    Collection of journal records keyed by a store-assigned integer id.

    Stores do not validate business rules; callers validate entries before
    calling ``create``.
    """

    @abstractmethod
    async def create(self, entry: ClassifiedEntry) -> JournalRecord:
        """Store an entry, assigning it a fresh id and creation time."""

    @abstractmethod
    async def list(self, limit: int = 50, offset: int = 0) -> list[JournalRecord]:
        """Get a page of records, most recently created first."""

    @abstractmethod
    async def get_by_id(self, record_id: int) -> JournalRecord | None:
        """Get one record, or None if no record has that id."""

    @abstractmethod
    async def list_by_date_range(self, start: date, end: date) -> list[JournalRecord]:
        """Get records whose date falls within [start, end]."""

    @abstractmethod
    async def snapshot(self) -> list[JournalRecord]:
        """Get every record as of the moment of the call."""


class MemoryRecordStore(RecordStore):
    """
    In-memory record store.

    Id assignment and insertion happen under one lock so concurrent creations
    never share an id. Reads copy the row table under the same lock and decode
    outside it.
    """

    def __init__(self) -> None:
        self._rows: dict[int, Row] = {}
        self._lock = asyncio.Lock()
        self._last_id = 0

    async def create(self, entry: ClassifiedEntry) -> JournalRecord:
        """
        Store a classified entry.

        Args:
            entry: The validated entry with its detected distortions

        Returns:
            The stored record with its id and creation timestamp
        """
        async with self._lock:
            self._last_id += 1
            record = JournalRecord(
                **entry.model_dump(),
                id=self._last_id,
                created_at=datetime.now(timezone.utc),
            )
            row = encode_record(record)
            self._rows[record.id] = row

        logger.debug("Created record %d", record.id)
        return decode_record(row)

    async def list(self, limit: int = 50, offset: int = 0) -> list[JournalRecord]:
        """
        Get a page of records.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip

        Returns:
            Records sorted by creation time descending (ties by id descending)
        """
        if limit < 0 or offset < 0:
            raise ValueError("limit and offset must be non-negative")

        records = await self.snapshot()
        records.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return records[offset : offset + limit]

    async def get_by_id(self, record_id: int) -> JournalRecord | None:
        async with self._lock:
            row = self._rows.get(record_id)
        if row is None:
            return None
        return decode_record(row)

    async def list_by_date_range(self, start: date, end: date) -> list[JournalRecord]:
        records = await self.snapshot()
        return [record for record in records if start <= record.date <= end]

    async def snapshot(self) -> list[JournalRecord]:
        async with self._lock:
            rows = list(self._rows.values())
        return [decode_record(row) for row in rows]
