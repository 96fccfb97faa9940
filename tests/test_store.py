"""
Tests for the MemoryRecordStore implementation.

These tests verify id assignment, pagination, point lookups, date range
queries and snapshot consistency.
"""

import asyncio
from datetime import date, datetime, timezone

import pytest

from anger_journal.models import DistortionType, Emotion
from anger_journal.store import MemoryRecordStore

from .factories import finding, make_entry


class TestMemoryRecordStore:
    """Test suite for MemoryRecordStore functionality."""

    def setup_method(self):
        """Set up a fresh store for each test."""
        self.store = MemoryRecordStore()

    async def test_create_assigns_id_and_timestamp(self):
        """Test that created records get sequential ids and a creation time."""
        before = datetime.now(timezone.utc)
        first = await self.store.create(make_entry())
        second = await self.store.create(make_entry())

        assert first.id == 1
        assert second.id == 2
        assert before <= first.created_at <= second.created_at
        assert first.created_at.tzinfo is not None

    async def test_create_stores_entry_verbatim(self):
        """Test that every field, including list order, survives storage."""
        emotions = [
            Emotion(type="怒り", intensity=90),
            Emotion(type="悲しみ", intensity=30),
            Emotion(type="怒り", intensity=10),
        ]
        distortions = [
            finding(DistortionType.MIND_READING),
            finding(DistortionType.LABELING),
        ]
        entry = make_entry(emotions=emotions, detected_distortions=distortions)

        created = await self.store.create(entry)
        fetched = await self.store.get_by_id(created.id)

        assert fetched == created
        assert fetched.emotions == emotions
        assert fetched.detected_distortions == distortions
        assert fetched.date == entry.date
        assert fetched.counter_evidence == entry.counter_evidence
        assert fetched.balanced_thinking == entry.balanced_thinking

    async def test_get_by_id_not_found(self):
        """Test that a missing id is reported as None."""
        await self.store.create(make_entry())
        assert await self.store.get_by_id(99) is None

    async def test_list_newest_first(self):
        """Test that list returns the most recently created records first."""
        for situation in ("first", "second", "third"):
            await self.store.create(make_entry(situation=situation))

        page = await self.store.list(limit=2, offset=0)

        assert [r.situation for r in page] == ["third", "second"]
        assert [r.id for r in page] == [3, 2]

    async def test_list_offset(self):
        for situation in ("first", "second", "third"):
            await self.store.create(make_entry(situation=situation))

        assert [r.id for r in await self.store.list(limit=50, offset=2)] == [1]
        assert await self.store.list(offset=3) == []
        assert await self.store.list(offset=10) == []
        assert await self.store.list(limit=0) == []

    async def test_list_defaults(self):
        for _ in range(55):
            await self.store.create(make_entry())

        page = await self.store.list()

        assert len(page) == 50
        assert page[0].id == 55

    async def test_list_rejects_negative_window(self):
        with pytest.raises(ValueError):
            await self.store.list(limit=-1)
        with pytest.raises(ValueError):
            await self.store.list(offset=-1)

    async def test_list_by_date_range_is_inclusive(self):
        """Test that both range ends are included, compared as dates."""
        for day in (1, 5, 10, 15):
            await self.store.create(make_entry(date=date(2024, 5, day)))

        found = await self.store.list_by_date_range(date(2024, 5, 5), date(2024, 5, 10))

        assert sorted(r.date.day for r in found) == [5, 10]

    async def test_list_by_date_range_empty(self):
        await self.store.create(make_entry(date=date(2024, 5, 1)))

        assert await self.store.list_by_date_range(date(2024, 6, 1), date(2024, 6, 30)) == []
        assert await self.store.list_by_date_range(date(2024, 5, 2), date(2024, 4, 1)) == []

    async def test_concurrent_creates_get_distinct_ids(self):
        """Test that concurrent creations never share an id."""
        created = await asyncio.gather(
            *(self.store.create(make_entry()) for _ in range(50))
        )

        assert sorted(r.id for r in created) == list(range(1, 51))
        assert len(await self.store.snapshot()) == 50

    async def test_returned_records_do_not_alias_storage(self):
        """Test that mutating a returned list does not change the stored record."""
        created = await self.store.create(make_entry())
        created.emotions.append(Emotion(type="驚き", intensity=5))

        fetched = await self.store.get_by_id(created.id)
        assert len(fetched.emotions) == 1

    async def test_snapshot_is_not_live(self):
        await self.store.create(make_entry())
        snapshot = await self.store.snapshot()
        await self.store.create(make_entry())

        assert len(snapshot) == 1
