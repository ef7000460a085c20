"""Unit tests for demo data seeding."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from learnmap.models import LearningEntry
from learnmap.storage import SEED_ENTRIES, FirestoreClient, seed_entries


@pytest.fixture
def empty_store() -> FirestoreClient:
    store = MagicMock(spec=FirestoreClient)
    store.count_entries = AsyncMock(return_value=0)
    store.add_entry = AsyncMock(return_value="doc")
    return store


class TestSeedEntries:
    """Tests for seed_entries."""

    def test_seed_data_is_complete(self) -> None:
        assert len(SEED_ENTRIES) == 16
        for entry in SEED_ENTRIES:
            assert entry.title
            assert entry.main_topic
            assert entry.sub_topic
            assert entry.description
            assert entry.id is None

    @pytest.mark.asyncio
    async def test_seeds_empty_collection(self, empty_store) -> None:
        inserted = await seed_entries(empty_store)
        assert inserted == len(SEED_ENTRIES)
        assert empty_store.add_entry.await_count == len(SEED_ENTRIES)

        first = empty_store.add_entry.await_args_list[0].args[0]
        assert first is not SEED_ENTRIES[0]
        assert first.title == SEED_ENTRIES[0].title
        assert first.created_at == SEED_ENTRIES[0].created_at

    @pytest.mark.asyncio
    async def test_custom_entries(self, empty_store) -> None:
        entries = [LearningEntry(title="T", main_topic="M", sub_topic="S")]
        assert await seed_entries(empty_store, entries) == 1

    @pytest.mark.asyncio
    async def test_skips_when_data_exists(self, mock_store) -> None:
        assert await seed_entries(mock_store) == 0
        mock_store.add_entry.assert_not_awaited()
