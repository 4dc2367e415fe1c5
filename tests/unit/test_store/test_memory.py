"""Unit tests for the in-memory item store."""

import pytest

from curation.ranker.models import FilterCriteria, StatusFilter
from curation.store.memory import InMemoryItemStore
from curation.store.protocols import ItemStore
from tests.helpers.factories import make_item


@pytest.fixture
def store() -> InMemoryItemStore:
    """Store with ranked, unranked, old and new items."""
    return InMemoryItemStore(
        [
            make_item("old", age_hours=10),
            make_item("rank-2", homepage_rank=2, is_published=True),
            make_item("new", age_hours=1),
            make_item("rank-1", homepage_rank=1),
        ],
        child_counts={"rank-1": 4},
    )


class TestListing:
    """Tests for list_items."""

    def test_satisfies_protocol(self, store: InMemoryItemStore) -> None:
        """The store implements ItemStore."""
        assert isinstance(store, ItemStore)

    @pytest.mark.asyncio
    async def test_listing_order(self, store: InMemoryItemStore) -> None:
        """Ranked ascending, then unranked newest first."""
        items = await store.list_items()
        assert [i.id for i in items] == ["rank-1", "rank-2", "new", "old"]

    @pytest.mark.asyncio
    async def test_criteria(self, store: InMemoryItemStore) -> None:
        """Criteria filter the listing."""
        items = await store.list_items(FilterCriteria(status=StatusFilter.PUBLISHED))
        assert [i.id for i in items] == ["rank-2"]

    @pytest.mark.asyncio
    async def test_count_children(self, store: InMemoryItemStore) -> None:
        """Known counts are returned, unknown items count 0."""
        assert await store.count_children("rank-1") == 4
        assert await store.count_children("old") == 0


class TestWrites:
    """Tests for update_item and delete_item."""

    @pytest.mark.asyncio
    async def test_update(self, store: InMemoryItemStore) -> None:
        """Updates replace the stored item."""
        result = await store.update_item("old", {"is_banner": True})

        assert result.ok
        assert store.get("old").is_banner

    @pytest.mark.asyncio
    async def test_update_missing_item(self, store: InMemoryItemStore) -> None:
        """Updating an unknown id fails with a reason."""
        result = await store.update_item("ghost", {"is_banner": True})

        assert not result.ok
        assert result.reason == "Item not found: ghost"

    @pytest.mark.asyncio
    async def test_update_unknown_field(self, store: InMemoryItemStore) -> None:
        """Unknown fields are rejected, not silently dropped."""
        result = await store.update_item("old", {"is_pinned": True})

        assert not result.ok
        assert result.reason == "Unknown item field: is_pinned"

    @pytest.mark.asyncio
    async def test_update_invalid_value(self, store: InMemoryItemStore) -> None:
        """Values failing item validation are rejected."""
        result = await store.update_item("old", {"homepage_rank": -1})

        assert not result.ok
        assert store.get("old").homepage_rank is None

    @pytest.mark.asyncio
    async def test_delete(self, store: InMemoryItemStore) -> None:
        """Deleted items disappear; deleting twice fails."""
        assert (await store.delete_item("old")).ok
        assert store.get("old") is None
        assert not (await store.delete_item("old")).ok
