"""Unit tests for working-set loading."""

import pytest

from curation.store.errors import ItemStoreReadError
from curation.store.loader import load_working_set
from tests.helpers.factories import make_item
from tests.helpers.stores import ScriptedStore


class TestLoadWorkingSet:
    """Tests for load_working_set."""

    @pytest.mark.asyncio
    async def test_attaches_episode_counts(self) -> None:
        """Each item carries its child count."""
        store = ScriptedStore(
            [make_item("a", homepage_rank=1), make_item("b")],
            child_counts={"a": 2, "b": 7},
        )
        items = await load_working_set(store)

        assert [(i.id, i.episode_count) for i in items] == [("a", 2), ("b", 7)]

    @pytest.mark.asyncio
    async def test_failed_count_is_zero(self) -> None:
        """A failing count does not block the rest of the load."""
        store = ScriptedStore([make_item("a"), make_item("b")], child_counts={"b": 1})
        store.failing_counts.add("a")

        items = {i.id: i.episode_count for i in await load_working_set(store)}

        assert items == {"a": 0, "b": 1}

    @pytest.mark.asyncio
    async def test_list_failure_propagates(self) -> None:
        """Listing failures are raised to the caller."""
        store = ScriptedStore()
        store.list_error = ItemStoreReadError("list_items", "unavailable")

        with pytest.raises(ItemStoreReadError, match="unavailable"):
            await load_working_set(store)
