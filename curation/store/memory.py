"""In-memory item store for snapshots and tests."""

import asyncio
from collections.abc import Iterable
from typing import Any

import structlog

from curation.config.constants import COMPONENT_STORE
from curation.items.models import Item
from curation.ranker.filters import matches
from curation.ranker.models import FilterCriteria
from curation.store.errors import UnknownFieldError
from curation.store.models import WriteResult


logger = structlog.get_logger()


def listing_order(item: Item) -> tuple[bool, int, float]:
    """Sort key: homepage rank ascending with unranked last, then newest first."""
    return (
        item.homepage_rank is None,
        item.homepage_rank or 0,
        -item.created_at.timestamp(),
    )


class InMemoryItemStore:
    """Item store backed by a dict.

    Implements the ``ItemStore`` protocol with the same ordering and failure
    semantics as the remote store.
    """

    def __init__(
        self,
        items: Iterable[Item] = (),
        child_counts: dict[str, int] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            items: Initial items.
            child_counts: Episode count per item id.
        """
        self._items: dict[str, Item] = {item.id: item for item in items}
        self._child_counts: dict[str, int] = dict(child_counts or {})
        self._lock = asyncio.Lock()
        self._log = logger.bind(component=COMPONENT_STORE, backend="memory")

    def get(self, item_id: str) -> Item | None:
        """Current stored item, or None."""
        return self._items.get(item_id)

    def set_child_count(self, item_id: str, count: int) -> None:
        """Set the episode count for an item."""
        self._child_counts[item_id] = count

    async def list_items(self, criteria: FilterCriteria | None = None) -> list[Item]:
        """List stored items in listing order."""
        async with self._lock:
            items = sorted(self._items.values(), key=listing_order)
        if criteria is not None:
            items = [i for i in items if matches(i, criteria)]
        return items

    async def count_children(self, item_id: str) -> int:
        """Count episodes for an item (0 when unknown)."""
        return self._child_counts.get(item_id, 0)

    async def update_item(self, item_id: str, fields: dict[str, Any]) -> WriteResult:
        """Apply a partial update, validating the resulting item."""
        async with self._lock:
            current = self._items.get(item_id)
            if current is None:
                return WriteResult.failure(f"Item not found: {item_id}")
            unknown = [name for name in fields if name not in Item.model_fields]
            if unknown:
                return WriteResult.failure(str(UnknownFieldError(unknown[0])))
            try:
                updated = Item.model_validate({**current.model_dump(), **fields})
            except ValueError as e:
                return WriteResult.failure(str(e))
            self._items[item_id] = updated

        self._log.debug("item_updated", item_id=item_id, fields=sorted(fields))
        return WriteResult.success()

    async def delete_item(self, item_id: str) -> WriteResult:
        """Remove an item."""
        async with self._lock:
            if self._items.pop(item_id, None) is None:
                return WriteResult.failure(f"Item not found: {item_id}")
            self._child_counts.pop(item_id, None)

        self._log.debug("item_deleted", item_id=item_id)
        return WriteResult.success()
