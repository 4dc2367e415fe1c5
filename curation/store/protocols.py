"""Protocol interface for item stores."""

from typing import Any, Protocol, runtime_checkable

from curation.items.models import Item
from curation.ranker.models import FilterCriteria
from curation.store.models import WriteResult


@runtime_checkable
class ItemStore(Protocol):
    """Remote persistence for items.

    The store performs no uniqueness or consistency checks; ranking
    invariants are enforced (softly) by the engine. Reads raise
    ``ItemStoreReadError`` on failure, writes return a failed
    ``WriteResult``.
    """

    async def list_items(self, criteria: FilterCriteria | None = None) -> list[Item]:
        """List items, optionally filtered, ordered by homepage rank (unranked
        last) then newest first."""
        ...

    async def count_children(self, item_id: str) -> int:
        """Count child records (episodes) belonging to an item."""
        ...

    async def update_item(self, item_id: str, fields: dict[str, Any]) -> WriteResult:
        """Apply a partial update to one item."""
        ...

    async def delete_item(self, item_id: str) -> WriteResult:
        """Delete one item."""
        ...
