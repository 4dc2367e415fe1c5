"""Fetch the working set with per-item episode counts."""

import asyncio
import time

import structlog

from curation.config.constants import COMPONENT_STORE
from curation.items.models import Item
from curation.ranker.models import FilterCriteria
from curation.store.errors import ItemStoreError
from curation.store.protocols import ItemStore


logger = structlog.get_logger()


async def _count_or_zero(store: ItemStore, item_id: str) -> int:
    try:
        return await store.count_children(item_id)
    except ItemStoreError as e:
        logger.warning(
            "child_count_failed",
            component=COMPONENT_STORE,
            item_id=item_id,
            error=str(e),
        )
        return 0


async def load_working_set(
    store: ItemStore, criteria: FilterCriteria | None = None
) -> list[Item]:
    """List items and attach their episode counts.

    Counts are fetched concurrently; a failed count is logged and treated
    as 0 so one bad item does not block the whole screen.

    Args:
        store: Item store to read from.
        criteria: Optional server-side filter.

    Returns:
        Items in store listing order with ``episode_count`` populated.

    Raises:
        ItemStoreReadError: If listing the items fails.
    """
    start = time.perf_counter()
    items = await store.list_items(criteria)
    counts = await asyncio.gather(*(_count_or_zero(store, i.id) for i in items))
    loaded = [
        item.model_copy(update={"episode_count": count})
        for item, count in zip(items, counts, strict=True)
    ]

    logger.info(
        "working_set_loaded",
        component=COMPONENT_STORE,
        item_count=len(loaded),
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
    )
    return loaded
