"""Rank collision detection."""

from collections.abc import Iterable, Sequence

from curation.items.models import Item, RankSlot


def detect_collisions(
    items: Iterable[Item], slot: RankSlot = RankSlot.HOMEPAGE
) -> dict[int, list[str]]:
    """Find ranks held by two or more items.

    Args:
        items: Items to scan.
        slot: Which rank field to check.

    Returns:
        Mapping of rank to the titles holding it, in scan order. Ranks held by
        a single item are omitted.
    """
    rank_map: dict[int, list[str]] = {}
    for item in items:
        rank = item.rank_for(slot)
        if rank is None:
            continue
        rank_map.setdefault(rank, []).append(item.title)

    return {rank: titles for rank, titles in rank_map.items() if len(titles) > 1}


def find_rank_conflicts(
    items: Sequence[Item],
    item_id: str,
    rank: int | None,
    slot: RankSlot = RankSlot.HOMEPAGE,
) -> list[Item]:
    """Items other than ``item_id`` that already hold ``rank`` in ``slot``.

    Clearing a rank (``None``) never conflicts.
    """
    if rank is None:
        return []
    return [i for i in items if i.id != item_id and i.rank_for(slot) == rank]
