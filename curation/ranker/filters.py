"""Working-set filtering for the ranking table."""

from collections.abc import Sequence

from curation.items.models import Item
from curation.ranker.models import (
    ALL_LANGUAGES,
    FilterCriteria,
    StatusFilter,
    VisibilityFilter,
)


def _matches_status(item: Item, status: StatusFilter) -> bool:
    if status is StatusFilter.PUBLISHED:
        return item.is_published
    if status is StatusFilter.DRAFT:
        return not item.is_published
    return True


def _matches_visibility(item: Item, visibility: VisibilityFilter) -> bool:
    if visibility is VisibilityFilter.BANNER:
        return item.is_banner
    if visibility is VisibilityFilter.NEW_LAUNCH:
        return item.is_new_launch
    if visibility is VisibilityFilter.RANKED:
        return item.is_ranked
    if visibility is VisibilityFilter.UNRANKED:
        return not item.is_ranked
    return True


def matches(item: Item, criteria: FilterCriteria) -> bool:
    """Check one item against every predicate."""
    return (
        _matches_status(item, criteria.status)
        and _matches_visibility(item, criteria.visibility)
        and (criteria.language == ALL_LANGUAGES or item.language == criteria.language)
    )


def filter_items(items: Sequence[Item], criteria: FilterCriteria) -> list[Item]:
    """Return the items that satisfy all predicates, preserving order.

    Args:
        items: Items to filter; not modified.
        criteria: Status, visibility and language predicates.

    Returns:
        A new list.
    """
    return [item for item in items if matches(item, criteria)]


def partition_ranked(items: Sequence[Item]) -> tuple[list[Item], list[Item]]:
    """Split items into ranked (ascending, stable) and unranked (input order)."""
    ranked = sorted(
        (i for i in items if i.is_ranked), key=lambda i: i.homepage_rank or 0
    )
    unranked = [i for i in items if not i.is_ranked]
    return ranked, unranked
