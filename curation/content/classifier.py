"""Lifecycle state classification for items."""

from curation.items.models import Item, LifecycleState


_STATE_DESCRIPTIONS: dict[LifecycleState, str] = {
    LifecycleState.DRAFT: "Story is not published and not visible to users",
    LifecycleState.READY: (
        "Story is published but may be missing content "
        "(episodes, description, or images)"
    ),
    LifecycleState.PUBLISHED: "Story is published and complete",
    LifecycleState.FEATURED: (
        "Story is published and featured on homepage "
        "(banner, new launch, or ranked)"
    ),
    LifecycleState.ARCHIVED: "Story is archived (unpublished)",
}


def is_complete(item: Item, episode_count: int) -> bool:
    """Check whether a published item has everything a listing needs."""
    return bool(
        item.title and item.cover_image_url and item.description and episode_count > 0
    )


def classify(item: Item, episode_count: int | None = None) -> LifecycleState:
    """Derive the lifecycle state of an item.

    Rules are evaluated in order and the first match wins:
    unpublished items are drafts, any homepage configuration makes an item
    featured, and published items are otherwise ready or published depending
    on completeness.

    Args:
        item: Item to classify.
        episode_count: Episode count to use; defaults to ``item.episode_count``.

    Returns:
        The derived state. ``ARCHIVED`` is never returned.
    """
    if not item.is_published:
        return LifecycleState.DRAFT

    if item.has_homepage_config:
        return LifecycleState.FEATURED

    count = item.episode_count if episode_count is None else episode_count
    if not is_complete(item, count):
        return LifecycleState.READY

    return LifecycleState.PUBLISHED


def describe_state(state: LifecycleState) -> str:
    """Human-readable explanation of a lifecycle state."""
    return _STATE_DESCRIPTIONS[state]


def featured_slots(item: Item) -> list[str]:
    """Names of the homepage placements configured on an item."""
    slots: list[str] = []
    if item.is_banner:
        slots.append("banner")
    if item.is_new_launch:
        slots.append("new_launch")
    if item.is_ranked:
        slots.append("ranked")
    return slots
