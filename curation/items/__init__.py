"""Item data model shared by every curation component."""

from curation.items.models import ImageSlot, Item, LifecycleState, RankSlot


__all__ = ["ImageSlot", "Item", "LifecycleState", "RankSlot"]
