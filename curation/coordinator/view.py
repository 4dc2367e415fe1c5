"""Derived, read-only view handed to the presentation layer."""

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from curation.config.schemas.homepage import SectionLimits
from curation.content.classifier import classify
from curation.content.warnings import SafetyWarning, collect_warnings
from curation.coordinator.working_set import RankEdits
from curation.items.models import Item, LifecycleState, RankSlot
from curation.ranker.assembler import assemble_homepage
from curation.ranker.collisions import detect_collisions
from curation.ranker.filters import filter_items
from curation.ranker.models import FilterCriteria, HomepageSections


class CurationView(BaseModel):
    """Everything the UI renders for one state of the working set.

    Attributes:
        items: Items in working-set order, including optimistic changes.
        states: Lifecycle state per item id.
        collisions: Homepage rank collisions, unsaved edits included.
        new_launch_collisions: New launch rank collisions, unsaved edits included.
        sections: Assembled homepage sections.
        warnings: Soft invariant violations.
        busy: ``(item_id, field)`` pairs with a pending write.
        pending_ranks: Unsaved rank edits as ``{item_id: {slot: rank}}``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    items: list[Item] = Field(default_factory=list)
    states: dict[str, LifecycleState] = Field(default_factory=dict)
    collisions: dict[int, list[str]] = Field(default_factory=dict)
    new_launch_collisions: dict[int, list[str]] = Field(default_factory=dict)
    sections: HomepageSections = Field(default_factory=HomepageSections)
    warnings: list[SafetyWarning] = Field(default_factory=list)
    busy: frozenset[tuple[str, str]] = frozenset()
    pending_ranks: dict[str, dict[str, int | None]] = Field(default_factory=dict)

    def state_of(self, item_id: str) -> LifecycleState | None:
        """Lifecycle state of one item, or None if unknown."""
        return self.states.get(item_id)

    def item(self, item_id: str) -> Item | None:
        """Item by id, or None."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def filtered(self, criteria: FilterCriteria) -> list[Item]:
        """Items matching a filter, in working-set order."""
        return filter_items(self.items, criteria)


def build_view(
    items: Sequence[Item],
    rank_edits: RankEdits | None = None,
    busy: Iterable[tuple[str, str]] = (),
    limits: SectionLimits | None = None,
) -> CurationView:
    """Recompute every derived output from the current items.

    Args:
        items: Working-set items, optimistic changes applied.
        rank_edits: Unsaved rank edits, overlaid only for collision detection.
        busy: Pending ``(item_id, field)`` writes.
        limits: Homepage section caps.

    Returns:
        A fresh view.
    """
    edits = rank_edits or RankEdits()
    return CurationView(
        items=list(items),
        states={item.id: classify(item) for item in items},
        collisions=detect_collisions(edits.overlay(items, RankSlot.HOMEPAGE)),
        new_launch_collisions=detect_collisions(
            edits.overlay(items, RankSlot.NEW_LAUNCH), RankSlot.NEW_LAUNCH
        ),
        sections=assemble_homepage(items, limits),
        warnings=collect_warnings(items),
        busy=frozenset(busy),
        pending_ranks=edits.snapshot(),
    )
