"""End-to-end curation scenarios over an in-memory item store."""

import pytest

from curation.content.classifier import classify
from curation.content.readiness import compute_readiness
from curation.content.warnings import WarningKind, WarningSeverity
from curation.coordinator import (
    BannerToggle,
    ImageAssign,
    MutationCoordinator,
    MutationStatus,
    NotificationLevel,
    NotificationLog,
    PublishToggle,
    RankAssign,
)
from curation.items.models import ImageSlot, LifecycleState
from curation.ranker.models import FilterCriteria, VisibilityFilter
from tests.helpers.factories import make_complete_item, make_item
from tests.helpers.stores import ScriptedStore


@pytest.fixture
def store() -> ScriptedStore:
    """Two published stories, X ranked first, plus a draft."""
    return ScriptedStore(
        [
            make_complete_item("x", title="Story X", homepage_rank=1),
            make_complete_item("y", title="Story Y"),
            make_item("z", title="Story Z", age_hours=5),
        ],
        child_counts={"x": 4, "y": 2},
    )


class TestRankConflictScenario:
    """Saving a taken rank asks for confirmation first."""

    @pytest.mark.asyncio
    async def test_decline_then_accept(self, store: ScriptedStore) -> None:
        """Declining changes nothing; accepting writes optimistically."""
        notifier = NotificationLog()
        coordinator = await MutationCoordinator.load(store, notifier=notifier)

        pending = await coordinator.apply(RankAssign("y", 1))
        assert pending.status == MutationStatus.CONFIRMATION_REQUIRED
        assert pending.proposal.conflicting_titles == ["Story X"]

        declined = coordinator.cancel_rank_change(pending.proposal.proposal_id)
        assert declined.status == MutationStatus.CANCELLED
        assert coordinator.view.item("y").homepage_rank is None
        assert store.update_calls == []

        retry = coordinator.propose_rank_change("y", 1)
        accepted = await coordinator.confirm_rank_change(retry.proposal_id)

        assert accepted.ok
        assert store.update_calls == [("y", {"homepage_rank": 1})]
        assert store.get("y").homepage_rank == 1
        assert coordinator.view.collisions == {1: ["Story X", "Story Y"]}
        duplicate = [
            w for w in coordinator.view.warnings if w.kind == WarningKind.DUPLICATE_RANK
        ]
        assert duplicate[0].message == "Duplicate homepage rank 1: Story X, Story Y"
        assert notifier.last.level == NotificationLevel.SUCCESS


class TestBannerWithoutImageScenario:
    """Soft invariants flag configuration without blocking it."""

    @pytest.mark.asyncio
    async def test_banner_toggle_flagged_until_image_uploaded(
        self, store: ScriptedStore
    ) -> None:
        """The toggle succeeds, is flagged, and clears once an image lands."""
        coordinator = await MutationCoordinator.load(store)

        outcome = await coordinator.apply(BannerToggle("y", enabled=True))

        view = coordinator.view
        assert outcome.ok
        assert view.state_of("y") == LifecycleState.FEATURED
        assert view.sections.banner == []
        missing = [w for w in view.warnings if w.kind == WarningKind.BANNER_MISSING_IMAGE]
        assert missing[0].severity == WarningSeverity.ERROR
        assert missing[0].item_ids == ["y"]
        assert not compute_readiness(view.item("y")).banner_configured

        await coordinator.apply(
            ImageAssign("y", "https://cdn.example.com/y.jpg", ImageSlot.BANNER)
        )

        view = coordinator.view
        assert [i.id for i in view.sections.banner] == ["y"]
        assert not any(w.kind == WarningKind.BANNER_MISSING_IMAGE for w in view.warnings)
        banner_items = view.filtered(FilterCriteria(visibility=VisibilityFilter.BANNER))
        assert [i.id for i in banner_items] == ["y"]


class TestFailedPublishScenario:
    """A failed write rolls back one field of one item."""

    @pytest.mark.asyncio
    async def test_publish_failure_rolls_back(self, store: ScriptedStore) -> None:
        """The item's flag is restored and nothing else changes."""
        notifier = NotificationLog()
        coordinator = await MutationCoordinator.load(store, notifier=notifier)
        before = {item.id: item for item in coordinator.items}
        store.fail_fields["is_published"] = "row-level security violation"

        outcome = await coordinator.apply(PublishToggle("z", published=True))

        assert outcome.status == MutationStatus.FAILED
        assert outcome.message == "row-level security violation"
        assert {item.id: item for item in coordinator.items} == before
        assert classify(coordinator.view.item("z")) == LifecycleState.DRAFT
        assert notifier.last.level == NotificationLevel.ERROR
        assert notifier.last.message == "row-level security violation"
        assert not store.get("z").is_published

        store.fail_fields.clear()
        retried = await coordinator.apply(PublishToggle("z", published=True))
        assert retried.ok
        assert store.get("z").is_published


class TestRefreshScenario:
    """The working set follows the store between screen loads."""

    @pytest.mark.asyncio
    async def test_refresh_picks_up_external_edits(self, store: ScriptedStore) -> None:
        """Edits made elsewhere appear after a refresh."""
        coordinator = await MutationCoordinator.load(store)
        await store.update_item("y", {"homepage_rank": 0})
        store.set_child_count("y", 9)

        view = await coordinator.refresh()

        assert [i.id for i in view.items] == ["y", "x", "z"]
        assert view.item("y").episode_count == 9
        assert [i.id for i in view.sections.ranked] == ["y", "x"]
