"""Optimistic mutation coordinator for homepage curation edits."""

import asyncio
import time
import uuid
from collections.abc import Callable, Iterable
from typing import Any, Self

import structlog

from curation.config.constants import COMPONENT_COORDINATOR
from curation.config.schemas.homepage import HomepageConfig
from curation.coordinator.errors import (
    MutationInFlightError,
    RemoteWriteFailure,
    StaleReferenceError,
    UnknownProposalError,
    ValidationRejection,
)
from curation.coordinator.metrics import CoordinatorMetrics
from curation.coordinator.models import MutationOutcome, MutationStatus, RankProposal
from curation.coordinator.mutations import Mutation, RankAssign, parse_rank_input
from curation.coordinator.notifications import (
    Notification,
    NotificationLevel,
    NotificationLog,
    Notifier,
)
from curation.coordinator.view import CurationView, build_view
from curation.coordinator.working_set import RankEdits, WorkingSet
from curation.items.models import Item, RankSlot
from curation.ranker.collisions import find_rank_conflicts
from curation.store.errors import ItemStoreError
from curation.store.loader import load_working_set
from curation.store.models import WriteResult
from curation.store.protocols import ItemStore


logger = structlog.get_logger()

ViewListener = Callable[[CurationView], None]


class MutationCoordinator:
    """Applies single-field edits optimistically and rolls back on failure.

    Every mutation follows the same protocol:
        snapshot the field -> optimistic update (busy) -> rebuild view
        -> await store write -> keep (success) or restore the field (failure)

    Snapshots are per item and per field, so a rollback never overwrites a
    concurrent edit to another field or another item. Only one write per
    ``(item_id, field)`` may be pending; a second one raises
    ``MutationInFlightError``.

    Rank assignments are two-phase: ``propose_rank_change`` reports conflicts,
    then ``confirm_rank_change`` or ``cancel_rank_change`` resolves them.
    """

    def __init__(
        self,
        store: ItemStore,
        items: Iterable[Item] = (),
        config: HomepageConfig | None = None,
        notifier: Notifier | None = None,
        metrics: CoordinatorMetrics | None = None,
        session_id: str | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            store: Item store receiving writes.
            items: Initial working set, in display order.
            config: Homepage configuration (section caps).
            notifier: Sink for user-facing notifications.
            metrics: Optional metrics instance.
            session_id: Editor session identifier for logging.
        """
        self._store = store
        self._config = config or HomepageConfig()
        self._notifier: Notifier = notifier or NotificationLog()
        self._metrics = metrics or CoordinatorMetrics.get_instance()
        self._session_id = session_id or uuid.uuid4().hex[:12]

        self._working_set = WorkingSet(items)
        self._rank_edits = RankEdits()
        self._in_flight: set[tuple[str, str]] = set()
        self._proposals: dict[str, RankProposal] = {}
        self._listeners: list[ViewListener] = []

        self._log = logger.bind(
            component=COMPONENT_COORDINATOR,
            session_id=self._session_id,
        )
        self._view = self._build_view()

    @classmethod
    async def load(cls, store: ItemStore, **kwargs: Any) -> Self:
        """Build a coordinator over a freshly fetched working set.

        Raises:
            ItemStoreReadError: If the initial fetch fails.
        """
        items = await load_working_set(store)
        return cls(store, items, **kwargs)

    # ===== Read side =====

    @property
    def session_id(self) -> str:
        """Editor session identifier."""
        return self._session_id

    @property
    def view(self) -> CurationView:
        """Latest derived view, optimistic changes included."""
        return self._view

    @property
    def items(self) -> list[Item]:
        """Working-set items in display order."""
        return self._working_set.items()

    @property
    def notifier(self) -> Notifier:
        """Notification sink."""
        return self._notifier

    def is_busy(self, item_id: str, field_name: str) -> bool:
        """Whether a write to this item field is pending."""
        return (item_id, field_name) in self._in_flight

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Call ``listener`` with every new view.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def refresh(self) -> CurationView:
        """Refetch the working set from the store.

        Items that disappeared are dropped along with their unsaved rank
        edits and open proposals. On a read failure the previous snapshot is kept and an error
        notification is emitted.
        """
        try:
            items = await load_working_set(self._store)
        except ItemStoreError as e:
            self._log.error("working_set_refresh_failed", error=str(e))
            self._notify(NotificationLevel.ERROR, "Error", "Failed to load stories")
            return self._view

        self._working_set.replace_all(items)
        self._rank_edits.prune(item.id for item in items)
        self._drop_proposals(
            lambda p: p.item_id not in self._working_set, reason="item_removed"
        )
        self._log.info("working_set_refreshed", item_count=len(items))
        self._publish_view()
        return self._view

    # ===== Unsaved rank edits =====

    def stage_rank_edit(
        self, item_id: str, raw_value: object, slot: RankSlot = RankSlot.HOMEPAGE
    ) -> CurationView:
        """Record a typed but unsaved rank and recompute collisions.

        Raises:
            ValidationRejection: If the value is not a non-negative integer.
            StaleReferenceError: If the item is not in the working set.
        """
        rank = parse_rank_input(raw_value)
        if item_id not in self._working_set:
            raise StaleReferenceError(item_id)
        self._rank_edits.stage(item_id, slot, rank)
        self._publish_view()
        return self._view

    def discard_rank_edit(self, item_id: str, slot: RankSlot = RankSlot.HOMEPAGE) -> None:
        """Forget an unsaved rank."""
        self._rank_edits.discard(item_id, slot)
        self._publish_view()

    def pending_rank(self, item_id: str, slot: RankSlot = RankSlot.HOMEPAGE) -> int | None:
        """The unsaved rank if one is staged, otherwise the item's current rank."""
        if self._rank_edits.has(item_id, slot):
            return self._rank_edits.get(item_id, slot)
        item = self._working_set.get(item_id)
        return item.rank_for(slot) if item is not None else None

    # ===== Rank proposals =====

    def propose_rank_change(
        self, item_id: str, rank: object, slot: RankSlot = RankSlot.HOMEPAGE
    ) -> RankProposal:
        """Open a rank assignment and report conflicting items.

        An earlier open proposal for the same item and slot is cancelled.

        Args:
            item_id: Item to re-rank.
            rank: Raw rank input; blank or None clears the rank.
            slot: Homepage or new launch rank.

        Returns:
            The proposal. If ``requires_confirmation`` is False it can be
            confirmed without asking the editor.

        Raises:
            ValidationRejection: If the rank input is invalid.
            StaleReferenceError: If the item is not in the working set.
        """
        try:
            value = parse_rank_input(rank)
        except ValidationRejection:
            self._metrics.record_rejected()
            self._log.info("rank_input_rejected", item_id=item_id, value=repr(rank))
            raise
        return self._open_proposal(RankAssign(item_id=item_id, rank=value, slot=slot))

    async def confirm_rank_change(self, proposal_id: str) -> MutationOutcome:
        """Accept a proposal and run the rank write.

        Raises:
            UnknownProposalError: If no open proposal has this id.
            MutationInFlightError: If the same rank field is already being
                saved; the proposal stays open.
        """
        proposal = self._get_proposal(proposal_id)
        mutation = proposal.mutation
        if self.is_busy(mutation.item_id, mutation.field_name):
            self._metrics.record_rejected()
            raise MutationInFlightError(mutation.item_id, mutation.field_name)

        proposal.confirm()
        del self._proposals[proposal_id]
        return await self._execute(mutation)

    def cancel_rank_change(self, proposal_id: str) -> MutationOutcome:
        """Decline a proposal; nothing changes and the store is not called.

        Raises:
            UnknownProposalError: If no open proposal has this id.
        """
        proposal = self._get_proposal(proposal_id)
        proposal.cancel()
        del self._proposals[proposal_id]
        self._metrics.record_rejected()
        self._log.info(
            "rank_change_cancelled",
            proposal_id=proposal_id,
            item_id=proposal.item_id,
            rank=proposal.rank,
        )
        return MutationOutcome(
            status=MutationStatus.CANCELLED,
            mutation=proposal.mutation,
            error=ValidationRejection("Rank change cancelled", proposal.rank),
            proposal=proposal,
        )

    def open_proposals(self) -> list[RankProposal]:
        """Proposals awaiting confirmation or cancellation."""
        return list(self._proposals.values())

    # ===== Mutations =====

    async def apply(self, mutation: Mutation) -> MutationOutcome:
        """Single entry point for every mutation kind.

        A rank assignment that collides with another item returns
        ``CONFIRMATION_REQUIRED`` without touching any state.

        Raises:
            MutationInFlightError: If the same item field already has a
                pending write. No proposal is opened in that case.
        """
        if isinstance(mutation, RankAssign):
            if self.is_busy(mutation.item_id, mutation.field_name):
                self._metrics.record_rejected()
                self._log.warning(
                    "mutation_rejected_in_flight",
                    item_id=mutation.item_id,
                    field=mutation.field_name,
                )
                raise MutationInFlightError(mutation.item_id, mutation.field_name)
            try:
                proposal = self._open_proposal(mutation)
            except StaleReferenceError as e:
                return MutationOutcome(
                    status=MutationStatus.NOT_FOUND, mutation=mutation, error=e
                )
            if proposal.requires_confirmation:
                return MutationOutcome(
                    status=MutationStatus.CONFIRMATION_REQUIRED,
                    mutation=mutation,
                    proposal=proposal,
                )
            return await self.confirm_rank_change(proposal.proposal_id)

        return await self._execute(mutation)

    async def _execute(self, mutation: Mutation) -> MutationOutcome:
        item_id = mutation.item_id
        field_name = mutation.field_name
        key = (item_id, field_name)
        log = self._log.bind(
            item_id=item_id, field=field_name, kind=mutation.kind.value
        )

        if key in self._in_flight:
            self._metrics.record_rejected()
            log.warning("mutation_rejected_in_flight")
            raise MutationInFlightError(item_id, field_name)

        try:
            prior = self._working_set.set_field(item_id, field_name, mutation.value)
        except StaleReferenceError as e:
            self._report_stale(e, field_name)
            return MutationOutcome(
                status=MutationStatus.NOT_FOUND, mutation=mutation, error=e
            )

        self._in_flight.add(key)
        self._metrics.record_started()
        log.info("mutation_started", prior=prior, value=mutation.value)
        self._publish_view()

        start = time.perf_counter()
        try:
            result = await self._store.update_item(item_id, mutation.to_update())
        except asyncio.CancelledError:
            self._in_flight.discard(key)
            self._working_set.restore_field(item_id, field_name, prior)
            log.warning("mutation_cancelled")
            self._publish_view()
            raise
        except Exception as e:  # noqa: BLE001
            log.warning("store_write_raised", error=str(e), error_type=type(e).__name__)
            result = WriteResult.failure(str(e) or mutation.failure_message())
        self._in_flight.discard(key)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        if result.ok:
            self._metrics.record_success(duration_ms)
            if isinstance(mutation, RankAssign) and self._rank_edits.has(
                item_id, mutation.slot
            ):
                if self._rank_edits.get(item_id, mutation.slot) == mutation.rank:
                    self._rank_edits.discard(item_id, mutation.slot)
            log.info("mutation_succeeded", duration_ms=duration_ms)
            self._notify(
                NotificationLevel.SUCCESS,
                "Success",
                mutation.success_message(),
                item_id=item_id,
                field_name=field_name,
            )
            self._publish_view()
            return MutationOutcome(status=MutationStatus.SUCCEEDED, mutation=mutation)

        reason = result.reason or mutation.failure_message()
        restored = self._working_set.restore_field(item_id, field_name, prior)
        if not restored:
            self._metrics.record_rollback_skipped()
        self._metrics.record_failure(field_name, duration_ms)
        log.warning(
            "mutation_rolled_back",
            reason=reason,
            restored=restored,
            duration_ms=duration_ms,
        )
        self._notify(
            NotificationLevel.ERROR,
            "Error",
            reason,
            item_id=item_id,
            field_name=field_name,
        )
        self._publish_view()
        return MutationOutcome(
            status=MutationStatus.FAILED,
            mutation=mutation,
            error=RemoteWriteFailure(item_id, field_name, reason),
        )

    # ===== Internals =====

    def _open_proposal(self, mutation: RankAssign) -> RankProposal:
        if mutation.item_id not in self._working_set:
            error = StaleReferenceError(mutation.item_id)
            self._report_stale(error, mutation.field_name)
            raise error

        # one open proposal per item and slot; a newer one replaces the older
        self._drop_proposals(
            lambda p: p.item_id == mutation.item_id and p.slot is mutation.slot,
            reason="superseded",
        )
        conflicts = find_rank_conflicts(
            self._working_set.items(), mutation.item_id, mutation.rank, mutation.slot
        )
        proposal = RankProposal(
            proposal_id=uuid.uuid4().hex,
            mutation=mutation,
            conflicting_titles=[item.title for item in conflicts],
        )
        self._proposals[proposal.proposal_id] = proposal
        self._log.info(
            "rank_change_proposed",
            proposal_id=proposal.proposal_id,
            item_id=mutation.item_id,
            slot=mutation.slot.value,
            rank=mutation.rank,
            conflict_count=len(conflicts),
        )
        return proposal

    def _drop_proposals(
        self, predicate: Callable[[RankProposal], bool], reason: str
    ) -> None:
        """Cancel and forget open proposals matching ``predicate``."""
        for proposal in [p for p in self._proposals.values() if predicate(p)]:
            proposal.cancel()
            del self._proposals[proposal.proposal_id]
            self._log.info(
                "rank_proposal_dropped",
                proposal_id=proposal.proposal_id,
                item_id=proposal.item_id,
                reason=reason,
            )

    def _get_proposal(self, proposal_id: str) -> RankProposal:
        proposal = self._proposals.get(proposal_id)
        if proposal is None:
            raise UnknownProposalError(proposal_id)
        return proposal

    def _report_stale(self, error: StaleReferenceError, field_name: str) -> None:
        self._metrics.record_stale()
        self._log.info("mutation_target_missing", item_id=error.item_id, field=field_name)
        self._notify(
            NotificationLevel.INFO,
            "Not found",
            str(error),
            item_id=error.item_id,
            field_name=field_name,
        )

    def _notify(
        self,
        level: NotificationLevel,
        title: str,
        message: str,
        item_id: str | None = None,
        field_name: str | None = None,
    ) -> None:
        self._notifier.notify(
            Notification(
                level=level,
                title=title,
                message=message,
                item_id=item_id,
                field_name=field_name,
            )
        )

    def _build_view(self) -> CurationView:
        return build_view(
            self._working_set.items(),
            rank_edits=self._rank_edits,
            busy=self._in_flight,
            limits=self._config.limits,
        )

    def _publish_view(self) -> None:
        self._view = self._build_view()
        for listener in list(self._listeners):
            try:
                listener(self._view)
            except Exception:  # noqa: BLE001
                self._log.exception("view_listener_failed")
