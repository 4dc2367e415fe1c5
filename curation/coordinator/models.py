"""Outcome and proposal models for coordinated mutations."""

from dataclasses import dataclass, field
from enum import Enum

from curation.content.titles import summarize_titles
from curation.coordinator.errors import CurationError
from curation.coordinator.mutations import Mutation, RankAssign
from curation.coordinator.state_machine import ProposalState, ProposalStateMachine
from curation.items.models import RankSlot


class MutationStatus(str, Enum):
    """How a mutation request resolved.

    - SUCCEEDED: store confirmed; optimistic value kept
    - FAILED: store rejected; field rolled back
    - NOT_FOUND: item missing from the working set; nothing changed
    - CONFIRMATION_REQUIRED: rank conflict; awaiting confirm or cancel
    - CANCELLED: editor declined a rank conflict
    """

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    NOT_FOUND = "not_found"
    CONFIRMATION_REQUIRED = "confirmation_required"
    CANCELLED = "cancelled"


@dataclass
class RankProposal:
    """A pending rank assignment, possibly conflicting with other items.

    Attributes:
        proposal_id: Identifier used to confirm or cancel.
        mutation: The rank assignment to perform on confirmation.
        conflicting_titles: Titles of other items already holding the rank.
    """

    proposal_id: str
    mutation: RankAssign
    conflicting_titles: list[str] = field(default_factory=list)
    _machine: ProposalStateMachine = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._machine = ProposalStateMachine(self.proposal_id)

    @property
    def item_id(self) -> str:
        """Item whose rank changes."""
        return self.mutation.item_id

    @property
    def rank(self) -> int | None:
        """Proposed rank."""
        return self.mutation.rank

    @property
    def slot(self) -> RankSlot:
        """Slot whose rank changes."""
        return self.mutation.slot

    @property
    def state(self) -> ProposalState:
        """Current proposal state."""
        return self._machine.state

    @property
    def requires_confirmation(self) -> bool:
        """Whether other items already hold the proposed rank."""
        return bool(self.conflicting_titles)

    @property
    def confirmation_message(self) -> str | None:
        """Yes/no question naming the conflicting items, if any."""
        if not self.conflicting_titles:
            return None
        return (
            f"Rank {self.rank} is already used by: "
            f"{summarize_titles(self.conflicting_titles)}. Continue anyway?"
        )

    def confirm(self) -> None:
        """Mark confirmed.

        Raises:
            ProposalStateError: If already resolved.
        """
        self._machine.transition(ProposalState.CONFIRMED)

    def cancel(self) -> None:
        """Mark cancelled.

        Raises:
            ProposalStateError: If already resolved.
        """
        self._machine.transition(ProposalState.CANCELLED)


@dataclass(frozen=True)
class MutationOutcome:
    """Result of a coordinator operation.

    Attributes:
        status: How the request resolved.
        mutation: The mutation involved, if one was built.
        error: Typed error for non-successful outcomes.
        proposal: Pending proposal when confirmation is required.
    """

    status: MutationStatus
    mutation: Mutation | None = None
    error: CurationError | None = None
    proposal: RankProposal | None = None

    @property
    def ok(self) -> bool:
        """Whether the change was persisted."""
        return self.status is MutationStatus.SUCCEEDED

    @property
    def message(self) -> str:
        """Text suitable for the presentation layer."""
        if self.proposal is not None and self.status is MutationStatus.CONFIRMATION_REQUIRED:
            return self.proposal.confirmation_message or ""
        if self.error is not None:
            return str(self.error)
        if self.mutation is not None:
            return self.mutation.success_message()
        return self.status.value
