"""State machine for two-phase rank proposals."""

from enum import Enum
from typing import ClassVar

import structlog

from curation.coordinator.errors import CurationError


logger = structlog.get_logger()


class ProposalState(str, Enum):
    """Lifecycle of a rank proposal.

    State transitions:
        PROPOSED -> CONFIRMED: editor accepted; the rank write is issued
        PROPOSED -> CANCELLED: editor declined; nothing changes
    """

    PROPOSED = "PROPOSED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class ProposalStateError(CurationError):
    """Raised when a proposal is resolved more than once."""

    def __init__(
        self, proposal_id: str, from_state: ProposalState, to_state: ProposalState
    ) -> None:
        """Initialize the error.

        Args:
            proposal_id: Proposal identifier.
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.proposal_id = proposal_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal proposal transition for '{proposal_id}': "
            f"{from_state.value} -> {to_state.value}"
        )


class ProposalStateMachine:
    """Enforces that a proposal is confirmed or cancelled exactly once."""

    VALID_TRANSITIONS: ClassVar[dict[ProposalState, set[ProposalState]]] = {
        ProposalState.PROPOSED: {ProposalState.CONFIRMED, ProposalState.CANCELLED},
        ProposalState.CONFIRMED: set(),
        ProposalState.CANCELLED: set(),
    }

    def __init__(self, proposal_id: str) -> None:
        """Initialize in PROPOSED state.

        Args:
            proposal_id: Proposal identifier for logging.
        """
        self._proposal_id = proposal_id
        self._state = ProposalState.PROPOSED
        self._log = logger.bind(component="coordinator", proposal_id=proposal_id)

    @property
    def state(self) -> ProposalState:
        """Get the current state."""
        return self._state

    def can_transition(self, to_state: ProposalState) -> bool:
        """Check if a transition to the given state is valid."""
        return to_state in self.VALID_TRANSITIONS[self._state]

    def transition(self, to_state: ProposalState) -> None:
        """Move to a new state.

        Raises:
            ProposalStateError: If the proposal was already resolved.
        """
        if not self.can_transition(to_state):
            self._log.error(
                "invariant_violation",
                error_type="illegal_state_transition",
                from_state=self._state.value,
                to_state=to_state.value,
            )
            raise ProposalStateError(self._proposal_id, self._state, to_state)

        old_state = self._state
        self._state = to_state
        self._log.info(
            "proposal_state_transition",
            from_state=old_state.value,
            to_state=to_state.value,
        )

    def is_resolved(self) -> bool:
        """Whether the proposal was confirmed or cancelled."""
        return self._state is not ProposalState.PROPOSED
