"""Error taxonomy for coordinated mutations.

Local errors (``ValidationRejection``, ``StaleReferenceError``) short-circuit
before any state changes. ``RemoteWriteFailure`` is never raised out of the
coordinator; it is attached to the failed outcome after the rollback.
"""


class CurationError(Exception):
    """Base exception for all curation engine errors."""


class ValidationRejection(CurationError):
    """Raised when an edit is refused locally, before any store call."""

    def __init__(self, message: str, value: object = None) -> None:
        """Initialize the rejection.

        Args:
            message: Human-readable reason.
            value: The rejected input, if any.
        """
        self.value = value
        super().__init__(message)


class RemoteWriteFailure(CurationError):
    """The item store did not apply a write; the field was rolled back."""

    def __init__(self, item_id: str, field_name: str, reason: str) -> None:
        """Initialize the failure.

        Args:
            item_id: Item whose write failed.
            field_name: Field that was rolled back.
            reason: Reason reported by the store.
        """
        self.item_id = item_id
        self.field_name = field_name
        self.reason = reason
        super().__init__(reason)


class StaleReferenceError(CurationError):
    """Raised when an edit targets an item missing from the working set."""

    def __init__(self, item_id: str) -> None:
        """Initialize the error.

        Args:
            item_id: The missing item id.
        """
        self.item_id = item_id
        super().__init__(f"Story not found: {item_id}")


class MutationInFlightError(CurationError):
    """Raised when the same field of the same item already has a pending write."""

    def __init__(self, item_id: str, field_name: str) -> None:
        """Initialize the error.

        Args:
            item_id: Item being edited.
            field_name: Field with a pending write.
        """
        self.item_id = item_id
        self.field_name = field_name
        super().__init__(
            f"A change to {field_name} on {item_id} is already being saved; "
            "retry once it completes"
        )


class UnknownProposalError(CurationError):
    """Raised when confirming or cancelling a proposal that does not exist."""

    def __init__(self, proposal_id: str) -> None:
        """Initialize the error.

        Args:
            proposal_id: The unknown proposal id.
        """
        self.proposal_id = proposal_id
        super().__init__(f"Unknown rank proposal: {proposal_id}")
