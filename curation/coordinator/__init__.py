"""Optimistic mutation coordination over the curation working set."""

from curation.coordinator.coordinator import MutationCoordinator
from curation.coordinator.errors import (
    CurationError,
    MutationInFlightError,
    RemoteWriteFailure,
    StaleReferenceError,
    UnknownProposalError,
    ValidationRejection,
)
from curation.coordinator.metrics import CoordinatorMetrics
from curation.coordinator.models import MutationOutcome, MutationStatus, RankProposal
from curation.coordinator.mutations import (
    BannerToggle,
    ImageAssign,
    Mutation,
    MutationKind,
    NewLaunchToggle,
    PublishToggle,
    RankAssign,
    parse_rank_input,
)
from curation.coordinator.notifications import (
    Notification,
    NotificationLevel,
    NotificationLog,
    Notifier,
)
from curation.coordinator.state_machine import (
    ProposalState,
    ProposalStateError,
    ProposalStateMachine,
)
from curation.coordinator.view import CurationView, build_view
from curation.coordinator.working_set import RankEdits, WorkingSet


__all__ = [
    "BannerToggle",
    "CoordinatorMetrics",
    "CurationError",
    "CurationView",
    "ImageAssign",
    "Mutation",
    "MutationCoordinator",
    "MutationInFlightError",
    "MutationKind",
    "MutationOutcome",
    "MutationStatus",
    "NewLaunchToggle",
    "Notification",
    "NotificationLevel",
    "NotificationLog",
    "Notifier",
    "ProposalState",
    "ProposalStateError",
    "ProposalStateMachine",
    "PublishToggle",
    "RankAssign",
    "RankEdits",
    "RankProposal",
    "RemoteWriteFailure",
    "StaleReferenceError",
    "UnknownProposalError",
    "ValidationRejection",
    "WorkingSet",
    "build_view",
    "parse_rank_input",
]
