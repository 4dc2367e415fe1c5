"""Per-item content analysis: lifecycle state, readiness and safety warnings."""

from curation.content.classifier import (
    classify,
    describe_state,
    featured_slots,
    is_complete,
)
from curation.content.readiness import HomepageReadiness, compute_readiness
from curation.content.titles import summarize_titles
from curation.content.warnings import (
    SafetyWarning,
    WarningKind,
    WarningSeverity,
    collect_warnings,
    has_errors,
)


__all__ = [
    "HomepageReadiness",
    "SafetyWarning",
    "WarningKind",
    "WarningSeverity",
    "classify",
    "collect_warnings",
    "compute_readiness",
    "describe_state",
    "featured_slots",
    "has_errors",
    "is_complete",
    "summarize_titles",
]
