"""Soft invariant checks surfaced as safety warnings.

None of these checks block an edit. They are computed over the working set
after every change so editors can see configuration that will not render
(banner or new launch without an image), duplicate homepage ranks, empty
published stories, and homepage configuration left on unpublished stories.
"""

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from curation.content.titles import summarize_titles
from curation.items.models import Item
from curation.ranker.collisions import detect_collisions


class WarningSeverity(str, Enum):
    """Severity of a safety warning.

    - ERROR: the item cannot render in the slot it is configured for
    - WARNING: likely mistake that still renders
    - INFO: dead configuration with no visible effect
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class WarningKind(str, Enum):
    """Category of a safety warning."""

    DUPLICATE_RANK = "duplicate_rank"
    BANNER_MISSING_IMAGE = "banner_missing_image"
    NEW_LAUNCH_MISSING_IMAGE = "new_launch_missing_image"
    PUBLISHED_WITHOUT_EPISODES = "published_without_episodes"
    UNPUBLISHED_WITH_HOMEPAGE_CONFIG = "unpublished_with_homepage_config"


class SafetyWarning(BaseModel):
    """A single soft-invariant violation report."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    severity: WarningSeverity
    kind: WarningKind
    message: str
    count: int = Field(ge=1)
    item_ids: list[str] = Field(default_factory=list)
    rank: int | None = None


def _plural(count: int) -> str:
    return f"{count} story" if count == 1 else f"{count} stories"


def collect_warnings(items: Sequence[Item]) -> list[SafetyWarning]:
    """Check a collection of items against every soft invariant.

    Args:
        items: Items to check, in working-set order.

    Returns:
        Warnings in a stable order: duplicate ranks (ascending rank), missing
        banner images, missing tile images, published without episodes, and
        unpublished items with homepage configuration.
    """
    warnings: list[SafetyWarning] = []

    collisions = detect_collisions(items)
    for rank in sorted(collisions):
        titles = collisions[rank]
        warnings.append(
            SafetyWarning(
                severity=WarningSeverity.WARNING,
                kind=WarningKind.DUPLICATE_RANK,
                message=f"Duplicate homepage rank {rank}: {summarize_titles(titles)}",
                count=len(titles),
                item_ids=[i.id for i in items if i.homepage_rank == rank],
                rank=rank,
            )
        )

    checks: list[tuple[WarningSeverity, WarningKind, list[Item], str]] = [
        (
            WarningSeverity.ERROR,
            WarningKind.BANNER_MISSING_IMAGE,
            [i for i in items if i.is_banner and not i.has_banner_image],
            "{n} missing banner image",
        ),
        (
            WarningSeverity.ERROR,
            WarningKind.NEW_LAUNCH_MISSING_IMAGE,
            [i for i in items if i.is_new_launch and not i.has_tile_image],
            "{n} missing tile image",
        ),
        (
            WarningSeverity.WARNING,
            WarningKind.PUBLISHED_WITHOUT_EPISODES,
            [i for i in items if i.is_published and i.episode_count == 0],
            "{n} published without episodes",
        ),
        (
            WarningSeverity.INFO,
            WarningKind.UNPUBLISHED_WITH_HOMEPAGE_CONFIG,
            [i for i in items if not i.is_published and i.has_homepage_config],
            "{n} unpublished but still configured for the homepage",
        ),
    ]

    for severity, kind, offenders, template in checks:
        if not offenders:
            continue
        warnings.append(
            SafetyWarning(
                severity=severity,
                kind=kind,
                message=template.format(n=_plural(len(offenders))),
                count=len(offenders),
                item_ids=[i.id for i in offenders],
            )
        )

    return warnings


def has_errors(warnings: Sequence[SafetyWarning]) -> bool:
    """Whether any warning has error severity."""
    return any(w.severity is WarningSeverity.ERROR for w in warnings)
