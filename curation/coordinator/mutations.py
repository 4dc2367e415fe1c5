"""Mutation kinds accepted by the coordinator.

Each mutation changes exactly one item field. The field name doubles as the
busy key, so two different mutations on the same item never block each
other while a repeat of the same one does.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from curation.coordinator.errors import ValidationRejection
from curation.items.models import ImageSlot, RankSlot


class MutationKind(str, Enum):
    """Discriminator for the mutation union."""

    PUBLISH_TOGGLE = "publish_toggle"
    BANNER_TOGGLE = "banner_toggle"
    NEW_LAUNCH_TOGGLE = "new_launch_toggle"
    RANK_ASSIGN = "rank_assign"
    IMAGE_ASSIGN = "image_assign"


def parse_rank_input(raw: object) -> int | None:
    """Parse an editor-supplied rank.

    Args:
        raw: ``None`` or blank text clears the rank; integers and digit
            strings set it.

    Returns:
        The rank, or None for unranked.

    Raises:
        ValidationRejection: For negative, non-numeric or boolean input.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationRejection("Rank must be a whole number", raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = int(text)
        except ValueError as e:
            raise ValidationRejection("Rank must be a whole number", raw) from e
    else:
        raise ValidationRejection("Rank must be a whole number", raw)

    if value < 0:
        raise ValidationRejection("Rank cannot be negative", raw)
    return value


@dataclass(frozen=True)
class _FieldMutation(ABC):
    """Common shape of single-field mutations."""

    item_id: str

    kind: ClassVar[MutationKind]

    @property
    @abstractmethod
    def field_name(self) -> str:
        """Item field written by this mutation."""

    @property
    @abstractmethod
    def value(self) -> Any:
        """New value for the field."""

    def to_update(self) -> dict[str, Any]:
        """Partial-update payload sent to the item store."""
        return {self.field_name: self.value}

    @abstractmethod
    def success_message(self) -> str:
        """Notification text when the store accepts the write."""

    @abstractmethod
    def failure_message(self) -> str:
        """Fallback notification text when the store rejects the write."""


@dataclass(frozen=True)
class PublishToggle(_FieldMutation):
    """Publish or unpublish (archive) an item."""

    published: bool

    kind: ClassVar[MutationKind] = MutationKind.PUBLISH_TOGGLE

    @property
    def field_name(self) -> str:
        return "is_published"

    @property
    def value(self) -> bool:
        return self.published

    def success_message(self) -> str:
        return "Story published" if self.published else "Story archived (unpublished)"

    def failure_message(self) -> str:
        return "Failed to update story"


@dataclass(frozen=True)
class BannerToggle(_FieldMutation):
    """Add or remove an item from the banner carousel."""

    enabled: bool

    kind: ClassVar[MutationKind] = MutationKind.BANNER_TOGGLE

    @property
    def field_name(self) -> str:
        return "is_banner"

    @property
    def value(self) -> bool:
        return self.enabled

    def success_message(self) -> str:
        return "Story added to banner" if self.enabled else "Story removed from banner"

    def failure_message(self) -> str:
        return "Failed to update banner status"


@dataclass(frozen=True)
class NewLaunchToggle(_FieldMutation):
    """Add or remove an item from the new launch grid."""

    enabled: bool

    kind: ClassVar[MutationKind] = MutationKind.NEW_LAUNCH_TOGGLE

    @property
    def field_name(self) -> str:
        return "is_new_launch"

    @property
    def value(self) -> bool:
        return self.enabled

    def success_message(self) -> str:
        if self.enabled:
            return "Story added to new launches"
        return "Story removed from new launches"

    def failure_message(self) -> str:
        return "Failed to update new launch status"


@dataclass(frozen=True)
class RankAssign(_FieldMutation):
    """Set or clear the homepage or new launch rank."""

    rank: int | None
    slot: RankSlot = RankSlot.HOMEPAGE

    kind: ClassVar[MutationKind] = MutationKind.RANK_ASSIGN

    def __post_init__(self) -> None:
        if self.rank is not None and (
            isinstance(self.rank, bool) or not isinstance(self.rank, int) or self.rank < 0
        ):
            raise ValidationRejection("Rank must be a non-negative whole number", self.rank)

    @property
    def field_name(self) -> str:
        return self.slot.field_name

    @property
    def value(self) -> int | None:
        return self.rank

    def success_message(self) -> str:
        label = "Homepage" if self.slot is RankSlot.HOMEPAGE else "New launch"
        shown = "unranked" if self.rank is None else str(self.rank)
        return f"{label} rank updated to {shown}"

    def failure_message(self) -> str:
        return "Failed to update rank"


@dataclass(frozen=True)
class ImageAssign(_FieldMutation):
    """Set the banner or tile image URL once an upload completes.

    Blank URLs are stored as None.
    """

    url: str | None
    slot: ImageSlot = ImageSlot.BANNER

    kind: ClassVar[MutationKind] = MutationKind.IMAGE_ASSIGN

    def __post_init__(self) -> None:
        if self.url is not None and not self.url.strip():
            object.__setattr__(self, "url", None)

    @property
    def field_name(self) -> str:
        return self.slot.field_name

    @property
    def value(self) -> str | None:
        return self.url

    def success_message(self) -> str:
        label = "Banner" if self.slot is ImageSlot.BANNER else "Tile"
        return f"{label} image uploaded" if self.url else f"{label} image removed"

    def failure_message(self) -> str:
        return "Failed to upload image"


Mutation = PublishToggle | BannerToggle | NewLaunchToggle | RankAssign | ImageAssign
