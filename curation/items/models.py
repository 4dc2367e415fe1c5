"""Data models for curated items (stories)."""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class LifecycleState(str, Enum):
    """Derived lifecycle state of an item.

    - DRAFT: not published
    - READY: published but missing content
    - PUBLISHED: published and complete
    - FEATURED: published with homepage configuration
    - ARCHIVED: vocabulary only, never derived from item flags
    """

    DRAFT = "draft"
    READY = "ready"
    PUBLISHED = "published"
    FEATURED = "featured"
    ARCHIVED = "archived"


class RankSlot(str, Enum):
    """Homepage slot ordered by a rank field."""

    HOMEPAGE = "homepage"
    NEW_LAUNCH = "new_launch"

    @property
    def field_name(self) -> str:
        """Item field holding the rank for this slot."""
        return "homepage_rank" if self is RankSlot.HOMEPAGE else "new_launch_rank"


class ImageSlot(str, Enum):
    """Homepage slot that renders an item image."""

    BANNER = "banner"
    TILE = "tile"

    @property
    def field_name(self) -> str:
        """Item field holding the image URL for this slot."""
        return "banner_image_url" if self is ImageSlot.BANNER else "tile_image_url"


class Item(BaseModel):
    """A story eligible for homepage placement.

    Immutable; field edits produce a new instance via ``model_copy``. Rows
    coming from the item store may carry extra columns, which are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Annotated[str, Field(min_length=1, description="Item identifier")]
    title: str = Field(default="", description="Display title")
    language: str = Field(default="en", description="Language tag")
    is_published: bool = False
    is_banner: bool = False
    is_new_launch: bool = False
    homepage_rank: Annotated[int | None, Field(ge=0)] = None
    new_launch_rank: Annotated[int | None, Field(ge=0)] = None
    banner_image_url: str | None = None
    tile_image_url: str | None = None
    description: str | None = None
    cover_image_url: str | None = None
    episode_count: Annotated[int, Field(ge=0, description="Child episode count")] = 0
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_ranked(self) -> bool:
        """Whether the item holds a homepage rank."""
        return self.homepage_rank is not None

    @property
    def has_homepage_config(self) -> bool:
        """Whether any homepage placement is configured."""
        return self.is_banner or self.is_new_launch or self.is_ranked

    @property
    def has_banner_image(self) -> bool:
        """Whether a non-blank banner image URL is set."""
        return bool(self.banner_image_url and self.banner_image_url.strip())

    @property
    def has_tile_image(self) -> bool:
        """Whether a non-blank tile image URL is set."""
        return bool(self.tile_image_url and self.tile_image_url.strip())

    def rank_for(self, slot: RankSlot) -> int | None:
        """Rank held in the given slot."""
        return self.homepage_rank if slot is RankSlot.HOMEPAGE else self.new_launch_rank
