"""Data models for homepage assembly and filtering."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from curation.items.models import Item


class StatusFilter(str, Enum):
    """Publication status filter."""

    ALL = "all"
    PUBLISHED = "published"
    DRAFT = "draft"


class VisibilityFilter(str, Enum):
    """Homepage placement filter."""

    ALL = "all"
    BANNER = "banner"
    NEW_LAUNCH = "newLaunch"
    RANKED = "ranked"
    UNRANKED = "unranked"


ALL_LANGUAGES = "all"


class FilterCriteria(BaseModel):
    """Predicates applied by the filter engine, ANDed together.

    Attributes:
        status: Publication status to keep.
        visibility: Homepage placement to keep.
        language: Exact language tag, or ``"all"``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: StatusFilter = StatusFilter.ALL
    visibility: VisibilityFilter = VisibilityFilter.ALL
    language: str = Field(default=ALL_LANGUAGES, min_length=1)

    @property
    def is_unfiltered(self) -> bool:
        """Whether every predicate accepts all items."""
        return (
            self.status is StatusFilter.ALL
            and self.visibility is VisibilityFilter.ALL
            and self.language == ALL_LANGUAGES
        )


class HomepageSections(BaseModel):
    """The three homepage sections, each independently selected.

    Attributes:
        banner: Banner carousel items, in working-set order.
        ranked: Ranked list items, ascending by homepage rank.
        new_launches: New launch grid items, ascending by new launch rank.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    banner: list[Item] = Field(default_factory=list)
    ranked: list[Item] = Field(default_factory=list)
    new_launches: list[Item] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Whether no section has content."""
        return not (self.banner or self.ranked or self.new_launches)

    def to_summary(self) -> dict[str, list[str]]:
        """Item ids per section, for logging and serialization."""
        return {
            "banner": [i.id for i in self.banner],
            "ranked": [i.id for i in self.ranked],
            "new_launches": [i.id for i in self.new_launches],
        }
