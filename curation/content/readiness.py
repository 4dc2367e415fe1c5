"""Homepage readiness checklist for a single item."""

from pydantic import BaseModel, ConfigDict, Field

from curation.items.models import Item


class HomepageReadiness(BaseModel):
    """Outcome of the four homepage readiness checks.

    Attributes:
        published: Item is published.
        episodes_exist: Item has at least one episode.
        banner_configured: Banner is off, or on with an image.
        new_launch_configured: New launch is off, or on with a tile image.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    published: bool
    episodes_exist: bool
    banner_configured: bool
    new_launch_configured: bool
    issues: list[str] = Field(default_factory=list)

    @property
    def score(self) -> int:
        """Number of checks that pass."""
        return sum(
            (
                self.published,
                self.episodes_exist,
                self.banner_configured,
                self.new_launch_configured,
            )
        )

    @property
    def percentage(self) -> float:
        """Share of passing checks, 0 to 100."""
        return self.score / 4 * 100

    @property
    def is_ready(self) -> bool:
        """Whether every check passes."""
        return self.score == 4


def compute_readiness(item: Item, episode_count: int | None = None) -> HomepageReadiness:
    """Evaluate whether an item can render correctly on the homepage.

    Args:
        item: Item to evaluate.
        episode_count: Episode count override; defaults to ``item.episode_count``.

    Returns:
        Readiness checks with the list of failing checks as issues.
    """
    count = item.episode_count if episode_count is None else episode_count
    published = item.is_published
    episodes_exist = count > 0
    banner_configured = not item.is_banner or item.has_banner_image
    new_launch_configured = not item.is_new_launch or item.has_tile_image

    issues: list[str] = []
    if not published:
        issues.append("Story must be published for homepage visibility")
    if not episodes_exist:
        issues.append("Story has no episodes")
    if not banner_configured:
        issues.append("Banner is enabled but no banner image is set")
    if not new_launch_configured:
        issues.append("New launch is enabled but no tile image is set")

    return HomepageReadiness(
        published=published,
        episodes_exist=episodes_exist,
        banner_configured=banner_configured,
        new_launch_configured=new_launch_configured,
        issues=issues,
    )
