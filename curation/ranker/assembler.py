"""Homepage section assembly."""

from collections.abc import Sequence

import structlog

from curation.config.schemas.homepage import SectionLimits
from curation.items.models import Item
from curation.ranker.models import HomepageSections


logger = structlog.get_logger()


def select_banner(items: Sequence[Item], limit: int) -> list[Item]:
    """Published banner items with a banner image, in input order."""
    return [i for i in items if i.is_published and i.is_banner and i.has_banner_image][
        :limit
    ]


def select_ranked(items: Sequence[Item], limit: int) -> list[Item]:
    """Published ranked items, ascending by homepage rank.

    ``sorted`` is stable, so equal ranks keep input order.
    """
    ranked = [i for i in items if i.is_published and i.homepage_rank is not None]
    return sorted(ranked, key=lambda i: i.homepage_rank or 0)[:limit]


def select_new_launches(items: Sequence[Item], limit: int) -> list[Item]:
    """Published new launch items with a tile image, ascending by new launch rank.

    A missing new launch rank sorts as 0, ahead of rank 1.
    """
    launches = [
        i for i in items if i.is_published and i.is_new_launch and i.has_tile_image
    ]
    return sorted(launches, key=lambda i: i.new_launch_rank or 0)[:limit]


def assemble_homepage(
    items: Sequence[Item], limits: SectionLimits | None = None
) -> HomepageSections:
    """Project the item set onto the three homepage sections.

    Sections are independent: one item may appear in all three.

    Args:
        items: Working set in display order.
        limits: Section caps; defaults to 5 banner, 6 ranked, 8 new launches.

    Returns:
        The assembled sections.
    """
    limits = limits or SectionLimits()
    sections = HomepageSections(
        banner=select_banner(items, limits.banner_max),
        ranked=select_ranked(items, limits.ranked_max),
        new_launches=select_new_launches(items, limits.new_launch_max),
    )
    logger.debug(
        "homepage_assembled",
        component="ranker",
        items_in=len(items),
        banner=len(sections.banner),
        ranked=len(sections.ranked),
        new_launches=len(sections.new_launches),
    )
    return sections
