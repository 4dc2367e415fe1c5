"""Homepage ranking: collision detection, section assembly and filtering."""

from curation.ranker.assembler import assemble_homepage
from curation.ranker.collisions import detect_collisions, find_rank_conflicts
from curation.ranker.filters import filter_items, matches, partition_ranked
from curation.ranker.models import (
    ALL_LANGUAGES,
    FilterCriteria,
    HomepageSections,
    StatusFilter,
    VisibilityFilter,
)


__all__ = [
    "ALL_LANGUAGES",
    "FilterCriteria",
    "HomepageSections",
    "StatusFilter",
    "VisibilityFilter",
    "assemble_homepage",
    "detect_collisions",
    "filter_items",
    "find_rank_conflicts",
    "matches",
    "partition_ranked",
]
