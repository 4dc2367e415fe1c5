"""Unit tests for homepage section assembly."""

import random

from curation.config.schemas.homepage import SectionLimits
from curation.ranker.assembler import assemble_homepage
from tests.helpers.factories import make_item


BANNER_URL = "https://cdn.example.com/banner.jpg"
TILE_URL = "https://cdn.example.com/tile.jpg"


class TestBannerSection:
    """Tests for the banner section."""

    def test_capped_at_five(self) -> None:
        """Ten qualifying items yield five banner entries in input order."""
        items = [
            make_item(f"s{i}", is_published=True, is_banner=True, banner_image_url=BANNER_URL)
            for i in range(10)
        ]
        sections = assemble_homepage(items)

        assert [i.id for i in sections.banner] == ["s0", "s1", "s2", "s3", "s4"]

    def test_requires_image_and_publication(self) -> None:
        """Banner items without an image or unpublished are skipped."""
        items = [
            make_item("no-image", is_published=True, is_banner=True),
            make_item("blank", is_published=True, is_banner=True, banner_image_url=" "),
            make_item("draft", is_banner=True, banner_image_url=BANNER_URL),
            make_item("ok", is_published=True, is_banner=True, banner_image_url=BANNER_URL),
        ]
        assert [i.id for i in assemble_homepage(items).banner] == ["ok"]


class TestRankedSection:
    """Tests for the ranked section."""

    def test_sorted_for_any_permutation(self) -> None:
        """Ranked items come out ascending whatever the input order."""
        items = [make_item(f"s{r}", is_published=True, homepage_rank=r) for r in range(6)]
        rng = random.Random(7)
        for _ in range(20):
            shuffled = items[:]
            rng.shuffle(shuffled)
            ranks = [i.homepage_rank for i in assemble_homepage(shuffled).ranked]
            assert ranks == sorted(ranks)
            assert len(set(ranks)) == len(ranks)

    def test_ties_keep_input_order(self) -> None:
        """Equal ranks keep their relative input order."""
        items = [
            make_item("b", is_published=True, homepage_rank=1),
            make_item("a", is_published=True, homepage_rank=1),
            make_item("c", is_published=True, homepage_rank=0),
        ]
        assert [i.id for i in assemble_homepage(items).ranked] == ["c", "b", "a"]

    def test_capped_at_six(self) -> None:
        """Only the six lowest ranks are shown."""
        items = [make_item(f"s{r}", is_published=True, homepage_rank=r) for r in range(9, 0, -1)]
        ranked = assemble_homepage(items).ranked
        assert [i.homepage_rank for i in ranked] == [1, 2, 3, 4, 5, 6]

    def test_unpublished_excluded(self) -> None:
        """Drafts never appear even with a rank."""
        items = [make_item("a", homepage_rank=1)]
        assert assemble_homepage(items).ranked == []


class TestNewLaunchSection:
    """Tests for the new launch section."""

    def test_missing_rank_sorts_first(self) -> None:
        """A missing new launch rank sorts as 0."""
        items = [
            make_item("one", is_published=True, is_new_launch=True, tile_image_url=TILE_URL, new_launch_rank=1),
            make_item("none", is_published=True, is_new_launch=True, tile_image_url=TILE_URL),
            make_item("two", is_published=True, is_new_launch=True, tile_image_url=TILE_URL, new_launch_rank=2),
        ]
        assert [i.id for i in assemble_homepage(items).new_launches] == ["none", "one", "two"]

    def test_capped_at_eight(self) -> None:
        """At most eight tiles are shown."""
        items = [
            make_item(f"s{i}", is_published=True, is_new_launch=True, tile_image_url=TILE_URL, new_launch_rank=i)
            for i in range(12)
        ]
        assert len(assemble_homepage(items).new_launches) == 8


class TestAssembleHomepage:
    """Tests for section independence and limits."""

    def test_item_can_appear_in_every_section(self) -> None:
        """Sections overlap freely."""
        item = make_item(
            "all",
            is_published=True,
            is_banner=True,
            banner_image_url=BANNER_URL,
            homepage_rank=1,
            is_new_launch=True,
            tile_image_url=TILE_URL,
        )
        sections = assemble_homepage([item])

        assert sections.to_summary() == {
            "banner": ["all"],
            "ranked": ["all"],
            "new_launches": ["all"],
        }

    def test_custom_limits(self) -> None:
        """Configured caps replace the defaults."""
        items = [make_item(f"s{r}", is_published=True, homepage_rank=r) for r in range(5)]
        limits = SectionLimits(banner_max=1, ranked_max=2, new_launch_max=1)
        assert len(assemble_homepage(items, limits).ranked) == 2

    def test_empty(self) -> None:
        """No items yields empty sections."""
        assert assemble_homepage([]).is_empty
