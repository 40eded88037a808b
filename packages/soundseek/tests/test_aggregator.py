"""Tests for multi-query content aggregation and the artist lookup flow."""

from typing import Any

import pytest
from soundseek import create_artist_lookup
from soundseek.config import PipelineConfig
from soundseek.exceptions import CatalogUnavailableError, NotFoundError
from soundseek.models.enums import MatchSource
from soundseek.services.aggregator import (
    ARTIST_TEMPLATES,
    ContentAggregator,
    QueryTemplate,
)

TERM = "Some Artist"


def _ids(tracks: list[Any]) -> list[str]:
    return [track.id for track in tracks]


@pytest.fixture
def no_delay() -> PipelineConfig:
    return PipelineConfig(strategy_delay=0)


# ============================================================================
# ContentAggregator
# ============================================================================


class TestContentAggregator:
    def test_template_order(self) -> None:
        assert [t.render(TERM) for t in ARTIST_TEMPLATES] == [
            "Some Artist official video",
            "Some Artist official music",
            "Some Artist official",
            "Some Artist album",
            "Some Artist playlist",
            "Some Artist mixes",
            "Some Artist",
        ]

    @pytest.mark.asyncio
    async def test_first_seen_wins_and_tags_template(
        self, catalog: Any, make_video: Any, no_delay: PipelineConfig
    ) -> None:
        catalog.search_responses["Some Artist official video"] = [
            make_video("A"),
            make_video("B", title="B from official video"),
        ]
        catalog.search_responses["Some Artist album"] = [
            make_video("B", title="B from album"),
            make_video("C"),
        ]
        aggregator = ContentAggregator(catalog, no_delay)

        result = await aggregator.aggregate(TERM)

        assert _ids(result.items) == ["A", "B", "C"]
        b = result.items[1]
        assert b.source_strategy == "official_video"
        assert b.title == "B from official video"
        assert result.items[2].source_strategy == "album"
        assert result.pagination.total_items == 3
        assert len(catalog.searched) == len(ARTIST_TEMPLATES)

    @pytest.mark.asyncio
    async def test_early_stop(
        self, catalog: Any, make_video: Any, pipeline_config: PipelineConfig
    ) -> None:
        # items_per_page=2, early_stop_pages=3: stop at 6 merged items
        catalog.search_responses["Some Artist official video"] = [
            make_video(vid) for vid in "abcd"
        ]
        catalog.search_responses["Some Artist official music"] = [
            make_video(vid) for vid in "cdef"
        ]
        aggregator = ContentAggregator(catalog, pipeline_config)

        tracks = await aggregator.collect(TERM)

        assert _ids(tracks) == list("abcdef")
        assert catalog.searched == [
            "Some Artist official video",
            "Some Artist official music",
        ]

    @pytest.mark.asyncio
    async def test_ranks_official_templates_first(
        self, catalog: Any, make_video: Any, no_delay: PipelineConfig
    ) -> None:
        templates = (
            QueryTemplate("album", "{term} album"),
            QueryTemplate("official_video", "{term} official video"),
        )
        catalog.search_responses["Some Artist album"] = [make_video("A")]
        catalog.search_responses["Some Artist official video"] = [make_video("B")]
        aggregator = ContentAggregator(catalog, no_delay, templates=templates)

        result = await aggregator.aggregate(TERM)

        assert _ids(result.items) == ["B", "A"]

    @pytest.mark.asyncio
    async def test_results_without_id_are_dropped(
        self, catalog: Any, make_video: Any, no_delay: PipelineConfig
    ) -> None:
        catalog.search_responses["Some Artist"] = [
            {"title": "No ID here"},
            make_video("A"),
        ]
        tracks = await ContentAggregator(catalog, no_delay).collect(TERM)
        assert _ids(tracks) == ["A"]

    @pytest.mark.asyncio
    async def test_failed_template_is_skipped(
        self, catalog: Any, make_video: Any, no_delay: PipelineConfig
    ) -> None:
        failing = CatalogUnavailableError("boom")
        catalog.search_responses["Some Artist official video"] = failing
        catalog.search_responses["Some Artist official"] = [make_video("A")]

        tracks = await ContentAggregator(catalog, no_delay).collect(TERM)

        assert _ids(tracks) == ["A"]
        assert len(catalog.searched) == len(ARTIST_TEMPLATES)

    @pytest.mark.asyncio
    async def test_every_template_failing_is_unavailable(
        self, catalog: Any, no_delay: PipelineConfig
    ) -> None:
        for template in ARTIST_TEMPLATES:
            catalog.search_responses[template.render(TERM)] = CatalogUnavailableError(
                "boom"
            )
        with pytest.raises(CatalogUnavailableError):
            await ContentAggregator(catalog, no_delay).collect(TERM)

    @pytest.mark.asyncio
    async def test_initialization_failure_is_not_retried(
        self, catalog: Any, no_delay: PipelineConfig
    ) -> None:
        catalog.init_error = CatalogUnavailableError("Catalog service unavailable")
        with pytest.raises(CatalogUnavailableError, match="service unavailable"):
            await ContentAggregator(catalog, no_delay).aggregate(TERM)
        assert catalog.count("initialize") == 1
        assert catalog.searched == []

    @pytest.mark.asyncio
    async def test_cooldown_between_templates(
        self, catalog: Any, sleeps: list[float]
    ) -> None:
        aggregator = ContentAggregator(catalog, PipelineConfig(strategy_delay=0.5))
        await aggregator.collect(TERM)
        assert len(catalog.searched) == len(ARTIST_TEMPLATES)
        assert sleeps == [0.5] * (len(ARTIST_TEMPLATES) - 1)

    @pytest.mark.asyncio
    async def test_no_cooldown_after_early_stop(
        self, catalog: Any, make_video: Any, sleeps: list[float]
    ) -> None:
        config = PipelineConfig(items_per_page=2, early_stop_pages=1, strategy_delay=1)
        catalog.search_responses["Some Artist official music"] = [
            make_video("a"),
            make_video("b"),
        ]
        await ContentAggregator(catalog, config).collect(TERM)
        assert len(catalog.searched) == 2
        assert sleeps == [1]

    @pytest.mark.asyncio
    async def test_no_results_is_empty_not_error(
        self, catalog: Any, no_delay: PipelineConfig
    ) -> None:
        result = await ContentAggregator(catalog, no_delay).aggregate(TERM)
        assert result.items == []
        assert result.pagination.total_pages == 0

    @pytest.mark.asyncio
    async def test_pagination(
        self, catalog: Any, make_video: Any, pipeline_config: PipelineConfig
    ) -> None:
        catalog.search_responses["Some Artist official video"] = [
            make_video(vid) for vid in "abc"
        ]
        aggregator = ContentAggregator(catalog, pipeline_config)

        second = await aggregator.aggregate(TERM, page=2)

        assert _ids(second.items) == ["c"]
        assert second.pagination.current_page == 2
        assert second.pagination.total_pages == 2
        assert second.pagination.has_more is False

        past_end = await aggregator.aggregate(TERM, page=5)
        assert past_end.items == []
        assert past_end.pagination.total_items == 3

    @pytest.mark.asyncio
    async def test_deep_search_thumbnail_placeholder(
        self, catalog: Any, make_video: Any, no_delay: PipelineConfig
    ) -> None:
        catalog.search_responses["Some Artist"] = [make_video("A")]
        tracks = await ContentAggregator(catalog, no_delay).collect(TERM)
        assert tracks[0].thumbnail_url == "/default-video.jpg"


# ============================================================================
# ArtistLookupService
# ============================================================================


class TestArtistLookup:
    @pytest.mark.asyncio
    async def test_full_flow(
        self, catalog: Any, make_video: Any, no_delay: PipelineConfig
    ) -> None:
        catalog.search_responses["Some Artist official artist channel"] = [
            {"artist": "Some Artist", "browseId": "UC1"}
        ]
        catalog.channels["UC1"] = {"name": "Some Artist", "subscribers": "1M"}
        catalog.search_responses["Some Artist official video"] = [make_video("A")]

        lookup = await create_artist_lookup(catalog, no_delay).lookup("Some Artist")

        assert lookup.channel_info.channel_id == "UC1"
        assert lookup.channel_info.match_source is MatchSource.OFFICIAL_ARTIST
        assert lookup.metadata.subscribers == "1M"
        assert _ids(lookup.videos) == ["A"]
        assert lookup.pagination.total_items == 1

    @pytest.mark.asyncio
    async def test_aggregates_for_resolved_name_when_metadata_is_empty(
        self, catalog: Any, make_video: Any, no_delay: PipelineConfig
    ) -> None:
        catalog.search_responses["some artist vevo"] = [
            {"artist": "SomeArtistVEVO", "browseId": "UC2"}
        ]
        catalog.search_responses["SomeArtistVEVO official video"] = [make_video("A")]

        lookup = await create_artist_lookup(catalog, no_delay).lookup("some artist")

        assert lookup.metadata.name == "Unknown Artist"
        assert _ids(lookup.videos) == ["A"]

    @pytest.mark.asyncio
    async def test_not_found_stops_before_channel_fetch(
        self, catalog: Any, no_delay: PipelineConfig
    ) -> None:
        with pytest.raises(NotFoundError):
            await create_artist_lookup(catalog, no_delay).lookup("Nobody")
        assert catalog.count("get_channel") == 0
