"""Tests for channel metadata and playlist categorization."""

from typing import Any

import pytest
from soundseek.exceptions import CatalogUnavailableError
from soundseek.models.enums import PlaylistCategory
from soundseek.services.channel import ChannelService, categorize_playlist


@pytest.mark.parametrize(
    "title,category",
    [
        ("Discovery (Album)", PlaylistCategory.ALBUMS),
        ("Get Lucky - Single", PlaylistCategory.SINGLES),
        ("Daft Punk Mix", PlaylistCategory.MIXES),
        ("Remixes", PlaylistCategory.MIXES),
        ("Popular Songs", PlaylistCategory.SONGS),
        ("Album Singles Mix", PlaylistCategory.ALBUMS),
    ],
)
def test_categorize_playlist(title: str, category: PlaylistCategory) -> None:
    assert categorize_playlist(title) == category


@pytest.fixture
def channel_page() -> dict[str, Any]:
    return {
        "name": "Daft Punk",
        "description": "French duo",
        "subscribers": "9.1M",
        "thumbnails": [{"url": "https://a/avatar.jpg"}],
        "albums": {"results": [{"title": "Discovery", "browseId": "MPREb_1"}]},
        "singles": {"results": [{"title": "Get Lucky", "browseId": "MPREb_2"}]},
        "playlists": {
            "results": [
                {"title": "Mix", "playlistId": "PL3"},
                {"title": "Broken", "playlistId": "PL4"},
                {"title": "Duplicate", "browseId": "MPREb_1"},
            ]
        },
        "videos": {
            "results": [
                {"videoId": "v1", "title": "Around the World", "thumbnails": []},
                {"title": "No ID"},
            ]
        },
    }


class TestChannelService:
    @pytest.mark.asyncio
    async def test_get_metadata(
        self, catalog: Any, channel_page: dict[str, Any]
    ) -> None:
        catalog.channels["UCdaft"] = channel_page

        metadata = await ChannelService(catalog).get_metadata("UCdaft")

        assert metadata.id == "UCdaft"
        assert metadata.name == "Daft Punk"
        assert metadata.subscribers == "9.1M"

    @pytest.mark.asyncio
    async def test_channel_data(
        self, catalog: Any, channel_page: dict[str, Any]
    ) -> None:
        catalog.channels["UCdaft"] = channel_page
        catalog.playlists["MPREb_1"] = {
            "title": "Discovery (Album)",
            "trackCount": 14,
            "year": "2001",
        }
        catalog.playlists["MPREb_2"] = {
            "title": "Get Lucky - Single",
            "trackCount": 1,
            "year": "2013",
        }
        catalog.playlists["PL3"] = {"title": "Daft Punk Mix", "year": "2020"}
        catalog.playlists["PL4"] = CatalogUnavailableError("playlist gone")

        data = await ChannelService(catalog).get_channel_data("UCdaft")

        assert data.metadata.name == "Daft Punk"
        assert [(p.id, p.year) for p in data.content.albums] == [("MPREb_1", "2001")]
        assert [(p.id, p.year) for p in data.content.singles] == [("MPREb_2", "2013")]
        assert [(p.id, p.year) for p in data.content.mixes] == [("PL3", None)]
        assert data.content.songs == []
        assert [v.id for v in data.content.videos] == ["v1"]
        assert data.last_updated.tzinfo is not None
        # Each referenced playlist is fetched once, in page order
        assert [arg for op, arg in catalog.calls if op == "get_playlist"] == [
            "MPREb_1",
            "MPREb_2",
            "PL3",
            "PL4",
        ]

    @pytest.mark.asyncio
    async def test_channel_without_playlists(self, catalog: Any) -> None:
        data = await ChannelService(catalog).get_channel_data("UCempty")

        assert data.metadata.id == "UCempty"
        assert data.content.albums == []
        assert data.content.videos == []
        assert catalog.count("get_playlist") == 0

    @pytest.mark.asyncio
    async def test_channel_fetch_error_propagates(self, catalog: Any) -> None:
        catalog.channels["UCbad"] = CatalogUnavailableError("down")
        with pytest.raises(CatalogUnavailableError):
            await ChannelService(catalog).get_channel_data("UCbad")
