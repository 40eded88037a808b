"""Artist and channel API endpoints."""

import logging

from fastapi import APIRouter, Query

from soundseek_api.api.deps import (
    ArtistLookupDep,
    ChannelsDep,
    DiscoveryDep,
    page_number,
    require,
)
from soundseek_api.schemas.artist import (
    ArtistContent,
    ArtistResponse,
    ArtistSong,
    ArtistSongsResponse,
    ChannelDataResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["artist"])


@router.get("/artist")
async def artist_lookup(
    lookup: ArtistLookupDep,
    name: str | None = Query(None, description="Artist name"),
    artist: str | None = Query(None, description="Alias of name"),
    page: str | None = Query(None, description="1-based page number"),
) -> ArtistResponse:
    """Resolve an artist, then return its metadata and one page of content."""
    artist_name = require(name or artist, "Artist name is required")
    page_num = page_number(page)
    logger.info("Artist lookup: %s (page %d)", artist_name, page_num)
    result = await lookup.lookup(artist_name, page_num)
    return ArtistResponse(
        channel_info=result.channel_info,
        metadata=result.metadata,
        content=ArtistContent(videos=result.videos),
        pagination=result.pagination,
    )


@router.get("/channel-data")
async def channel_data(
    channels: ChannelsDep,
    channel_id: str | None = Query(None, alias="channelId", description="Channel ID"),
) -> ChannelDataResponse:
    """Channel metadata with its playlists categorized."""
    cid = require(channel_id, "Channel ID is required")
    data = await channels.get_channel_data(cid)
    return ChannelDataResponse(
        metadata=data.metadata,
        content=data.content,
        last_updated=data.last_updated,
    )


@router.get("/artist-songs")
async def artist_songs(
    discovery: DiscoveryDep,
    artist: str | None = Query(None, description="Artist name"),
) -> ArtistSongsResponse:
    """Songs found for an artist name."""
    artist_name = require(artist, "Artist name is required")
    songs = await discovery.artist_songs(artist_name)
    return ArtistSongsResponse(songs=[ArtistSong.from_track(song) for song in songs])
