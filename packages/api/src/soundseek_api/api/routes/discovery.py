"""Discovery API endpoints: genres, moods, search and charts."""

from fastapi import APIRouter, Query
from soundseek import MoodPlaylists, NormalizedTrack

from soundseek_api.api.deps import DiscoveryDep, require
from soundseek_api.schemas.discovery import (
    LongListensResponse,
    PopularResponse,
    RecommendationResponse,
    SongsResponse,
)

router = APIRouter(tags=["discovery"])


@router.get("/genre/{genre}")
async def genre_songs(genre: str, discovery: DiscoveryDep) -> list[NormalizedTrack]:
    """Tracks for a genre."""
    return await discovery.genre_songs(require(genre, "Genre is required"))


@router.get("/genre-songs")
async def genre_songs_query(
    discovery: DiscoveryDep,
    genre: str | None = Query(None, description="Genre name"),
) -> list[NormalizedTrack]:
    """Tracks for a genre, with the genre as a query parameter."""
    return await discovery.genre_songs(require(genre, "Genre is required"))


@router.get("/mood-playlists")
async def mood_playlists(
    discovery: DiscoveryDep,
    mood: str | None = Query(None, description="Mood, e.g. chill"),
) -> MoodPlaylists:
    """First playlist found for a mood, with its tracks."""
    return await discovery.mood_playlists(require(mood, "Mood is required"))


@router.get("/search")
async def search(
    discovery: DiscoveryDep,
    q: str | None = Query(None, description="Search query"),
) -> SongsResponse:
    """Music search; exact title matches win when present."""
    songs = await discovery.search(require(q, "Missing search query"))
    return SongsResponse(songs=songs)


@router.get("/popular")
async def popular(
    discovery: DiscoveryDep,
    country: str = Query("US", description="Region hint"),
) -> PopularResponse:
    """Up to 100 popular tracks across genres, most viewed first."""
    return PopularResponse(songs=await discovery.popular(country or "US"))


@router.get("/recommendation")
async def recommendation(discovery: DiscoveryDep) -> RecommendationResponse:
    """Recommended Pop and Rock tracks."""
    return RecommendationResponse(recommended=await discovery.recommended())


@router.get("/longlistens")
async def long_listens(discovery: DiscoveryDep) -> LongListensResponse:
    """Hour-plus mixes, sets and playlists."""
    return LongListensResponse(listens=await discovery.long_listens())
