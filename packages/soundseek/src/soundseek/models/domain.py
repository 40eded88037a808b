"""Domain models for soundseek.

These are the public models the pipeline emits. They serialize with
camelCase keys (``model_dump(by_alias=True)``) for the JSON API, while
Python code uses the snake_case field names.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from soundseek.models.enums import LongListenKind, MatchSource


class DomainModel(BaseModel):
    """Base model for immutable domain records."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Thumbnail(DomainModel):
    """Image candidate. Dimensions are absent for some catalog shapes."""

    url: str
    width: int | None = None
    height: int | None = None


class ResolvedIdentity(DomainModel):
    """Catalog channel an artist name resolved to.

    Only emitted when the known-channel table or a heuristic strategy
    produced a positive match.
    """

    channel_id: str
    channel_name: str
    thumbnail_url: str | None = None
    match_source: MatchSource


class NormalizedTrack(DomainModel):
    """Stable track record consumed by the rest of the application.

    ``id`` is the catalog's content id and the deduplication key across
    every merge step. ``title`` and ``artist`` are never empty.
    """

    id: str
    title: str = Field(min_length=1)
    artist: str = Field(min_length=1)
    thumbnail_url: str = ""
    duration_text: str | None = None
    published_text: str | None = None
    view_count_text: str | None = None
    source_strategy: str | None = None
    url: str


class GenreTrack(NormalizedTrack):
    """Track found through a genre query, tagged with that genre."""

    genre: str


class LongListen(DomainModel):
    """Long-form listening item (mixes, DJ sets, focus playlists)."""

    id: str
    title: str
    creator: str
    thumbnail_url: str
    duration_text: str
    kind: LongListenKind
    url: str


class Pagination(DomainModel):
    """Page metadata computed from the full merged result set."""

    current_page: int
    total_pages: int
    total_items: int
    has_more: bool
    items_per_page: int


class AggregatedResultSet(DomainModel):
    """One page of an ordered, deduplicated track sequence."""

    items: list[NormalizedTrack]
    pagination: Pagination

    @model_validator(mode="after")
    def _check_unique_ids(self) -> AggregatedResultSet:
        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError("AggregatedResultSet items must have unique ids")
        return self


class ChannelMetadata(DomainModel):
    """Channel page metadata."""

    id: str
    name: str
    description: str | None = None
    subscribers: str | None = None
    thumbnails: list[Thumbnail] = Field(default_factory=list)
    banners: list[Thumbnail] = Field(default_factory=list)
    is_verified: bool = False
    view_count: str | None = None


class PlaylistSummary(DomainModel):
    """Channel playlist (or album) after its full info was fetched."""

    id: str
    title: str
    video_count: int | str | None = None
    thumbnails: list[Thumbnail] = Field(default_factory=list)
    year: str | None = None


class ChannelContent(DomainModel):
    """Channel playlists split into buckets, plus the channel's videos."""

    songs: list[PlaylistSummary] = Field(default_factory=list)
    albums: list[PlaylistSummary] = Field(default_factory=list)
    singles: list[PlaylistSummary] = Field(default_factory=list)
    videos: list[NormalizedTrack] = Field(default_factory=list)
    mixes: list[PlaylistSummary] = Field(default_factory=list)


class ChannelData(DomainModel):
    """Full channel payload for the channel-data endpoint."""

    metadata: ChannelMetadata
    content: ChannelContent
    last_updated: datetime


class ArtistLookup(DomainModel):
    """Result of resolving an artist and aggregating one page of content."""

    channel_info: ResolvedIdentity
    metadata: ChannelMetadata
    videos: list[NormalizedTrack]
    pagination: Pagination


class PlaylistRef(DomainModel):
    """Playlist reference picked from a search."""

    id: str
    title: str
    thumbnail_url: str = ""


class MoodPlaylists(DomainModel):
    """Playlist found for a mood and the tracks it contains."""

    mood: str
    playlists: list[PlaylistRef] = Field(default_factory=list)
    songs: list[NormalizedTrack] = Field(default_factory=list)


class StreamFormat(DomainModel):
    """A single playable rendition candidate."""

    url: str
    bitrate: int = 0
    has_video: bool = False
    has_audio: bool = False
    mime_type: str | None = None


class CaptionTrack(DomainModel):
    """Caption track offered for a video."""

    language_name: str
    language_code: str
    url: str
    is_translatable: bool = False


class VideoDetails(DomainModel):
    """Descriptive details of a video, from whichever info source answered."""

    title: str | None = None
    author: str | None = None
    length: int | None = None
    thumbnail_url: str | None = None


class StreamResolution(DomainModel):
    """Playable URL selected for a video, with captions and details."""

    url: str
    captions: list[CaptionTrack] = Field(default_factory=list)
    details: VideoDetails
