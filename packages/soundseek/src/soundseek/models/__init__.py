"""Data models for soundseek.

Public API:
    NormalizedTrack - Cleaned track record (id, title, artist, thumbnail, ...)
    ResolvedIdentity - Channel an artist name resolved to
    AggregatedResultSet - One page of merged tracks plus pagination
    StreamResolution - Selected stream URL, captions and video details

Internal:
    query.py - Outbound CatalogQuery
"""

from soundseek.models.domain import (
    AggregatedResultSet,
    ArtistLookup,
    CaptionTrack,
    ChannelContent,
    ChannelData,
    ChannelMetadata,
    GenreTrack,
    LongListen,
    MoodPlaylists,
    NormalizedTrack,
    Pagination,
    PlaylistRef,
    PlaylistSummary,
    ResolvedIdentity,
    StreamFormat,
    StreamResolution,
    Thumbnail,
    VideoDetails,
)
from soundseek.models.enums import (
    ClassifierStrategy,
    ContentType,
    LongListenKind,
    MatchSource,
    PlaylistCategory,
    ThumbnailPolicy,
)
from soundseek.models.query import CatalogQuery

__all__ = [
    "AggregatedResultSet",
    "ArtistLookup",
    "CaptionTrack",
    "CatalogQuery",
    "ChannelContent",
    "ChannelData",
    "ChannelMetadata",
    "ClassifierStrategy",
    "ContentType",
    "GenreTrack",
    "LongListen",
    "LongListenKind",
    "MatchSource",
    "MoodPlaylists",
    "NormalizedTrack",
    "Pagination",
    "PlaylistCategory",
    "PlaylistRef",
    "PlaylistSummary",
    "ResolvedIdentity",
    "StreamFormat",
    "StreamResolution",
    "Thumbnail",
    "ThumbnailPolicy",
    "VideoDetails",
]
