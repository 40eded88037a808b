"""Artist and channel API schemas."""

from datetime import datetime

from pydantic import Field
from soundseek import ChannelMetadata, NormalizedTrack, Pagination, ResolvedIdentity
from soundseek.models import ChannelContent

from soundseek_api.schemas.common import ApiModel


class ArtistContent(ApiModel):
    """Aggregated tracks for one artist page."""

    videos: list[NormalizedTrack] = Field(default_factory=list)


class ArtistResponse(ApiModel):
    """Response for an artist lookup."""

    channel_info: ResolvedIdentity
    metadata: ChannelMetadata
    content: ArtistContent
    pagination: Pagination


class ChannelDataResponse(ApiModel):
    """Response for channel data with categorized playlists."""

    success: bool = True
    metadata: ChannelMetadata
    content: ChannelContent
    last_updated: datetime


class ArtistSong(ApiModel):
    """Compact song entry of the artist-songs endpoint."""

    id: str
    title: str
    thumbnail: str
    channel: str

    @classmethod
    def from_track(cls, track: NormalizedTrack) -> "ArtistSong":
        return cls(
            id=track.id,
            title=track.title,
            thumbnail=track.thumbnail_url,
            channel=track.artist,
        )


class ArtistSongsResponse(ApiModel):
    """Response for songs found for an artist."""

    songs: list[ArtistSong] = Field(default_factory=list)
