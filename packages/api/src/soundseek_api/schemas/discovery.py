"""Discovery API schemas."""

from pydantic import Field
from soundseek import GenreTrack, LongListen, NormalizedTrack

from soundseek_api.schemas.common import ApiModel


class SongsResponse(ApiModel):
    """Response for a music search."""

    songs: list[NormalizedTrack] = Field(default_factory=list)


class PopularResponse(ApiModel):
    """Response for popular tracks across genres."""

    songs: list[GenreTrack] = Field(default_factory=list)


class RecommendationResponse(ApiModel):
    """Response for recommended tracks."""

    recommended: list[GenreTrack] = Field(default_factory=list)


class LongListensResponse(ApiModel):
    """Response for long-form listening content."""

    success: bool = True
    listens: list[LongListen] = Field(default_factory=list)
