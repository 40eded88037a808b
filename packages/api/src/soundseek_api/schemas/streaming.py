"""Stream resolution API schemas.

These keep the snake_case keys players already consume.
"""

from pydantic import BaseModel, Field
from soundseek import StreamResolution


class CaptionOut(BaseModel):
    """Caption track offered for a video."""

    language_name: str
    language_code: str
    url: str
    is_translatable: bool = False


class VideoDetailsOut(BaseModel):
    """Descriptive details of a video."""

    title: str | None = None
    author: str | None = None
    length: int | None = None
    thumbnail: str | None = None


class StreamResponse(BaseModel):
    """Response for a resolved video stream."""

    url: str
    captions: list[CaptionOut] = Field(default_factory=list)
    video_details: VideoDetailsOut

    @classmethod
    def from_resolution(cls, resolution: StreamResolution) -> "StreamResponse":
        details = resolution.details
        return cls(
            url=resolution.url,
            captions=[
                CaptionOut(
                    language_name=track.language_name,
                    language_code=track.language_code,
                    url=track.url,
                    is_translatable=track.is_translatable,
                )
                for track in resolution.captions
            ],
            video_details=VideoDetailsOut(
                title=details.title,
                author=details.author,
                length=details.length,
                thumbnail=details.thumbnail_url,
            ),
        )
