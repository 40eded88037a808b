"""Stream resolution API endpoints."""

from fastapi import APIRouter, Query, Response, status
from fastapi.responses import RedirectResponse

from soundseek_api.api.deps import StreamsDep
from soundseek_api.schemas.streaming import StreamResponse

router = APIRouter(tags=["streaming"])

STREAM_CACHE_CONTROL = "public, max-age=3600"


@router.get("/video-stream")
async def video_stream(
    response: Response,
    streams: StreamsDep,
    video_id: str | None = Query(None, alias="id", description="Video ID"),
) -> StreamResponse:
    """Best playable stream for a video, with captions and details."""
    resolution = await streams.resolve(video_id or "")
    response.headers["Cache-Control"] = STREAM_CACHE_CONTROL
    return StreamResponse.from_resolution(resolution)


@router.get("/audio", response_class=RedirectResponse)
async def audio(
    streams: StreamsDep,
    video_id: str | None = Query(None, alias="id", description="Video ID"),
) -> RedirectResponse:
    """Redirect to the best audio-only stream of a video."""
    url = await streams.resolve_audio_url(video_id or "")
    return RedirectResponse(url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
