"""Stream resolution service.

Picks one playable URL for a video:

1. Full info (yt-dlp extraction). On a catalog error, fall back to the
   basic player response. Errors from the fallback propagate.
2. If neither source yields anything, fail with NotFoundError.
3. With streaming data, select in strict order, each tier sorted by
   bitrate (highest first):
   a. combined formats with video and audio
   b. adaptive formats with video and audio
   c. adaptive formats with audio
4. Without any streaming data, ask the catalog directly for the best
   video+audio stream.
5. Nothing selected: NoPlayableStreamError.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from soundseek.client import CatalogProtocol
from soundseek.exceptions import (
    CatalogError,
    CatalogUnavailableError,
    NoPlayableStreamError,
    NotFoundError,
)
from soundseek.lib.normalize import (
    as_mapping,
    extract_text,
    select_thumbnail,
    thumbnail_candidates,
)
from soundseek.models.domain import (
    CaptionTrack,
    StreamFormat,
    StreamResolution,
    VideoDetails,
)
from soundseek.models.enums import ThumbnailPolicy
from soundseek.utils.url import validate_video_id

logger = logging.getLogger(__name__)


@dataclass
class PlayerInfo:
    """Playback information from either info source."""

    details: VideoDetails | None = None
    formats: list[StreamFormat] | None = None
    adaptive_formats: list[StreamFormat] | None = None
    captions: list[CaptionTrack] = field(default_factory=list)

    @property
    def has_streaming_data(self) -> bool:
        return self.formats is not None or self.adaptive_formats is not None

    @property
    def is_empty(self) -> bool:
        return self.details is None and not self.has_streaming_data


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return int(value)
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


# ============================================================================
# yt-dlp info dict
# ============================================================================


def _has_codec(value: Any) -> bool:
    return isinstance(value, str) and value not in ("", "none")


def _ytdlp_format(raw: Any) -> StreamFormat | None:
    data = as_mapping(raw)
    url = data.get("url")
    if not isinstance(url, str) or not url:
        return None
    tbr = data.get("tbr")
    has_video = _has_codec(data.get("vcodec"))
    ext = data.get("ext")
    kind = "video" if has_video else "audio"
    return StreamFormat(
        url=url,
        bitrate=int(tbr * 1000) if isinstance(tbr, int | float) else 0,
        has_video=has_video,
        has_audio=_has_codec(data.get("acodec")),
        mime_type=f"{kind}/{ext}" if isinstance(ext, str) else None,
    )


def _ytdlp_captions(info: Any) -> list[CaptionTrack]:
    tracks: list[CaptionTrack] = []
    for language, entries in as_mapping(as_mapping(info).get("subtitles")).items():
        if not isinstance(entries, list):
            continue
        candidates = [as_mapping(entry) for entry in entries]
        chosen = next(
            (entry for entry in candidates if entry.get("ext") == "vtt"),
            candidates[0] if candidates else None,
        )
        if not chosen or not isinstance(chosen.get("url"), str):
            continue
        tracks.append(
            CaptionTrack(
                language_name=extract_text(chosen.get("name")) or language.upper(),
                language_code=language,
                url=chosen["url"],
                is_translatable=False,
            )
        )
    return tracks


def parse_full_info(info: Any) -> PlayerInfo:
    """Read a yt-dlp info dict.

    yt-dlp lists every rendition in one ``formats`` list. Muxed renditions
    count as combined formats, the rest as adaptive ones.
    """
    data = as_mapping(info)
    if not data:
        return PlayerInfo()

    details = VideoDetails(
        title=extract_text(data.get("title")),
        author=extract_text(data.get("uploader")) or extract_text(data.get("channel")),
        length=_as_int(data.get("duration")),
        thumbnail_url=(
            data.get("thumbnail")
            if isinstance(data.get("thumbnail"), str)
            else select_thumbnail(thumbnail_candidates(data.get("thumbnails")))
        ),
    )

    raw_formats = data.get("formats")
    if not isinstance(raw_formats, list):
        return PlayerInfo(details=details, captions=_ytdlp_captions(data))

    parsed = [fmt for raw in raw_formats if (fmt := _ytdlp_format(raw))]
    return PlayerInfo(
        details=details,
        formats=[fmt for fmt in parsed if fmt.has_video and fmt.has_audio],
        adaptive_formats=[
            fmt for fmt in parsed if not (fmt.has_video and fmt.has_audio)
        ],
        captions=_ytdlp_captions(data),
    )


# ============================================================================
# Player response
# ============================================================================


def _player_format(raw: Any) -> StreamFormat | None:
    data = as_mapping(raw)
    url = data.get("url")
    if not isinstance(url, str) or not url:
        # Ciphered formats carry signatureCipher instead of url
        return None
    mime_type = data.get("mimeType") if isinstance(data.get("mimeType"), str) else ""
    has_video = mime_type.startswith("video/")
    has_audio = mime_type.startswith("audio/") or (
        has_video and ("audioQuality" in data or "audioSampleRate" in data)
    )
    return StreamFormat(
        url=url,
        bitrate=_as_int(data.get("bitrate")) or 0,
        has_video=has_video,
        has_audio=has_audio,
        mime_type=mime_type or None,
    )


def _player_formats(value: Any) -> list[StreamFormat] | None:
    if not isinstance(value, list):
        return None
    return [fmt for raw in value if (fmt := _player_format(raw))]


def _player_captions(response: Any) -> list[CaptionTrack]:
    renderer = as_mapping(
        as_mapping(as_mapping(response).get("captions")).get(
            "playerCaptionsTracklistRenderer"
        )
    )
    tracks = renderer.get("captionTracks")
    if not isinstance(tracks, list):
        return []

    captions: list[CaptionTrack] = []
    for raw in tracks:
        track = as_mapping(raw)
        code = track.get("languageCode")
        url = track.get("baseUrl")
        if not isinstance(code, str) or not isinstance(url, str):
            continue
        captions.append(
            CaptionTrack(
                language_name=extract_text(track.get("name")) or code.upper(),
                language_code=code,
                url=url,
                is_translatable=bool(track.get("isTranslatable")),
            )
        )
    return captions


def parse_basic_info(response: Any) -> PlayerInfo:
    """Read a catalog player response (streamingData, videoDetails, captions)."""
    data = as_mapping(response)
    video = as_mapping(data.get("videoDetails"))
    details = None
    if video:
        details = VideoDetails(
            title=extract_text(video.get("title")),
            author=extract_text(video.get("author")),
            length=_as_int(video.get("lengthSeconds")),
            thumbnail_url=select_thumbnail(
                thumbnail_candidates(video.get("thumbnail")), ThumbnailPolicy.LARGEST
            ),
        )

    streaming = data.get("streamingData")
    if not isinstance(streaming, dict):
        return PlayerInfo(details=details, captions=_player_captions(data))

    return PlayerInfo(
        details=details,
        formats=_player_formats(streaming.get("formats")) or [],
        adaptive_formats=_player_formats(streaming.get("adaptiveFormats")) or [],
        captions=_player_captions(data),
    )


# ============================================================================
# Selection
# ============================================================================


def _best(formats: list[StreamFormat] | None, *, video: bool) -> StreamFormat | None:
    candidates = [
        fmt
        for fmt in formats or []
        if fmt.has_audio and (fmt.has_video or not video)
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda fmt: fmt.bitrate)


def select_format(info: PlayerInfo) -> StreamFormat | None:
    """Pick a format: combined, then adaptive video+audio, then adaptive audio."""
    return (
        _best(info.formats, video=True)
        or _best(info.adaptive_formats, video=True)
        or _best(info.adaptive_formats, video=False)
    )


class StreamResolver:
    """Resolve a video ID to a playable stream URL."""

    def __init__(self, client: CatalogProtocol) -> None:
        self._client = client

    async def _load_info(self, video_id: str) -> PlayerInfo:
        try:
            return parse_full_info(await self._client.get_info(video_id))
        except CatalogError as e:
            logger.warning(
                "Full info failed for %s, trying basic info: %s", video_id, e
            )
        return parse_basic_info(await self._client.get_basic_info(video_id))

    async def _direct_stream(self, video_id: str) -> StreamFormat | None:
        try:
            raw = await self._client.get_streaming_data(video_id)
        except CatalogError as e:
            logger.error("Direct streaming data failed for %s: %s", video_id, e)
            return None
        if raw is None:
            return None
        fmt = _ytdlp_format(raw)
        if fmt is None:
            return None
        # Selected with a video+audio format selector
        return fmt.model_copy(update={"has_video": True, "has_audio": True})

    async def resolve(self, video_id: str) -> StreamResolution:
        """Resolve the best playable stream for a video.

        Raises:
            InvalidIdError: If the ID is malformed (before any network call).
            NotFoundError: If no information could be retrieved.
            NoPlayableStreamError: If no format is playable.
            CatalogUnavailableError: If the basic-info fallback fails.
        """
        video_id = validate_video_id(video_id)
        info = await self._load_info(video_id)
        if info.is_empty:
            raise NotFoundError("Could not retrieve video information")

        if info.has_streaming_data:
            selected = select_format(info)
        else:
            selected = await self._direct_stream(video_id)

        if selected is None:
            raise NoPlayableStreamError("No suitable stream found")

        logger.debug(
            "Selected %s stream for %s (%d bps)",
            "audio-only" if not selected.has_video else "video",
            video_id,
            selected.bitrate,
        )
        return StreamResolution(
            url=selected.url,
            captions=info.captions,
            details=info.details or VideoDetails(),
        )

    async def resolve_audio_url(self, video_id: str) -> str:
        """Best audio-only stream URL for a video.

        Raises:
            InvalidIdError: If the ID is malformed.
            CatalogUnavailableError: If no http(s) URL was produced.
        """
        video_id = validate_video_id(video_id)
        url = await self._client.get_audio_url(video_id)
        if not url or not url.startswith("http"):
            logger.error("Invalid audio URL received for %s: %r", video_id, url)
            raise CatalogUnavailableError("Failed to retrieve audio")
        return url
