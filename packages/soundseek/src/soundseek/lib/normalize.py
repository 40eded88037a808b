"""Field extraction for raw catalog results.

The catalog returns semi-structured records whose fields come in several
shapes depending on the endpoint and on the day: a title may be a plain
string, a ``{"text": ...}`` object, a ``{"simpleText": ...}`` object or a
``{"runs": [{"text": ...}]}`` object; thumbnails may be a list, a single
object or nested under another key; the author may be an object, a string
or an ``artists`` list.

Every function here is total: it accepts anything, never raises, and falls
back to a documented default. Call sites pick a NormalizePolicy instead of
re-implementing extraction inline.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from soundseek.models.domain import (
    ChannelMetadata,
    NormalizedTrack,
    PlaylistSummary,
    Thumbnail,
)
from soundseek.models.enums import LongListenKind, ThumbnailPolicy
from soundseek.utils.url import watch_url

RawResult = Mapping[str, Any]

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_TRACK = "Unknown Track"
UNKNOWN_PLAYLIST = "Unknown Playlist"

VIDEO_PLACEHOLDER = "/default-video.jpg"
LONG_LISTEN_PLACEHOLDER = "/default-longlisten.jpg"

# Thumbnail URL substrings in preference order
_QUALITY_ORDER = ("maxres", "hqdefault", "mqdefault")

# "Artist - Song" / "Artist | Song"
_TITLE_DELIMITER = re.compile(r" - | \| ")

# Long-form cleanup
_LONG_FORM_NOISE = re.compile(r"(\[.*?\])|(\(.*?\))|(\|.*)")
_REPEATED_SPACE = re.compile(r"\s{2,}")
_CREATOR_SUFFIX = re.compile(r"( - Topic| Official| -? VEVO)$", re.IGNORECASE)

# Popular-chart cleanup
_LEADING_ARTIST = re.compile(r"^.*-\s*")
_BRACKETED = re.compile(r"\s*[\(\[].*?[\)\]]")
_TITLE_NOISE = re.compile(r"official video|lyrics?|visualizer|hd|4k", re.IGNORECASE)


# ============================================================================
# PRIMITIVES
# ============================================================================


def as_mapping(value: Any) -> RawResult:
    """Return value if it is a mapping, else an empty one."""
    return value if isinstance(value, Mapping) else {}


def extract_text(value: Any) -> str | None:
    """Extract display text from any of the catalog's text shapes.

    Returns the stripped text, or None when nothing usable is present.
    """
    text: str | None = None
    match value:
        case str():
            text = value
        case {"text": str() as inner}:
            text = inner
        case {"simpleText": str() as inner}:
            text = inner
        case {"runs": [{"text": str() as inner}, *_]}:
            text = inner
    if text is None:
        return None
    return text.strip() or None


def extract_id(raw: RawResult) -> str | None:
    """Extract the content ID (``id``, ``videoId`` or ``video_id``)."""
    for key in ("id", "videoId", "video_id"):
        value = raw.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def parse_duration(text: str | None) -> int:
    """Parse a clock duration like '3:00' or '1:23:45' to seconds.

    Returns 0 for absent or unparseable values.
    """
    if not text:
        return 0
    parts = text.strip().split(":")
    if not 1 < len(parts) <= 3:
        return 0
    seconds = 0
    for part in parts:
        if not part.isdigit():
            return 0
        seconds = seconds * 60 + int(part)
    return seconds


# ============================================================================
# FIELD EXTRACTORS
# ============================================================================


def extract_title(raw: RawResult, default: str = UNKNOWN_TITLE) -> str:
    """Title from a string, ``{text}``, ``{simpleText}`` or ``runs`` shape."""
    return extract_text(raw.get("title")) or default


def extract_author_name(raw: RawResult) -> str | None:
    """Author name from ``author.name``, a bare ``author`` or ``artists[]``."""
    author = raw.get("author")
    match author:
        case {"name": name}:
            if text := extract_text(name):
                return text
        case str():
            if text := extract_text(author):
                return text
    artists = raw.get("artists")
    if isinstance(artists, list):
        for artist in artists:
            if name := extract_text(as_mapping(artist).get("name")):
                return name
    return None


def artist_from_title(title: str | None) -> str | None:
    """Segment before the first " - " or " | " of an "Artist - Song" title."""
    if not title:
        return None
    parts = _TITLE_DELIMITER.split(title)
    if len(parts) < 2:
        return None
    return parts[0].strip() or None


def extract_artist(raw: RawResult, *, prefer_title: bool = False) -> str:
    """Artist name with per-call-site precedence.

    Default order: author, then ``channel``, then the title's leading
    segment. With ``prefer_title`` the title segment is tried first.
    """
    from_title = artist_from_title(extract_text(raw.get("title")))
    if prefer_title and from_title:
        return from_title
    return (
        extract_author_name(raw)
        or extract_text(raw.get("channel"))
        or from_title
        or UNKNOWN_ARTIST
    )


def _thumbnail(value: Any) -> Thumbnail | None:
    item = as_mapping(value)
    url = item.get("url")
    if not isinstance(url, str) or not url:
        return None
    width = item.get("width")
    height = item.get("height")
    return Thumbnail(
        url=url,
        width=width if isinstance(width, int) else None,
        height=height if isinstance(height, int) else None,
    )


def thumbnail_candidates(value: Any) -> list[Thumbnail]:
    """Collect thumbnail candidates from a list, an object or a nested object."""
    match value:
        case list():
            return [thumb for item in value if (thumb := _thumbnail(item))]
        case {"url": _}:
            thumb = _thumbnail(value)
            return [thumb] if thumb else []
        case {"thumbnails": nested}:
            return thumbnail_candidates(nested)
    return []


def raw_thumbnails(raw: RawResult) -> list[Thumbnail]:
    """Thumbnail candidates of a result (``thumbnails`` or ``thumbnail``)."""
    return thumbnail_candidates(raw.get("thumbnails", raw.get("thumbnail")))


def select_thumbnail(
    candidates: list[Thumbnail], policy: ThumbnailPolicy = ThumbnailPolicy.FIRST
) -> str | None:
    """Pick one thumbnail URL from candidates according to policy."""
    if not candidates:
        return None
    match policy:
        case ThumbnailPolicy.QUALITY:
            for quality in _QUALITY_ORDER:
                for thumb in candidates:
                    if quality in thumb.url:
                        return thumb.url
        case ThumbnailPolicy.LARGEST:
            best = max(candidates, key=lambda t: (t.width or 0) * (t.height or 0))
            return best.url
    return candidates[0].url


def extract_duration_text(raw: RawResult) -> str | None:
    """Human-readable duration (``duration`` or ``length``)."""
    return extract_text(raw.get("duration")) or extract_text(raw.get("length"))


def extract_duration_seconds(raw: RawResult) -> int:
    """Duration in seconds, for filtering only. Returns 0 when unknown."""
    seconds = raw.get("duration_seconds")
    if isinstance(seconds, int):
        return seconds
    nested = as_mapping(raw.get("duration")).get("seconds")
    if isinstance(nested, int | float):
        return int(nested)
    return parse_duration(extract_duration_text(raw))


def extract_published_text(raw: RawResult) -> str | None:
    """Publication text (``published``), else the release ``year``."""
    if text := extract_text(raw.get("published")):
        return text
    year = raw.get("year")
    if isinstance(year, int):
        return str(year)
    return extract_text(year)


def extract_view_count_text(raw: RawResult) -> str | None:
    """View count display text (``view_count``, ``short_view_count``, ``views``)."""
    for key in ("view_count", "short_view_count", "views"):
        if text := extract_text(raw.get(key)):
            return text
    return None


# ============================================================================
# RECORD NORMALIZATION
# ============================================================================


@dataclass(frozen=True)
class NormalizePolicy:
    """Per-call-site extraction choices.

    Attributes:
        thumbnail_policy: How to choose among thumbnail candidates.
        placeholder: Thumbnail used when the result has none.
        author_thumbnail_fallback: Use the author's avatar before the placeholder.
        prefer_title_artist: Take the artist from an "Artist - Song" title first.
        title_cleaner: Optional title rewrite; an empty result keeps the default.
        default_title: Title used when the result has none.
        default_text: Value for absent duration/view-count text.
    """

    thumbnail_policy: ThumbnailPolicy = ThumbnailPolicy.FIRST
    placeholder: str = ""
    author_thumbnail_fallback: bool = False
    prefer_title_artist: bool = False
    title_cleaner: Callable[[str], str] | None = None
    default_title: str = UNKNOWN_TITLE
    default_text: str | None = None


def clean_popular_title(title: str) -> str:
    """Drop the leading "Artist -" part, bracketed segments and video noise."""
    cleaned = _LEADING_ARTIST.sub("", title)
    cleaned = _BRACKETED.sub("", cleaned)
    cleaned = _TITLE_NOISE.sub("", cleaned)
    return cleaned.strip()


# Artist deep search: first thumbnail, author avatar, then video placeholder
DEEP_SEARCH_POLICY = NormalizePolicy(
    placeholder=VIDEO_PLACEHOLDER, author_thumbnail_fallback=True
)

# Genre, mood, search, recommendation
SIMPLE_POLICY = NormalizePolicy()

# Popular charts: "Artist - Song" titles, largest artwork, "N/A" placeholders
POPULAR_POLICY = NormalizePolicy(
    thumbnail_policy=ThumbnailPolicy.LARGEST,
    prefer_title_artist=True,
    title_cleaner=clean_popular_title,
    default_title=UNKNOWN_TRACK,
    default_text="N/A",
)


def resolve_thumbnail(raw: RawResult, policy: NormalizePolicy = SIMPLE_POLICY) -> str:
    """Thumbnail URL for a result under a call-site policy."""
    url = select_thumbnail(raw_thumbnails(raw), policy.thumbnail_policy)
    if url is None and policy.author_thumbnail_fallback:
        author = as_mapping(raw.get("author"))
        url = select_thumbnail(thumbnail_candidates(author.get("thumbnails")))
    return url or policy.placeholder


def normalize(
    raw: Any,
    *,
    source_strategy: str | None = None,
    policy: NormalizePolicy = SIMPLE_POLICY,
) -> NormalizedTrack:
    """Build a NormalizedTrack from one raw catalog result.

    Total: never raises and never leaves title or artist empty. A result
    without an ID gets ``id=""``; callers that merge drop those.
    """
    data = as_mapping(raw)
    video_id = extract_id(data) or ""

    title = extract_text(data.get("title"))
    if title and policy.title_cleaner:
        title = policy.title_cleaner(title) or None

    return NormalizedTrack(
        id=video_id,
        title=title or policy.default_title,
        artist=extract_artist(data, prefer_title=policy.prefer_title_artist),
        thumbnail_url=resolve_thumbnail(data, policy),
        duration_text=extract_duration_text(data) or policy.default_text,
        published_text=extract_published_text(data),
        view_count_text=extract_view_count_text(data) or policy.default_text,
        source_strategy=source_strategy,
        url=watch_url(video_id) if video_id else "",
    )


# ============================================================================
# LONG-FORM ("LISTENS") CLEANUP
# ============================================================================


def clean_long_form_title(title: str) -> str:
    """Strip bracketed/parenthesized and pipe-trailing segments."""
    cleaned = _LONG_FORM_NOISE.sub("", title)
    cleaned = _REPEATED_SPACE.sub(" ", cleaned).strip()
    return cleaned or title.strip()


def clean_creator_name(creator: str) -> str:
    """Strip trailing " - Topic", " Official" and " VEVO" suffixes."""
    return _CREATOR_SUFFIX.sub("", creator).strip()


def format_long_duration(seconds: int) -> str:
    """Format seconds as "Hh Mm"."""
    hours, remainder = divmod(max(seconds, 0), 3600)
    return f"{hours}h {remainder // 60}m"


def detect_long_listen_kind(title: str) -> LongListenKind:
    """Classify long-form content by title keywords."""
    lowered = title.lower()
    if "dj mix" in lowered:
        return LongListenKind.DJ_SET
    if "mashup" in lowered:
        return LongListenKind.MASHUP
    if "remix" in lowered:
        return LongListenKind.REMIX
    if "study" in lowered or "focus" in lowered:
        return LongListenKind.FOCUS_MIX
    return LongListenKind.EXTENDED_MIX


# ============================================================================
# CHANNELS AND PLAYLISTS
# ============================================================================


@dataclass(frozen=True)
class ChannelRef:
    """Channel identity extracted from a search result."""

    id: str | None
    name: str | None
    thumbnail_url: str | None


def channel_ref_from_channel_result(raw: Any) -> ChannelRef:
    """Channel identity of a channel/artist search result."""
    data = as_mapping(raw)
    name = (
        extract_text(data.get("artist"))
        or extract_text(data.get("name"))
        or extract_text(data.get("title"))
        or extract_author_name(data)
    )
    channel_id = next(
        (
            value
            for key in ("browseId", "channelId", "id")
            if isinstance(value := data.get(key), str) and value
        ),
        None,
    )
    return ChannelRef(
        id=channel_id,
        name=name,
        thumbnail_url=select_thumbnail(raw_thumbnails(data)),
    )


def channel_ref_from_video_result(raw: Any) -> ChannelRef:
    """Uploading channel of a video search result."""
    data = as_mapping(raw)
    author = as_mapping(data.get("author"))
    channel_id = author.get("id") or author.get("channel_id")
    thumbnails = thumbnail_candidates(author.get("thumbnails"))
    if not channel_id:
        artists = data.get("artists")
        first = as_mapping(artists[0]) if isinstance(artists, list) and artists else {}
        channel_id = first.get("id")
    return ChannelRef(
        id=channel_id if isinstance(channel_id, str) and channel_id else None,
        name=extract_author_name(data),
        thumbnail_url=select_thumbnail(thumbnails),
    )


def normalize_channel(raw: Any, channel_id: str) -> ChannelMetadata:
    """Channel metadata from an artist page or a ``{metadata: ...}`` shape."""
    data = as_mapping(raw)
    meta = as_mapping(data.get("metadata")) or data
    avatar = meta.get("avatar")
    thumbnails = thumbnail_candidates(avatar) if avatar else raw_thumbnails(meta)
    resolved_id = data.get("channelId") or data.get("id") or channel_id
    return ChannelMetadata(
        id=resolved_id if isinstance(resolved_id, str) else channel_id,
        name=(
            extract_text(meta.get("title"))
            or extract_text(meta.get("name"))
            or UNKNOWN_ARTIST
        ),
        description=extract_text(meta.get("description")),
        subscribers=(
            extract_text(meta.get("subscriber_count"))
            or extract_text(meta.get("subscribers"))
        ),
        thumbnails=thumbnails,
        banners=thumbnail_candidates(meta.get("banners")),
        is_verified=bool(meta.get("is_verified") or meta.get("verified")),
        view_count=(
            extract_text(meta.get("view_count")) or extract_text(meta.get("views"))
        ),
    )


def normalize_playlist(raw: Any, playlist_id: str) -> PlaylistSummary:
    """Playlist (or album) summary from a full playlist/album response."""
    data = as_mapping(raw)
    count = next(
        (
            value
            for key in ("trackCount", "video_count", "itemCount")
            if isinstance(value := data.get(key), int | str) and value != ""
        ),
        None,
    )
    year = data.get("year")
    return PlaylistSummary(
        id=playlist_id,
        title=extract_title(data, default=UNKNOWN_PLAYLIST),
        video_count=count,
        thumbnails=raw_thumbnails(data),
        year=str(year) if isinstance(year, int | str) and year != "" else None,
    )


def playlist_items(raw: Any) -> list[RawResult]:
    """Entries of a playlist response (``tracks`` or ``videos``)."""
    data = as_mapping(raw)
    items = data.get("tracks")
    if not isinstance(items, list):
        items = data.get("videos")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, Mapping)]
