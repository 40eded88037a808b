"""Enumerations for soundseek domain models."""

from enum import StrEnum


class ContentType(StrEnum):
    """Content-type filter for catalog searches."""

    VIDEO = "video"
    CHANNEL = "channel"
    PLAYLIST = "playlist"

    @property
    def search_filter(self) -> str:
        """ytmusicapi search filter for this content type."""
        match self:
            case ContentType.VIDEO:
                return "videos"
            case ContentType.CHANNEL:
                return "artists"
            case ContentType.PLAYLIST:
                return "playlists"


class MatchSource(StrEnum):
    """How an artist name was resolved to a channel.

    Declaration order after KNOWN_CHANNEL is the heuristic priority order.
    """

    KNOWN_CHANNEL = "known_channel"
    OFFICIAL_ARTIST = "official_artist"
    VEVO = "vevo"
    TOPIC = "topic"
    OFFICIAL_VIDEO = "official_video"


class ClassifierStrategy(StrEnum):
    """Music classification heuristic selected by a call site.

    - NEGATIVE_KEYWORDS: reject titles/channels with non-music indicators
    - POSITIVE_PATTERNS: accept music-style titles or music channel names
    """

    NEGATIVE_KEYWORDS = "negative_keywords"
    POSITIVE_PATTERNS = "positive_patterns"


class ThumbnailPolicy(StrEnum):
    """How a single thumbnail is chosen from a list of candidates."""

    FIRST = "first"
    QUALITY = "quality"  # maxres > hqdefault > mqdefault, then first
    LARGEST = "largest"  # largest width x height


class LongListenKind(StrEnum):
    """Label for long-form listening content, detected from its title."""

    DJ_SET = "DJ Set"
    MASHUP = "Mashup"
    REMIX = "Remix"
    FOCUS_MIX = "Focus Mix"
    EXTENDED_MIX = "Extended Mix"


class PlaylistCategory(StrEnum):
    """Bucket a channel playlist is filed under."""

    SONGS = "songs"
    ALBUMS = "albums"
    SINGLES = "singles"
    MIXES = "mixes"
