"""Content ID validation and URL construction."""

import re

from soundseek.exceptions import InvalidIdError

# Catalog video IDs: exactly 11 characters of [A-Za-z0-9_-]
VIDEO_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{11}")

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# Search results reference playlists by browse ID ("VL" + playlist ID)
_PLAYLIST_BROWSE_PREFIX = "VL"

# Album browse IDs are served by the album endpoint, not the playlist one
ALBUM_BROWSE_PREFIX = "MPREb"


def is_valid_video_id(video_id: str | None) -> bool:
    """Check whether a string matches the catalog's video ID scheme."""
    return bool(video_id) and VIDEO_ID_PATTERN.fullmatch(video_id) is not None


def validate_video_id(video_id: str | None) -> str:
    """Return the video ID unchanged, or fail fast before any network call.

    Raises:
        InvalidIdError: If the ID is missing or malformed.
    """
    if not video_id:
        raise InvalidIdError("Missing video ID")
    if not is_valid_video_id(video_id):
        raise InvalidIdError("Invalid video ID format")
    return video_id


def watch_url(video_id: str) -> str:
    """Build the public watch URL for a video."""
    return WATCH_URL.format(video_id=video_id)


def playlist_id_from_browse_id(browse_id: str) -> str:
    """Strip the "VL" browse prefix from a playlist browse ID."""
    if browse_id.startswith(_PLAYLIST_BROWSE_PREFIX):
        return browse_id[len(_PLAYLIST_BROWSE_PREFIX) :]
    return browse_id


def is_album_browse_id(content_id: str) -> bool:
    """Check whether an ID addresses an album page."""
    return content_id.startswith(ALBUM_BROWSE_PREFIX)
