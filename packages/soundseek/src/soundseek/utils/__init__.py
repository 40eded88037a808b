"""Utility functions for soundseek.

Available via `from soundseek.utils import ...` for power users.
Not re-exported at the top-level `soundseek` package.
"""

from soundseek.utils.url import (
    is_album_browse_id,
    is_valid_video_id,
    playlist_id_from_browse_id,
    validate_video_id,
    watch_url,
)

__all__ = [
    "is_album_browse_id",
    "is_valid_video_id",
    "playlist_id_from_browse_id",
    "validate_video_id",
    "watch_url",
]
