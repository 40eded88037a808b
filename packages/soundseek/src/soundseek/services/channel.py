"""Channel metadata and categorized content service."""

import logging
from datetime import UTC, datetime

from soundseek.client import CatalogProtocol
from soundseek.exceptions import CatalogError
from soundseek.lib.normalize import (
    RawResult,
    as_mapping,
    extract_id,
    normalize,
    normalize_channel,
    normalize_playlist,
)
from soundseek.models.domain import (
    ChannelContent,
    ChannelData,
    ChannelMetadata,
    NormalizedTrack,
    PlaylistSummary,
)
from soundseek.models.enums import PlaylistCategory

logger = logging.getLogger(__name__)

# Artist page sections that reference playlists or albums
PLAYLIST_SECTIONS = ("albums", "singles", "playlists")


def categorize_playlist(title: str) -> PlaylistCategory:
    """File a playlist by its title: album, single or mix, else songs."""
    lowered = title.lower()
    if "album" in lowered:
        return PlaylistCategory.ALBUMS
    if "single" in lowered:
        return PlaylistCategory.SINGLES
    if "mix" in lowered:
        return PlaylistCategory.MIXES
    return PlaylistCategory.SONGS


def _section_results(raw: RawResult, section: str) -> list[RawResult]:
    results = as_mapping(raw.get(section)).get("results")
    if not isinstance(results, list):
        return []
    return [as_mapping(item) for item in results]


def _playlist_ids(raw: RawResult) -> list[str]:
    """Playlist and album IDs referenced by a channel page, in page order."""
    seen: dict[str, None] = {}
    for section in PLAYLIST_SECTIONS:
        for item in _section_results(raw, section):
            playlist_id = (
                item.get("playlistId") or item.get("browseId") or item.get("id")
            )
            if isinstance(playlist_id, str) and playlist_id:
                seen.setdefault(playlist_id, None)
    return list(seen)


def _channel_videos(raw: RawResult) -> list[NormalizedTrack]:
    return [
        normalize(item)
        for item in _section_results(raw, "videos")
        if extract_id(item)
    ]


class ChannelService:
    """Fetch channel metadata and its playlists, sorted into buckets."""

    def __init__(self, client: CatalogProtocol) -> None:
        self._client = client

    async def get_metadata(self, channel_id: str) -> ChannelMetadata:
        """Fetch and normalize a channel's metadata."""
        raw = await self._client.get_channel(channel_id)
        return normalize_channel(raw, channel_id)

    async def get_channel_data(self, channel_id: str) -> ChannelData:
        """Fetch a channel with its playlists categorized.

        Each referenced playlist is fetched in full, one at a time, and
        categorized by its title. A playlist that fails to load is logged
        and left out.

        Raises:
            CatalogUnavailableError: If the channel itself cannot be fetched.
        """
        raw = as_mapping(await self._client.get_channel(channel_id))
        metadata = normalize_channel(raw, channel_id)

        buckets: dict[PlaylistCategory, list[PlaylistSummary]] = {
            category: [] for category in PlaylistCategory
        }
        for playlist_id in _playlist_ids(raw):
            try:
                info = await self._client.get_playlist(playlist_id)
            except CatalogError as e:
                logger.warning("Skipping playlist %s: %s", playlist_id, e)
                continue
            summary = normalize_playlist(info, playlist_id)
            category = categorize_playlist(summary.title)
            if category in (PlaylistCategory.MIXES, PlaylistCategory.SONGS):
                summary = summary.model_copy(update={"year": None})
            buckets[category].append(summary)

        logger.debug(
            "Channel %s: %s",
            channel_id,
            ", ".join(
                f"{len(items)} {category}" for category, items in buckets.items()
            ),
        )

        return ChannelData(
            metadata=metadata,
            content=ChannelContent(
                songs=buckets[PlaylistCategory.SONGS],
                albums=buckets[PlaylistCategory.ALBUMS],
                singles=buckets[PlaylistCategory.SINGLES],
                videos=_channel_videos(raw),
                mixes=buckets[PlaylistCategory.MIXES],
            ),
            last_updated=datetime.now(UTC),
        )
