"""Term-seeded discovery: genres, moods, charts, search and long listens.

Every flow here issues plain catalog searches for a templated term and
normalizes the results with its own call-site policy. Which music
classifier (if any) applies is decided per flow:

- genre_songs, recommended, artist_songs, mood_playlists: none
- search: NEGATIVE_KEYWORDS
- popular: POSITIVE_PATTERNS
"""

import asyncio
import logging

from soundseek.client import CatalogProtocol
from soundseek.config import PipelineConfig
from soundseek.exceptions import CatalogError, CatalogUnavailableError, NotFoundError
from soundseek.lib.classify import is_music
from soundseek.lib.normalize import (
    LONG_LISTEN_PLACEHOLDER,
    POPULAR_POLICY,
    SIMPLE_POLICY,
    UNKNOWN_ARTIST,
    UNKNOWN_PLAYLIST,
    NormalizePolicy,
    RawResult,
    clean_creator_name,
    clean_long_form_title,
    detect_long_listen_kind,
    extract_author_name,
    extract_duration_seconds,
    extract_id,
    extract_text,
    format_long_duration,
    normalize,
    playlist_items,
    raw_thumbnails,
    resolve_thumbnail,
    select_thumbnail,
)
from soundseek.lib.pacing import paced
from soundseek.lib.ranking import rank_by_views
from soundseek.models.domain import (
    GenreTrack,
    LongListen,
    MoodPlaylists,
    NormalizedTrack,
    PlaylistRef,
)
from soundseek.models.enums import ClassifierStrategy, ContentType, ThumbnailPolicy
from soundseek.models.query import CatalogQuery
from soundseek.utils.url import playlist_id_from_browse_id, watch_url

logger = logging.getLogger(__name__)

MUSIC_GENRES: tuple[str, ...] = (
    "Pop",
    "Rock",
    "Hip Hop",
    "R&B",
    "Electronic",
    "Jazz",
    "Classical",
    "Country",
    "Metal",
    "Indie",
)

RECOMMENDED_GENRES: tuple[str, ...] = ("Pop", "Rock")

LONG_LISTEN_QUERIES: tuple[str, ...] = (
    "Billboard top 100 songs",
    "Spotify top 100 2024",
    "electronic dj mixes",
    "best pop remixes",
    "party playlists",
    "focus/study playlist 2025",
)


def genre_query(genre: str) -> str:
    return f"{genre} music"


def _has_artist_song_fields(raw: RawResult) -> bool:
    return bool(
        extract_id(raw)
        and extract_text(raw.get("title"))
        and raw_thumbnails(raw)
        and extract_author_name(raw)
    )


class DiscoveryService:
    """Genre, mood, chart, search and long-form discovery flows."""

    def __init__(
        self, client: CatalogProtocol, config: PipelineConfig | None = None
    ) -> None:
        self._client = client
        self._config = config or PipelineConfig()

    async def _search_videos(self, query: str, **hints: object) -> list[RawResult]:
        return await self._client.search(
            CatalogQuery(query=query, content_type=ContentType.VIDEO, **hints)
        )

    async def genre_songs(self, genre: str) -> list[NormalizedTrack]:
        """Tracks for a genre from a single "{genre} music" search."""
        results = await self._search_videos(genre_query(genre))
        tracks = [normalize(raw) for raw in results if extract_id(raw)]
        logger.info("Found %d %s songs", len(tracks), genre)
        return tracks

    async def _genre_tracks(
        self,
        genres: tuple[str, ...],
        *,
        strategy: ClassifierStrategy | None = None,
        policy: NormalizePolicy = SIMPLE_POLICY,
        region: str | None = None,
    ) -> list[GenreTrack]:
        """Sequential, paced genre searches merged in declaration order.

        A genre whose search fails is logged and skipped. IDs are unique
        across genres (first genre wins). The client is initialized once up
        front, so a client that cannot start fails the whole flow.
        """
        await self._client.initialize()

        tracks: list[GenreTrack] = []
        seen: set[str] = set()
        failures = 0

        async for genre in paced(genres, self._config.strategy_delay):
            try:
                results = await self._search_videos(genre_query(genre), region=region)
            except CatalogError as e:
                logger.warning("Skipping genre %s: %s", genre, e)
                failures += 1
                continue

            added = 0
            for raw in results:
                video_id = extract_id(raw)
                if not video_id or video_id in seen:
                    continue
                if strategy is not None and not is_music(
                    extract_text(raw.get("title")), extract_author_name(raw), strategy
                ):
                    continue
                seen.add(video_id)
                track = normalize(raw, policy=policy)
                tracks.append(GenreTrack(**track.model_dump(), genre=genre))
                added += 1
            logger.debug("Found %d %s songs", added, genre)

        if genres and failures == len(genres):
            raise CatalogUnavailableError("All genre searches failed")
        return tracks

    async def popular(self, country: str = "US") -> list[GenreTrack]:
        """Chart-style tracks across MUSIC_GENRES, most viewed first.

        Only results passing the positive-pattern classifier are kept. The
        country is passed to the catalog as a region hint.
        """
        tracks = await self._genre_tracks(
            MUSIC_GENRES,
            strategy=ClassifierStrategy.POSITIVE_PATTERNS,
            policy=POPULAR_POLICY,
            region=country,
        )
        ranked = rank_by_views(tracks)[: self._config.popular_limit]
        logger.info("Found %d popular tracks for %s", len(ranked), country)
        return ranked

    async def recommended(self) -> list[GenreTrack]:
        """Pop and Rock tracks, tagged with their genre, unfiltered."""
        return await self._genre_tracks(RECOMMENDED_GENRES)

    async def search(self, query: str) -> list[NormalizedTrack]:
        """Free-text music search.

        Results whose title or artist carries a non-music keyword are
        dropped. If any remaining title equals the query (ignoring case),
        only those exact matches are returned.
        """
        results = await self._search_videos(query)
        songs = [
            track
            for track in (normalize(raw) for raw in results if extract_id(raw))
            if is_music(track.title, track.artist, ClassifierStrategy.NEGATIVE_KEYWORDS)
        ]
        wanted = query.strip().lower()
        exact = [track for track in songs if track.title.lower() == wanted]
        return exact or songs

    async def artist_songs(self, artist: str) -> list[NormalizedTrack]:
        """Songs from a "{artist} songs" search.

        Results missing an ID, title, thumbnail or author are dropped.

        Raises:
            NotFoundError: If no complete result remains.
        """
        results = await self._search_videos(f"{artist} songs")
        songs = [normalize(raw) for raw in results if _has_artist_song_fields(raw)]
        if not songs:
            raise NotFoundError("No songs found")
        return songs

    async def mood_playlists(self, mood: str) -> MoodPlaylists:
        """First playlist found for a mood, with its tracks.

        Raises:
            NotFoundError: If the search returns no playlist with an ID.
        """
        results = await self._client.search(
            CatalogQuery(
                query=f"{mood} music playlist", content_type=ContentType.PLAYLIST
            )
        )
        if not results:
            raise NotFoundError("No playlists found")

        selected: RawResult | None = None
        playlist_id = ""
        for raw in results:
            browse_id = raw.get("playlistId") or raw.get("browseId") or raw.get("id")
            if isinstance(browse_id, str) and browse_id:
                selected = raw
                playlist_id = playlist_id_from_browse_id(browse_id)
                break
        if selected is None:
            raise NotFoundError("No valid playlists found")

        logger.debug("Selected playlist %s for mood %s", playlist_id, mood)
        details = await self._client.get_playlist(playlist_id)
        items = playlist_items(details)
        if not items:
            return MoodPlaylists(mood=mood)

        return MoodPlaylists(
            mood=mood,
            playlists=[
                PlaylistRef(
                    id=playlist_id,
                    title=extract_text(selected.get("title")) or UNKNOWN_PLAYLIST,
                    thumbnail_url=resolve_thumbnail(selected),
                )
            ],
            songs=[normalize(item) for item in items if extract_id(item)],
        )

    async def long_listens(self) -> list[LongListen]:
        """Hour-plus mixes, sets and playlists.

        LONG_LISTEN_QUERIES are issued concurrently. A failed query is
        logged and contributes nothing; results merge in query order.

        Raises:
            CatalogUnavailableError: If the catalog client cannot initialize,
                or every query failed.
        """
        await self._client.initialize()

        hints = {"sort_by": "rating", "duration": "long", "features": ("hd", "cc")}
        outcomes = await asyncio.gather(
            *(self._search_videos(query, **hints) for query in LONG_LISTEN_QUERIES),
            return_exceptions=True,
        )

        merged: dict[str, RawResult] = {}
        failures = 0
        for query, outcome in zip(LONG_LISTEN_QUERIES, outcomes, strict=True):
            if isinstance(outcome, CatalogError):
                logger.warning("Long-listen query '%s' failed: %s", query, outcome)
                failures += 1
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            for raw in outcome:
                video_id = extract_id(raw)
                if video_id and video_id not in merged:
                    merged[video_id] = raw

        if failures == len(LONG_LISTEN_QUERIES):
            raise CatalogUnavailableError("All long-listen searches failed")

        listens: list[LongListen] = []
        for video_id, raw in merged.items():
            seconds = extract_duration_seconds(raw)
            if seconds < self._config.long_listen_min_seconds:
                continue
            title = extract_text(raw.get("title")) or ""
            listens.append(
                LongListen(
                    id=video_id,
                    title=clean_long_form_title(title),
                    creator=clean_creator_name(
                        extract_author_name(raw) or UNKNOWN_ARTIST
                    ),
                    thumbnail_url=(
                        select_thumbnail(raw_thumbnails(raw), ThumbnailPolicy.QUALITY)
                        or LONG_LISTEN_PLACEHOLDER
                    ),
                    duration_text=format_long_duration(seconds),
                    kind=detect_long_listen_kind(title),
                    url=watch_url(video_id),
                )
            )
            if len(listens) >= self._config.long_listen_limit:
                break
        return listens
