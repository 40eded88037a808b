"""Catalog client adapter.

Wraps the unofficial catalog libraries (ytmusicapi for search, channels and
playlists; yt-dlp for video info and stream URLs) behind one asynchronous,
fallible contract:

- The ytmusicapi handle is built lazily, once per adapter. Concurrent
  callers await the same in-flight initialization. A failed or timed-out
  initialization is not cached; the next call starts over.
- Every operation runs in a worker thread and is raced against a timeout.
  A timeout raises CatalogTimeoutError; the thread itself keeps running.
- No retries happen here. Retry and skip policy belongs to callers.
- Responses are cached in-process by (operation, arguments). Callers must
  not add caches of their own.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any, Protocol, TypeVar

import yt_dlp
from ytmusicapi import YTMusic
from ytmusicapi.exceptions import YTMusicError

from soundseek.config import CatalogConfig
from soundseek.exceptions import (
    CatalogError,
    CatalogTimeoutError,
    CatalogUnavailableError,
)
from soundseek.models.query import CatalogQuery
from soundseek.utils.url import is_album_browse_id, watch_url

logger = logging.getLogger(__name__)

T = TypeVar("T")

RawResult = dict[str, Any]
YoutubeDLFactory = Callable[[dict[str, Any]], Any]

# Exceptions the backends raise for failed requests or responses whose
# shape changed under them
_BACKEND_ERRORS: tuple[type[Exception], ...] = (
    YTMusicError,
    yt_dlp.utils.DownloadError,
    KeyError,
    IndexError,
    TypeError,
    ValueError,
)

# yt-dlp format selectors
STREAM_FORMAT = "best[vcodec!=none][acodec!=none]/best"
AUDIO_FORMAT = "bestaudio[ext=m4a]/bestaudio[ext=webm]"


class CatalogProtocol(Protocol):
    """Protocol for catalog clients.

    This protocol enables dependency injection and testing.
    Implement this protocol to create fake catalogs for testing.
    """

    async def initialize(self) -> Any:
        """Make sure the underlying client handle exists."""
        ...

    async def search(self, query: CatalogQuery) -> list[RawResult]:
        """Search the catalog."""
        ...

    async def get_channel(self, channel_id: str) -> RawResult:
        """Fetch a channel (artist) page."""
        ...

    async def get_playlist(self, playlist_id: str) -> RawResult:
        """Fetch a playlist or album with its items."""
        ...

    async def get_info(self, video_id: str) -> RawResult:
        """Fetch full video info (formats and captions)."""
        ...

    async def get_basic_info(self, video_id: str) -> RawResult:
        """Fetch the player response for a video."""
        ...

    async def get_streaming_data(self, video_id: str) -> RawResult | None:
        """Select the best combined video+audio stream directly."""
        ...

    async def get_audio_url(self, video_id: str) -> str | None:
        """Look up the best audio-only stream URL."""
        ...


class ResponseCache:
    """LRU cache with a per-entry time-to-live.

    Args:
        max_size: Maximum number of entries; the least recently used is evicted.
        clock: Monotonic clock in seconds (injectable for tests).
    """

    def __init__(
        self, max_size: int, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[Hashable, tuple[float, Any]] = OrderedDict()

    def get(self, key: Hashable) -> Any | None:
        """Return a live entry, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return value

    def set(self, key: Hashable, value: Any, ttl: float) -> None:
        """Store a value for ``ttl`` seconds."""
        if self._max_size < 1 or ttl <= 0:
            return
        self._entries[key] = (self._clock() + ttl, value)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_size:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class CatalogClient:
    """Production catalog client.

    Wraps ytmusicapi and yt-dlp with lazy initialization, per-call
    timeouts, consistent error conversion and response caching.
    Implements CatalogProtocol.
    """

    def __init__(
        self,
        config: CatalogConfig | None = None,
        ytmusic_factory: Callable[[], YTMusic] | None = None,
        ydl_factory: YoutubeDLFactory | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the adapter without touching the network.

        Args:
            config: Optional catalog configuration. Uses defaults if not provided.
            ytmusic_factory: Builds the ytmusicapi handle. Defaults to YTMusic
                with the configured language and location.
            ydl_factory: Builds a yt-dlp context manager from an options dict.
            clock: Monotonic clock used by the response cache.
        """
        self._config = config or CatalogConfig()
        self._ytmusic_factory = ytmusic_factory or self._create_ytmusic
        self._ydl_factory = ydl_factory or yt_dlp.YoutubeDL
        self._cache = ResponseCache(self._config.cache_size, clock=clock)
        self._handle: YTMusic | None = None
        self._init_task: asyncio.Task[YTMusic] | None = None

    @property
    def config(self) -> CatalogConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._handle is not None

    def _create_ytmusic(self) -> YTMusic:
        logger.info(
            "Creating catalog client (language=%s, location=%s)",
            self._config.language,
            self._config.location,
        )
        return YTMusic(language=self._config.language, location=self._config.location)

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def initialize(self) -> YTMusic:
        """Return the client handle, creating it on first use.

        Idempotent. Concurrent callers share the in-flight initialization.

        Raises:
            CatalogUnavailableError: If construction fails or exceeds
                ``init_timeout``. Nothing is cached in that case.
        """
        if self._handle is not None:
            return self._handle

        if self._init_task is None:
            self._init_task = asyncio.create_task(
                self._build_handle(), name="catalog-init"
            )
        task = self._init_task

        try:
            handle = await asyncio.shield(task)
        except CatalogError:
            if self._init_task is task:
                self._init_task = None
            raise

        self._handle = handle
        return handle

    async def _build_handle(self) -> YTMusic:
        timeout = self._config.init_timeout
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._ytmusic_factory), timeout=timeout
            )
        except TimeoutError as e:
            logger.error("Catalog initialization timed out after %ss", timeout)
            raise CatalogUnavailableError(
                "Catalog service unavailable: initialization timed out"
            ) from e
        except Exception as e:
            logger.error("Catalog initialization failed: %s", e)
            raise CatalogUnavailableError("Catalog service unavailable") from e

    # ------------------------------------------------------------------
    # Call wrapping
    # ------------------------------------------------------------------

    async def _run(
        self,
        label: str,
        func: Callable[..., T],
        *args: Any,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> T:
        """Run a blocking backend call in a thread, raced against a timeout."""
        budget = timeout if timeout is not None else self._config.call_timeout
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args, **kwargs), timeout=budget
            )
        except TimeoutError as e:
            logger.warning("Catalog %s timed out after %ss", label, budget)
            raise CatalogTimeoutError(f"{label} timed out after {budget}s") from e
        except _BACKEND_ERRORS as e:
            logger.warning("Catalog %s failed: %s", label, e)
            raise CatalogUnavailableError(f"{label} failed: {e}") from e

    async def call(
        self,
        operation: str,
        *args: Any,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> Any:
        """Invoke a method of the client handle with the timeout contract.

        Args:
            operation: Name of the ytmusicapi method (e.g. "search").
            *args: Positional arguments for the method.
            timeout: Seconds allowed; defaults to ``call_timeout``.
            **kwargs: Keyword arguments for the method.

        Raises:
            CatalogUnavailableError: If initialization or the call fails.
            CatalogTimeoutError: If the call exceeds its budget.
        """
        handle = await self.initialize()
        return await self._run(
            operation, getattr(handle, operation), *args, timeout=timeout, **kwargs
        )

    async def _cached_call(
        self, key: tuple[Hashable, ...], operation: str, *args: Any, **kwargs: Any
    ) -> Any:
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached
        result = await self.call(operation, *args, **kwargs)
        if result is not None:
            self._cache.set(key, result, self._config.cache_ttl)
        return result

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def search(self, query: CatalogQuery) -> list[RawResult]:
        """Search the catalog.

        Hints on the query are not supported by the backend and are
        dropped; callers that rely on one filter the results themselves.
        """
        if query.hints:
            logger.debug("Ignoring unsupported search hints: %s", query.hints)
        logger.debug("Searching %s: %s", query.content_type, query.query)
        results = await self._cached_call(
            ("search", *query.cache_key),
            "search",
            query.query,
            filter=query.content_type.search_filter,
            limit=self._config.search_limit,
        )
        return [item for item in results or [] if isinstance(item, dict)]

    async def get_channel(self, channel_id: str) -> RawResult:
        """Fetch a channel (artist) page."""
        logger.debug("Fetching channel: %s", channel_id)
        return await self._cached_call(
            ("channel", channel_id), "get_artist", channel_id
        )

    async def get_playlist(self, playlist_id: str) -> RawResult:
        """Fetch a playlist, or an album when given an album browse ID."""
        if is_album_browse_id(playlist_id):
            logger.debug("Fetching album: %s", playlist_id)
            return await self._cached_call(
                ("album", playlist_id), "get_album", playlist_id
            )
        logger.debug("Fetching playlist: %s", playlist_id)
        return await self._cached_call(
            ("playlist", playlist_id), "get_playlist", playlist_id
        )

    async def get_basic_info(self, video_id: str) -> RawResult:
        """Fetch the player response (streamingData, videoDetails, captions)."""
        logger.debug("Fetching basic info: %s", video_id)
        return await self.call("get_song", video_id)

    def _extract(self, video_id: str, format_selector: str | None) -> RawResult:
        opts: dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "noprogress": True,
            "skip_download": True,
            "color": "never",  # Disable ANSI codes in error messages
        }
        if format_selector:
            opts["format"] = format_selector
        with self._ydl_factory(opts) as ydl:
            info = ydl.extract_info(watch_url(video_id), download=False)
        return dict(info or {})

    async def get_info(self, video_id: str) -> RawResult:
        """Fetch full video info with every format and caption track."""
        logger.debug("Fetching full info: %s", video_id)
        return await self._run("get_info", self._extract, video_id, None)

    async def get_streaming_data(self, video_id: str) -> RawResult | None:
        """Let yt-dlp pick the best combined video+audio stream."""
        logger.debug("Fetching streaming data: %s", video_id)
        info = await self._run(
            "get_streaming_data", self._extract, video_id, STREAM_FORMAT
        )
        return info if info.get("url") else None

    async def get_audio_url(self, video_id: str) -> str | None:
        """Best audio-only stream URL (m4a preferred, then webm).

        Valid URLs are cached for ``audio_cache_ttl`` seconds.
        """
        key = ("audio", video_id)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Serving cached audio URL for %s", video_id)
            return cached

        info = await self._run("get_audio_url", self._extract, video_id, AUDIO_FORMAT)
        url = info.get("url")
        if not isinstance(url, str) or not url.startswith("http"):
            return None
        self._cache.set(key, url, self._config.audio_cache_ttl)
        return url

    def clear_cache(self) -> None:
        """Clear the response cache."""
        self._cache.clear()
        logger.debug("Response cache cleared")

    def get_cache_size(self) -> int:
        """Number of cached responses."""
        return len(self._cache)
