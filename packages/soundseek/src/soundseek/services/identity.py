"""Artist identity resolution service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from soundseek.client import CatalogProtocol
from soundseek.config import PipelineConfig
from soundseek.exceptions import CatalogError, CatalogUnavailableError, NotFoundError
from soundseek.lib.matching import is_artist_match
from soundseek.lib.normalize import (
    UNKNOWN_ARTIST,
    ChannelRef,
    channel_ref_from_channel_result,
    channel_ref_from_video_result,
    normalize_channel,
    select_thumbnail,
)
from soundseek.lib.pacing import paced
from soundseek.models.domain import ResolvedIdentity
from soundseek.models.enums import ContentType, MatchSource
from soundseek.models.query import CatalogQuery

logger = logging.getLogger(__name__)

# Curated shortcuts for names the search heuristics resolve poorly.
# Keys are lowercased artist names.
KNOWN_CHANNELS: Mapping[str, str] = MappingProxyType(
    {
        "ajsbhbhbhb": "UCBJycsmduvYEL83R_U4JriQ",
        "nlnndsjjce": "UCANLZYMidaCbLQFWXBC95Jg",
        "endnrerefe": "UC2XdaAVUannpujzv32jcouQ",
    }
)


@dataclass(frozen=True)
class SearchStrategy:
    """One query template tried while resolving an artist."""

    source: MatchSource
    template: str
    content_type: ContentType

    def query(self, artist_name: str) -> CatalogQuery:
        return CatalogQuery(
            query=self.template.format(name=artist_name),
            content_type=self.content_type,
        )


# Tried strictly in this order; earlier strategies win
SEARCH_STRATEGIES: tuple[SearchStrategy, ...] = (
    SearchStrategy(
        MatchSource.OFFICIAL_ARTIST,
        "{name} official artist channel",
        ContentType.CHANNEL,
    ),
    SearchStrategy(MatchSource.VEVO, "{name} vevo", ContentType.CHANNEL),
    SearchStrategy(MatchSource.TOPIC, "{name} topic", ContentType.CHANNEL),
    SearchStrategy(
        MatchSource.OFFICIAL_VIDEO, "{name} official music video", ContentType.VIDEO
    ),
)


class IdentityResolver:
    """Resolve a free-text artist name to a catalog channel.

    Resolution order:
    1. Known-channel table (exact, case-insensitive name match). Fetches
       the channel directly and skips every search strategy.
    2. SEARCH_STRATEGIES, one at a time with a cooldown between them.
       A strategy that raises is logged and abandoned. The first candidate
       whose channel name passes is_artist_match() wins.
    """

    def __init__(
        self,
        client: CatalogProtocol,
        config: PipelineConfig | None = None,
        known_channels: Mapping[str, str] | None = None,
        strategies: tuple[SearchStrategy, ...] = SEARCH_STRATEGIES,
    ) -> None:
        """Initialize the resolver.

        Args:
            client: Catalog client for searches and channel fetches.
            config: Pipeline configuration (cooldown between strategies).
            known_channels: Extra name -> channel ID entries, merged over
                the built-in table.
            strategies: Search strategies in priority order.
        """
        self._client = client
        self._config = config or PipelineConfig()
        self._known_channels = {
            **KNOWN_CHANNELS,
            **{
                name.strip().lower(): cid
                for name, cid in (known_channels or {}).items()
            },
        }
        self._strategies = strategies

    async def resolve(self, artist_name: str) -> ResolvedIdentity:
        """Resolve an artist name to its channel.

        Args:
            artist_name: Artist name as typed by the user.

        Returns:
            The matched channel, tagged with how it was found.

        Raises:
            CatalogUnavailableError: If the catalog client cannot initialize,
                or every strategy failed with a catalog error.
            NotFoundError: If no strategy produced a matching channel.
        """
        display_name = artist_name.strip()
        lookup_key = display_name.lower()

        if channel_id := self._known_channels.get(lookup_key):
            logger.debug("Known channel for '%s': %s", display_name, channel_id)
            return await self._resolve_known_channel(display_name, channel_id)

        await self._client.initialize()

        failures = 0
        async for strategy in paced(self._strategies, self._config.strategy_delay):
            try:
                candidates = await self._candidates(strategy, display_name)
            except CatalogError as e:
                logger.warning(
                    "Strategy %s failed for '%s': %s", strategy.source, display_name, e
                )
                failures += 1
                continue

            for candidate in candidates:
                if candidate.id and is_artist_match(candidate.name, display_name):
                    logger.info(
                        "Resolved '%s' to %s (%s) via %s",
                        display_name,
                        candidate.name,
                        candidate.id,
                        strategy.source,
                    )
                    return ResolvedIdentity(
                        channel_id=candidate.id,
                        channel_name=candidate.name or display_name,
                        thumbnail_url=candidate.thumbnail_url,
                        match_source=strategy.source,
                    )

        if self._strategies and failures == len(self._strategies):
            raise CatalogUnavailableError(
                f"All channel search strategies failed for '{display_name}'"
            )
        raise NotFoundError("No matching channel found")

    async def _candidates(
        self, strategy: SearchStrategy, artist_name: str
    ) -> list[ChannelRef]:
        results = await self._client.search(strategy.query(artist_name))
        if strategy.content_type is ContentType.CHANNEL:
            return [channel_ref_from_channel_result(result) for result in results]
        return [channel_ref_from_video_result(result) for result in results]

    async def _resolve_known_channel(
        self, artist_name: str, channel_id: str
    ) -> ResolvedIdentity:
        raw = await self._client.get_channel(channel_id)
        metadata = normalize_channel(raw, channel_id)
        return ResolvedIdentity(
            channel_id=channel_id,
            channel_name=(
                artist_name if metadata.name == UNKNOWN_ARTIST else metadata.name
            ),
            thumbnail_url=select_thumbnail(metadata.thumbnails),
            match_source=MatchSource.KNOWN_CHANNEL,
        )
