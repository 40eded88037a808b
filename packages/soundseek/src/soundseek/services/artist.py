"""Artist lookup: resolve, describe and aggregate in one call."""

import logging

from soundseek.lib.normalize import UNKNOWN_ARTIST
from soundseek.models.domain import ArtistLookup
from soundseek.services.aggregator import ContentAggregator
from soundseek.services.channel import ChannelService
from soundseek.services.identity import IdentityResolver

logger = logging.getLogger(__name__)


class ArtistLookupService:
    """Orchestrate the artist flow.

    1. Resolve the name to a channel (IdentityResolver)
    2. Fetch the channel's metadata (ChannelService)
    3. Aggregate one page of content for the channel's display name
    """

    def __init__(
        self,
        resolver: IdentityResolver,
        channels: ChannelService,
        aggregator: ContentAggregator,
    ) -> None:
        self._resolver = resolver
        self._channels = channels
        self._aggregator = aggregator

    async def lookup(self, artist_name: str, page: int = 1) -> ArtistLookup:
        """Look up an artist and one page of their content.

        Raises:
            NotFoundError: If the name resolves to no channel.
            CatalogUnavailableError: If the catalog fails along the way.
        """
        identity = await self._resolver.resolve(artist_name)
        metadata = await self._channels.get_metadata(identity.channel_id)
        term = (
            identity.channel_name if metadata.name == UNKNOWN_ARTIST else metadata.name
        )
        logger.debug("Aggregating content for %s (page %d)", term, page)
        result = await self._aggregator.aggregate(term, page)
        return ArtistLookup(
            channel_info=identity,
            metadata=metadata,
            videos=result.items,
            pagination=result.pagination,
        )
