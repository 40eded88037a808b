"""Business logic services for soundseek.

Public API:
    IdentityResolver - Resolve an artist name to a catalog channel
    ContentAggregator - Merge, rank and paginate multi-query searches
    ChannelService - Channel metadata and categorized playlists
    ArtistLookupService - Resolve + metadata + aggregation in one call
    DiscoveryService - Genre, mood, popular, search and long-listen flows
    StreamResolver - Playable stream URL selection for a video
"""

from soundseek.services.aggregator import ContentAggregator
from soundseek.services.artist import ArtistLookupService
from soundseek.services.channel import ChannelService
from soundseek.services.discovery import DiscoveryService
from soundseek.services.identity import IdentityResolver
from soundseek.services.streaming import StreamResolver

__all__ = [
    "ArtistLookupService",
    "ChannelService",
    "ContentAggregator",
    "DiscoveryService",
    "IdentityResolver",
    "StreamResolver",
]
