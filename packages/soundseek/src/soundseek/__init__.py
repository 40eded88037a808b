"""soundseek - Music discovery on top of an unofficial video catalog.

This library resolves free-text artist names to catalog channels,
aggregates and ranks music content from several searches, classifies
results as music or not, and picks playable streams for videos.

Designed for use as a library in applications (e.g., FastAPI) with
a CLI for debugging and development.

Examples:
    Look up an artist:
    ```python
    from soundseek import create_artist_lookup, create_client

    client = create_client()
    lookup = create_artist_lookup(client)
    result = await lookup.lookup("Daft Punk", page=1)
    for track in result.videos:
        print(f"{track.artist} - {track.title}")
    ```

    Resolve a stream:
    ```python
    from soundseek import StreamResolver, create_client

    resolver = StreamResolver(create_client())
    stream = await resolver.resolve("dQw4w9WgXcQ")
    ```
"""

from collections.abc import Mapping

from soundseek.client import CatalogClient, CatalogProtocol
from soundseek.config import CatalogConfig, PipelineConfig
from soundseek.exceptions import (
    CatalogError,
    CatalogTimeoutError,
    CatalogUnavailableError,
    InvalidIdError,
    InvalidInputError,
    NoPlayableStreamError,
    NotFoundError,
)
from soundseek.models import (
    AggregatedResultSet,
    ArtistLookup,
    CaptionTrack,
    CatalogQuery,
    ChannelData,
    ChannelMetadata,
    ClassifierStrategy,
    ContentType,
    GenreTrack,
    LongListen,
    MatchSource,
    MoodPlaylists,
    NormalizedTrack,
    Pagination,
    ResolvedIdentity,
    StreamResolution,
)
from soundseek.services import (
    ArtistLookupService,
    ChannelService,
    ContentAggregator,
    DiscoveryService,
    IdentityResolver,
    StreamResolver,
)


def create_client(config: CatalogConfig | None = None) -> CatalogClient:
    """Create a catalog client.

    The underlying catalog handle is created lazily on first use, so this
    never touches the network. Share one client per process.

    Args:
        config: Optional catalog configuration. Uses defaults if not provided.

    Returns:
        A CatalogClient instance.
    """
    return CatalogClient(config=config)


def create_artist_lookup(
    client: CatalogProtocol,
    config: PipelineConfig | None = None,
    known_channels: Mapping[str, str] | None = None,
) -> ArtistLookupService:
    """Create a configured artist lookup service.

    Args:
        client: Catalog client shared by every stage.
        config: Optional pipeline configuration. Uses defaults if not provided.
        known_channels: Extra artist name -> channel ID shortcuts.

    Returns:
        An ArtistLookupService wired with resolver, channel service and aggregator.

    Examples:
        With faster pacing and smaller pages:
        ```python
        config = PipelineConfig(items_per_page=20, strategy_delay=0.25)
        lookup = create_artist_lookup(create_client(), config)
        ```
    """
    return ArtistLookupService(
        resolver=IdentityResolver(client, config, known_channels=known_channels),
        channels=ChannelService(client),
        aggregator=ContentAggregator(client, config),
    )


__all__ = [
    "AggregatedResultSet",
    "ArtistLookup",
    "ArtistLookupService",
    "CaptionTrack",
    "CatalogClient",
    "CatalogConfig",
    "CatalogError",
    "CatalogProtocol",
    "CatalogQuery",
    "CatalogTimeoutError",
    "CatalogUnavailableError",
    "ChannelData",
    "ChannelMetadata",
    "ChannelService",
    "ClassifierStrategy",
    "ContentAggregator",
    "ContentType",
    "DiscoveryService",
    "GenreTrack",
    "IdentityResolver",
    "InvalidIdError",
    "InvalidInputError",
    "LongListen",
    "MatchSource",
    "MoodPlaylists",
    "NoPlayableStreamError",
    "NormalizedTrack",
    "NotFoundError",
    "Pagination",
    "PipelineConfig",
    "ResolvedIdentity",
    "StreamResolution",
    "StreamResolver",
    "create_artist_lookup",
    "create_client",
]
