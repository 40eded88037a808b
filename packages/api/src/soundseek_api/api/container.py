"""Service wiring for the API.

One ``Services`` bundle is built per application in the lifespan handler
and stored on ``app.state``. Routes reach it through ``get_services``.
"""

import logging
from dataclasses import dataclass

from fastapi import Request
from soundseek import (
    ArtistLookupService,
    CatalogClient,
    CatalogProtocol,
    ChannelService,
    ContentAggregator,
    DiscoveryService,
    IdentityResolver,
    StreamResolver,
)

from soundseek_api.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Pipeline services sharing a single catalog client.

    The client builds its catalog handle on the first request that needs
    it, so constructing the bundle never touches the network.
    """

    client: CatalogProtocol
    artist_lookup: ArtistLookupService
    channels: ChannelService
    discovery: DiscoveryService
    streams: StreamResolver

    def close(self) -> None:
        """Drop cached catalog responses on shutdown."""
        if isinstance(self.client, CatalogClient):
            self.client.clear_cache()
        logger.debug("Catalog response cache cleared")


def create_services(
    settings: Settings, client: CatalogProtocol | None = None
) -> Services:
    """Build the pipeline services from settings.

    Args:
        settings: Application settings.
        client: Catalog to use instead of a new CatalogClient (tests pass
            a fake here).
    """
    catalog = client or CatalogClient(config=settings.catalog_config)
    pipeline = settings.pipeline_config
    channels = ChannelService(catalog)
    resolver = IdentityResolver(
        catalog, pipeline, known_channels=settings.known_channels
    )

    return Services(
        client=catalog,
        artist_lookup=ArtistLookupService(
            resolver=resolver,
            channels=channels,
            aggregator=ContentAggregator(catalog, pipeline),
        ),
        channels=channels,
        discovery=DiscoveryService(catalog, pipeline),
        streams=StreamResolver(catalog),
    )


def get_services(request: Request) -> Services:
    """Dependency returning the bundle built at startup.

    Raises:
        RuntimeError: If the lifespan handler has not run.
    """
    services: Services | None = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services are not available before application startup")
    return services
