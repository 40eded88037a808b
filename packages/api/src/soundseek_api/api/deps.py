"""FastAPI dependency injection factories.

This module provides type-safe dependency injection for FastAPI routes.
Dependencies are defined as Annotated types for clean, reusable injection.

Usage in routes:
    from soundseek_api.api.deps import DiscoveryDep

    @router.get("/search")
    async def search(discovery: DiscoveryDep) -> ...:
        ...
"""

from typing import Annotated

from fastapi import Depends
from soundseek import (
    ArtistLookupService,
    ChannelService,
    DiscoveryService,
    InvalidInputError,
    StreamResolver,
)

from soundseek_api.api.container import Services, get_services
from soundseek_api.settings import Settings, get_settings

# -- Settings --

SettingsDep = Annotated[Settings, Depends(get_settings)]

# -- Service dependencies (request-scoped via app.state) --

ServicesDep = Annotated[Services, Depends(get_services)]


def _get_artist_lookup(services: ServicesDep) -> ArtistLookupService:
    """Get artist lookup service from services container."""
    return services.artist_lookup


def _get_channels(services: ServicesDep) -> ChannelService:
    """Get channel service from services container."""
    return services.channels


def _get_discovery(services: ServicesDep) -> DiscoveryService:
    """Get discovery service from services container."""
    return services.discovery


def _get_streams(services: ServicesDep) -> StreamResolver:
    """Get stream resolver from services container."""
    return services.streams


ArtistLookupDep = Annotated[ArtistLookupService, Depends(_get_artist_lookup)]
ChannelsDep = Annotated[ChannelService, Depends(_get_channels)]
DiscoveryDep = Annotated[DiscoveryService, Depends(_get_discovery)]
StreamsDep = Annotated[StreamResolver, Depends(_get_streams)]


# -- Parameter helpers --


def require(value: str | None, message: str) -> str:
    """Return a stripped, non-empty parameter or fail with a 400."""
    if value is None or not value.strip():
        raise InvalidInputError(message)
    return value.strip()


def page_number(value: str | None) -> int:
    """Parse a 1-based page parameter, falling back to 1 when unusable."""
    try:
        page = int(value) if value is not None else 1
    except ValueError:
        return 1
    return max(page, 1)
