"""Configuration for soundseek."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogConfig:
    """Catalog client configuration.

    Attributes:
        language: Interface language sent to the catalog.
        location: Region sent to the catalog.
        init_timeout: Seconds allowed for client construction.
        call_timeout: Seconds allowed for each individual catalog operation.
        search_limit: Maximum number of results requested per search.
        cache_size: Maximum number of cached responses.
        cache_ttl: Seconds a cached search/channel/playlist response stays valid.
        audio_cache_ttl: Seconds a resolved audio URL stays valid.
    """

    language: str = "en"
    location: str = "US"
    init_timeout: float = 60.0
    call_timeout: float = 60.0
    search_limit: int = 20
    cache_size: int = 256
    cache_ttl: float = 300.0
    audio_cache_ttl: float = 24 * 60 * 60


@dataclass(frozen=True)
class PipelineConfig:
    """Resolution and aggregation configuration.

    Attributes:
        items_per_page: Page size for artist content pagination.
        strategy_delay: Cooldown in seconds between sequential catalog queries.
        early_stop_pages: Stop issuing templates once this many pages are merged.
        popular_limit: Maximum number of tracks returned by the popular flow.
        long_listen_limit: Maximum number of long-form items returned.
        long_listen_min_seconds: Minimum duration for long-form content.
    """

    items_per_page: int = 40
    strategy_delay: float = 0.5
    early_stop_pages: int = 3
    popular_limit: int = 100
    long_listen_limit: int = 80
    long_listen_min_seconds: int = 3600
