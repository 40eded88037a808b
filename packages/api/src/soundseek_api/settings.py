"""Application settings using pydantic-settings."""

from functools import cache
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from soundseek import CatalogConfig, PipelineConfig

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]

Environment = Annotated[
    Literal["development", "production"],
    BeforeValidator(lambda v: v.strip().lower() if isinstance(v, str) else v),
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SOUNDSEEK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    reload: bool = Field(default=False, description="Enable auto-reload")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default="INFO", description="Log level")
    environment: Environment = Field(
        default="development",
        description="Deployment environment (error details only in development)",
    )

    # CORS settings
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # Catalog client settings
    catalog_language: str = Field(default="en", description="Catalog language")
    catalog_location: str = Field(default="US", description="Catalog location")
    init_timeout: float = Field(
        default=60.0, gt=0, description="Catalog client initialization timeout (s)"
    )
    call_timeout: float = Field(
        default=60.0, gt=0, description="Per-operation catalog timeout (s)"
    )
    cache_size: int = Field(default=256, ge=0, description="Response cache entries")
    cache_ttl: float = Field(default=300.0, ge=0, description="Response cache TTL (s)")

    # Pipeline settings
    strategy_delay: float = Field(
        default=0.5, ge=0, description="Cooldown between sequential searches (s)"
    )
    items_per_page: int = Field(default=40, ge=1, description="Artist page size")

    # Extra artist name -> channel ID shortcuts (JSON object)
    known_channels: dict[str, str] = Field(
        default_factory=dict, description="Additional known channels"
    )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def catalog_config(self) -> CatalogConfig:
        return CatalogConfig(
            language=self.catalog_language,
            location=self.catalog_location,
            init_timeout=self.init_timeout,
            call_timeout=self.call_timeout,
            cache_size=self.cache_size,
            cache_ttl=self.cache_ttl,
        )

    @property
    def pipeline_config(self) -> PipelineConfig:
        return PipelineConfig(
            items_per_page=self.items_per_page,
            strategy_delay=self.strategy_delay,
        )


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
