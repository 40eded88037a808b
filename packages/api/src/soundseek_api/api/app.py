"""FastAPI application factory and configuration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from importlib.metadata import version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from rich.console import Console
from rich.logging import RichHandler

from soundseek_api.api.container import create_services
from soundseek_api.api.exceptions import register_exception_handlers
from soundseek_api.api.routes import artist, discovery, health, streaming
from soundseek_api.settings import Settings, get_settings

API_PREFIX = "/api"

ROUTERS = (health.router, artist.router, discovery.router, streaming.router)

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "urllib3", "yt_dlp")

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Send soundseek, uvicorn and library logs through one RichHandler."""
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        log_time_format="[%X]",
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logging.basicConfig(level=settings.log_level, handlers=[handler], force=True)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        server_logger = logging.getLogger(name)
        server_logger.handlers = [handler]
        server_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the services on startup and release them on shutdown."""
    settings = get_settings()
    services = create_services(settings)
    app.state.services = services
    logger.info(
        "soundseek API ready (%s, catalog %s/%s, %d extra known channels)",
        settings.environment,
        settings.catalog_language,
        settings.catalog_location,
        len(settings.known_channels),
    )
    try:
        yield
    finally:
        services.close()


def create_app() -> FastAPI:
    """Create the FastAPI application with all routes under /api."""
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="soundseek",
        description="Artist resolution, music discovery and stream lookup",
        version=version("soundseek"),
        lifespan=lifespan,
        debug=settings.debug,
    )
    register_exception_handlers(app)

    # Browsers may not send credentials to a wildcard origin
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()
