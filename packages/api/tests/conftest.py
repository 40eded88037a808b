"""Test fixtures and configuration for soundseek-api tests.

This module provides shared fixtures organized into:
- Environment fixtures: isolation from .env files and SOUNDSEEK_* variables
- Catalog fixtures: a recording fake catalog with canned responses
- App fixtures: the FastAPI app wired to the fake catalog
"""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from soundseek import CatalogQuery
from soundseek_api.api.app import create_app
from soundseek_api.api.container import create_services, get_services
from soundseek_api.settings import Settings, get_settings

# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Isolate tests from .env files, the shell environment and cached settings."""
    for key in list(os.environ.keys()):
        if key.startswith("SOUNDSEEK_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def production(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the app as a production deployment."""
    monkeypatch.setenv("SOUNDSEEK_ENVIRONMENT", "production")
    get_settings.cache_clear()


# =============================================================================
# Catalog Fixtures
# =============================================================================


class FakeCatalog:
    """Recording fake implementing the CatalogProtocol.

    Responses are looked up by query text (searches) or ID (everything
    else). A response that is an exception instance is raised instead.
    """

    def __init__(self) -> None:
        self.search_responses: dict[str, Any] = {}
        self.channels: dict[str, Any] = {}
        self.playlists: dict[str, Any] = {}
        self.full_info: dict[str, Any] = {}
        self.basic_info: dict[str, Any] = {}
        self.streaming_data: dict[str, Any] = {}
        self.audio_urls: dict[str, Any] = {}
        self.calls: list[tuple[str, str]] = []

    def _answer(
        self, operation: str, table: dict[str, Any], key: str, default: Any
    ) -> Any:
        self.calls.append((operation, key))
        value = table.get(key, default)
        if isinstance(value, Exception):
            raise value
        return value

    async def initialize(self) -> object:
        return object()

    async def search(self, query: CatalogQuery) -> list[dict[str, Any]]:
        return self._answer("search", self.search_responses, query.query, [])

    async def get_channel(self, channel_id: str) -> dict[str, Any]:
        return self._answer("get_channel", self.channels, channel_id, {})

    async def get_playlist(self, playlist_id: str) -> dict[str, Any]:
        return self._answer("get_playlist", self.playlists, playlist_id, {})

    async def get_info(self, video_id: str) -> dict[str, Any]:
        return self._answer("get_info", self.full_info, video_id, {})

    async def get_basic_info(self, video_id: str) -> dict[str, Any]:
        return self._answer("get_basic_info", self.basic_info, video_id, {})

    async def get_streaming_data(self, video_id: str) -> dict[str, Any] | None:
        return self._answer("get_streaming_data", self.streaming_data, video_id, None)

    async def get_audio_url(self, video_id: str) -> str | None:
        return self._answer("get_audio_url", self.audio_urls, video_id, None)


@pytest.fixture
def catalog() -> FakeCatalog:
    """Fresh recording fake catalog."""
    return FakeCatalog()


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def app(catalog: FakeCatalog) -> FastAPI:
    """FastAPI app whose services share the fake catalog, without cooldowns."""
    app = create_app()
    services = create_services(Settings(strategy_delay=0), client=catalog)
    app.dependency_overrides[get_services] = lambda: services
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """HTTP client that returns 500 responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)
