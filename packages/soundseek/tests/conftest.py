"""Test fixtures and configuration.

FakeCatalog implements CatalogProtocol with canned responses and records
every call, so tests can assert on call order and call counts without
any network access.
"""

import asyncio
from typing import Any

import pytest
from soundseek.config import PipelineConfig
from soundseek.models.query import CatalogQuery

Response = Any


class FakeCatalog:
    """Recording fake implementing the CatalogProtocol.

    Responses are looked up by query text (searches) or ID (everything
    else). A response that is an exception instance is raised instead.
    """

    def __init__(self) -> None:
        self.search_responses: dict[str, Response] = {}
        self.channels: dict[str, Response] = {}
        self.playlists: dict[str, Response] = {}
        self.full_info: dict[str, Response] = {}
        self.basic_info: dict[str, Response] = {}
        self.streaming_data: dict[str, Response] = {}
        self.audio_urls: dict[str, Response] = {}
        self.init_error: Exception | None = None
        self.calls: list[tuple[str, str]] = []
        self.queries: list[CatalogQuery] = []

    @staticmethod
    def _answer(table: dict[str, Response], key: str, default: Response) -> Response:
        value = table.get(key, default)
        if isinstance(value, Exception):
            raise value
        return value

    def count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)

    @property
    def searched(self) -> list[str]:
        return [arg for op, arg in self.calls if op == "search"]

    async def initialize(self) -> object:
        self.calls.append(("initialize", ""))
        if self.init_error is not None:
            raise self.init_error
        return object()

    async def search(self, query: CatalogQuery) -> list[dict[str, Any]]:
        self.calls.append(("search", query.query))
        self.queries.append(query)
        return self._answer(self.search_responses, query.query, [])

    async def get_channel(self, channel_id: str) -> dict[str, Any]:
        self.calls.append(("get_channel", channel_id))
        return self._answer(self.channels, channel_id, {})

    async def get_playlist(self, playlist_id: str) -> dict[str, Any]:
        self.calls.append(("get_playlist", playlist_id))
        return self._answer(self.playlists, playlist_id, {})

    async def get_info(self, video_id: str) -> dict[str, Any]:
        self.calls.append(("get_info", video_id))
        return self._answer(self.full_info, video_id, {})

    async def get_basic_info(self, video_id: str) -> dict[str, Any]:
        self.calls.append(("get_basic_info", video_id))
        return self._answer(self.basic_info, video_id, {})

    async def get_streaming_data(self, video_id: str) -> dict[str, Any] | None:
        self.calls.append(("get_streaming_data", video_id))
        return self._answer(self.streaming_data, video_id, None)

    async def get_audio_url(self, video_id: str) -> str | None:
        self.calls.append(("get_audio_url", video_id))
        return self._answer(self.audio_urls, video_id, None)


def video(
    video_id: str,
    title: str = "Some Song",
    author: str | None = "Some Artist",
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw video search result."""
    raw: dict[str, Any] = {"id": video_id, "title": title, **extra}
    if author is not None:
        raw["author"] = {"name": author}
    return raw


@pytest.fixture
def catalog() -> FakeCatalog:
    """Fresh recording fake catalog."""
    return FakeCatalog()


@pytest.fixture
def make_video() -> Any:
    """Factory for raw video search results."""
    return video


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    """Pipeline config without cooldowns and with small pages."""
    return PipelineConfig(items_per_page=2, strategy_delay=0)


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Cooldowns requested through asyncio.sleep, recorded instead of slept."""
    delays: list[float] = []

    async def record(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr(asyncio, "sleep", record)
    return delays
