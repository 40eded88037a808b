"""Tests for the soundseek command-line interface."""

import json
from typing import Any

import pytest
from click.testing import CliRunner
from soundseek import cli


@pytest.fixture
def runner(catalog: Any, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.setattr(cli, "create_client", lambda: catalog)
    return CliRunner()


def test_resolve_json(runner: CliRunner, catalog: Any) -> None:
    catalog.search_responses["Some Artist official artist channel"] = [
        {"artist": "Some Artist", "browseId": "UC1"}
    ]

    result = runner.invoke(
        cli.main, ["--delay", "0", "resolve", "Some Artist", "--json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["channelId"] == "UC1"
    assert payload["matchSource"] == "official_artist"


def test_resolve_not_found(runner: CliRunner) -> None:
    result = runner.invoke(cli.main, ["--delay", "0", "resolve", "Nobody"])

    assert result.exit_code == 1
    assert "No matching channel found" in result.output


def test_search_table(runner: CliRunner, catalog: Any, make_video: Any) -> None:
    catalog.search_responses["around"] = [make_video("v1", title="Around")]

    result = runner.invoke(cli.main, ["search", "around"])

    assert result.exit_code == 0, result.output
    assert "Around" in result.output
    assert "1 track(s)" in result.output


def test_genre_json(runner: CliRunner, catalog: Any, make_video: Any) -> None:
    catalog.search_responses["Jazz music"] = [make_video("v1")]

    result = runner.invoke(cli.main, ["genre", "Jazz", "--json"])

    assert result.exit_code == 0, result.output
    assert [item["id"] for item in json.loads(result.output)] == ["v1"]


def test_stream_audio(runner: CliRunner, catalog: Any) -> None:
    catalog.audio_urls["dQw4w9WgXcQ"] = "https://audio/best.m4a"

    result = runner.invoke(cli.main, ["stream", "dQw4w9WgXcQ", "--audio"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "https://audio/best.m4a"


def test_stream_invalid_id(runner: CliRunner, catalog: Any) -> None:
    result = runner.invoke(cli.main, ["stream", "short"])

    assert result.exit_code == 1
    assert "Invalid video ID format" in result.output
    assert catalog.calls == []
