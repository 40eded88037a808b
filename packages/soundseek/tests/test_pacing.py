"""Tests for paced sequential execution."""

import asyncio

import pytest
from soundseek.lib.pacing import paced


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.mark.asyncio
async def test_sleeps_between_steps_only() -> None:
    sleep = RecordingSleep()
    seen = [step async for step in paced(["a", "b", "c"], 0.5, sleep=sleep)]
    assert seen == ["a", "b", "c"]
    assert sleep.delays == [0.5, 0.5]


@pytest.mark.asyncio
async def test_early_break_skips_remaining_cooldowns() -> None:
    sleep = RecordingSleep()
    seen = []
    async for step in paced(range(7), 1.0, sleep=sleep):
        seen.append(step)
        if step == 1:
            break
    assert seen == [0, 1]
    assert sleep.delays == [1.0]


@pytest.mark.asyncio
async def test_zero_cooldown_never_sleeps() -> None:
    sleep = RecordingSleep()
    seen = [step async for step in paced([1, 2, 3], 0, sleep=sleep)]
    assert seen == [1, 2, 3]
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_empty_steps() -> None:
    sleep = RecordingSleep()
    assert [step async for step in paced([], 0.5, sleep=sleep)] == []
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_defaults_to_asyncio_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    sleep = RecordingSleep()
    monkeypatch.setattr(asyncio, "sleep", sleep)
    assert [step async for step in paced("ab", 0.25)] == ["a", "b"]
    assert sleep.delays == [0.25]
