"""Rate-limit-respecting sequential execution.

Catalog strategies are run strictly one at a time with a fixed cooldown
between them to stay under upstream throttling. Concurrent fan-out would
change what the catalog sees and must not replace this.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

Sleeper = Callable[[float], Awaitable[None]]


async def paced(
    steps: Iterable[T],
    cooldown: float,
    sleep: Sleeper | None = None,
) -> AsyncIterator[T]:
    """Yield steps in order, sleeping ``cooldown`` seconds between them.

    No sleep precedes the first step. The caller drives each step and may
    stop early by breaking out of the loop, which skips the remaining
    steps and their cooldowns. ``sleep`` defaults to :func:`asyncio.sleep`,
    looked up at call time.

    Example:
        >>> async for strategy in paced(strategies, 0.5):
        ...     results = await run(strategy)
        ...     if enough(results):
        ...         break
    """
    for index, step in enumerate(steps):
        if index and cooldown > 0:
            await (sleep or asyncio.sleep)(cooldown)
        yield step
