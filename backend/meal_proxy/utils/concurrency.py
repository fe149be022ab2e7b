"""Fail-fast concurrent fan-out."""

import asyncio
from typing import Awaitable, Iterable, TypeVar

T = TypeVar("T")


async def gather_or_cancel(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and return their results in order.

    The first failure cancels every sibling still running and is re-raised,
    so callers never see a partial result list.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Let cancelled siblings unwind before propagating
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
