"""Paging helpers for batched discovery.

Factories expose their pools through ranged getters. A full discovery run
splits the range into fixed-size windows and fetches them concurrently,
keeping the results in window order.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import structlog

T = TypeVar("T")

logger = structlog.get_logger()


def page_windows(total: int, step: int) -> list[tuple[int, int]]:
    """Split [0, total) into half-open windows of at most `step` items.

    Example:
        page_windows(2000, 766) -> [(0, 766), (766, 1532), (1532, 2000)]

    Raises:
        ValueError: If step is not positive or total is negative
    """
    if step <= 0:
        raise ValueError(f"Page step must be positive, got {step}")
    if total < 0:
        raise ValueError(f"Total must be non-negative, got {total}")
    return [(start, min(start + step, total)) for start in range(0, total, step)]


def chunks(items: Sequence[T], step: int) -> list[Sequence[T]]:
    """Split items into consecutive slices of at most `step` elements."""
    return [items[start:end] for start, end in page_windows(len(items), step)]


async def gather_pages(
    windows: Sequence[T],
    fetch: Callable[[T], Awaitable[list]],
    max_concurrency: int,
) -> list:
    """Fetch every page concurrently and concatenate the results in order.

    At most max_concurrency fetches are in flight at once. The first page
    failure propagates and the remaining fetches are cancelled, so callers
    never see a partial result.

    Raises:
        ValueError: If max_concurrency is not positive
    """
    if max_concurrency <= 0:
        raise ValueError(f"max_concurrency must be positive, got {max_concurrency}")

    semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch_page(index: int, window: T) -> list:
        async with semaphore:
            items = await fetch(window)
        logger.debug("discovery_page_fetched", page=index, items=len(items))
        return items

    tasks = [asyncio.ensure_future(fetch_page(i, window)) for i, window in enumerate(windows)]
    try:
        pages = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise

    results: list = []
    for page in pages:
        results.extend(page)
    return results


__all__ = ["page_windows", "chunks", "gather_pages"]
