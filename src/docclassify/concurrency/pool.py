"""Bounded async worker pool for per-type scoring."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class ScoringPool:
    """Async fan-out with a semaphore bound.

    Each item is handed to ``fn`` on a worker thread; at most ``max_workers``
    run at once. Results come back in input order, and the first exception
    propagates to the caller.
    """

    def __init__(self, max_workers: int = 8) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._max_workers = max_workers

    @property
    def max_workers(self) -> int:
        return self._max_workers

    async def map(self, fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
        """Apply ``fn`` to every item concurrently.

        Args:
            fn: Synchronous callable, run via ``asyncio.to_thread``.
            items: Inputs; consumed once.

        Returns the results in the same order as ``items``.
        """
        semaphore = asyncio.Semaphore(self._max_workers)

        async def worker(item: T) -> R:
            async with semaphore:
                return await asyncio.to_thread(fn, item)

        tasks = [worker(item) for item in items]
        if not tasks:
            return []
        logger.debug("Scoring %d items with up to %d workers", len(tasks), self._max_workers)
        return list(await asyncio.gather(*tasks))
