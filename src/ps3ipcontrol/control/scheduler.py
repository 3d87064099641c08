"""Deferred jobs that run independently of the request that created them.

A deferred job has nobody to report to, so its failures end up in the
log and nowhere else.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[None]]


class DeferredScheduler:
    """Runs jobs after a delay as background asyncio tasks.

    Usage::

        scheduler = DeferredScheduler()
        scheduler.schedule(35.0, activate, name="ps-activation")
        ...
        await scheduler.shutdown()
    """

    def __init__(self, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep) -> None:
        self._sleep = sleep
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(self, delay: float, job: Job, name: str = "deferred") -> asyncio.Task[None]:
        """Run ``job()`` after ``delay`` seconds without blocking the caller."""
        task = asyncio.create_task(self._run(delay, job, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Scheduled %s in %.1fs", name, delay)
        return task

    async def _run(self, delay: float, job: Job, name: str) -> None:
        await self._sleep(delay)
        try:
            await job()
        except Exception:
            logger.exception("Deferred job %s failed", name)
        else:
            logger.info("Deferred job %s completed", name)

    async def join(self) -> None:
        """Wait until every scheduled job has finished."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel jobs that have not finished yet."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Cancelled %d deferred job(s)", len(tasks))
