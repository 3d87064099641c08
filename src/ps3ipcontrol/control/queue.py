"""Single-worker command queue.

All control commands go through one worker so that check-then-act
sequences (guarded power-on, toggle) never interleave. A command that
has started runs to completion, even if the submitter stops waiting or
the queue is stopped.
"""

from __future__ import annotations

import asyncio
import logging

from ps3ipcontrol.control.sequencer import CommandSequencer
from ps3ipcontrol.domain.models import Action

logger = logging.getLogger(__name__)

# Queued after the last item by stop(); tells the worker to exit
_STOP = None


class CommandQueue:
    def __init__(self, sequencer: CommandSequencer) -> None:
        self._sequencer = sequencer
        self._queue: asyncio.Queue[tuple[Action, asyncio.Future[None]] | None] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._stopping = False

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done() and not self._stopping

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        if self.is_running:
            return
        self._stopping = False
        self._worker = asyncio.create_task(self._work(), name="command-queue")
        logger.debug("Command queue started")

    async def stop(self) -> None:
        """Finish the command in progress, then stop the worker.

        Commands still waiting in the queue are cancelled without running.
        """
        if self._worker is None:
            return
        self._stopping = True
        self._queue.put_nowait(_STOP)
        await self._worker
        self._worker = None
        while not self._queue.empty():
            item = self._queue.get_nowait()
            if item is not _STOP:
                item[1].cancel()
        logger.debug("Command queue stopped")

    async def submit(self, action: Action) -> None:
        """Queue ``action`` and wait for it to finish.

        Raises:
            RuntimeError: If the queue is not running.
            asyncio.CancelledError: If the queue stopped before the action started.
            Exception: Whatever the sequencer raised for this action.
        """
        if not self.is_running:
            raise RuntimeError("Command queue is not running")
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        await self._queue.put((action, future))
        await future

    async def _work(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                if item is _STOP:
                    return
                action, future = item
                if future.cancelled():
                    continue
                if self._stopping:
                    future.cancel()
                    continue
                await self._run(action, future)
            finally:
                self._queue.task_done()

    async def _run(self, action: Action, future: asyncio.Future[None]) -> None:
        try:
            await self._sequencer.execute(action)
        except Exception as e:
            if not future.done():
                future.set_exception(e)
        except BaseException:
            if not future.done():
                future.cancel()
            raise
        else:
            if not future.done():
                future.set_result(None)
