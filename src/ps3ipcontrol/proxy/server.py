"""REST API server for IP control of a PS3.

Every request is path-only and the method is ignored. Known paths run
a control command and answer 204, unknown paths answer 404, failures
answer 500. Responses never carry a body.

    /ps3/power/on        start the emulator, waking the console
    /ps3/power/off       hold PS, confirm twice with CROSS
    /ps3/power/toggle    on or off depending on whether the emulator runs
    /ps3/key/<name>      press one button (select, start, ps, up, ...)
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response

from ps3ipcontrol import __version__
from ps3ipcontrol.config.settings import Settings
from ps3ipcontrol.control.queue import CommandQueue
from ps3ipcontrol.control.router import resolve_action
from ps3ipcontrol.control.scheduler import DeferredScheduler
from ps3ipcontrol.control.sequencer import CommandSequencer
from ps3ipcontrol.control.state import PowerStateTracker, reconcile_forever
from ps3ipcontrol.gimx.prober import DeviceStateProber
from ps3ipcontrol.gimx.runner import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

# Any method runs the command; only the path matters
METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    settings: Settings,
    runner: CommandRunner | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> FastAPI:
    """Create the proxy application.

    Args:
        settings: Proxy configuration, including the console's device address.
        runner: Optional pre-configured CommandRunner (for testing).
        sleep: Awaitable delay used for key timing and deferred jobs (for testing).
    """
    runner = runner or SubprocessRunner()
    tracker = PowerStateTracker()
    prober = DeviceStateProber(runner, settings.gimx, tracker=tracker)
    scheduler = DeferredScheduler(sleep=sleep)
    sequencer = CommandSequencer(
        runner,
        prober,
        scheduler,
        settings.device_address,
        gimx=settings.gimx,
        timing=settings.timing,
        tracker=tracker,
        sleep=sleep,
    )
    commands = CommandQueue(sequencer)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        commands.start()
        reconcile_task = None
        interval = settings.server.reconcile_interval
        if interval > 0:
            reconcile_task = asyncio.create_task(reconcile_forever(prober, tracker, interval))
        logger.info("PS3 control proxy started (device=%s)", settings.device_address)

        yield

        if reconcile_task is not None:
            reconcile_task.cancel()
            try:
                await reconcile_task
            except asyncio.CancelledError:
                pass
        await commands.stop()
        await scheduler.shutdown()
        logger.info("PS3 control proxy stopped (power state %s)", tracker.state.value)

    app = FastAPI(
        title="ps3ipcontrol",
        description="IP control proxy for a PlayStation 3 via GIMX",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.tracker = tracker
    app.state.scheduler = scheduler
    app.state.commands = commands

    @app.api_route("/{path:path}", methods=METHODS)
    async def control(request: Request) -> Response:
        action = resolve_action(request.url.path)
        if action is None:
            return Response(status_code=404)
        try:
            await commands.submit(action)
        except Exception:
            logger.exception("Failed to execute %s", action)
            return Response(status_code=500)
        return Response(status_code=204)

    return app
