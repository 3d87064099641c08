"""Tracked power state of the console.

The tracker is updated optimistically when a power command completes
and reconciled with the emulator liveness probe, both whenever a command
probes and periodically in the background.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Awaitable, Callable

from ps3ipcontrol.domain.models import PowerState

if TYPE_CHECKING:
    from ps3ipcontrol.gimx.prober import DeviceStateProber

logger = logging.getLogger(__name__)


class PowerStateTracker:
    def __init__(self) -> None:
        self._state = PowerState.UNKNOWN

    @property
    def state(self) -> PowerState:
        return self._state

    def mark(self, state: PowerState) -> None:
        """Record the state implied by a command that just completed."""
        if state != self._state:
            logger.info("Power state %s -> %s", self._state.value, state.value)
        self._state = state

    def reconcile(self, running: bool) -> None:
        """Align the tracked state with an emulator liveness observation."""
        observed = PowerState.ON if running else PowerState.OFF
        if self._state not in (PowerState.UNKNOWN, observed):
            logger.info(
                "Tracked power state %s disagrees with probe, now %s",
                self._state.value, observed.value,
            )
        self._state = observed


async def reconcile_forever(
    prober: DeviceStateProber,
    tracker: PowerStateTracker,
    interval: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Probe the emulator every ``interval`` seconds until cancelled.

    The prober feeds its result into the tracker it was built with;
    ``tracker`` should be that same tracker.
    """
    while True:
        await prober.is_emulation_running()
        logger.debug("Power state %s", tracker.state.value)
        await sleep(interval)
