"""Emulator liveness probe.

Whether the GIMX process is running stands in for whether the console
is awake. The answer is conservative: any failure to probe reads as
"not running".
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ps3ipcontrol.config.settings import GimxConfig
from ps3ipcontrol.gimx.commands import find_emulator
from ps3ipcontrol.gimx.runner import CommandError, CommandRunner

if TYPE_CHECKING:
    from ps3ipcontrol.control.state import PowerStateTracker

logger = logging.getLogger(__name__)


class DeviceStateProber:
    def __init__(
        self,
        runner: CommandRunner,
        config: GimxConfig | None = None,
        tracker: PowerStateTracker | None = None,
    ) -> None:
        self._runner = runner
        self._config = config or GimxConfig()
        self._tracker = tracker

    async def is_emulation_running(self) -> bool:
        """Return True if a process named like the emulator is running."""
        try:
            running = await self._runner.run(find_emulator(self._config)) == 0
        except CommandError as e:
            logger.warning("Emulator probe failed, assuming not running: %s", e)
            running = False
        if self._tracker is not None:
            self._tracker.reconcile(running)
        return running
