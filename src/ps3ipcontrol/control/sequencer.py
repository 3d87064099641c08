"""Timed GIMX command sequences for each action.

Every step is an awaited external invocation, so a sequence proceeds
one step at a time and stops at the first failing step. Nothing is
rolled back; the :class:`CommandError` propagates to the caller.

Power-on and power-off encode undocumented timing requirements of the
console (see :class:`~ps3ipcontrol.config.settings.TimingConfig`):

    power on   start emulator  ...boot_delay...  PS press (deferred)
    power off  PS held for power_off_hold, CROSS, confirm_interval, CROSS
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from ps3ipcontrol.config.settings import GimxConfig, TimingConfig
from ps3ipcontrol.control.scheduler import DeferredScheduler
from ps3ipcontrol.control.state import PowerStateTracker
from ps3ipcontrol.domain.models import (
    KEY_DOWN,
    KEY_UP,
    Action,
    ActionType,
    ControllerKey,
    PowerState,
)
from ps3ipcontrol.gimx.commands import send_event, start_emulator
from ps3ipcontrol.gimx.prober import DeviceStateProber
from ps3ipcontrol.gimx.runner import CommandRunner

logger = logging.getLogger(__name__)


class CommandSequencer:
    """Realizes actions against the GIMX emulator.

    Args:
        runner: Executes GIMX invocations.
        prober: Answers whether the emulator is running.
        scheduler: Runs the deferred activation press after power-on.
        device_address: Bluetooth device address of the console.
        gimx: GIMX paths and endpoint.
        timing: Key press and power sequence delays.
        tracker: Optional power state tracker updated after power commands.
        sleep: Awaitable delay function (replaced in tests).
    """

    def __init__(
        self,
        runner: CommandRunner,
        prober: DeviceStateProber,
        scheduler: DeferredScheduler,
        device_address: str,
        gimx: GimxConfig | None = None,
        timing: TimingConfig | None = None,
        tracker: PowerStateTracker | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._runner = runner
        self._prober = prober
        self._scheduler = scheduler
        self._device_address = device_address
        self._gimx = gimx or GimxConfig()
        self._timing = timing or TimingConfig()
        self._tracker = tracker
        self._sleep = sleep

    async def execute(self, action: Action) -> None:
        logger.debug("Executing %s", action)
        if action.type == ActionType.POWER_ON:
            await self.power_on()
        elif action.type == ActionType.POWER_OFF:
            await self.power_off()
        elif action.type == ActionType.POWER_TOGGLE:
            await self.power_toggle()
        elif action.type == ActionType.KEY_PRESS and action.key is not None:
            await self.key_press(action.key)
        else:
            raise ValueError(f"Unsupported action: {action}")

    async def power_on(self) -> None:
        """Start the emulator unless it is already running."""
        if await self._prober.is_emulation_running():
            logger.info("Emulator already running, power on ignored")
            return
        await self._wake()

    async def power_off(self) -> None:
        """Run the power-off sequence regardless of the current state."""
        # Holding PS opens the power menu, CROSS confirms twice
        await self.key_press(ControllerKey.PS, self._timing.power_off_hold)
        await self.key_press(ControllerKey.CROSS)
        await self._sleep(self._timing.confirm_interval)
        await self.key_press(ControllerKey.CROSS)
        self._mark(PowerState.OFF)
        logger.info("Power off sequence sent")

    async def power_toggle(self) -> None:
        if await self._prober.is_emulation_running():
            await self.power_off()
        else:
            await self._wake()

    async def key_press(self, key: ControllerKey, duration: float | None = None) -> None:
        """Press ``key``, hold it for ``duration`` seconds and release it."""
        if duration is None:
            duration = self._timing.key_press_duration
        await self._runner.check(send_event(self._gimx, key, KEY_DOWN))
        await self._sleep(duration)
        await self._runner.check(send_event(self._gimx, key, KEY_UP))
        logger.debug("Pressed %s for %.2fs", key.path_name, duration)

    async def _wake(self) -> None:
        await self._runner.spawn(start_emulator(self._gimx, self._device_address))
        self._mark(PowerState.ON)
        logger.info("Emulator started for %s", self._device_address)
        # The controller is activated with a PS press once the console has booted
        self._scheduler.schedule(
            self._timing.boot_delay,
            lambda: self.key_press(ControllerKey.PS),
            name="ps-activation",
        )

    def _mark(self, state: PowerState) -> None:
        if self._tracker is not None:
            self._tracker.mark(state)
