"""Invocation builders and a recording CommandRunner shared by the tests.

The builders produce the entries a :class:`FakeRunner` and the recording
sleep fixture append to the shared log, so tests can compare whole
sequences.
"""

from __future__ import annotations

from typing import Sequence

from ps3ipcontrol.config.settings import GimxConfig
from ps3ipcontrol.domain.models import ControllerKey
from ps3ipcontrol.gimx.runner import CommandError, CommandRunner

DEVICE_ADDRESS = "F0:F0:02:12:34:56"
GIMX = "/usr/bin/gimx"
PGREP = "/usr/bin/pgrep"
ENDPOINT = "127.0.0.1:51914"


def probe_call() -> tuple:
    return ("run", (PGREP, "gimx"))


def start_call(device_address: str = DEVICE_ADDRESS) -> tuple:
    return (
        "spawn",
        (GIMX, "--type", "Sixaxis", "--src", ENDPOINT, "--bdaddr", device_address),
    )


def event_call(key: ControllerKey, intensity: int) -> tuple:
    return ("run", (GIMX, "--dst", ENDPOINT, "--event", f"{key.value}({intensity})"))


def press_calls(key: ControllerKey, duration: float = 0.1) -> list[tuple]:
    return [event_call(key, 255), ("sleep", duration), event_call(key, 0)]


def power_off_calls() -> list[tuple]:
    return [
        *press_calls(ControllerKey.PS, 3.0),
        *press_calls(ControllerKey.CROSS),
        ("sleep", 0.5),
        *press_calls(ControllerKey.CROSS),
    ]


class FakeRunner(CommandRunner):
    """Records invocations instead of running them.

    ``running`` decides what the pgrep probe reports. Any invocation
    whose argv contains ``fail_on`` exits with status 1, and
    ``spawn_error`` makes background starts fail.
    """

    def __init__(self, log: list, config: GimxConfig | None = None) -> None:
        self.log = log
        self.config = config or GimxConfig()
        self.running = False
        self.fail_on: str | None = None
        self.spawn_error = False

    async def run(self, argv: Sequence[str]) -> int:
        self.log.append(("run", tuple(argv)))
        if argv[0] == self.config.pgrep:
            return 0 if self.running else 1
        if self.fail_on is not None and self.fail_on in argv:
            return 1
        return 0

    async def spawn(self, argv: Sequence[str]) -> None:
        if self.spawn_error:
            raise CommandError(f"Cannot start {argv[0]}", argv=argv)
        self.log.append(("spawn", tuple(argv)))
