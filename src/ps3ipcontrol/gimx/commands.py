"""GIMX command line construction."""

from __future__ import annotations

from ps3ipcontrol.config.settings import GimxConfig
from ps3ipcontrol.domain.models import ControllerKey


def start_emulator(config: GimxConfig, device_address: str) -> list[str]:
    """Command that starts the emulator and connects it to the console.

    Connecting is what brings the PS3 out of standby.
    """
    return [
        config.binary,
        "--type", config.controller_type,
        "--src", config.endpoint,
        "--bdaddr", device_address,
    ]


def send_event(config: GimxConfig, key: ControllerKey, intensity: int) -> list[str]:
    """Command that delivers one button event to the running emulator."""
    return [config.binary, "--dst", config.endpoint, "--event", key.event(intensity)]


def find_emulator(config: GimxConfig) -> list[str]:
    return [config.pgrep, config.process_name]
