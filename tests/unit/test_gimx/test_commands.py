"""Tests for GIMX command line construction."""

from __future__ import annotations

from ps3ipcontrol.config.settings import GimxConfig
from ps3ipcontrol.domain.models import KEY_DOWN, KEY_UP, ControllerKey
from ps3ipcontrol.gimx.commands import find_emulator, send_event, start_emulator


class TestCommands:
    def test_start_emulator(self) -> None:
        argv = start_emulator(GimxConfig(), "F0:F0:02:AA:BB:CC")
        assert argv == [
            "/usr/bin/gimx",
            "--type", "Sixaxis",
            "--src", "127.0.0.1:51914",
            "--bdaddr", "F0:F0:02:AA:BB:CC",
        ]

    def test_send_event(self) -> None:
        config = GimxConfig()
        assert send_event(config, ControllerKey.CROSS, KEY_DOWN) == [
            "/usr/bin/gimx", "--dst", "127.0.0.1:51914", "--event", "cross(255)",
        ]
        assert send_event(config, ControllerKey.PS, KEY_UP)[-1] == "PS(0)"

    def test_custom_paths(self) -> None:
        config = GimxConfig(binary="/opt/gimx", pgrep="/bin/pgrep", endpoint="127.0.0.1:6000")
        assert send_event(config, ControllerKey.UP, KEY_DOWN)[:3] == [
            "/opt/gimx", "--dst", "127.0.0.1:6000",
        ]
        assert find_emulator(config) == ["/bin/pgrep", "gimx"]
