"""Shared test fixtures for the ps3ipcontrol test suite.

Provides a recording fake CommandRunner and a recording fake sleep that
write into one shared log, so tests can assert the exact order of GIMX
invocations and delays without touching hardware or waiting.
"""

from __future__ import annotations

import pytest
from helpers import DEVICE_ADDRESS, FakeRunner

from ps3ipcontrol.config.settings import Settings


@pytest.fixture
def log() -> list:
    """Ordered record of invocations and delays."""
    return []


@pytest.fixture
def fake_runner(log: list) -> FakeRunner:
    return FakeRunner(log)


@pytest.fixture
def fake_sleep(log: list):
    async def sleep(seconds: float) -> None:
        log.append(("sleep", seconds))

    return sleep


@pytest.fixture
def settings() -> Settings:
    settings = Settings(device_address=DEVICE_ADDRESS)
    settings.server.reconcile_interval = 0
    return settings
