"""Tests for power state tracking and reconciliation."""

from __future__ import annotations

import asyncio

import pytest
from helpers import probe_call

from ps3ipcontrol.control.state import PowerStateTracker, reconcile_forever
from ps3ipcontrol.domain.models import PowerState
from ps3ipcontrol.gimx.prober import DeviceStateProber


class TestPowerStateTracker:
    def test_starts_unknown(self) -> None:
        assert PowerStateTracker().state == PowerState.UNKNOWN

    def test_mark(self) -> None:
        tracker = PowerStateTracker()
        tracker.mark(PowerState.ON)
        assert tracker.state == PowerState.ON

    def test_reconcile_from_unknown(self) -> None:
        tracker = PowerStateTracker()
        tracker.reconcile(running=False)
        assert tracker.state == PowerState.OFF

    def test_reconcile_overrides_optimistic_state(self, caplog: pytest.LogCaptureFixture) -> None:
        tracker = PowerStateTracker()
        tracker.mark(PowerState.ON)
        with caplog.at_level("INFO", logger="ps3ipcontrol"):
            tracker.reconcile(running=False)
        assert tracker.state == PowerState.OFF
        assert "disagrees with probe" in caplog.text


class TestReconcileForever:
    @pytest.mark.asyncio
    async def test_probes_every_interval(
        self, fake_runner, caplog: pytest.LogCaptureFixture
    ) -> None:
        intervals: list[float] = []

        async def sleep(seconds: float) -> None:
            intervals.append(seconds)
            if len(intervals) == 2:
                raise asyncio.CancelledError

        tracker = PowerStateTracker()
        fake_runner.running = True
        prober = DeviceStateProber(fake_runner, tracker=tracker)

        with pytest.raises(asyncio.CancelledError):
            with caplog.at_level("DEBUG", logger="ps3ipcontrol"):
                await reconcile_forever(prober, tracker, 30.0, sleep=sleep)

        assert intervals == [30.0, 30.0]
        assert fake_runner.log == [probe_call(), probe_call()]
        assert tracker.state == PowerState.ON
        assert "Power state on" in caplog.text
