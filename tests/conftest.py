from __future__ import annotations

from typing import Callable, List

import pandas as pd
import pytest

from litho_telemetry import Alert, Reading, SimulationConfig, SimulationDriver


class FixedDraw:
    """Random source pinned to one point of every requested range."""

    def __init__(self, position: float):
        self.position = position

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.position


class ManualHandle:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualLoop:
    """Stand-in for an event loop whose clock only moves when told to."""

    def __init__(self):
        self.time = 0.0
        self.handles: List[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.time + delay, callback)
        self.handles.append(handle)
        return handle

    def pending(self) -> List[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds: float) -> None:
        target = self.time + seconds
        while True:
            due = sorted((h for h in self.pending() if h.when <= target + 1e-9), key=lambda h: h.when)
            if not due:
                break
            handle = due[0]
            self.time = handle.when
            handle.fired = True
            handle.callback()
        self.time = target


@pytest.fixture
def low_draw():
    return FixedDraw(0.0)


@pytest.fixture
def mid_draw():
    return FixedDraw(0.5)


@pytest.fixture
def high_draw():
    return FixedDraw(1.0)


@pytest.fixture
def manual_loop():
    return ManualLoop()


@pytest.fixture
def driver(manual_loop, mid_draw):
    return SimulationDriver(SimulationConfig(seed=7), loop=manual_loop, rng=mid_draw)


def make_reading(second: int, **changes) -> Reading:
    values = dict(
        timestamp=pd.Timestamp(2026, 1, 5, 9, 0, second),
        overlay_accuracy=0.5,
        focus_stability=4.0,
        throughput_rate=70,
        temperature_variation=0.25,
        vibration_level=0.45,
        vacuum_quality=1.1e-6,
    )
    values.update(changes)
    return Reading(**values)


def make_alert(n: int, severity: str = "warning") -> Alert:
    return Alert(severity=severity, message=f"alert {n}", timestamp=pd.Timestamp(2026, 1, 5, 9, 0, n))
