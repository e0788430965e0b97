from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from .config import TICK_INTERVALS, SimulationConfig
from .generators import MetricGenerator, RandomSource, build_generator
from .models import Alert, Reading
from .state import DashboardState

logger = logging.getLogger(__name__)

_ALERT_LEVELS = {"error": logging.ERROR, "warning": logging.WARNING, "info": logging.INFO}


class SimulationDriver:
    """Timer-driven runtime that feeds the dashboard state into a generator."""

    def __init__(
        self,
        config: SimulationConfig | None = None,
        generator: MetricGenerator | None = None,
        state: DashboardState | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        rng: RandomSource | None = None,
    ):
        if state is not None:
            if config is not None and config != state.config:
                raise ValueError("Driver config must match the config of the state it drives")
            config = state.config
        self.config = config or SimulationConfig()
        self._validate_interval(self.config.tick_interval_ms)
        self.generator = generator or build_generator(self.config.generator, self.config, rng)
        self.state = state or DashboardState(config=self.config)
        self.tick_interval_ms = self.config.tick_interval_ms
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self.ticks = 0
        self.tick_listeners: List[Callable[[Reading, List[Alert]], None]] = []

    @property
    def running(self) -> bool:
        return self.state.running

    @staticmethod
    def _validate_interval(interval_ms: int) -> None:
        if interval_ms not in TICK_INTERVALS.values():
            raise ValueError(
                f"Unsupported tick interval {interval_ms}ms. Available: {sorted(TICK_INTERVALS.values())}"
            )

    def _schedule(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.tick_interval_ms / 1000, self._on_tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_tick(self) -> None:
        self._handle = None
        if not self.state.running:
            return
        self.step()
        # A tick listener may have paused or reset the driver.
        if self.state.running:
            self._schedule()

    def _log_alert(self, alert: Alert) -> None:
        logger.log(_ALERT_LEVELS[alert.severity], "Alert %s: %s", alert.id[:8], alert.message)

    def step(self) -> Tuple[Reading, List[Alert]]:
        """Run one generation step and record its output."""
        reading, alerts = self.generator.generate(self.state.parameters)
        self.state.history.append(reading)
        self.state.alerts.extend(alerts)
        self.ticks += 1
        logger.debug("Tick %d at %s with %d alert(s)", self.ticks, reading.label, len(alerts))
        for alert in alerts:
            self._log_alert(alert)
        for listener in self.tick_listeners:
            listener(reading, alerts)
        return reading, alerts

    def start(self) -> None:
        if self.state.running:
            return
        # Only mark Running once a timer is actually pending.
        self._schedule()
        self.state.running = True
        logger.info("Simulation started (interval %dms)", self.tick_interval_ms)

    def pause(self) -> None:
        if not self.state.running:
            return
        self.state.running = False
        self._cancel()
        logger.info("Simulation paused after %d tick(s)", self.ticks)

    def toggle(self) -> None:
        if self.state.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self._cancel()
        self.state.clear()
        self.ticks = 0
        logger.info("Simulation reset to default parameters")

    def set_tick_interval(self, interval_ms: int) -> None:
        # The pending wait keeps its original delay.
        self._validate_interval(interval_ms)
        self.tick_interval_ms = interval_ms
        logger.info("Tick interval set to %dms", interval_ms)

    def set_parameter(self, name: str, value: float) -> None:
        self.state.set_parameter(name, value)
        logger.debug("Parameters now %s", self.state.parameters.as_dict())

    def toggle_visible_metric(self, name: str) -> None:
        self.state.toggle_visible_metric(name)

    def set_chart_kind(self, kind: str) -> None:
        self.state.set_chart_kind(kind)

    def toggle_alerts_visible(self) -> None:
        self.state.alerts_visible = not self.state.alerts_visible

    def run(self, ticks: int) -> List[Reading]:
        """Fast-forward ``ticks`` steps without waiting on the timer."""
        return [self.step()[0] for _ in range(ticks)]
