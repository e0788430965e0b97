from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .buffers import AlertLog, History
from .config import CHART_KINDS, METRIC_NAMES, SimulationConfig
from .models import ControlParameters, Reading, normalize_name


@dataclass
class DashboardState:
    """Everything the presentation layer reads; mutated only by the driver."""

    config: SimulationConfig = field(default_factory=SimulationConfig)
    parameters: ControlParameters = field(default_factory=ControlParameters)
    running: bool = False
    visible_metrics: List[str] = field(default_factory=lambda: list(METRIC_NAMES))
    alerts_visible: bool = True
    chart_kind: str = ""
    history: History = field(init=False)
    alerts: AlertLog = field(init=False)

    def __post_init__(self):
        self.history = History(self.config.history_capacity)
        self.alerts = AlertLog(self.config.alert_capacity)
        if not self.chart_kind:
            self.chart_kind = self.config.chart_kind
        if self.chart_kind not in CHART_KINDS:
            raise ValueError(f"Unknown chart kind '{self.chart_kind}'. Available: {list(CHART_KINDS)}")

    def latest_reading(self) -> Optional[Reading]:
        return self.history.latest()

    def set_parameter(self, name: str, value: float) -> None:
        self.parameters = self.parameters.updated(**{name: value})

    def toggle_visible_metric(self, name: str) -> None:
        metric = normalize_name(name)
        if metric not in METRIC_NAMES:
            raise ValueError(f"Unknown metric '{name}'. Available: {list(METRIC_NAMES)}")
        if metric in self.visible_metrics:
            self.visible_metrics.remove(metric)
        else:
            self.visible_metrics.append(metric)

    def set_chart_kind(self, kind: str) -> None:
        if kind not in CHART_KINDS:
            raise ValueError(f"Unknown chart kind '{kind}'. Available: {list(CHART_KINDS)}")
        self.chart_kind = kind

    def clear(self) -> None:
        """Drop collected telemetry and restore default parameters."""
        self.history.clear()
        self.alerts.clear()
        self.parameters = ControlParameters()
        self.running = False
