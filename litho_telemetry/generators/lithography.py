from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..models import Alert, ControlParameters, Reading
from .base import MetricGenerator, register_generator


@dataclass(frozen=True)
class AlertRule:
    """Fixed upper limit on one metric and the alert raised when it is exceeded."""

    metric: str
    limit: float
    severity: str
    template: str

    def check(self, value: float, now: pd.Timestamp) -> Optional[Alert]:
        if value > self.limit:
            return Alert(severity=self.severity, message=self.template.format(value=value), timestamp=now)
        return None


# Evaluation order matters: each alert is pushed newest-first into the log.
ALERT_RULES: Tuple[AlertRule, ...] = (
    AlertRule("overlay_accuracy", 3.0, "error", "Critical overlay error: {value:.2f}nm"),
    AlertRule("focus_stability", 12.0, "error", "Focus stability exceeding spec: {value:.1f}nm"),
    AlertRule("temperature_variation", 1.2, "warning", "Temperature variation high: {value:.2f}mK"),
    AlertRule("vibration_level", 2.5, "warning", "High vibration levels: {value:.2f}nm RMS"),
    AlertRule("vacuum_quality", 2e-6, "error", "Vacuum pressure out of spec: {value:.1e} mbar"),
)

# Lower bounds keeping every derived quantity physically meaningful.
FLOORS: Dict[str, float] = {
    "overlay_accuracy": 0.5,
    "focus_stability": 1.0,
    "throughput_rate": 1.0,
    "temperature_variation": 0.1,
    "vibration_level": 0.1,
    "vacuum_quality": 1e-7,
}

BASE_OVERLAY_NM = 2.5
BASE_FOCUS_NM = 10.0
BASE_TEMPERATURE_MK = 1.0
BASE_VIBRATION_NM = 3.0
BASE_VACUUM_MBAR = 1e-6


class LithographyGenerator(MetricGenerator):
    """Stepper process model with cross-coupled throughput losses."""

    name = "lithography"
    description = "Overlay, focus, thermal, vibration and vacuum model with throughput coupling"

    def _overlay(self, p: ControlParameters) -> float:
        base = BASE_OVERLAY_NM * (1 - p.alignment_precision / 100)
        return max(FLOORS["overlay_accuracy"], base + self.draw(-0.25, 0.25))

    def _focus(self, p: ControlParameters) -> float:
        # Poor vibration control amplifies optical focus drift up to 2x.
        base = BASE_FOCUS_NM * (1 - p.optical_power / 100) * (2 - p.vibration_control / 100)
        return max(FLOORS["focus_stability"], base + self.draw(-1.0, 1.0))

    def _temperature(self, p: ControlParameters) -> float:
        base = BASE_TEMPERATURE_MK * (1 - p.thermal_stability / 100)
        return max(FLOORS["temperature_variation"], base + self.draw(-0.1, 0.1))

    def _vibration(self, p: ControlParameters) -> float:
        base = BASE_VIBRATION_NM * (1 - p.vibration_control / 100)
        return max(FLOORS["vibration_level"], base + self.draw(-0.2, 0.2))

    def _vacuum(self, p: ControlParameters) -> float:
        base = BASE_VACUUM_MBAR * (2 - p.vacuum_pressure / 100)
        return max(FLOORS["vacuum_quality"], base + self.draw(0.0, 1e-7))

    def _throughput(self, p: ControlParameters, overlay: float, focus: float, temperature: float) -> float:
        rate = (
            p.wafer_throughput
            * (1 - max(overlay - 2, 0) / 10)
            * (1 - max(focus - 8, 0) / 20)
            * (1 - max(temperature - 0.8, 0) / 5)
        )
        return max(FLOORS["throughput_rate"], rate)

    def derive(self, params: ControlParameters) -> Dict[str, float]:
        """Raw, unrounded metric values for one tick."""
        overlay = self._overlay(params)
        focus = self._focus(params)
        temperature = self._temperature(params)
        vibration = self._vibration(params)
        vacuum = self._vacuum(params)
        return {
            "overlay_accuracy": overlay,
            "focus_stability": focus,
            "throughput_rate": self._throughput(params, overlay, focus, temperature),
            "temperature_variation": temperature,
            "vibration_level": vibration,
            "vacuum_quality": vacuum,
        }

    def generate(
        self, params: ControlParameters, now: Optional[pd.Timestamp] = None
    ) -> Tuple[Reading, List[Alert]]:
        now = now if now is not None else pd.Timestamp.now()
        raw = self.derive(params)

        alerts = []
        for rule in ALERT_RULES:
            alert = rule.check(raw[rule.metric], now)
            if alert is not None:
                alerts.append(alert)

        reading = Reading(
            timestamp=now,
            overlay_accuracy=round(raw["overlay_accuracy"], 2),
            focus_stability=round(raw["focus_stability"], 1),
            throughput_rate=max(1, int(round(raw["throughput_rate"]))),
            temperature_variation=round(raw["temperature_variation"], 2),
            vibration_level=round(raw["vibration_level"], 2),
            vacuum_quality=float(f"{raw['vacuum_quality']:.1e}"),
        )
        return reading, alerts


register_generator(LithographyGenerator)
