from __future__ import annotations

from typing import Dict, Iterable

import pandas as pd

from .config import METRIC_NAMES
from .generators import ALERT_RULES
from .models import Alert, Reading

METRIC_LABELS: Dict[str, str] = {
    "overlay_accuracy": "Overlay (nm)",
    "focus_stability": "Focus (nm)",
    "throughput_rate": "Throughput (wph)",
    "temperature_variation": "Temp (mK)",
    "vibration_level": "Vibration (nm RMS)",
    "vacuum_quality": "Vacuum (mbar)",
}

METRIC_UNITS: Dict[str, str] = {
    "overlay_accuracy": "nm",
    "focus_stability": "nm",
    "throughput_rate": "wph",
    "temperature_variation": "mK",
    "vibration_level": "nm RMS",
    "vacuum_quality": "mbar",
}

METRIC_COLORS: Dict[str, str] = {
    "overlay_accuracy": "#2563eb",
    "focus_stability": "#16a34a",
    "throughput_rate": "#dc2626",
    "temperature_variation": "#9333ea",
    "vibration_level": "#ea580c",
    "vacuum_quality": "#0891b2",
}

PARAMETER_DESCRIPTIONS: Dict[str, str] = {
    "wafer_throughput": "Target wafers per hour processing rate",
    "alignment_precision": "Wafer alignment system precision control",
    "thermal_stability": "Environmental temperature control efficiency",
    "vibration_control": "Mechanical vibration dampening system",
    "vacuum_pressure": "Vacuum system maintenance efficiency",
    "optical_power": "Optical system performance level",
}

# Throughput is the only metric with a lower acceptance bound.
MIN_THROUGHPUT_WPH = 60


def metric_status(reading: Reading) -> Dict[str, bool]:
    """In-spec flag per metric for the status cards."""
    status = {rule.metric: reading.value(rule.metric) <= rule.limit for rule in ALERT_RULES}
    status["throughput_rate"] = reading.throughput_rate >= MIN_THROUGHPUT_WPH
    return {metric: status[metric] for metric in METRIC_NAMES}


def readings_to_frame(readings: Iterable[Reading]) -> pd.DataFrame:
    readings = list(readings)
    frame = pd.DataFrame(
        {
            "time": [r.timestamp for r in readings],
            **{metric: [r.value(metric) for r in readings] for metric in METRIC_NAMES},
        }
    )
    return frame.astype({"throughput_rate": "int64"})


def alerts_to_frame(alerts: Iterable[Alert]) -> pd.DataFrame:
    alerts = list(alerts)
    return pd.DataFrame(
        {
            "id": [a.id for a in alerts],
            "time": [a.timestamp for a in alerts],
            "severity": [a.severity for a in alerts],
            "message": [a.message for a in alerts],
        }
    )


def format_value(metric: str, value: float) -> str:
    if metric == "vacuum_quality":
        return f"{value:.1e} {METRIC_UNITS[metric]}"
    if metric == "throughput_rate":
        return f"{int(value)} {METRIC_UNITS[metric]}"
    if metric == "focus_stability":
        return f"{value:.1f} {METRIC_UNITS[metric]}"
    return f"{value:.2f} {METRIC_UNITS[metric]}"


def format_reading(reading: Reading) -> str:
    status = metric_status(reading)
    fields = [
        f"{metric}={format_value(metric, reading.value(metric))}{'' if status[metric] else ' !'}"
        for metric in METRIC_NAMES
    ]
    return f"{reading.label} | " + " | ".join(fields)


def format_alert(alert: Alert) -> str:
    return f"{alert.timestamp.isoformat()} | {alert.severity.upper():7} | {alert.message}"


def format_alerts(alerts: Iterable[Alert]) -> str:
    return "\n".join(format_alert(alert) for alert in alerts)
