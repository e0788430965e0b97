from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field, fields, replace
from typing import Dict, List, Mapping

import pandas as pd

from .config import DEFAULT_PARAMETERS

SEVERITIES = ("warning", "error", "info")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_name(name: str) -> str:
    """Accept both ``alignmentPrecision`` and ``alignment_precision``."""
    return _CAMEL_BOUNDARY.sub("_", name.strip()).lower()


def clamp_percentage(value: float) -> int:
    return int(round(max(0.0, min(100.0, float(value)))))


@dataclass(frozen=True)
class ControlParameters:
    """Six normalized control knobs, each an integer percentage in [0, 100]."""

    wafer_throughput: int = DEFAULT_PARAMETERS["wafer_throughput"]
    alignment_precision: int = DEFAULT_PARAMETERS["alignment_precision"]
    thermal_stability: int = DEFAULT_PARAMETERS["thermal_stability"]
    vibration_control: int = DEFAULT_PARAMETERS["vibration_control"]
    vacuum_pressure: int = DEFAULT_PARAMETERS["vacuum_pressure"]
    optical_power: int = DEFAULT_PARAMETERS["optical_power"]

    def __post_init__(self):
        # Out-of-range input is clamped, never rejected.
        for f in fields(self):
            object.__setattr__(self, f.name, clamp_percentage(getattr(self, f.name)))

    @classmethod
    def names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "ControlParameters":
        return cls().updated(**values)

    def updated(self, **values: float) -> "ControlParameters":
        changes = {}
        for name, value in values.items():
            key = normalize_name(name)
            if key not in self.names():
                raise ValueError(f"Unknown parameter '{name}'. Available: {self.names()}")
            changes[key] = value
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in self.names()}


@dataclass(frozen=True)
class Reading:
    """One tick of derived process telemetry, already rounded for display."""

    timestamp: pd.Timestamp
    overlay_accuracy: float  # nm
    focus_stability: float  # nm
    throughput_rate: int  # wafers/hour
    temperature_variation: float  # mK
    vibration_level: float  # nm RMS
    vacuum_quality: float  # mbar

    @property
    def label(self) -> str:
        return self.timestamp.strftime("%H:%M:%S")

    def value(self, metric: str) -> float:
        return getattr(self, normalize_name(metric))


@dataclass(frozen=True)
class Alert:
    """Threshold breach raised by a generator; informational, never thrown."""

    severity: str
    message: str
    timestamp: pd.Timestamp
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity '{self.severity}'. Available: {list(SEVERITIES)}")
