from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# Percentages applied on reset and at startup.
DEFAULT_PARAMETERS: Dict[str, int] = {
    "wafer_throughput": 70,
    "alignment_precision": 80,
    "thermal_stability": 75,
    "vibration_control": 85,
    "vacuum_pressure": 90,
    "optical_power": 65,
}

METRIC_NAMES: Tuple[str, ...] = (
    "overlay_accuracy",
    "focus_stability",
    "throughput_rate",
    "temperature_variation",
    "vibration_level",
    "vacuum_quality",
)

# Tick period in milliseconds, keyed by the speed shown to the operator.
TICK_INTERVALS: Dict[str, int] = {
    "slow": 2000,
    "normal": 1000,
    "fast": 500,
}

CHART_KINDS: Tuple[str, ...] = ("line", "bar")


@dataclass
class SimulationConfig:
    """Runtime settings shared by the driver and the generators."""

    tick_interval_ms: int = TICK_INTERVALS["normal"]
    history_capacity: int = 21  # 20 retained + the newest reading
    alert_capacity: int = 5
    seed: Optional[int] = None
    generator: str = "lithography"
    chart_kind: str = "line"

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        seed = os.getenv("LITHO_SEED")
        return cls(
            tick_interval_ms=int(os.getenv("LITHO_TICK_MS", TICK_INTERVALS["normal"])),
            seed=int(seed) if seed else None,
            generator=os.getenv("LITHO_GENERATOR", "lithography"),
        )
