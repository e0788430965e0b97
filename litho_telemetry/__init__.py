from .buffers import AlertLog, BoundedBuffer, History
from .config import CHART_KINDS, DEFAULT_PARAMETERS, METRIC_NAMES, TICK_INTERVALS, SimulationConfig
from .data import alerts_to_frame, format_alert, format_alerts, format_reading, metric_status, readings_to_frame
from .driver import SimulationDriver
from .generators import (
    DEFAULT_GENERATOR,
    LithographyGenerator,
    MetricGenerator,
    available_generators,
    build_generator,
    register_generator,
)
from .models import Alert, ControlParameters, Reading
from .state import DashboardState

__all__ = [
    "Alert",
    "AlertLog",
    "BoundedBuffer",
    "CHART_KINDS",
    "ControlParameters",
    "DEFAULT_GENERATOR",
    "DEFAULT_PARAMETERS",
    "DashboardState",
    "History",
    "LithographyGenerator",
    "METRIC_NAMES",
    "MetricGenerator",
    "Reading",
    "SimulationConfig",
    "SimulationDriver",
    "TICK_INTERVALS",
    "alerts_to_frame",
    "available_generators",
    "build_generator",
    "format_alert",
    "format_alerts",
    "format_reading",
    "metric_status",
    "readings_to_frame",
    "register_generator",
]
