from .base import (
    MetricGenerator,
    RandomSource,
    available_generators,
    build_generator,
    register_generator,
)
from .lithography import ALERT_RULES, FLOORS, AlertRule, LithographyGenerator

DEFAULT_GENERATOR = LithographyGenerator.name

__all__ = [
    "ALERT_RULES",
    "AlertRule",
    "DEFAULT_GENERATOR",
    "FLOORS",
    "LithographyGenerator",
    "MetricGenerator",
    "RandomSource",
    "available_generators",
    "build_generator",
    "register_generator",
]
