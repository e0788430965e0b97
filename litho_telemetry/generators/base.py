from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Protocol, Tuple, Type

import numpy as np
import pandas as pd

from ..config import SimulationConfig
from ..models import Alert, ControlParameters, Reading


class RandomSource(Protocol):
    """Anything that can draw a uniform float; numpy's ``Generator`` qualifies."""

    def uniform(self, low: float, high: float) -> float:
        ...


class MetricGenerator(ABC):
    """Interface for pluggable metric-generation models."""

    name: str = "base"
    description: str = ""

    def __init__(self, config: SimulationConfig, rng: Optional[RandomSource] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

    @abstractmethod
    def generate(
        self, params: ControlParameters, now: Optional[pd.Timestamp] = None
    ) -> Tuple[Reading, List[Alert]]:
        """Derive the next reading and any threshold alerts from ``params``."""

    def draw(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))


GENERATOR_REGISTRY: Dict[str, Type[MetricGenerator]] = {}


def register_generator(generator_cls: Type[MetricGenerator]) -> None:
    GENERATOR_REGISTRY[generator_cls.name] = generator_cls


def available_generators() -> List[str]:
    return sorted(GENERATOR_REGISTRY)


def build_generator(
    name: str, config: SimulationConfig, rng: Optional[RandomSource] = None
) -> MetricGenerator:
    try:
        generator_cls = GENERATOR_REGISTRY[name]
    except KeyError as exc:
        raise ValueError(
            f"Unknown generator '{name}'. Available: {available_generators()}"
        ) from exc
    return generator_cls(config, rng)
