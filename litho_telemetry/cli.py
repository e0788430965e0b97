from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Dict, Iterable, Optional

from .config import TICK_INTERVALS, SimulationConfig
from .data import alerts_to_frame, format_alerts, format_reading, readings_to_frame
from .driver import SimulationDriver
from .generators import DEFAULT_GENERATOR, available_generators
from .generators import base as generator_base
from .models import ControlParameters

logger = logging.getLogger(__name__)


def parse_param_overrides(pairs: Iterable[str]) -> Dict[str, float]:
    overrides = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected NAME=VALUE, got '{pair}'")
        overrides[name] = float(value)
    return overrides


async def _run_on_timer(driver: SimulationDriver, ticks: int) -> None:
    if ticks <= 0:
        return
    done = asyncio.Event()

    def on_tick(reading, alerts) -> None:
        if driver.ticks >= ticks:
            driver.pause()
            done.set()

    driver.tick_listeners.append(on_tick)
    driver.start()
    try:
        await done.wait()
    finally:
        driver.pause()
        driver.tick_listeners.remove(on_tick)


def run_simulation(
    ticks: int,
    config: SimulationConfig | None = None,
    params: Optional[Dict[str, float]] = None,
    fast_forward: bool = False,
    output: str | None = None,
    alerts_output: str | None = None,
) -> SimulationDriver:
    driver = SimulationDriver(config or SimulationConfig())
    for name, value in (params or {}).items():
        driver.set_parameter(name, value)

    if fast_forward:
        driver.run(ticks)
    else:
        asyncio.run(_run_on_timer(driver, ticks))

    logger.info("Generated %d tick(s) with %s", driver.ticks, driver.generator.name)

    if output:
        readings_to_frame(driver.state.history).to_csv(output, index=False)
    if alerts_output:
        alerts_to_frame(driver.state.alerts).to_csv(alerts_output, index=False)

    return driver


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulated lithography process telemetry with threshold alerts.")
    parser.add_argument("--ticks", type=int, default=10, help="Number of readings to generate")
    parser.add_argument(
        "--speed",
        default="normal",
        choices=list(TICK_INTERVALS),
        help="Tick interval (slow=2000ms, normal=1000ms, fast=500ms)",
    )
    parser.add_argument("--seed", type=int, help="Seed for the random perturbations")
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Override a control parameter percentage, e.g. alignmentPrecision=40",
    )
    parser.add_argument(
        "--generator",
        default=DEFAULT_GENERATOR,
        choices=available_generators(),
        help="Metric generation model to execute",
    )
    parser.add_argument(
        "--fast-forward",
        action="store_true",
        help="Generate all ticks immediately instead of waiting on the timer",
    )
    parser.add_argument("--output", help="Optional path to save the reading history as CSV")
    parser.add_argument("--alerts-output", help="Optional path to save the alert log as CSV")
    parser.add_argument(
        "--list-generators",
        action="store_true",
        help="List available generators and exit",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "WARNING"),
        help="Logging level (default from LOG_LEVEL, else WARNING)",
    )
    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.list_generators:
        print("Available generators:")
        for name in available_generators():
            print(f"- {name}: {generator_base.GENERATOR_REGISTRY[name].description}")
        return

    try:
        params = parse_param_overrides(args.param)
        ControlParameters.from_mapping(params)
    except ValueError as exc:
        parser.error(str(exc))

    config = SimulationConfig(
        tick_interval_ms=TICK_INTERVALS[args.speed],
        seed=args.seed,
        generator=args.generator,
    )
    driver = run_simulation(
        args.ticks,
        config=config,
        params=params,
        fast_forward=args.fast_forward,
        output=args.output,
        alerts_output=args.alerts_output,
    )

    for reading in driver.state.history:
        print(format_reading(reading))

    if driver.state.alerts:
        print()
        print(format_alerts(driver.state.alerts))
    else:
        print("No alerts raised.")


__all__ = ["build_arg_parser", "main", "parse_param_overrides", "run_simulation"]
