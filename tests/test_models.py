from __future__ import annotations

import dataclasses

import pandas as pd
import pytest
from conftest import make_alert, make_reading

from litho_telemetry import DEFAULT_PARAMETERS, Alert, AlertLog, ControlParameters, History
from litho_telemetry.buffers import BoundedBuffer
from litho_telemetry.models import normalize_name


def test_default_parameters():
    assert ControlParameters().as_dict() == DEFAULT_PARAMETERS
    assert tuple(DEFAULT_PARAMETERS.values()) == (70, 80, 75, 85, 90, 65)


def test_parameters_clamp_out_of_range_values():
    params = ControlParameters(wafer_throughput=150, alignment_precision=-20, optical_power=42.6)
    assert params.wafer_throughput == 100
    assert params.alignment_precision == 0
    assert params.optical_power == 43


def test_updated_accepts_camel_case_and_leaves_original_alone():
    params = ControlParameters()
    changed = params.updated(alignmentPrecision=10, vacuum_pressure=120)
    assert changed.alignment_precision == 10
    assert changed.vacuum_pressure == 100
    assert params.alignment_precision == 80


def test_updated_rejects_unknown_parameter():
    with pytest.raises(ValueError, match="Unknown parameter"):
        ControlParameters().updated(laserPower=50)


def test_parameters_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ControlParameters().wafer_throughput = 10


def test_normalize_name():
    assert normalize_name("waferThroughput") == "wafer_throughput"
    assert normalize_name("vacuum_quality") == "vacuum_quality"


def test_alert_rejects_unknown_severity():
    with pytest.raises(ValueError, match="Unknown severity"):
        Alert(severity="critical", message="boom", timestamp=pd.Timestamp.now())


def test_alert_ids_are_unique():
    assert len({make_alert(1).id for _ in range(50)}) == 50


def test_history_keeps_newest_entries_in_arrival_order():
    history = History(21)
    readings = [make_reading(i) for i in range(30)]
    for reading in readings:
        history.append(reading)
        assert len(history) <= 21

    assert history.to_list() == readings[-21:]
    assert history[0] is readings[9]
    assert history.latest() is readings[-1]


def test_alert_log_is_newest_first_and_bounded():
    log = AlertLog(5)
    alerts = [make_alert(i) for i in range(7)]
    log.extend(alerts)

    assert len(log) == 5
    assert log.to_list() == list(reversed(alerts))[:5]
    assert log[0] is alerts[6]
    assert log[-1] is alerts[2]


def test_clear_empties_buffers():
    history = History(3)
    history.append(make_reading(0))
    history.clear()
    assert not history
    assert history.latest() is None


def test_buffer_capacity_must_be_positive():
    with pytest.raises(ValueError):
        BoundedBuffer(0)
