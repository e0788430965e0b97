from __future__ import annotations

import pandas as pd
from conftest import FixedDraw, make_alert, make_reading

from litho_telemetry import (
    METRIC_NAMES,
    ControlParameters,
    SimulationDriver,
    alerts_to_frame,
    format_alert,
    format_reading,
    metric_status,
    readings_to_frame,
)
from litho_telemetry.data import METRIC_COLORS, METRIC_LABELS, METRIC_UNITS, format_value


def test_metric_status_flags():
    assert all(metric_status(make_reading(0)).values())

    status = metric_status(make_reading(0, throughput_rate=59, focus_stability=12.5, vacuum_quality=2e-6))
    assert status["throughput_rate"] is False
    assert status["focus_stability"] is False
    assert status["vacuum_quality"] is True
    assert list(status) == list(METRIC_NAMES)


def test_readings_to_frame():
    frame = readings_to_frame([make_reading(0), make_reading(1)])
    assert list(frame.columns) == ["time", *METRIC_NAMES]
    assert len(frame) == 2
    assert frame["throughput_rate"].dtype == "int64"
    assert frame.loc[1, "time"] == pd.Timestamp(2026, 1, 5, 9, 0, 1)


def test_empty_frames():
    assert readings_to_frame([]).empty
    assert alerts_to_frame([]).empty


def test_alerts_to_frame_keeps_log_order():
    driver = SimulationDriver(rng=FixedDraw(1.0))
    driver.state.parameters = ControlParameters(vibration_control=0, optical_power=0)
    driver.step()
    frame = alerts_to_frame(driver.state.alerts)
    assert list(frame.columns) == ["id", "time", "severity", "message"]
    assert frame["message"].iloc[0].startswith("High vibration")
    assert frame["message"].iloc[1].startswith("Focus stability")


def test_format_value():
    assert format_value("vacuum_quality", 1.1e-6) == "1.1e-06 mbar"
    assert format_value("throughput_rate", 70) == "70 wph"
    assert format_value("focus_stability", 4.0) == "4.0 nm"
    assert format_value("vibration_level", 0.45) == "0.45 nm RMS"


def test_format_reading_marks_out_of_spec_metrics():
    line = format_reading(make_reading(3, overlay_accuracy=3.2))
    assert line.startswith("09:00:03 | ")
    assert "overlay_accuracy=3.20 nm !" in line
    assert "throughput_rate=70 wph |" in line


def test_format_alert():
    assert format_alert(make_alert(4)) == "2026-01-05T09:00:04 | WARNING | alert 4"


def test_presentation_tables_cover_every_metric():
    for table in (METRIC_LABELS, METRIC_UNITS, METRIC_COLORS):
        assert set(table) == set(METRIC_NAMES)
