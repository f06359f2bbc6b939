"""Tests for the sampled signal preview and its summary metrics."""

import numpy as np
import pytest

from model.signal_config import SignalConfig, SignalParameters, SignalType
from model.single_signal_config import SingleSignalConfig, SingleSignalType
from utils.metrics import METRIC_KEYS, compute_metrics_per_channel, compute_preview_metrics_single
from utils.signal_preview import (
    preview_config,
    preview_single_config,
    sample_signal,
    sample_single_signal,
    sample_times,
)


def test_step_returns_to_initial_after_end():
    sig = SignalParameters(signal_type=SignalType.STEP, initial_value=0, final_value=5, start_time=2, end_time=4)
    np.testing.assert_allclose(sample_signal(sig, np.arange(6.0)), [0, 0, 5, 5, 0, 0])


def test_unbounded_step_holds_final_value():
    sig = SignalParameters(signal_type=SignalType.STEP, final_value=5, start_time=2)
    np.testing.assert_allclose(sample_signal(sig, [1.0, 2.0, 100.0]), [0, 5, 5])


def test_ramp_freezes_at_end_time():
    sig = SignalParameters(signal_type=SignalType.RAMP, initial_value=1, slope=2, start_time=1, end_time=3)
    np.testing.assert_allclose(sample_signal(sig, np.arange(5.0)), [1, 1, 3, 5, 5])


def test_spline_is_smooth_between_values():
    sig = SignalParameters(signal_type=SignalType.SPLINE, initial_value=0, final_value=1, start_time=0, end_time=2)
    np.testing.assert_allclose(sample_signal(sig, [0.0, 1.0, 2.0, 3.0]), [0, 0.5, 1, 1])


def test_sine_with_phase_and_offset():
    sig = SignalParameters(signal_type=SignalType.SINE, offset=1, amplitude=2, frequency=1, phase=90)
    assert sample_signal(sig, [0.0])[0] == pytest.approx(3.0)


@pytest.mark.parametrize("signal_type, t, expected", [
    (SignalType.SQUARE, 0.25, 1.0),
    (SignalType.SQUARE, 0.75, -1.0),
    (SignalType.SAWTOOTH, 0.5, 0.0),
    (SignalType.TRIANGLE, 0.5, 1.0),
])
def test_periodic_shapes(signal_type, t, expected):
    sig = SignalParameters(signal_type=signal_type, frequency=1)
    assert sample_signal(sig, [t])[0] == pytest.approx(expected, abs=1e-9)


def test_periodic_outputs_offset_outside_window():
    sig = SignalParameters(signal_type=SignalType.SINE, offset=2, amplitude=3, start_time=1, end_time=2)
    values = sample_signal(sig, [0.5, 2.5])
    np.testing.assert_allclose(values, [2, 2])


def test_chirp_starts_at_initial_frequency_phase():
    sig = SignalParameters(signal_type=SignalType.CHIRP, offset=1, amplitude=2, start_time=1)
    assert sample_signal(sig, [1.0])[0] == pytest.approx(3.0)


def test_unbounded_chirp_keeps_initial_frequency():
    sig = SignalParameters(signal_type=SignalType.CHIRP, initial_frequency=1, target_time=None)
    assert sample_signal(sig, [0.5])[0] == pytest.approx(-1.0)


def test_sample_times_follow_publish_rate():
    t = sample_times(10, None, duration=1)
    assert t.size == 11
    assert t[-1] == pytest.approx(1.0)
    assert sample_times(10, 2.0).size == 21
    assert sample_times(10, 5.0, num_samples=4).size == 4


@pytest.mark.parametrize("kwargs", [
    {"publish_rate": 10, "total_time": None},
    {"publish_rate": 10, "total_time": 1, "num_samples": 0},
    {"publish_rate": 0, "total_time": 1},
])
def test_sample_times_rejects_bad_horizons(kwargs):
    with pytest.raises(ValueError):
        sample_times(**kwargs)


def test_preview_config_has_one_row_per_signal():
    paths = (SignalParameters(signal_type=SignalType.RAMP), SignalParameters(signal_type=SignalType.SINE))
    t, data = preview_config(SignalConfig(publish_rate=4, total_time=2, paths=paths))
    assert data.shape == (2, t.size)
    t, data = preview_config(SignalConfig(total_time=3, paths=()))
    assert data.shape == (0, 4)


def test_single_step_switches_at_step_time():
    config = SingleSignalConfig(signal_type=SingleSignalType.STEP, final_value=2, step_time=1.5, start_time=0)
    np.testing.assert_allclose(sample_single_signal(config, [1.0, 1.5, 3.0]), [0, 2, 2])


def test_single_preview_uses_start_time_for_ramp():
    config = SingleSignalConfig(signal_type=SingleSignalType.RAMP, slope=1, start_time=1, step_time=5,
                                publish_rate=1, total_time=3)
    t, data = preview_single_config(config)
    np.testing.assert_allclose(data, [0, 0, 1, 2])


def test_metrics_of_sine():
    t = np.arange(1000) / 1000.0
    metrics = compute_preview_metrics_single(np.sin(2 * np.pi * 5 * t), 1000.0)
    assert metrics["frequency_hz"] == pytest.approx(5.0, rel=1e-2)
    assert metrics["pkpk"] == pytest.approx(2.0, rel=1e-3)
    assert metrics["rms"] == pytest.approx(1 / np.sqrt(2), rel=1e-2)


def test_metrics_of_constant_signal():
    metrics = compute_preview_metrics_single(np.full(10, 3.0), 10.0)
    assert metrics["final"] == 3.0
    assert metrics["pkpk"] == 0.0
    assert np.isnan(metrics["frequency_hz"])


def test_metrics_per_channel():
    results = compute_metrics_per_channel(np.zeros((3, 5)), 1.0)
    assert len(results) == 3
    assert all(set(r) == set(METRIC_KEYS) for r in results)
    assert compute_metrics_per_channel(None, 1.0) == []
