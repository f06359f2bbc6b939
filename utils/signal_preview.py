"""Sampled preview of configured reference signals.

Evaluates what the generator publishes for a config, sampled at the publish
rate, so a host can draw it before pressing Start.
"""
import math
from typing import Optional, Tuple

import numpy as np
from scipy.signal import chirp, sawtooth, square

from model.signal_config import SignalConfig, SignalParameters, SignalType
from model.single_signal_config import SingleSignalConfig, SingleSignalType


def _active(t: np.ndarray, start: float, end: Optional[float]) -> np.ndarray:
    mask = t >= start
    if end is not None:
        mask &= t < end
    return mask


def _wave(kind: SignalType, angle: np.ndarray) -> np.ndarray:
    if kind is SignalType.SINE:
        return np.sin(angle)
    if kind is SignalType.SQUARE:
        return square(angle)
    if kind is SignalType.TRIANGLE:
        return sawtooth(angle, 0.5)
    return sawtooth(angle)


def _chirp(local: np.ndarray, params: SignalParameters) -> np.ndarray:
    # Linear sweep reaching target_frequency target_time seconds after start
    if params.target_time is None or params.target_time <= 0:
        return np.cos(2 * np.pi * params.initial_frequency * local + math.radians(params.phase))
    return chirp(local, f0=params.initial_frequency, t1=params.target_time,
                 f1=params.target_frequency, method="linear", phi=params.phase)


def sample_signal(params: SignalParameters, t) -> np.ndarray:
    """Value of one signal at times `t` (seconds)."""
    t = np.asarray(t, dtype=float)
    kind = params.signal_type
    start, end = params.start_time, params.end_time

    if kind is SignalType.STEP:
        return np.where(_active(t, start, end), params.final_value, params.initial_value)

    if kind is SignalType.RAMP:
        stop = math.inf if end is None else max(start, end)
        return params.initial_value + params.slope * (np.clip(t, start, stop) - start)

    if kind is SignalType.SPLINE:
        if end is None or end <= start:
            return np.where(t >= start, params.final_value, params.initial_value)
        s = np.clip((t - start) / (end - start), 0.0, 1.0)
        # cubic with zero slope at both ends
        return params.initial_value + (params.final_value - params.initial_value) * s * s * (3.0 - 2.0 * s)

    local = t - start
    if kind is SignalType.CHIRP:
        wave = _chirp(local, params)
    else:
        wave = _wave(kind, 2 * np.pi * params.frequency * local + math.radians(params.phase))
    return np.where(_active(t, start, end), params.offset + params.amplitude * wave, params.offset)


def _single_as_parameters(config: SingleSignalConfig) -> SignalParameters:
    start = config.step_time if config.signal_type is SingleSignalType.STEP else config.start_time
    return SignalParameters(
        signal_type=SignalType(config.signal_type.value),
        initial_value=config.initial_value,
        final_value=config.final_value,
        start_time=start,
        end_time=None,
        slope=config.slope,
        offset=config.offset,
        amplitude=config.amplitude,
        frequency=config.frequency,
        phase=0.0,
        initial_frequency=config.initial_frequency,
        target_frequency=config.target_frequency,
        target_time=config.target_time,
    )


def sample_single_signal(config: SingleSignalConfig, t) -> np.ndarray:
    return sample_signal(_single_as_parameters(config), t)


def sample_times(publish_rate: float, total_time: Optional[float], duration: Optional[float] = None,
                 num_samples: Optional[int] = None) -> np.ndarray:
    """Sample instants over the preview horizon.

    The horizon is `duration` if given, else `total_time`. Without
    `num_samples` the instants follow the publish rate.
    """
    horizon = duration if duration is not None else total_time
    if horizon is None or not math.isfinite(horizon) or horizon < 0:
        raise ValueError("preview needs a finite duration when total time is unbounded")
    if num_samples is not None:
        if num_samples < 1:
            raise ValueError(f"num_samples must be positive, got {num_samples}")
        return np.linspace(0.0, horizon, num_samples)
    if publish_rate <= 0:
        raise ValueError(f"publish rate must be positive, got {publish_rate}")
    count = int(math.floor(horizon * publish_rate + 1e-9)) + 1
    return np.arange(count) / publish_rate


def preview_config(config: SignalConfig, duration: Optional[float] = None,
                   num_samples: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Return (t, data) with one row of data per configured signal."""
    t = sample_times(config.publish_rate, config.total_time, duration, num_samples)
    if not config.paths:
        return t, np.empty((0, t.size))
    return t, np.vstack([sample_signal(path, t) for path in config.paths])


def preview_single_config(config: SingleSignalConfig, duration: Optional[float] = None,
                          num_samples: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    t = sample_times(config.publish_rate, config.total_time, duration, num_samples)
    return t, sample_single_signal(config, t)
