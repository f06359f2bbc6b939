from typing import Dict, List
import numpy as np

METRIC_KEYS = ["min", "max", "mean", "pkpk", "rms", "final", "frequency_hz"]


def compute_preview_metrics_single(sig: np.ndarray, sample_rate: float) -> Dict[str, float]:
    """
    Summary of one previewed reference signal.
    - min/max/mean/pkpk/RMS on the raw samples (RMS includes the offset).
    - final: last sample, i.e. the value the generator holds at the horizon.
    - Frequency: from mid-level rising crossings (interpolated), NaN when the
      signal does not oscillate at least twice.
    """
    metrics = {k: float("nan") for k in METRIC_KEYS}

    if sig is None:
        return metrics
    raw = np.asarray(sig, dtype=float).ravel()
    n = raw.size
    if n == 0:
        return metrics

    vmin = float(np.min(raw))
    vmax = float(np.max(raw))
    metrics["min"] = vmin
    metrics["max"] = vmax
    metrics["mean"] = float(np.mean(raw))
    metrics["pkpk"] = vmax - vmin
    metrics["rms"] = float(np.sqrt(np.mean(raw ** 2)))
    metrics["final"] = float(raw[-1])

    if n < 3 or sample_rate <= 0 or vmax == vmin:
        return metrics

    mid = vmin + 0.5 * (vmax - vmin)
    below = raw[:-1] < mid
    above = raw[1:] >= mid
    idx = np.nonzero(below & above)[0]
    if idx.size >= 2:
        # linear interpolation for fractional crossing index
        denom = raw[idx + 1] - raw[idx]
        frac = np.where(denom == 0, 0.0, (mid - raw[idx]) / np.where(denom == 0, 1.0, denom))
        crossings = idx + frac
        period_samples = float(np.median(np.diff(crossings)))
        if period_samples > 0:
            metrics["frequency_hz"] = float(sample_rate) / period_samples

    return metrics


def compute_metrics_per_channel(data: np.ndarray, sample_rate: float) -> List[Dict[str, float]]:
    results: List[Dict[str, float]] = []
    if data is None:
        return results
    arr = np.asarray(data)
    if arr.ndim == 1:
        results.append(compute_preview_metrics_single(arr, sample_rate))
    elif arr.ndim == 2:
        for ch in range(arr.shape[0]):
            results.append(compute_preview_metrics_single(arr[ch], sample_rate))
    else:
        results.append(compute_preview_metrics_single(arr.ravel(), sample_rate))
    return results
