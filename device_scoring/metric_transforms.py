# device_scoring/metric_transforms.py
"""
Per-dimension scores derived from raw resource readings.

All three functions are pure. Compute and network inputs must be strictly
positive and finite; anything else raises InvalidMetricError instead of
letting the negative-exponent power laws produce inf/nan.
"""
import numpy as np

from device_scoring.errors import InvalidMetricError


def _require_positive(metric: str, value: float) -> float:
    value = float(value)
    if not np.isfinite(value) or value <= 0:
        raise InvalidMetricError(metric, value)
    return value


def cpu_score(usage: float, count: float, freq: float) -> float:
    """
    Compute score: mean of three power-law terms, one per CPU dimension.

    Args:
        usage: CPU utilisation fraction.
        count: Number of CPU cores.
        freq: CPU clock frequency.

    Returns:
        float: Compute score.

    Raises:
        InvalidMetricError: If any input is non-positive or non-finite.
    """
    usage = _require_positive("cpuUsage", usage)
    count = _require_positive("cpuCount", count)
    freq = _require_positive("cpuFreq", freq)

    freq_term = 1 / (5.66 * np.power(freq, -0.66))
    usage_term = 1 / (3.22 * np.power(usage, -0.241))
    count_term = 1 / (4 * np.power(count, -0.3))
    return float((freq_term + usage_term + count_term) / 3)


def net_score(bandwidth: float) -> float:
    """Network throughput score, strictly increasing in bandwidth."""
    bandwidth = _require_positive("netBandwidth", bandwidth)
    return float(1 / (8770 * np.power(bandwidth, -0.9)))


def rendering_score(rtt: float) -> float:
    """
    Latency score toward the requesting peer.

    Non-positive rtt carries no signal and maps to 0.0. Positive rtt is
    strictly decreasing: higher latency, lower score.
    """
    rtt = float(rtt)
    if np.isnan(rtt):
        raise InvalidMetricError("rtt", rtt)
    if rtt <= 0:
        return 0.0
    return float(0.77 * np.power(rtt, -0.43))
