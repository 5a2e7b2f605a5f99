# device_scoring/score_assembler.py
from typing import Dict

from device_scoring.metric_transforms import cpu_score, net_score, rendering_score

# Fixed weights. Changing these breaks score parity with deployed devices.
NET_WEIGHT = 1.0
CPU_WEIGHT = 0.5
RENDERING_WEIGHT = 1.0


def assemble_score(net: float, cpu: float, rendering: float) -> float:
    """Combine per-dimension scores: compute counts at half weight."""
    return float(NET_WEIGHT * net + CPU_WEIGHT * cpu + RENDERING_WEIGHT * rendering)


def score_breakdown(usage: float, count: float, freq: float,
                    bandwidth: float, rtt: float) -> Dict[str, float]:
    """
    Run every transform and the assembler over one set of readings.

    Returns:
        dict: 'cpu', 'net', 'rendering' per-dimension scores and 'total'.

    Raises:
        InvalidMetricError: If a compute or network reading is not positive.
    """
    cpu = cpu_score(usage, count, freq)
    net = net_score(bandwidth)
    rendering = rendering_score(rtt)
    return {
        "cpu": cpu,
        "net": net,
        "rendering": rendering,
        "total": assemble_score(net, cpu, rendering),
    }
