# device_scoring/resource_kinds.py
from enum import Enum
from typing import List


class ResourceKind(Enum):
    """Measurable device quantities. The value doubles as the snapshot field name."""
    CPU_USAGE = "cpuUsage"
    CPU_COUNT = "cpuCount"
    CPU_FREQ = "cpuFreq"
    NET_BANDWIDTH = "netBandwidth"
    NET_RTT = "rtt"

    @property
    def is_peer_relative(self) -> bool:
        # rtt is the only reading measured against a specific peer
        return self is ResourceKind.NET_RTT


# Fetch order used by the snapshot builder
FETCH_ORDER: List[ResourceKind] = [
    ResourceKind.CPU_USAGE,
    ResourceKind.CPU_COUNT,
    ResourceKind.CPU_FREQ,
    ResourceKind.NET_BANDWIDTH,
    ResourceKind.NET_RTT,
]

METRIC_NAMES: List[str] = [kind.value for kind in FETCH_ORDER]

ERROR_KEY = "error"


def kind_from_name(name: str) -> ResourceKind:
    """Look up a ResourceKind by its snapshot field name."""
    try:
        return ResourceKind(name)
    except ValueError:
        raise ValueError(f"Unknown metric name: {name}. Expected one of {METRIC_NAMES}") from None
