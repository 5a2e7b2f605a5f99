# device_scoring/snapshot_builder.py
"""
Builds a per-request resource snapshot for one target device.

Metrics are fetched in FETCH_ORDER. The first failed read ends the build: the
snapshot is marked with the error entry and the remaining metrics are never
requested. No retries happen here.
"""
import logging
from typing import Dict, Optional, Mapping, Any

from device_scoring.errors import MetricUnavailableError
from device_scoring.resource_kinds import ERROR_KEY, FETCH_ORDER, METRIC_NAMES, ResourceKind
from device_scoring.resource_provider import ResourceProvider

logger = logging.getLogger(__name__)

# Value stored under the error key; matches the legacy invalid score
ERROR_MARKER = 0.0


class ResourceSnapshot:
    """Readings for one device at one scoring moment, complete or error-marked."""

    def __init__(self, device_id: str, readings: Optional[Dict[str, float]] = None,
                 error: Optional[MetricUnavailableError] = None):
        self.device_id = device_id
        self.readings: Dict[str, float] = dict(readings or {})
        self.error = error

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def failed_metric(self) -> Optional[ResourceKind]:
        return self.error.kind if self.error is not None else None

    def to_dict(self) -> Dict[str, float]:
        """Plain mapping form; failed snapshots carry the error key."""
        data = dict(self.readings)
        if not self.is_valid:
            data[ERROR_KEY] = ERROR_MARKER
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], device_id: str = "") -> "ResourceSnapshot":
        readings = {k: v for k, v in data.items() if k != ERROR_KEY}
        error = None
        if ERROR_KEY in data:
            missing = [m for m in METRIC_NAMES if m not in readings]
            kind = ResourceKind(missing[0]) if missing else ResourceKind.NET_RTT
            error = MetricUnavailableError(kind, device_id or None, "snapshot marked as error")
        return cls(device_id, readings, error)

    def __repr__(self) -> str:
        status = "ok" if self.is_valid else f"error({self.failed_metric.value})"
        return f"ResourceSnapshot(device_id={self.device_id!r}, status={status}, readings={self.readings})"


def build_snapshot(provider: ResourceProvider, device_id: str) -> ResourceSnapshot:
    """
    Read all five metrics for a device, stopping at the first failure.

    Args:
        provider: Source of metric readings.
        device_id: Peer device rtt is measured against.

    Returns:
        ResourceSnapshot: Complete, or error-marked with the readings fetched
        before the failing one.
    """
    snapshot = ResourceSnapshot(device_id)
    for kind in FETCH_ORDER:
        try:
            value = float(provider.read_metric(kind, device_id if kind.is_peer_relative else None))
        except MetricUnavailableError as e:
            snapshot.error = e
        except Exception as e:
            # any provider failure counts as an unavailable metric
            snapshot.error = MetricUnavailableError(kind, device_id, f"{type(e).__name__}: {e}")
            snapshot.error.__cause__ = e

        if snapshot.error is not None:
            logger.warning(
                f"Snapshot for {device_id} stopped at '{kind.value}': {snapshot.error}"
            )
            return snapshot
        snapshot.readings[kind.value] = value

    logger.debug(f"Snapshot for {device_id} complete: {snapshot.readings}")
    return snapshot
