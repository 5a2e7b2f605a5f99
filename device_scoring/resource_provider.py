# device_scoring/resource_provider.py
"""
Resource provider contract consumed by the scoring engine.

Providers return one numeric reading per call. The latency target is passed
with the read itself, so a provider shared between threads never carries a
"current target" between two calls.
"""
import threading
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Union

from device_scoring.errors import MetricUnavailableError
from device_scoring.resource_kinds import ResourceKind, kind_from_name


class ResourceProvider(ABC):

    @abstractmethod
    def read_metric(self, kind: ResourceKind, device_id: Optional[str] = None) -> float:
        """
        Read one metric.

        Args:
            kind: Metric to read.
            device_id: Peer to measure against. Required for ResourceKind.NET_RTT,
                ignored for local metrics.

        Raises:
            MetricUnavailableError: If the reading cannot be obtained.
        """
        raise NotImplementedError


class StaticResourceProvider(ResourceProvider):
    """Fixed local readings and a per-peer rtt table."""

    def __init__(self, readings: Mapping[Union[str, ResourceKind], float],
                 rtt_by_device: Optional[Mapping[str, float]] = None):
        self.readings: Dict[ResourceKind, float] = {}
        for key, value in readings.items():
            kind = key if isinstance(key, ResourceKind) else kind_from_name(key)
            if kind.is_peer_relative:
                raise ValueError("rtt is peer-relative; pass it through rtt_by_device")
            self.readings[kind] = float(value)
        self.rtt_by_device: Dict[str, float] = {
            device: float(value) for device, value in (rtt_by_device or {}).items()
        }

    def read_metric(self, kind: ResourceKind, device_id: Optional[str] = None) -> float:
        if kind.is_peer_relative:
            if device_id is None:
                raise MetricUnavailableError(kind, reason="no target device given")
            if device_id not in self.rtt_by_device:
                raise MetricUnavailableError(kind, device_id, "no rtt recorded")
            return self.rtt_by_device[device_id]

        if kind not in self.readings:
            raise MetricUnavailableError(kind, device_id, "no reading recorded")
        return self.readings[kind]


class LegacyProviderAdapter(ResourceProvider):
    """
    Wraps a provider that measures latency against a mutable target device.

    The wrapped object exposes ``set_device_id(device_id)`` and
    ``get_resource(kind)``. Setting the target and reading rtt happen under
    one lock, so concurrent snapshot builds sharing the wrapped provider
    always get the rtt of the device they asked for.
    """

    def __init__(self, legacy_provider):
        self.legacy_provider = legacy_provider
        self._target_lock = threading.Lock()

    def read_metric(self, kind: ResourceKind, device_id: Optional[str] = None) -> float:
        if not kind.is_peer_relative:
            return float(self.legacy_provider.get_resource(kind))

        if device_id is None:
            raise MetricUnavailableError(kind, reason="no target device given")
        with self._target_lock:
            self.legacy_provider.set_device_id(device_id)
            return float(self.legacy_provider.get_resource(kind))
