# device_scoring/simulated_provider.py
"""
Resource provider backed by layer profiles and seeded noise.

Local metrics come from the local device's layer profile; rtt toward a peer is
drawn from the peer's layer profile. Every read advances the fault injector by
one step.
"""
import logging
import threading
import zlib
from typing import Dict, Optional, Any

from device_scoring.device_profiler import get_baseline_and_noise, layer_profiles, metric_ceilings, metric_floors
from device_scoring.errors import MetricUnavailableError
from device_scoring.fault_injector import YAMLFaultInjector
from device_scoring.metric_generator import MetricGenerator
from device_scoring.resource_kinds import METRIC_NAMES, ResourceKind
from device_scoring.resource_provider import ResourceProvider

logger = logging.getLogger(__name__)


class SimulatedResourceProvider(ResourceProvider):

    def __init__(self, local_device_id: str,
                 profiles: Optional[Dict[str, Any]] = None,
                 seed: Optional[int] = None,
                 fault_injector: Optional[YAMLFaultInjector] = None):
        """
        Args:
            local_device_id: Device whose compute and bandwidth readings are simulated.
            profiles: Layer profiles (default: built-in layer_profiles).
            seed: RNG seed for reproducibility.
            fault_injector: Optional injector applied to every read.

        Raises:
            ValueError: If the local device's layer is unknown.
        """
        self.local_device_id = local_device_id
        self.profiles = profiles if profiles is not None else layer_profiles
        self.seed = seed
        self.fault_injector = fault_injector
        self.floors = [metric_floors[m] for m in METRIC_NAMES]
        self.ceilings = [metric_ceilings.get(m, float("inf")) for m in METRIC_NAMES]
        self._lock = threading.Lock()

        self.local_generator = self._make_generator(local_device_id)
        self.peer_generators: Dict[str, MetricGenerator] = {}
        self.reads = 0

    def _make_generator(self, device_id: str) -> MetricGenerator:
        baselines, noise_scales = get_baseline_and_noise(self.profiles, device_id)
        # per-device stream, stable across runs for a fixed seed
        seed = None if self.seed is None else [self.seed, zlib.crc32(device_id.encode("utf-8"))]
        return MetricGenerator(baselines, noise_scales, seed=seed, floors=self.floors,
                               ceilings=self.ceilings)

    def read_metric(self, kind: ResourceKind, device_id: Optional[str] = None) -> float:
        with self._lock:
            self.reads += 1
            if self.fault_injector is not None:
                self.fault_injector.advance()

            if kind.is_peer_relative:
                if device_id is None:
                    raise MetricUnavailableError(kind, reason="no target device given")
                if device_id not in self.peer_generators:
                    try:
                        self.peer_generators[device_id] = self._make_generator(device_id)
                    except ValueError as e:
                        raise MetricUnavailableError(kind, device_id, str(e)) from e
                reading = self.peer_generators[device_id].step()
            else:
                reading = self.local_generator.step()

            value = float(reading[METRIC_NAMES.index(kind.value)])
            if self.fault_injector is not None:
                value = self.fault_injector.apply(kind, value, device_id)

        logger.debug(f"Simulated {kind.value}={value:.4f} (local={self.local_device_id}, target={device_id})")
        return value
