"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Dict, List, Optional

from device_scoring.errors import MetricUnavailableError
from device_scoring.resource_kinds import ResourceKind
from device_scoring.resource_provider import ResourceProvider, StaticResourceProvider


class RecordingProvider(ResourceProvider):
    """Static readings that can be made to fail on one metric; records every read."""

    def __init__(self, readings: Dict[str, float], rtt_by_device: Dict[str, float],
                 fail_on: Optional[ResourceKind] = None, exception: Optional[Exception] = None):
        self.inner = StaticResourceProvider(readings, rtt_by_device)
        self.fail_on = fail_on
        self.exception = exception
        self.calls: List[tuple] = []

    def read_metric(self, kind, device_id=None):
        self.calls.append((kind, device_id))
        if kind == self.fail_on:
            if self.exception is not None:
                raise self.exception
            raise MetricUnavailableError(kind, device_id, "simulated failure")
        return self.inner.read_metric(kind, device_id)


@pytest.fixture
def reference_readings() -> Dict[str, float]:
    """Local readings of the reference scenario (rtt is per peer)."""
    return {
        "cpuUsage": 0.5,
        "cpuCount": 4,
        "cpuFreq": 2.0,
        "netBandwidth": 100,
    }


@pytest.fixture
def rtt_table() -> Dict[str, float]:
    """Round-trip times toward known peers, in milliseconds."""
    return {
        "L2N_01": 20.0,
        "L3N_01": 60.0,
        "CloudDBServer": 0.0,
    }


@pytest.fixture
def static_provider(reference_readings, rtt_table) -> StaticResourceProvider:
    return StaticResourceProvider(reference_readings, rtt_table)


@pytest.fixture
def make_recording_provider(reference_readings, rtt_table):
    """Factory for a RecordingProvider over the reference readings."""
    def _make(fail_on: Optional[ResourceKind] = None, exception: Optional[Exception] = None):
        return RecordingProvider(reference_readings, rtt_table, fail_on=fail_on, exception=exception)
    return _make


@pytest.fixture
def reference_snapshot() -> Dict[str, float]:
    """Complete snapshot mapping of the reference scenario."""
    return {
        "cpuUsage": 0.5,
        "cpuCount": 4.0,
        "cpuFreq": 2.0,
        "netBandwidth": 100.0,
        "rtt": 20.0,
    }

