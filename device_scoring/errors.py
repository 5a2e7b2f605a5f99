# device_scoring/errors.py
from typing import Optional

from device_scoring.resource_kinds import ResourceKind


class ScoringError(Exception):
    """Base class for scoring failures."""
    pass


class MetricUnavailableError(ScoringError):
    """A single resource read failed."""

    def __init__(self, kind: ResourceKind, device_id: Optional[str] = None, reason: str = ""):
        self.kind = kind
        self.device_id = device_id
        self.reason = reason
        message = f"metric '{kind.value}' unavailable"
        if device_id is not None:
            message += f" for device {device_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ResourceNotFoundError(ScoringError):
    """Raised when an error-marked snapshot is scored."""

    def __init__(self, message: str = "resource not found"):
        super().__init__(message)


class InvalidMetricError(ScoringError, ValueError):
    """A transform input is non-positive or non-finite."""

    def __init__(self, metric: str, value: float):
        self.metric = metric
        self.value = value
        super().__init__(f"metric '{metric}' must be a finite positive number, got {value!r}")
