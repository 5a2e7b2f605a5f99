# device_scoring/scoring.py
"""
Scoring facade used by the orchestrator to rank candidate devices.

score_by_id keeps the legacy contract: any failure collapses to INVALID_SCORE.
score() returns a ScoreResult that keeps "no score" apart from a real 0.0.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Tuple, Union, Any

from device_scoring.errors import MetricUnavailableError, ResourceNotFoundError, ScoringError
from device_scoring.resource_kinds import ERROR_KEY, ResourceKind
from device_scoring.resource_provider import ResourceProvider
from device_scoring.score_assembler import score_breakdown
from device_scoring.snapshot_builder import ResourceSnapshot, build_snapshot

logger = logging.getLogger(__name__)

# Legacy sentinel for "no score"
INVALID_SCORE = 0.0

SnapshotLike = Union[ResourceSnapshot, Mapping[str, Any]]


class ScoreResult:
    """Either a score or the error that prevented one."""

    def __init__(self, score: Optional[float] = None, error: Optional[ScoringError] = None):
        if (score is None) == (error is None):
            raise ValueError("ScoreResult needs exactly one of score or error")
        self.score = score
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        if self.error is not None:
            raise self.error
        return self.score

    def value_or_sentinel(self) -> float:
        return self.score if self.ok else INVALID_SCORE

    def __repr__(self) -> str:
        if self.ok:
            return f"ScoreResult(score={self.score})"
        return f"ScoreResult(error={self.error!r})"


class Scoring(ABC):
    """Contract every scoring strategy exposes to the orchestrator."""

    @abstractmethod
    def score(self, device_id: str) -> ScoreResult:
        raise NotImplementedError

    @abstractmethod
    def score_by_id(self, device_id: str) -> float:
        raise NotImplementedError

    @abstractmethod
    def get_snapshot(self, device_id: str) -> Tuple[Dict[str, float], Optional[MetricUnavailableError]]:
        raise NotImplementedError

    @abstractmethod
    def score_from_snapshot(self, snapshot: SnapshotLike) -> float:
        raise NotImplementedError


class DefaultScoring(Scoring):
    """
    Network throughput plus half-weighted compute plus latency toward the peer.

    The provider is held by the instance; callers that share one provider
    across threads need a provider whose reads are independent per call
    (see LegacyProviderAdapter for the two-step kind).
    """

    def __init__(self, provider: ResourceProvider):
        self.provider = provider

    # -------------------------------------------------------------------------
    # Snapshot retrieval
    # -------------------------------------------------------------------------

    def get_resource_snapshot(self, device_id: str) -> ResourceSnapshot:
        return build_snapshot(self.provider, device_id)

    def get_snapshot(self, device_id: str) -> Tuple[Dict[str, float], Optional[MetricUnavailableError]]:
        """
        Raw readings for a device, e.g. for caching and re-scoring later.

        Returns:
            tuple: (mapping form of the snapshot, None) on success, or
            (error-marked mapping, MetricUnavailableError) when a read failed.
        """
        snapshot = self.get_resource_snapshot(device_id)
        return snapshot.to_dict(), snapshot.error

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def score_from_snapshot(self, snapshot: SnapshotLike) -> float:
        """
        Score previously retrieved readings.

        Field presence is not re-validated; a snapshot missing a metric is a
        caller error and surfaces as KeyError.

        Raises:
            ResourceNotFoundError: If the snapshot carries the error marker.
            InvalidMetricError: If a compute or network reading is not positive.
        """
        if isinstance(snapshot, ResourceSnapshot):
            snapshot = snapshot.to_dict()
        if ERROR_KEY in snapshot:
            raise ResourceNotFoundError()

        breakdown = score_breakdown(
            snapshot[ResourceKind.CPU_USAGE.value],
            snapshot[ResourceKind.CPU_COUNT.value],
            snapshot[ResourceKind.CPU_FREQ.value],
            snapshot[ResourceKind.NET_BANDWIDTH.value],
            snapshot[ResourceKind.NET_RTT.value],
        )
        logger.debug(f"Score breakdown: {breakdown}")
        return breakdown["total"]

    def score(self, device_id: str) -> ScoreResult:
        """Build a snapshot and score it, reporting failures explicitly."""
        snapshot = self.get_resource_snapshot(device_id)
        if not snapshot.is_valid:
            return ScoreResult(error=snapshot.error)
        try:
            return ScoreResult(score=self.score_from_snapshot(snapshot))
        except ScoringError as e:
            logger.warning(f"Cannot score {device_id}: {e}")
            return ScoreResult(error=e)

    def score_by_id(self, device_id: str) -> float:
        """Score a device, returning INVALID_SCORE when it cannot be scored."""
        return self.score(device_id).value_or_sentinel()
