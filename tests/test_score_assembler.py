"""
Tests for the fixed-weight score assembler.
"""

import pytest

from device_scoring.errors import InvalidMetricError
from device_scoring.metric_transforms import cpu_score, net_score, rendering_score
from device_scoring.score_assembler import (
    assemble_score,
    score_breakdown,
    CPU_WEIGHT,
    NET_WEIGHT,
    RENDERING_WEIGHT,
)


class TestAssembleScore:
    """Test weight application."""

    def test_weights(self):
        """Compute counts at half weight, network and latency at full weight."""
        assert (NET_WEIGHT, CPU_WEIGHT, RENDERING_WEIGHT) == (1.0, 0.5, 1.0)

    def test_combination(self):
        """total = net + cpu/2 + rendering."""
        assert assemble_score(net=1.0, cpu=2.0, rendering=3.0) == pytest.approx(5.0)
        assert assemble_score(0.0, 0.0, 0.0) == 0.0

    def test_cpu_only_contributes_half(self):
        """Doubling cpu should add exactly its previous value / 2."""
        low = assemble_score(0.1, 0.4, 0.2)
        high = assemble_score(0.1, 0.8, 0.2)
        assert high - low == pytest.approx(0.2)


class TestScoreBreakdown:
    """Test the full transform-plus-assembly run."""

    def test_reference_scenario(self):
        """Reference readings should give the fixed regression total."""
        breakdown = score_breakdown(0.5, 4, 2.0, 100, 20)

        assert breakdown["cpu"] == pytest.approx(0.306959, rel=1e-5)
        assert breakdown["net"] == pytest.approx(0.00719450, rel=1e-5)
        assert breakdown["rendering"] == pytest.approx(0.212348, rel=1e-5)
        assert breakdown["total"] == pytest.approx(0.373022, rel=1e-5)

    def test_total_consistent_with_parts(self):
        """Total should be assembled from the reported parts."""
        breakdown = score_breakdown(0.3, 8, 2.4, 250, 45)
        assert breakdown["cpu"] == cpu_score(0.3, 8, 2.4)
        assert breakdown["net"] == net_score(250)
        assert breakdown["rendering"] == rendering_score(45)
        assert breakdown["total"] == pytest.approx(
            breakdown["net"] + breakdown["cpu"] / 2 + breakdown["rendering"]
        )

    def test_zero_rtt_keeps_other_dimensions(self):
        """A zero rtt drops only the latency contribution."""
        breakdown = score_breakdown(0.5, 4, 2.0, 100, 0)
        assert breakdown["rendering"] == 0.0
        assert breakdown["total"] == pytest.approx(breakdown["net"] + breakdown["cpu"] / 2)

    def test_invalid_reading_raises(self):
        """Zero bandwidth should surface as InvalidMetricError."""
        with pytest.raises(InvalidMetricError):
            score_breakdown(0.5, 4, 2.0, 0, 20)
