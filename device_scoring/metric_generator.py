# device_scoring/metric_generator.py
import numpy as np
from typing import List, Optional

from device_scoring.resource_kinds import METRIC_NAMES


class MetricGenerator:
    def __init__(self, baselines: List[float], noise_levels: List[float],
                 seed: Optional[int], floors: Optional[List[float]] = None,
                 ceilings: Optional[List[float]] = None):
        if len(baselines) != len(METRIC_NAMES) or len(noise_levels) != len(METRIC_NAMES):
            raise ValueError(f"Expected {len(METRIC_NAMES)} baselines and noise levels, one per metric")
        self.metric_names = METRIC_NAMES
        self.baselines = np.array(baselines, dtype=float)
        self.noise_levels = np.array(noise_levels, dtype=float)
        self.floors = np.array(floors, dtype=float) if floors is not None else np.zeros_like(self.baselines)
        self.ceilings = np.array(ceilings, dtype=float) if ceilings is not None else np.full_like(self.baselines, np.inf)
        self.rng = np.random.default_rng(seed)

    def step(self) -> np.ndarray:
        """One noisy reading per metric, in fetch order."""
        noise = self.rng.normal(0, self.noise_levels)
        new_level = np.minimum(np.maximum(self.baselines + noise, self.floors), self.ceilings)
        count_idx = self.metric_names.index("cpuCount")
        # core count is a whole number
        new_level[count_idx] = max(np.round(new_level[count_idx]), self.floors[count_idx])
        return new_level
