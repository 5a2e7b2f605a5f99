# device_scoring/fault_injector.py
"""
YAML-driven read-fault injection for the simulated resource provider.

Each template describes a fault that starts with a Bernoulli probability per
step and lasts for a sampled number of steps. While active, reads of the
affected metrics either fail (``unavailable``) or return a pinned value
(``stuck_at``).
"""
import logging
import os
from collections import deque
import numpy as np
import yaml
from typing import Deque, List, Optional, Dict, Any
from enum import Enum

from device_scoring.errors import MetricUnavailableError
from device_scoring.resource_kinds import METRIC_NAMES, ResourceKind

logger = logging.getLogger(__name__)

# Oldest fault records are dropped past this many
FAULT_HISTORY_LIMIT = 1000


class FaultType(Enum):
    UNAVAILABLE = "unavailable"
    STUCK_AT = "stuck_at"

class OccurrenceModel(Enum):
    BERNOULLI = "bernoulli"

class DurationDistribution(Enum):
    GEOMETRIC = "geometric"
    DETERMINISTIC = "deterministic"


class ReadFaultTemplate:
    def __init__(self, template_config: Dict[str, Any]):
        try:
            self.id = template_config['id']
            self.name = template_config['name']
            self.type = FaultType(template_config['type'])
            self.affected_metrics = list(template_config['affected_metrics'])
            occurrence = template_config['occurrence_model']
            duration = template_config['duration_dist']
        except KeyError as e:
            raise ValueError(f"Fault template is missing field {e}") from e

        unknown = [m for m in self.affected_metrics if m not in METRIC_NAMES]
        if unknown:
            raise ValueError(f"Fault template {self.id} names unknown metrics: {unknown}")

        # Parse occurrence model
        self.occurrence_model = OccurrenceModel(occurrence['type'])
        self.occurrence_p = float(occurrence['p'])

        # Parse duration distribution
        self.duration_dist = DurationDistribution(duration['type'])
        if self.duration_dist == DurationDistribution.GEOMETRIC:
            self.duration_p = float(duration['p'])
        elif self.duration_dist == DurationDistribution.DETERMINISTIC:
            self.duration_steps = int(duration['n_steps'])

        self.stuck_value = template_config.get('stuck_value', None)
        if self.type == FaultType.STUCK_AT and self.stuck_value is None:
            raise ValueError(f"Fault template {self.id} of type stuck_at needs a stuck_value")
        self.note = template_config.get('note', '')

    def sample_occurrence(self, rng: np.random.Generator) -> bool:
        """Sample whether this fault occurs in the current step."""
        if self.occurrence_model == OccurrenceModel.BERNOULLI:
            return rng.random() < self.occurrence_p
        return False

    def sample_duration(self, rng: np.random.Generator) -> int:
        """Sample the duration of this fault."""
        if self.duration_dist == DurationDistribution.GEOMETRIC:
            return int(rng.geometric(self.duration_p))
        elif self.duration_dist == DurationDistribution.DETERMINISTIC:
            return self.duration_steps
        return 1


class YAMLFaultInjector:
    def __init__(self, templates: List[ReadFaultTemplate], seed: Optional[int],
                 history_limit: int = FAULT_HISTORY_LIMIT):
        if history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {history_limit}")
        self.templates = templates
        self.rng = np.random.default_rng(seed)
        self.active_faults: Dict[str, Dict[str, Any]] = {}  # fault_id -> template, remaining_steps
        self.fault_history: Deque[Dict[str, Any]] = deque(maxlen=history_limit)
        self.step_count = 0

    @classmethod
    def from_yaml(cls, yaml_config_path: str, seed: Optional[int]) -> "YAMLFaultInjector":
        """
        Build an injector from a YAML file with a top-level 'fault_templates' list.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the YAML is invalid or a template is malformed.
        """
        if not os.path.isfile(yaml_config_path):
            raise FileNotFoundError(f"Fault template file not found: {yaml_config_path}")
        try:
            with open(yaml_config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in fault template: {e}") from e

        if not isinstance(config, dict):
            raise ValueError("YAML fault template should define a mapping (dict).")

        templates = [ReadFaultTemplate(t) for t in (config.get('fault_templates') or [])]
        return cls(templates, seed)

    def advance(self) -> None:
        """Expire finished faults, then sample new ones for this step."""
        finished = [fid for fid, data in self.active_faults.items() if data['remaining_steps'] <= 0]
        for fault_id in finished:
            logger.info(f"Ending fault: {self.active_faults[fault_id]['template'].name}")
            del self.active_faults[fault_id]

        for template in self.templates:
            if template.id not in self.active_faults and template.sample_occurrence(self.rng):
                duration = template.sample_duration(self.rng)
                self.active_faults[template.id] = {
                    'template': template,
                    'remaining_steps': duration,
                    'start_step': self.step_count
                }
                self.fault_history.append({
                    'fault_id': template.id,
                    'fault_name': template.name,
                    'start_step': self.step_count,
                    'affected_metrics': template.affected_metrics,
                    'duration': duration
                })
                logger.info(f"Starting fault: {template.name} for {duration} steps")

        for data in self.active_faults.values():
            data['remaining_steps'] -= 1
        self.step_count += 1

    def apply(self, kind: ResourceKind, value: float, device_id: Optional[str] = None) -> float:
        """Return the reading as seen through active faults, or raise if one blocks it."""
        for data in self.active_faults.values():
            template = data['template']
            if kind.value not in template.affected_metrics:
                continue
            if template.type == FaultType.UNAVAILABLE:
                raise MetricUnavailableError(kind, device_id, f"injected fault {template.name}")
            if template.type == FaultType.STUCK_AT:
                value = float(template.stuck_value)
        return value

    def get_fault_status(self) -> Dict[str, Any]:
        """Get current fault status."""
        active_faults = []
        for fault_id, fault_data in self.active_faults.items():
            active_faults.append({
                'fault_id': fault_id,
                'fault_name': fault_data['template'].name,
                'remaining_steps': fault_data['remaining_steps'],
                'affected_metrics': fault_data['template'].affected_metrics
            })

        return {
            'active_faults': active_faults,
            'any_active': len(active_faults) > 0
        }
