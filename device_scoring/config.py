# device_scoring/config.py
import logging
import os
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = "data/scoring_config.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_CONFIG_KEYS = (
    "local_device_id", "device_list_path", "report_path", "log_level",
    "seed", "fault_templates_path", "layer_profiles_path",
)


class ScoringConfig:
    """Settings for the scoring demo runner. Scoring weights are not configurable."""

    def __init__(self,
                 local_device_id: str,
                 device_list_path: str,
                 report_path: str = "data/device_scores.csv",
                 log_level: str = "INFO",
                 seed: Optional[int] = None,
                 fault_templates_path: Optional[str] = None,
                 layer_profiles_path: Optional[str] = None):
        self.local_device_id = local_device_id
        self.device_list_path = device_list_path
        self.report_path = report_path
        if not isinstance(log_level, str):
            raise ValueError(f"Unknown log level: {log_level!r}. Expected one of {_LOG_LEVELS}")
        self.log_level = log_level.upper()
        self.seed = seed
        self.fault_templates_path = fault_templates_path
        self.layer_profiles_path = layer_profiles_path

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {log_level}. Expected one of {_LOG_LEVELS}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0):
            raise ValueError(f"seed must be a non-negative integer, got {seed!r}")

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def load_config(path: str = DEFAULT_CONFIG_PATH) -> ScoringConfig:
    """
    Load the YAML configuration file.

    Relative paths inside the file are kept as written; they resolve against
    the working directory, like the rest of the data files.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the file has invalid format or misses required keys.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    if not os.path.isfile(path):
        raise ValueError(f"Path is not a file: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML format in config: {e}") from e

    if not isinstance(content, dict):
        raise ValueError("YAML config should define a mapping (dict).")

    missing = [key for key in ("local_device_id", "device_list_path") if key not in content]
    if missing:
        raise ValueError(f"Config is missing required keys: {missing}")

    unknown = sorted(set(content) - set(_CONFIG_KEYS))
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    return ScoringConfig(**content)
