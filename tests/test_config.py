"""
Tests for configuration loading and device list extraction.
"""

import logging
import pytest
from pathlib import Path

from device_operations.device_id_extract import extract_device_ids
from device_scoring.config import ScoringConfig, load_config


class TestLoadConfig:
    """Test YAML configuration loading."""

    def test_valid_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "local_device_id: L2N_01\n"
            "device_list_path: data/device_list.csv\n"
            "log_level: debug\n"
            "seed: 3\n"
        )
        config = load_config(str(path))

        assert config.local_device_id == "L2N_01"
        assert config.log_level == "DEBUG"
        assert config.logging_level == logging.DEBUG
        assert config.seed == 3
        assert config.fault_templates_path is None
        assert config.report_path == "data/device_scores.csv"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.yaml"))

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("local_device_id: [oops\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(path))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("just a string\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(str(path))

    def test_missing_required_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("local_device_id: L2N_01\n")
        with pytest.raises(ValueError, match="device_list_path"):
            load_config(str(path))

    def test_weights_are_not_configurable(self, tmp_path):
        """Unknown keys, such as scoring weights, are rejected."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "local_device_id: L2N_01\n"
            "device_list_path: devices.csv\n"
            "cpu_weight: 1.0\n"
        )
        with pytest.raises(ValueError, match="cpu_weight"):
            load_config(str(path))

    def test_bad_log_level(self):
        with pytest.raises(ValueError):
            ScoringConfig("L2N_01", "devices.csv", log_level="LOUD")

    def test_bad_seed(self):
        with pytest.raises(ValueError):
            ScoringConfig("L2N_01", "devices.csv", seed=-1)

    @pytest.mark.parametrize("level", ["10", "null"])
    def test_non_string_log_level_in_yaml(self, tmp_path, level):
        """Numeric or empty log levels are rejected as ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "local_device_id: L2N_01\n"
            "device_list_path: devices.csv\n"
            f"log_level: {level}\n"
        )
        with pytest.raises(ValueError, match="log level"):
            load_config(str(path))

    def test_boolean_seed_in_yaml(self, tmp_path):
        """YAML booleans are not seeds."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "local_device_id: L2N_01\n"
            "device_list_path: devices.csv\n"
            "seed: true\n"
        )
        with pytest.raises(ValueError, match="seed"):
            load_config(str(path))

    def test_shipped_config_loads(self):
        """The bundled demo configuration is valid."""
        config = load_config(str(Path(__file__).parent.parent / "data" / "scoring_config.yaml"))
        assert config.local_device_id == "L2N_01"


class TestExtractDeviceIds:
    """Test device list CSV reading."""

    def test_comma_delimited(self, tmp_path):
        path = tmp_path / "devices.csv"
        path.write_text("device_id,layer\nL2N_01,L2\nL3N_01,L3\n")
        assert extract_device_ids(path) == ["L2N_01", "L3N_01"]

    def test_semicolon_and_count(self, tmp_path):
        path = tmp_path / "devices.csv"
        path.write_text("device_id;layer\nL2N_01;L2\n;L3\nL2N_01;L2\nL4N_01;L4\n")
        ids, count = extract_device_ids(path, return_count=True)
        assert ids == ["L2N_01", "L4N_01"]
        assert count == 2

    def test_tab_delimited_custom_column(self, tmp_path):
        path = tmp_path / "devices.tsv"
        path.write_text("node_id\tlayer\nCloudDBServer\tCLOUD\n")
        assert extract_device_ids(path, device_id_column="node_id") == ["CloudDBServer"]

    def test_missing_column(self, tmp_path):
        path = tmp_path / "devices.csv"
        path.write_text("id,layer\nL2N_01,L2\n")
        with pytest.raises(ValueError, match="device_id"):
            extract_device_ids(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            extract_device_ids(tmp_path / "none.csv")
