# device_scoring/device_profiler.py
import os
from typing import Dict, Any

import yaml

from device_scoring.resource_kinds import METRIC_NAMES


# cpuUsage as fraction: x/100, cpuFreq in GHz, netBandwidth in Mbit/s, rtt in milliseconds
layer_profiles: Dict[str, Dict[str, Dict[str, float]]] = {
    "CLOUD": {
        "baseline": {'cpuUsage': 0.09, 'cpuCount': 32, 'cpuFreq': 3.2, 'netBandwidth': 1000.0, 'rtt': 22.8},
        "noise":    {'cpuUsage': 0.05, 'cpuCount': 0,  'cpuFreq': 0.1, 'netBandwidth': 50.0,   'rtt': 5}
    },
    "L1": {
        "baseline": {'cpuUsage': 0.45, 'cpuCount': 16, 'cpuFreq': 2.8, 'netBandwidth': 500.0, 'rtt': 20},
        "noise":    {'cpuUsage': 0.12, 'cpuCount': 0,  'cpuFreq': 0.1, 'netBandwidth': 40.0,  'rtt': 6}
    },
    "L2": {
        "baseline": {'cpuUsage': 0.40, 'cpuCount': 8, 'cpuFreq': 2.4, 'netBandwidth': 200.0, 'rtt': 45},
        "noise":    {'cpuUsage': 0.2,  'cpuCount': 0, 'cpuFreq': 0.2, 'netBandwidth': 30.0,  'rtt': 10}
    },
    "L3": {
        "baseline": {'cpuUsage': 0.35, 'cpuCount': 4, 'cpuFreq': 1.8, 'netBandwidth': 100.0, 'rtt': 60},
        "noise":    {'cpuUsage': 0.25, 'cpuCount': 0, 'cpuFreq': 0.2, 'netBandwidth': 20.0,  'rtt': 15}
    },
    "L4": {
        "baseline": {'cpuUsage': 0.25, 'cpuCount': 2, 'cpuFreq': 1.2, 'netBandwidth': 20.0, 'rtt': 75},
        "noise":    {'cpuUsage': 0.45, 'cpuCount': 0, 'cpuFreq': 0.1, 'netBandwidth': 5.0,  'rtt': 20}
    }
}

# Readings never drop below these; the transforms need strictly positive input
metric_floors: Dict[str, float] = {'cpuUsage': 0.01, 'cpuCount': 1, 'cpuFreq': 0.1, 'netBandwidth': 0.1, 'rtt': 0.1}
# cpuUsage is a fraction of total capacity
metric_ceilings: Dict[str, float] = {'cpuUsage': 1.0}


def layer_for_device(device_id: str) -> str:
    """Infer the layer from the device identifier."""
    if device_id == "CloudDBServer":
        return "CLOUD"
    elif device_id == "L1Node" or device_id.startswith("L1N"):
        return "L1"
    elif device_id.startswith("L2N"):
        return "L2"
    elif device_id.startswith("L3N"):
        return "L3"
    elif device_id.startswith("L4N"):
        return "L4"
    else:
        raise ValueError(f"Unknown device layer for {device_id}")


def get_baseline_and_noise(profiles: Dict[str, Any], device_id: str):
    """Return (baseline, noise) lists in fetch order for the device's layer."""
    layer = layer_for_device(device_id)
    if layer not in profiles:
        raise ValueError(f"No profile for layer {layer} (device {device_id})")
    baseline = profiles[layer]["baseline"]
    noise = profiles[layer]["noise"]
    return [float(baseline[m]) for m in METRIC_NAMES], [float(noise[m]) for m in METRIC_NAMES]


def load_layer_profiles(path: str) -> Dict[str, Any]:
    """
    Load layer profiles from YAML and merge them over the built-in ones.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the YAML is invalid or a layer misses a metric.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Layer profile file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML format in layer profiles: {e}") from e

    if not isinstance(content, dict) or not isinstance(content.get("layer_profiles"), dict):
        raise ValueError("Layer profile file should define a 'layer_profiles' mapping.")

    profiles = {layer: {k: dict(v) for k, v in data.items()} for layer, data in layer_profiles.items()}
    for layer, data in content["layer_profiles"].items():
        for section in ("baseline", "noise"):
            values = (data or {}).get(section, {})
            missing = [m for m in METRIC_NAMES if m not in values]
            if missing:
                raise ValueError(f"Layer {layer} {section} is missing metrics: {missing}")
        profiles[layer] = {"baseline": dict(data["baseline"]), "noise": dict(data["noise"])}
    return profiles
