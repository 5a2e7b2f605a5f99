#main.py
import argparse
import logging
from typing import Any, Dict, List, Optional

from device_operations.device_id_extract import extract_device_ids
from device_scoring.config import DEFAULT_CONFIG_PATH, load_config, ScoringConfig
from device_scoring.device_profiler import layer_profiles, load_layer_profiles
from device_scoring.errors import ScoringError
from device_scoring.fault_injector import YAMLFaultInjector
from device_scoring.resource_kinds import FETCH_ORDER
from device_scoring.score_assembler import score_breakdown
from device_scoring.scoring import DefaultScoring
from device_scoring.simulated_provider import SimulatedResourceProvider
from logging_mod.csv_writer import write_score_report
from logging_mod.log_config import configure_logging

logger = logging.getLogger(__name__)


def build_scoring(config: ScoringConfig) -> DefaultScoring:
    """Wire a simulated provider for the local device into the default strategy."""
    profiles = layer_profiles
    if config.layer_profiles_path:
        logger.info(f"Loading layer profiles from {config.layer_profiles_path}")
        profiles = load_layer_profiles(config.layer_profiles_path)

    injector = None
    if config.fault_templates_path:
        logger.info(f"Loading fault templates from {config.fault_templates_path}")
        injector = YAMLFaultInjector.from_yaml(config.fault_templates_path, seed=config.seed)

    provider = SimulatedResourceProvider(
        config.local_device_id,
        profiles=profiles,
        seed=config.seed,
        fault_injector=injector
    )
    return DefaultScoring(provider)


def score_devices(scoring: DefaultScoring, device_ids: List[str]) -> List[Dict[str, Any]]:
    """Score each candidate device independently. No ranking is done here."""
    records = []
    for device_id in device_ids:
        snapshot = scoring.get_resource_snapshot(device_id)
        record: Dict[str, Any] = {'device_id': device_id, 'readings': snapshot.readings}

        if not snapshot.is_valid:
            record['error'] = str(snapshot.error)
            logger.warning(f"{device_id}: no score ({snapshot.error})")
            records.append(record)
            continue

        try:
            total = scoring.score_from_snapshot(snapshot)
            breakdown = score_breakdown(*(snapshot.readings[kind.value] for kind in FETCH_ORDER))
        except ScoringError as e:
            record['error'] = str(e)
            logger.warning(f"{device_id}: no score ({e})")
        else:
            # per-dimension columns come from the default transforms; the total from the strategy
            breakdown["total"] = total
            record['breakdown'] = breakdown
            logger.info(f"{device_id}: score={total:.6f}")
        records.append(record)
    return records


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Score candidate devices for service placement")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to YAML configuration")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(config.log_level)
    logger.info(f"Local device: {config.local_device_id}")

    device_ids = extract_device_ids(config.device_list_path)
    logger.info(f"Scoring {len(device_ids)} devices from {config.device_list_path}")

    scoring = build_scoring(config)
    records = score_devices(scoring, device_ids)
    write_score_report(records, config.report_path)

    failed = sum(1 for r in records if r.get('error'))
    logger.info("=" * 60)
    logger.info(f"Scored {len(records) - failed}/{len(records)} devices")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
