# logging_mod/csv_writer.py
import csv
import logging
import os
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

REPORT_HEADERS = [
    'device_id',
    'cpuUsage', 'cpuCount', 'cpuFreq', 'netBandwidth', 'rtt',
    'cpu_score', 'net_score', 'rendering_score', 'total_score',
    'error'
]


def write_score_report(records: List[Dict[str, Any]], filename: str = 'device_scores.csv') -> str:
    """
    One row per scored device. Missing readings and scores are left blank.

    Each record holds 'device_id', optionally 'readings' (metric -> value),
    'breakdown' (cpu/net/rendering/total) and 'error' (message).
    """
    output_dir = os.path.dirname(filename)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(filename, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(REPORT_HEADERS)

        for record in records:
            readings = record.get('readings') or {}
            breakdown = record.get('breakdown') or {}
            row = [
                record['device_id'],
                readings.get('cpuUsage', ''), readings.get('cpuCount', ''),
                readings.get('cpuFreq', ''), readings.get('netBandwidth', ''),
                readings.get('rtt', ''),
                breakdown.get('cpu', ''), breakdown.get('net', ''),
                breakdown.get('rendering', ''), breakdown.get('total', ''),
                record.get('error') or ''
            ]
            writer.writerow(row)

    logger.info(f"Score report written to {filename}")
    return filename
