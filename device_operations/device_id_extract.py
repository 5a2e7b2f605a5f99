# device_operations/device_id_extract.py
from typing import List, Union
from pathlib import Path

import pandas as pd


def _detect_delimiter(file_path: Path) -> str:
    # Read first line to detect delimiter
    with open(file_path, 'r', newline='', encoding='utf-8') as f:
        first_line = f.readline().strip()
    if '\t' in first_line:
        return '\t'
    elif ',' in first_line:
        return ','
    elif ';' in first_line:
        return ';'
    return ','  # Default fallback


def extract_device_ids(file_path: Union[str, Path],
                       delimiter: str = 'auto',
                       device_id_column: str = 'device_id',
                       return_count: bool = False) -> Union[List[str], tuple]:
    """
    Read device identifiers from a CSV file.

    Args:
        file_path: CSV file with a device identifier column.
        delimiter: Field delimiter, or 'auto' to detect it from the header line.
        device_id_column: Name of the identifier column.
        return_count: Also return the number of identifiers.

    Returns:
        List of identifiers in file order, blanks and duplicates dropped;
        or (ids, count) when return_count is set.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the identifier column is missing.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if delimiter == 'auto':
        delimiter = _detect_delimiter(file_path)

    df = pd.read_csv(file_path, delimiter=delimiter, dtype=str)
    if device_id_column not in df.columns:
        raise ValueError(f"Column '{device_id_column}' not found in CSV. Available columns: {list(df.columns)}")

    ids = df[device_id_column].dropna().astype(str).str.strip()
    device_ids = ids[ids != ""].drop_duplicates().tolist()

    if return_count:
        return device_ids, len(device_ids)
    return device_ids
