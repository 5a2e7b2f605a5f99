# logging_mod/log_config.py
import logging
from typing import Union


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure console logger for scoring reports."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s"
    )
    logging.getLogger().setLevel(level)
