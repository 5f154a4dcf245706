"""
Logging utilities for the release sync action
"""

import logging
from typing import Optional

LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(debug_mode: bool = False, log_file: Optional[str] = None):
    """Setup logging configuration"""
    level = logging.DEBUG if debug_mode else logging.INFO

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO)

    return logging.getLogger(__name__)


def log_banner(title: str):
    """Print a section banner into the log stream"""
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60, flush=True)
