"""
Action outputs - exposes run-scoped key/value pairs to the calling workflow
"""

import os
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class ActionOutputs:
    """
    Writes step outputs.

    Outputs are appended to the file named by GITHUB_OUTPUT. Without it the
    legacy ``::set-output`` workflow command is printed to stdout. Every value
    set is also kept in ``values`` so callers can inspect the run result.
    """

    def __init__(self, output_file: Optional[str] = None):
        if output_file is None:
            output_file = os.getenv('GITHUB_OUTPUT') or None
        self.output_file = output_file
        self.values: Dict[str, str] = {}

    def set(self, name: str, value: str):
        value = str(value)
        self.values[name] = value
        logger.debug(f"OUTPUT {name}={value}")

        if self.output_file:
            with open(self.output_file, 'a', encoding='utf-8') as f:
                f.write(f"{name}={value}\n")
        else:
            print(f"::set-output name={name}::{value}", flush=True)

    def get(self, name: str, default=None):
        return self.values.get(name, default)
