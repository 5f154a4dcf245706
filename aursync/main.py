#!/usr/bin/env python3
"""
Main Entry Point for the AUR Release Sync action
"""

import os
import sys
import logging
import traceback

from aursync.common.config_loader import load_settings
from aursync.common.errors import SyncError
from aursync.common.logging_utils import log_banner, setup_logging
from aursync.orchestrator.pipeline import ReleaseSyncPipeline

logger = logging.getLogger(__name__)


def main() -> int:
    setup_logging(debug_mode=os.getenv('RUNNER_DEBUG') == '1')

    log_banner("🚀 AUR RELEASE SYNC")

    try:
        settings = load_settings()
    except SyncError as e:
        logger.error(str(e))
        return 1

    try:
        return ReleaseSyncPipeline(settings).run()
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
