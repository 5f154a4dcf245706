"""
Namcap linter wrapper
"""

import logging
from pathlib import Path

from aursync.common.shell_executor import ShellExecutor

logger = logging.getLogger(__name__)


class Namcap:
    """Lints PKGBUILDs and built packages"""

    def __init__(self, shell_executor: ShellExecutor = None):
        self.shell_executor = shell_executor or ShellExecutor()

    def check(self, target: Path, cwd: Path = None) -> bool:
        """
        Run namcap against a PKGBUILD or package file.

        The linter output is logged verbatim.

        Returns:
            True if namcap exited successfully
        """
        result = self.shell_executor.run_command(
            ['namcap', str(target)],
            cwd=cwd,
            shell=False,
            check=False,
        )

        for line in (result.stdout or '').splitlines() + (result.stderr or '').splitlines():
            if line.strip():
                logger.info(f"namcap: {line}")

        if result.returncode != 0:
            logger.error(f"❌ namcap failed for {Path(target).name} (exit code {result.returncode})")
            return False
        return True
