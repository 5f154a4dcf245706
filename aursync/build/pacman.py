"""
Pacman wrapper - installs extra packages and test-installs the built one
"""

import logging
from pathlib import Path
from typing import List

from aursync import config
from aursync.common.errors import ToolError
from aursync.common.shell_executor import ShellExecutor

logger = logging.getLogger(__name__)


class Pacman:
    """Unattended pacman operations"""

    def __init__(self, shell_executor: ShellExecutor = None, timeout: int = config.PACMAN_TIMEOUT):
        self.shell_executor = shell_executor or ShellExecutor()
        self.timeout = timeout

    def _run(self, args: List[str]):
        cmd = ['pacman', *args]
        result = self.shell_executor.run_command(
            cmd,
            shell=False,
            check=False,
            log_cmd=True,
            timeout=self.timeout,
        )
        return result

    def install_packages(self, packages: List[str]):
        """
        Sync the system and install packages from the repositories

        Raises:
            ToolError: if pacman fails
        """
        if not packages:
            return
        logger.info(f"Installing additional packages: {' '.join(packages)}")
        result = self._run(['-Syuq', '--noconfirm', *packages])
        if result.returncode != 0:
            raise ToolError("Failed to install additional packages")

    def install_local(self, package_file: Path):
        """
        Install a built package file to prove it is installable

        Raises:
            ToolError: if pacman fails
        """
        logger.info(f"Installing built package {Path(package_file).name}")
        result = self._run(['-U', '--noconfirm', str(package_file)])
        if result.returncode != 0:
            raise ToolError(f"Failed to install built package {Path(package_file).name}")
