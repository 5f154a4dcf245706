"""
SSH setup for the AUR transport
"""

import os
import logging
from pathlib import Path
from typing import Optional

from aursync import config
from aursync.common.errors import ToolError
from aursync.common.shell_executor import ShellExecutor

logger = logging.getLogger(__name__)


class AurSSHTransport:
    """
    Provisions the SSH material used to push to the AUR.

    SIDE EFFECTS:
    - Creates the ssh directory (0700) if missing
    - Writes known_hosts from ``ssh-keyscan -H <aur host>``
    - Writes the deploy key (0400); cleanup() removes it again
    """

    def __init__(self, ssh_dir: Optional[Path] = None, host: str = config.AUR_HOST,
                 shell_executor: ShellExecutor = None):
        self.ssh_dir = Path(ssh_dir) if ssh_dir else Path.home() / ".ssh"
        self.host = host
        self.shell_executor = shell_executor or ShellExecutor()
        self.known_hosts = self.ssh_dir / "known_hosts"
        self.key_path = self.ssh_dir / config.SSH_KEY_NAME

    @property
    def ssh_command(self) -> str:
        """Value for GIT_SSH_COMMAND"""
        return f"ssh -o UserKnownHostsFile={self.known_hosts} -i {self.key_path}"

    def prepare(self, private_key: str) -> str:
        """
        Seed known_hosts and write the private key

        Returns:
            The ssh command to use as GIT_SSH_COMMAND

        Raises:
            ToolError: if the AUR host keys cannot be collected
        """
        logger.info("Preparing the container for SSH")

        if not self.ssh_dir.is_dir():
            logger.info(f"Creating {self.ssh_dir}")
            self.ssh_dir.mkdir(mode=0o700, parents=True)

        logger.info("Collecting SSH public key(s) from AUR server(s)")
        result = self.shell_executor.run_command(
            ['ssh-keyscan', '-H', self.host],
            shell=False,
            check=False,
            timeout=60,
        )
        if result.returncode != 0 or not result.stdout:
            raise ToolError(f"Couldn't get SSH public key from {self.host}")
        with open(self.known_hosts, 'w') as f:
            f.write(result.stdout)

        logger.info(f"Writing AUR SSH key to {self.key_path}")
        if self.key_path.exists():
            self.key_path.chmod(0o600)
        fd = os.open(self.key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w') as f:
            f.write(private_key.rstrip('\n') + '\n')
        self.key_path.chmod(0o400)

        return self.ssh_command

    def cleanup(self):
        """Remove the private key; safe to call more than once"""
        if self.key_path.exists():
            self.key_path.chmod(0o600)
            self.key_path.unlink()
            logger.info(f"Removed AUR SSH key {self.key_path}")
