"""
Git Client Module - Handles Git operations
"""

import logging
from pathlib import Path
from typing import Optional

from aursync import config
from aursync.common.shell_executor import ShellExecutor

logger = logging.getLogger(__name__)


class GitClient:
    """Handles Git operations on one working copy"""

    def __init__(self, repo_url: str = None, current_dir: Path = None, ssh_command: Optional[str] = None,
                 shell_executor: ShellExecutor = None, timeout: int = config.GIT_TIMEOUT):
        self.repo_url = repo_url
        self.current_dir = Path(current_dir) if current_dir else None
        self.ssh_command = ssh_command
        self.shell_executor = shell_executor or ShellExecutor()
        self.timeout = timeout

    def _git(self, *args, cwd=None):
        # Without a dedicated ssh command git must use the ambient transport
        if self.ssh_command:
            env = {"GIT_SSH_COMMAND": self.ssh_command}
            remove = None
        else:
            env = None
            remove = ["GIT_SSH_COMMAND"]

        return self.shell_executor.run_command(
            ["git", *args],
            cwd=cwd or self.current_dir,
            shell=False,
            check=False,
            timeout=self.timeout,
            extra_env=env,
            remove_env=remove,
        )

    def clone_repository(self, target_dir: Path, repo_url: str = None) -> bool:
        """Clone the repository into target_dir and make it the current working copy"""
        url = repo_url or self.repo_url
        if not url:
            logger.error("No repository URL provided")
            return False

        target_dir = Path(target_dir)
        result = self._git("clone", url, str(target_dir), cwd=target_dir.parent)
        if result.returncode == 0:
            logger.info(f"✅ Successfully cloned repository to {target_dir}")
            self.current_dir = target_dir
            return True

        logger.error(f"❌ Failed to clone repository: {result.stderr}")
        return False

    def configure_identity(self, email: str, name: str) -> bool:
        """Set the global committer identity"""
        for key, value in (("user.email", email), ("user.name", name)):
            result = self._git("config", "--global", key, value)
            if result.returncode != 0:
                logger.error(f"❌ Failed to set {key}: {result.stderr}")
                return False
        return True

    def mark_safe_directory(self, directory: Path) -> bool:
        """
        Trust a working copy owned by another user (build user, runner uid)

        Returns:
            True if successful, False otherwise
        """
        directory = Path(directory)
        result = self._git("config", "--global", "--add", "safe.directory", str(directory), cwd=directory)
        if result.returncode == 0:
            logger.info(f"✅ Marked {directory} as a safe directory")
            return True

        logger.error(f"❌ Failed to mark {directory} as a safe directory: {result.stderr}")
        return False

    def add_files(self, *files: str) -> bool:
        """
        Add files to Git staging

        Returns:
            True if successful, False otherwise
        """
        if not self.current_dir:
            logger.error("No repository directory set")
            return False

        result = self._git("add", *files)
        if result.returncode == 0:
            logger.info(f"✅ Added files: {' '.join(files)}")
            return True

        logger.error(f"❌ Failed to add files: {result.stderr}")
        return False

    def status(self) -> str:
        """Short status of the working copy, also written to the log"""
        result = self._git("status", "--short", "--branch")
        for line in (result.stdout or "").splitlines():
            logger.info(f"  {line}")
        return result.stdout or ""

    def commit(self, message: str) -> bool:
        """
        Commit staged changes

        Returns:
            True if successful, False otherwise
        """
        if not self.current_dir:
            logger.error("No repository directory set")
            return False

        result = self._git("commit", "-m", message)
        if result.returncode == 0:
            logger.info(f"✅ Committed changes: {message}")
            return True
        if "nothing to commit" in (result.stdout or "") + (result.stderr or ""):
            logger.info("ℹ️ Nothing to commit")
            return False

        logger.error(f"❌ Failed to commit: {result.stderr}")
        return False

    def push(self) -> bool:
        """
        Push changes to the default remote

        Returns:
            True if successful, False otherwise
        """
        if not self.current_dir:
            logger.error("No repository directory set")
            return False

        result = self._git("push")
        if result.returncode == 0:
            logger.info("✅ Pushed changes to remote")
            return True

        logger.error(f"❌ Failed to push: {result.stderr}")
        return False
