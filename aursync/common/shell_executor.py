"""
Shell Executor Module - Handles external command execution with logging
"""

import os
import subprocess
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ShellExecutor:
    """Runs external tools, optionally as a different (non-root) user"""

    def __init__(self, debug_mode: bool = False):
        self.debug_mode = debug_mode

    def run_command(self, cmd, cwd=None, capture=True, check=True, shell=True, user=None,
                    log_cmd=False, timeout=1800, extra_env=None, remove_env=None):
        """
        Run a command and return the CompletedProcess

        Args:
            cmd: Command string (shell=True) or argument list (shell=False)
            cwd: Working directory (defaults to the process cwd)
            capture: Capture stdout/stderr as text
            check: Raise CalledProcessError on a non-zero exit status
            shell: Run through the shell
            user: Run as this user through sudo
            log_cmd: Log the command and its output at INFO
            timeout: Seconds before the command is killed
            extra_env: Variables added to the inherited environment
            remove_env: Variable names dropped from the inherited environment

        Returns:
            subprocess.CompletedProcess
        """
        if log_cmd or self.debug_mode:
            logger.info(f"RUNNING COMMAND: {cmd}")

        if cwd is None:
            cwd = Path.cwd()

        env = os.environ.copy()
        for name in remove_env or ():
            env.pop(name, None)
        if extra_env:
            env.update(extra_env)
        env['LC_ALL'] = 'C'

        if user:
            env['HOME'] = f'/home/{user}'
            env['USER'] = user
            sudo_cmd = ['sudo', '--preserve-env=LC_ALL', '-u', user]
            if shell:
                sudo_cmd.extend(['bash', '-c', f'cd "{cwd}" && {cmd}'])
            else:
                sudo_cmd.extend(cmd)
            args = sudo_cmd
            run_shell = False
        else:
            args = cmd
            run_shell = shell

        try:
            result = subprocess.run(
                args,
                cwd=cwd,
                shell=run_shell,
                capture_output=capture,
                text=True,
                check=check,
                env=env,
                timeout=timeout
            )
        except subprocess.TimeoutExpired:
            logger.error(f"⚠️ Command timed out after {timeout} seconds: {cmd}")
            raise
        except subprocess.CalledProcessError as e:
            logger.error(f"Command failed: {cmd} (exit code {e.returncode})")
            self._log_output(e.stdout, e.stderr, logging.ERROR)
            raise

        if log_cmd or self.debug_mode:
            self._log_output(result.stdout, result.stderr, logging.INFO)
            logger.info(f"EXIT CODE: {result.returncode}")

        return result

    @staticmethod
    def _log_output(stdout, stderr, level):
        if stdout:
            logger.log(level, f"STDOUT: {stdout.strip()[-2000:]}")
        if stderr:
            logger.log(level, f"STDERR: {stderr.strip()[-2000:]}")
