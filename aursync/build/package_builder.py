"""
Package Builder Module - Runs makepkg as the non-root build user
"""

import logging
from pathlib import Path

from aursync import config
from aursync.common.errors import BuildError
from aursync.common.shell_executor import ShellExecutor

logger = logging.getLogger(__name__)


class PackageBuilder:
    """Builds the package from a recipe checkout and regenerates .SRCINFO"""

    def __init__(self, shell_executor: ShellExecutor = None, build_user: str = config.BUILD_USER,
                 timeout: int = config.MAKEPKG_TIMEOUT):
        self.shell_executor = shell_executor or ShellExecutor()
        self.build_user = build_user
        self.timeout = timeout

    def prepare_checkout(self, recipe_dir: Path):
        """Hand the checkout over to the build user so makepkg can write into it"""
        owner = f"{self.build_user}:{self.build_user}"
        result = self.shell_executor.run_command(
            ['chown', '-R', owner, str(recipe_dir)],
            shell=False,
            check=False,
        )
        if result.returncode != 0:
            raise BuildError(f"failed to change ownership of {recipe_dir} to {owner}: {result.stderr}")

    def build(self, recipe_dir: Path) -> Path:
        """
        Build the package as the build user

        Args:
            recipe_dir: Directory holding the PKGBUILD

        Returns:
            Path of the single built package file

        Raises:
            BuildError: if makepkg fails or the artifact is missing/ambiguous
        """
        logger.info(f"🔨 Building package file as user {self.build_user}")

        result = self.shell_executor.run_command(
            "makepkg",
            cwd=recipe_dir,
            check=False,
            user=self.build_user,
            timeout=self.timeout,
        )

        if result.returncode != 0:
            logger.error("=== MAKEPKG FAILURE DIAGNOSTICS ===")
            logger.error(f"Working directory: {recipe_dir}")
            for stream in (result.stdout, result.stderr):
                if not stream:
                    continue
                for line in stream.splitlines()[-200:]:
                    if line.strip():
                        logger.error(f"  {line}")
            raise BuildError(f"makepkg failed with exit code {result.returncode}")

        return self.find_built_package(recipe_dir)

    def find_built_package(self, recipe_dir: Path) -> Path:
        """Locate exactly one artifact matching the package file pattern"""
        built_files = sorted(Path(recipe_dir).rglob(config.BUILT_PACKAGE_GLOB))

        if not built_files:
            raise BuildError("BUILT_PKG_FILE is an empty var")
        if len(built_files) > 1:
            names = ", ".join(p.name for p in built_files)
            raise BuildError(f"expected one built package, found {len(built_files)}: {names}")

        logger.info(f"BUILT_PKG_FILE: {built_files[0]}")
        return built_files[0]

    def print_srcinfo(self, recipe_dir: Path) -> Path:
        """Regenerate .SRCINFO from the PKGBUILD as the build user"""
        logger.info(f"Updating {config.SRCINFO_FILE} as user {self.build_user}")

        result = self.shell_executor.run_command(
            "makepkg --printsrcinfo",
            cwd=recipe_dir,
            check=False,
            user=self.build_user,
            timeout=300,
        )
        if result.returncode != 0 or not result.stdout:
            raise BuildError(f"makepkg --printsrcinfo failed: {result.stderr}")

        srcinfo_path = Path(recipe_dir) / config.SRCINFO_FILE
        with open(srcinfo_path, 'w', encoding='utf-8') as f:
            f.write(result.stdout)
        return srcinfo_path
