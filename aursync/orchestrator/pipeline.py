"""
Release Sync Pipeline - Main orchestrator
=================================================================================
Checks the monitored upstream for a new release and, when there is one,
packages it for the AUR.

EXECUTION PHASES:
PHASE 1: Requirements, additional packages, SSH transport
PHASE 2: Latest release lookup and version gate (early exit when up to date)
PHASE 3: Asset download, checksum, PKGBUILD update and lint
PHASE 4: Build as the non-root user, package lint, test install
PHASE 5: Publish to the AUR and record the version in the source repo

Any SyncError aborts the run with exit code 1. Nothing is rolled back: if
the source repo push fails after the AUR push succeeded, the AUR package is
already updated while VERSION.env still names the previous version.
"""

import shutil
import logging
from dataclasses import dataclass
from pathlib import Path

from aursync import config
from aursync.build.namcap import Namcap
from aursync.build.package_builder import PackageBuilder
from aursync.build.pacman import Pacman
from aursync.build.recipe import update_recipe_file
from aursync.common import config_loader
from aursync.common.config_loader import StaticConfig, SyncSettings
from aursync.common.errors import PublishError, SyncError, ToolError, check_response
from aursync.common.logging_utils import log_banner
from aursync.common.outputs import ActionOutputs
from aursync.common.shell_executor import ShellExecutor
from aursync.release.asset_fetcher import AssetFetcher
from aursync.release.github_client import GitHubReleaseClient
from aursync.release.version_gate import versions_match
from aursync.scm.git_client import GitClient
from aursync.scm.ssh_setup import AurSSHTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleaseInfo:
    """What this run learned about the upstream release"""
    tag: str
    asset_url: str
    asset_sha256: str


class ReleaseSyncPipeline:
    """
    Orchestrates one release sync run.

    Every external collaborator can be injected; defaults talk to GitHub,
    makepkg, namcap, pacman and git.
    """

    def __init__(self, settings: SyncSettings, release_client=None, fetcher=None,
                 builder=None, linter=None, pacman=None, ssh_transport=None,
                 git_factory=None, outputs: ActionOutputs = None,
                 strict_package_lint: bool = config.STRICT_PACKAGE_LINT):
        self.settings = settings
        shell = ShellExecutor(debug_mode=settings.debug_mode)

        self.release_client = release_client or GitHubReleaseClient(token=settings.github_token)
        self.fetcher = fetcher or AssetFetcher()
        self.builder = builder or PackageBuilder(shell)
        self.linter = linter or Namcap(shell)
        self.pacman = pacman or Pacman(shell)
        self.ssh_transport = ssh_transport or AurSSHTransport(shell_executor=shell)
        self.git_factory = git_factory or (lambda **kwargs: GitClient(shell_executor=shell, **kwargs))
        self.outputs = outputs or ActionOutputs()
        self.strict_package_lint = strict_package_lint

        self.workdir = Path(settings.workdir)
        self.aur_dir = self.workdir / config.AUR_CHECKOUT_DIR

    def run(self) -> int:
        """
        Execute the pipeline

        RETURNS: Exit code (0 = success or nothing to do, 1 = failure)
        """
        try:
            self._execute()
            return 0
        except SyncError as e:
            logger.error(str(e))
            return 1
        finally:
            self.ssh_transport.cleanup()

    def _execute(self):
        settings = self.settings

        # PHASE 1
        config_loader.check_requirements(self.workdir)

        if settings.additional_packages:
            self.pacman.install_packages(settings.additional_packages)
        logger.info(f"Additional packages installed: {' '.join(settings.additional_packages)}")

        ssh_command = self.ssh_transport.prepare(settings.aur_ssh_key)

        static = config_loader.load_static_config(self.workdir)
        logger.info(f"UPSTREAM_REPO: {static.upstream_repo}")
        logger.info(f"AUR_REPO: {static.aur_repo}")
        logger.info(f"PKG_NAME: {static.pkg_name}")
        logger.info(f"ASSET_FILE_STUB: {static.asset_stub}")
        self.outputs.set("aurPackageName", static.pkg_name)

        # PHASE 2
        logger.info("Getting latest tag from Github API")
        latest_tag = check_response(self.release_client.get_latest_tag(static.upstream_repo), "LATEST_TAG")

        marker = config_loader.load_version_marker(self.workdir)
        self.outputs.set("currentVersion", marker.current_version)
        self.outputs.set("latestVersion", latest_tag)

        logger.info("Comparing latest version to current version")
        if versions_match(marker.current_version, latest_tag):
            logger.info("latest upstream version is the same as the current package version, nothing to do")
            self.outputs.set("aurUpdated", "false")
            return

        # PHASE 3
        release = self._fetch_release(static, latest_tag)
        recipe_path = self._prepare_recipe(static, release, ssh_command)

        # PHASE 4
        self._build_and_validate(recipe_path)

        git = self.git_factory(current_dir=self.aur_dir, ssh_command=ssh_command)
        if not git.configure_identity(settings.git_email, settings.git_user):
            raise ToolError("Couldn't configure git identity")

        # Both checkouts are owned by someone other than root
        for directory in (self.aur_dir, self.workdir):
            if not git.mark_safe_directory(directory):
                raise ToolError(f"Couldn't mark {directory} as a safe git directory")

        # PHASE 5
        logger.info(f"PUSH_TO_AUR: {settings.push_to_aur}")
        if settings.push_to_aur:
            self._publish(git, release)
        else:
            self.outputs.set("aurUpdated", "false")

    def _fetch_release(self, static: StaticConfig, latest_tag: str) -> ReleaseInfo:
        logger.info("Getting asset URL from Github API")
        asset_url = check_response(
            self.release_client.get_asset_url(static.upstream_repo, static.asset_stub), "ASSET_URL")
        logger.info(f"ASSET_URL: {asset_url}")

        logger.info("Downloading asset file from Github and computing sha256sum")
        asset_sha = check_response(self.fetcher.fetch_sha256(asset_url, self.workdir), "ASSET_SHA")
        logger.info(f"ASSET_SHA: {asset_sha}")

        return ReleaseInfo(tag=latest_tag, asset_url=asset_url, asset_sha256=asset_sha)

    def _prepare_recipe(self, static: StaticConfig, release: ReleaseInfo, ssh_command: str) -> Path:
        log_banner("UPDATING PKGBUILD")

        logger.info(f"Cloning AUR repo into ./{config.AUR_CHECKOUT_DIR}")
        aur_git = self.git_factory(repo_url=static.aur_repo, ssh_command=ssh_command)
        if not aur_git.clone_repository(self.aur_dir):
            raise ToolError("failed to clone AUR repo")

        self.builder.prepare_checkout(self.aur_dir)

        recipe_path = self.aur_dir / config.RECIPE_FILE
        update_recipe_file(recipe_path, release.tag, release.asset_sha256)

        logger.info("Testing PKGBUILD with namcap")
        if not self.linter.check(recipe_path, cwd=self.aur_dir):
            raise ToolError("PKGBUILD failed namcap check")

        return recipe_path

    def _build_and_validate(self, recipe_path: Path) -> Path:
        log_banner("BUILDING PACKAGE")

        package_file = self.builder.build(recipe_path.parent)

        logger.info("Testing package file with namcap")
        if not self.linter.check(package_file, cwd=recipe_path.parent):
            if self.strict_package_lint:
                raise ToolError("package file failed namcap check")
            logger.warning("⚠️ package file failed namcap check, continuing")

        logger.info("Installing built package")
        self.pacman.install_local(package_file)
        return package_file

    def _publish(self, aur_git, release: ReleaseInfo):
        log_banner("PUBLISHING")

        self.builder.print_srcinfo(self.aur_dir)

        logger.info("Staging files for committing")
        if not aur_git.add_files(config.RECIPE_FILE, config.SRCINFO_FILE):
            raise PublishError("Couldn't add files for committing")

        logger.info("Show current AUR repo status before committing changes")
        aur_git.status()

        logger.info("Committing changes to AUR repo")
        if not aur_git.commit(f"bump to {release.tag}"):
            raise PublishError("Couldn't commit changes to the AUR repo")

        logger.info("Pushing commit to AUR repo")
        if not aur_git.push():
            self.outputs.set("aurUpdated", "false")
            raise PublishError("Couldn't push commit to the AUR")
        self.outputs.set("aurUpdated", "true")

        # AUR-specific transport is done with
        self.ssh_transport.cleanup()

        logger.info("Updating source repo with the latest version")
        config_loader.write_version_marker(self.workdir, release.tag)
        shutil.copy2(self.aur_dir / config.RECIPE_FILE, self.workdir / config.RECIPE_FILE)

        source_git = self.git_factory(current_dir=self.workdir)

        logger.info("Staging files for committing")
        if not source_git.add_files(config.VERSION_FILE, config.RECIPE_FILE):
            raise PublishError("Couldn't stage files")

        logger.info("Show current source repo status before committing changes")
        source_git.status()

        logger.info("Committing changes")
        if not source_git.commit(f"update latest version to {release.tag}"):
            raise PublishError("Couldn't commit changes to the source repo")

        logger.info("Pushing changes to source repo")
        if not source_git.push():
            raise PublishError("Couldn't push commit")
