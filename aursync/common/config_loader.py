"""
Config Loader Module - Loads the persisted configuration files and run settings
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from aursync import config
from .environment import get_workdir, validate_environment
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaticConfig:
    """Identifiers of the monitored upstream and the AUR package (VARS.env)"""
    upstream_repo: str      # e.g. "org/repo"
    aur_repo: str           # AUR git remote
    pkg_name: str
    asset_stub: str         # suffix of the release asset name


@dataclass(frozen=True)
class VersionMarker:
    """Last upstream version packaged (VERSION.env)"""
    current_version: str


@dataclass(frozen=True)
class SyncSettings:
    """Run settings, collected once from the environment"""
    workdir: Path
    aur_ssh_key: str
    git_email: str
    git_user: str
    push_to_aur: bool = False
    additional_packages: List[str] = field(default_factory=list)
    github_token: Optional[str] = None
    debug_mode: bool = False


def parse_env_file(path: Path) -> Dict[str, str]:
    """
    Parse KEY=value lines.

    Blank lines and comments are skipped, an ``export`` prefix is accepted
    and one layer of matching quotes around the value is removed.
    """
    values = {}
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue
            if line.startswith('export '):
                line = line[len('export '):].lstrip()
            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
                value = value[1:-1]
            values[key] = value
    return values


def _find_key(values: Mapping[str, str], canonical: str, substring: str) -> Optional[str]:
    if canonical in values:
        return canonical
    for key in values:
        if substring in key:
            return key
    return None


def check_requirements(workdir: Path):
    """
    Sanity check the persisted configuration files before anything else runs.

    Raises:
        ConfigError: if a file or one of its required keys is missing
    """
    version_path = workdir / config.VERSION_FILE
    if not version_path.is_file():
        raise ConfigError(f"{config.VERSION_FILE} file not found")
    if config.VERSION_KEY not in parse_env_file(version_path):
        raise ConfigError(f"{config.VERSION_KEY} not found in {config.VERSION_FILE} file")

    vars_path = workdir / config.VARS_FILE
    if not vars_path.is_file():
        raise ConfigError(f"{config.VARS_FILE} file not found")
    values = parse_env_file(vars_path)
    for canonical, substring in config.STATIC_CONFIG_KEYS.items():
        if _find_key(values, canonical, substring) is None:
            raise ConfigError(f"required variable {canonical} not set in {config.VARS_FILE} file")


def load_static_config(workdir: Path) -> StaticConfig:
    """Load the four package identifiers from VARS.env"""
    values = parse_env_file(workdir / config.VARS_FILE)

    resolved = {}
    for canonical, substring in config.STATIC_CONFIG_KEYS.items():
        key = _find_key(values, canonical, substring)
        if key is None or not values[key]:
            raise ConfigError(f"required variable {canonical} not set in {config.VARS_FILE} file")
        resolved[canonical] = values[key]

    return StaticConfig(
        upstream_repo=resolved['UPSTREAM_REPO'],
        aur_repo=resolved['AUR_REPO'],
        pkg_name=resolved['PKG_NAME'],
        asset_stub=resolved['ASSET_FILE_STUB'],
    )


def load_version_marker(workdir: Path) -> VersionMarker:
    """Load the last synced version from VERSION.env"""
    values = parse_env_file(workdir / config.VERSION_FILE)
    version = values.get(config.VERSION_KEY, '')
    if not version:
        raise ConfigError(f"{config.VERSION_KEY} not found in {config.VERSION_FILE} file")
    return VersionMarker(current_version=version)


def write_version_marker(workdir: Path, version: str) -> Path:
    """Rewrite VERSION.env with the newly synced version"""
    path = workdir / config.VERSION_FILE
    with open(path, 'w', encoding='utf-8') as f:
        f.write(f"{config.VERSION_KEY}={version}\n")
    return path


def load_settings(env: Optional[Mapping[str, str]] = None) -> SyncSettings:
    """
    Build SyncSettings from the environment.

    Raises:
        ConfigError: if a required credential or identity value is missing
    """
    env = os.environ if env is None else env
    validate_environment(env)

    return SyncSettings(
        workdir=get_workdir(env),
        aur_ssh_key=env['AUR_SSH_KEY'],
        git_email=env['GIT_EMAIL'],
        git_user=env['GIT_USER'],
        push_to_aur=env.get('INPUT_PUSHTOAUR') == 'true',
        additional_packages=env.get('INPUT_ADDITIONALPACKAGES', '').split(),
        github_token=env.get('PERSONAL_ACCESS_TOKEN') or None,
        debug_mode=env.get('RUNNER_DEBUG') == '1',
    )
