"""
Environment validation module
"""

import os
import logging
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

REQUIRED_VARS = [
    'AUR_SSH_KEY',
    'GIT_EMAIL',
    'GIT_USER',
]

OPTIONAL_VARS = [
    'PERSONAL_ACCESS_TOKEN',
    'INPUT_ADDITIONALPACKAGES',
    'INPUT_PUSHTOAUR',
]


def validate_environment(env: Optional[Mapping[str, str]] = None) -> bool:
    """
    Check that every required variable is set and non-blank.

    Secret values are never logged, only whether they were loaded.

    Raises:
        ConfigError: naming the first missing variable
    """
    env = os.environ if env is None else env

    for var in REQUIRED_VARS:
        value = env.get(var)
        if not value or value.strip() == '':
            raise ConfigError(f"{var} is not set")

    for var in REQUIRED_VARS + OPTIONAL_VARS:
        value = env.get(var)
        if value and value.strip() != '':
            logger.debug(f"   {var}: [LOADED]")
        else:
            logger.debug(f"   {var}: [MISSING]")

    return True


def get_workdir(env: Optional[Mapping[str, str]] = None) -> Path:
    """Resolve the working directory: INPUT_WORKDIR relative to the process cwd"""
    env = os.environ if env is None else env
    workdir = (Path.cwd() / env.get('INPUT_WORKDIR', '')).resolve()
    if not workdir.is_dir():
        raise ConfigError(f"working directory {workdir} not found")
    return workdir
