"""
Common modules: configuration, environment, logging, command execution
"""

from .config_loader import (
    StaticConfig,
    SyncSettings,
    VersionMarker,
    check_requirements,
    load_settings,
    load_static_config,
    load_version_marker,
    write_version_marker,
)
from .errors import SyncError
from .logging_utils import setup_logging
from .outputs import ActionOutputs
from .shell_executor import ShellExecutor

__all__ = [
    'StaticConfig',
    'SyncSettings',
    'VersionMarker',
    'check_requirements',
    'load_settings',
    'load_static_config',
    'load_version_marker',
    'write_version_marker',
    'SyncError',
    'setup_logging',
    'ActionOutputs',
    'ShellExecutor',
]
