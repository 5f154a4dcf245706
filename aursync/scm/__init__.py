"""
SCM modules: git working copies and the AUR SSH transport
"""

from .git_client import GitClient
from .ssh_setup import AurSSHTransport

__all__ = ['GitClient', 'AurSSHTransport']
