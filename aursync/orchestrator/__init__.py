"""
Orchestrator modules package
"""

from .pipeline import ReleaseInfo, ReleaseSyncPipeline

__all__ = ['ReleaseInfo', 'ReleaseSyncPipeline']
