"""
AUR Release Sync - packages new upstream GitHub releases for the AUR
"""

__version__ = "1.0.0"
