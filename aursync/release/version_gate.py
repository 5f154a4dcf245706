"""
Version gate - decides whether the upstream release is new
"""

VERSION_PREFIX = "v"


def strip_version_prefix(version: str) -> str:
    """Remove at most one leading 'v' from a tag"""
    if version.startswith(VERSION_PREFIX):
        return version[len(VERSION_PREFIX):]
    return version


def versions_match(current: str, latest: str) -> bool:
    """
    Compare the packaged version with the latest upstream tag.

    The tags are equal when they match exactly after stripping one
    leading 'v' from each, so ``v1.2.3`` matches ``1.2.3``.
    """
    return strip_version_prefix(current) == strip_version_prefix(latest)
