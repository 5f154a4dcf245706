"""
Error types raised by the release sync pipeline
"""


class SyncError(RuntimeError):
    """Base class for every fatal pipeline error"""


class ConfigError(SyncError):
    """A required file, key or environment value is missing"""


class EmptyResultError(SyncError):
    """An external lookup produced no usable value"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is an empty var")


class FetchError(SyncError):
    """The release asset could not be downloaded"""


class RecipeError(SyncError):
    """The PKGBUILD is unreadable or lacks a managed field"""


class ToolError(SyncError):
    """An external tool exited with a failure status"""


class BuildError(ToolError):
    """makepkg failed or left no single package artifact"""


class PublishError(ToolError):
    """Staging, committing or pushing a repository failed"""


def check_response(value, name: str):
    """Return value unchanged, raising EmptyResultError when it is empty"""
    if not value:
        raise EmptyResultError(name)
    return value
