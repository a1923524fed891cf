"""Exceptions raised by the auto-reload supervisor."""


class AutoReloadError(Exception):
    """Base class for auto-reload failures."""

    pass


class ProjectNotFoundError(AutoReloadError):
    """Raised when the project directory has no pubspec.yaml."""

    pass


class SpawnError(AutoReloadError):
    """Raised when the flutter child process cannot be launched."""

    pass


class ChildInputError(AutoReloadError):
    """Raised when writing to the child's standard input fails."""

    pass
