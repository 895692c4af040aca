"""Exceptions raised by repotoc."""


class TocError(Exception):
    """Base class for fatal repotoc errors."""


class ConfigError(TocError):
    """The configuration file exists but is unusable."""


class OrphanedPathError(TocError):
    """A path was recorded before its parent directory."""

    def __init__(self, path: str):
        super().__init__(f"Directory or file wasn't reported: {path}")
        self.path = path
