from __future__ import annotations


class ConfigError(Exception):
    """Base class for every error raised by layered_config."""


class UnsupportedFormatError(ConfigError):
    """The file extension does not map to a known parser."""

    def __init__(self, location: str, extension: str):
        self.location = location
        self.extension = extension
        super().__init__(f"Unsupported file format '{extension}': {location}")


class MalformedContentError(ConfigError):
    """A parser failed or did not produce a mapping."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Incorrect format in {location}: {reason}")


class ConfigLockedError(ConfigError):
    """A mutation was attempted while the loader is locked."""


class PathNotFoundError(ConfigError, FileNotFoundError):
    """A configuration file does not exist."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Configuration file not found: {location}")
