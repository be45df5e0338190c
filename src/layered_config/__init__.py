"""Layered configuration store: merge INI, .env, JSON and YAML files into one tree."""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigLockedError,
    MalformedContentError,
    PathNotFoundError,
    UnsupportedFormatError,
)
from .environment import EnvironmentSink, MemoryEnvironment, ProcessEnvironment  # noqa: F401
from .freeze import FrozenConfig  # noqa: F401
from .loader import ConfigLoader  # noqa: F401
from .settings import LoaderSettings  # noqa: F401
from .store import NestedStore  # noqa: F401

__all__ = [
    "ConfigLoader",
    "NestedStore",
    "LoaderSettings",
    "FrozenConfig",
    "EnvironmentSink",
    "ProcessEnvironment",
    "MemoryEnvironment",
    "ConfigError",
    "ConfigLockedError",
    "MalformedContentError",
    "PathNotFoundError",
    "UnsupportedFormatError",
]
