"""Destinations for :meth:`ConfigLoader.export`.

A sink has two halves: an environment-variable mirror that can be rewritten
at will, and a set of constants that can be defined once and never changed
afterwards.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Tuple

from loguru import logger

# process-wide, shared by every ProcessEnvironment
_DEFINED_CONSTANTS: Dict[str, Any] = {}


class EnvironmentSink(ABC):
    @abstractmethod
    def exists(self, name: str) -> bool:
        """True if ``name`` is a defined constant or a set environment variable."""

    @abstractmethod
    def set_if_absent(self, name: str, value: Any) -> bool:
        """Define constant ``name`` unless it already is. Returns True if defined now."""

    @abstractmethod
    def set_always(self, name: str, value: str) -> None:
        """Write environment variable ``name``."""

    @abstractmethod
    def items(self) -> Iterable[Tuple[str, str]]:
        """Current environment variables."""


class ProcessEnvironment(EnvironmentSink):
    """Writes ``os.environ`` and the process-wide constant registry."""

    def exists(self, name: str) -> bool:
        return name in _DEFINED_CONSTANTS or name in os.environ

    def set_if_absent(self, name: str, value: Any) -> bool:
        if name in _DEFINED_CONSTANTS:
            return False
        _DEFINED_CONSTANTS[name] = value
        return True

    def set_always(self, name: str, value: str) -> None:
        if not valid_variable_name(name):
            logger.debug(f"Export skipped {name!r}: not a valid environment variable name")
            return
        os.environ[name] = value.replace("\x00", "")

    def items(self) -> Iterable[Tuple[str, str]]:
        return list(os.environ.items())


class MemoryEnvironment(EnvironmentSink):
    """Dictionary-backed sink for tests and dry runs."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self.environ: Dict[str, str] = dict(environ or {})
        self.constants: Dict[str, Any] = {}

    def exists(self, name: str) -> bool:
        return name in self.constants or name in self.environ

    def set_if_absent(self, name: str, value: Any) -> bool:
        if name in self.constants:
            return False
        self.constants[name] = value
        return True

    def set_always(self, name: str, value: str) -> None:
        self.environ[name] = value

    def items(self) -> Iterable[Tuple[str, str]]:
        return list(self.environ.items())


def valid_variable_name(name: str) -> bool:
    return bool(name) and "=" not in name and "\x00" not in name


def constant(name: str, default: Any = None) -> Any:
    return _DEFINED_CONSTANTS.get(name, default)


def defined_constants() -> Dict[str, Any]:
    return dict(_DEFINED_CONSTANTS)
