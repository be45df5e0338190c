from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from . import parsers
from .coercion import coerce_scalar, parse_bool_word, stringify
from .environment import EnvironmentSink, ProcessEnvironment
from .errors import ConfigLockedError, MalformedContentError, PathNotFoundError
from .freeze import FrozenConfig, freeze
from .interpolation import resolve_mapping
from .settings import LoaderSettings
from .store import NestedStore


class ConfigLoader:
    """Merge INI, .env, JSON and YAML files into one path-addressed store.

    Each file is parsed into a mapping, ``${NAME}`` references in it are
    resolved against the file itself and then against everything merged
    before it, and its top-level keys are written into the store as flat
    keys. Later files overwrite earlier ones key by key.
    """

    def __init__(
        self,
        defaults: Optional[Mapping[str, Any]] = None,
        settings: Optional[LoaderSettings] = None,
        environment: Optional[EnvironmentSink] = None,
    ):
        self.settings = settings or LoaderSettings()
        self.environment = environment or ProcessEnvironment()
        self._store = NestedStore(defaults)
        self._locked = False
        self.sources: List[str] = []

    # ------------------------------------------------------------------
    # access
    # ------------------------------------------------------------------
    def _separator(self, separator: Optional[str]) -> str:
        return self.settings.separator if separator is None else separator

    def get(self, key: str, default: Any = None, separator: Optional[str] = None) -> Any:
        return self._store.get(key, default, self._separator(separator))

    def has(self, key: str, separator: Optional[str] = None) -> bool:
        return self._store.has(key, self._separator(separator))

    def get_str(self, key: str, default: str = "", separator: Optional[str] = None) -> str:
        value = self.get(key, None, separator)
        if value is None:
            return default
        return stringify(value)

    def get_int(self, key: str, default: int = 0, separator: Optional[str] = None) -> int:
        value = self.get(key, None, separator)
        if value is None:
            return default
        try:
            if isinstance(value, str):
                value = value.strip()
                try:
                    return int(value)
                except ValueError:
                    return int(float(value))
            return int(value)
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Config value {key!r}={value!r} is not an int, using {default!r}")
            return default

    def get_float(self, key: str, default: float = 0.0, separator: Optional[str] = None) -> float:
        value = self.get(key, None, separator)
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning(f"Config value {key!r}={value!r} is not a float, using {default!r}")
            return default

    def get_bool(self, key: str, default: bool = False, separator: Optional[str] = None) -> bool:
        value = self.get(key, None, separator)
        if value is None:
            return default
        if isinstance(value, str):
            flag = parse_bool_word(value)
            if flag is None:
                logger.warning(f"Config value {key!r}={value!r} is not a bool, using {default!r}")
                return default
            return flag
        return bool(value)

    def to_dict(self) -> Dict[str, Any]:
        return self._store.to_dict()

    def freeze(self) -> FrozenConfig:
        return freeze(self._store.to_dict())

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------
    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> "ConfigLoader":
        self._locked = True
        logger.debug("Config locked")
        return self

    def unlock(self) -> "ConfigLoader":
        self._locked = False
        logger.debug("Config unlocked")
        return self

    def _ensure_unlocked(self, operation: str) -> None:
        if self._locked:
            raise ConfigLockedError(f"Cannot {operation}: configuration is locked")

    def set(self, key: str, value: Any, separator: Optional[str] = None) -> Any:
        self._ensure_unlocked(f"set {key!r}")
        return self._store.set(key, value, self._separator(separator))

    def delete(self, key: str, separator: Optional[str] = None) -> Any:
        self._ensure_unlocked(f"delete {key!r}")
        return self._store.delete(key, self._separator(separator))

    def from_dict(self, data: Mapping[str, Any]) -> "ConfigLoader":
        self._ensure_unlocked("merge values")
        self._merge(data)
        return self

    def _merge(self, data: Mapping[str, Any]) -> None:
        for key, value in data.items():
            self._store.set(key, value, "")

    # ------------------------------------------------------------------
    # files
    # ------------------------------------------------------------------
    def _lookup_existing(self, name: str) -> Any:
        return self._store.get(name, None, "")

    @staticmethod
    def _read_text(location: str) -> str:
        path = Path(location)
        if not path.exists():
            raise PathNotFoundError(location)
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return handle.read()
        except UnicodeDecodeError as exc:
            raise MalformedContentError(location, f"not valid UTF-8 ({exc.reason})") from exc

    def parse_file(self, location: str | os.PathLike[str]) -> Dict[str, Any]:
        location = str(location)
        kind = parsers.format_of(location)
        if kind == "ini":
            return self.parse_ini_file(location)
        if kind == "env":
            return self.parse_env_file(location)
        if kind == "json":
            return self.parse_json_file(location)
        return self.parse_yaml_file(location)

    def parse_ini_file(self, location: str | os.PathLike[str], sections: Optional[bool] = None) -> Dict[str, Any]:
        location = str(location)
        if sections is None:
            sections = self.settings.ini_sections
        parsed = parsers.read_ini(self._read_text(location), location, sections)
        return resolve_mapping(parsed, location, self._lookup_existing)

    def parse_env_file(self, location: str | os.PathLike[str]) -> Dict[str, Any]:
        location = str(location)
        parsed = parsers.read_env(self._read_text(location))
        return resolve_mapping(parsed, location, self._lookup_existing)

    def parse_json_file(self, location: str | os.PathLike[str]) -> Dict[str, Any]:
        location = str(location)
        parsed = parsers.read_json(self._read_text(location), location)
        return resolve_mapping(parsed, location, self._lookup_existing)

    def parse_yaml_file(self, location: str | os.PathLike[str]) -> Dict[str, Any]:
        location = str(location)
        parsed = parsers.read_yaml(self._read_text(location), location)
        return resolve_mapping(parsed, location, self._lookup_existing)

    def _merge_file(self, location: str, parsed: Dict[str, Any]) -> "ConfigLoader":
        self._merge(parsed)
        self.sources.append(location)
        logger.debug(f"Merged {len(parsed)} keys from {location}")
        return self

    def from_file(self, location: str | os.PathLike[str]) -> "ConfigLoader":
        self._ensure_unlocked("load a file")
        location = str(location)
        return self._merge_file(location, self.parse_file(location))

    def from_ini_file(self, location: str | os.PathLike[str], sections: Optional[bool] = None) -> "ConfigLoader":
        self._ensure_unlocked("load a file")
        location = str(location)
        return self._merge_file(location, self.parse_ini_file(location, sections))

    def from_env_file(self, location: str | os.PathLike[str]) -> "ConfigLoader":
        self._ensure_unlocked("load a file")
        location = str(location)
        return self._merge_file(location, self.parse_env_file(location))

    def from_json_file(self, location: str | os.PathLike[str]) -> "ConfigLoader":
        self._ensure_unlocked("load a file")
        location = str(location)
        return self._merge_file(location, self.parse_json_file(location))

    def from_yaml_file(self, location: str | os.PathLike[str]) -> "ConfigLoader":
        self._ensure_unlocked("load a file")
        location = str(location)
        return self._merge_file(location, self.parse_yaml_file(location))

    def from_dir(
        self,
        location: str | os.PathLike[str],
        deep: bool = False,
        sort: Optional[bool] = None,
    ) -> "ConfigLoader":
        """Load every file in ``location``; subdirectories too when ``deep``.

        Entries are taken in filesystem order unless ``sort`` (or the
        ``sort_directory`` setting) asks for name order. A file with an
        unsupported extension aborts the scan. Files merged before it stay
        merged. A missing directory is ignored.
        """
        self._ensure_unlocked("load a directory")
        location = str(location)
        if not os.path.isdir(location):
            logger.debug(f"Skipping missing config directory {location}")
            return self
        if sort is None:
            sort = self.settings.sort_directory

        with os.scandir(location) as it:
            entries = list(it)
        if sort:
            entries.sort(key=lambda entry: entry.name)

        for entry in entries:
            if entry.is_file():
                self.from_file(entry.path)
            elif deep and entry.is_dir():
                self.from_dir(entry.path, deep, sort)
        return self

    # ------------------------------------------------------------------
    # process environment
    # ------------------------------------------------------------------
    def from_environment(self, only_existing: bool = False) -> "ConfigLoader":
        self._ensure_unlocked("import the environment")
        imported = 0
        for name, value in self.environment.items():
            if only_existing and name not in self._store:
                continue
            self._store.set(name, coerce_scalar(value), "")
            imported += 1
        logger.debug(f"Imported {imported} environment variables")
        return self

    def export(self, overwrite: bool = False) -> None:
        for key, value in self._store.items():
            if not overwrite and self.environment.exists(key):
                logger.debug(f"Export skipped existing {key}")
                continue
            self.environment.set_always(key, stringify(value))
            self.environment.set_if_absent(key, value)
