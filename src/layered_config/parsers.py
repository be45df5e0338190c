"""Format readers.

Each reader turns file text into a mapping. INI and ``.env`` values are run
through :func:`coerce_raw`; JSON and YAML keep the types their decoders give.
Nothing here resolves ``${...}`` references, that happens in the loader once
the whole file is parsed.
"""

from __future__ import annotations

import configparser
import json
import re
from pathlib import Path
from typing import Any, Dict

import yaml

from .coercion import coerce_scalar, is_quoted, unquote
from .errors import MalformedContentError, UnsupportedFormatError

FORMATS: Dict[str, str] = {
    "ini": "ini",
    "env": "env",
    "json": "json",
    "yml": "yaml",
    "yaml": "yaml",
}

_ENV_KEY = re.compile(r"^[a-zA-Z0-9_.]+$")
_WHITESPACE = " \r\n\t"

# section names nobody writes by hand; they keep configparser from treating
# [DEFAULT] specially and give header-less keys somewhere to live
_ROOT_SECTION = "\x00root"
_DEFAULT_SECTION = "\x00defaults"


def extension_of(location: str | Path) -> str:
    name = Path(location).name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def format_of(location: str | Path) -> str:
    extension = extension_of(location)
    try:
        return FORMATS[extension]
    except KeyError:
        raise UnsupportedFormatError(str(location), extension) from None


def coerce_raw(value: str) -> Any:
    if is_quoted(value):
        return unquote(value)
    return coerce_scalar(value)


def read_env(text: str) -> Dict[str, Any]:
    parsed: Dict[str, Any] = {}
    for line in text.splitlines():
        line = line.strip(_WHITESPACE)
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip(_WHITESPACE)
        if not _ENV_KEY.match(key):
            continue
        parsed[key] = coerce_raw(value.strip(_WHITESPACE))
    return parsed


def read_ini(text: str, location: str, sections: bool = False) -> Dict[str, Any]:
    parser = configparser.ConfigParser(
        interpolation=None,
        delimiters=("=",),
        comment_prefixes=(";", "#"),
        strict=False,
        default_section=_DEFAULT_SECTION,
    )
    parser.optionxform = str  # keep key case
    # indented lines are ordinary entries, not continuations of the previous value
    text = "\n".join(line.lstrip() for line in text.splitlines())
    try:
        parser.read_string(f"[{_ROOT_SECTION}]\n{text}", source=location)
    except configparser.Error as exc:
        raise MalformedContentError(location, str(exc)) from exc

    parsed: Dict[str, Any] = {}
    for section in parser.sections():
        values = {key: coerce_raw(value) for key, value in parser.items(section)}
        if section == _ROOT_SECTION or not sections:
            parsed.update(values)
        else:
            parsed[section] = values
    return parsed


def read_json(text: str, location: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedContentError(location, str(exc)) from exc
    return _require_mapping(data, location)


def read_yaml(text: str, location: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MalformedContentError(location, str(exc)) from exc
    if data is None:
        return {}
    return _stringify_keys(_require_mapping(data, location))


def _require_mapping(data: Any, location: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedContentError(
            location, f"expected a mapping at the top level, got {type(data).__name__}"
        )
    return data


def _stringify_keys(data: Any) -> Any:
    if isinstance(data, dict):
        return {str(key): _stringify_keys(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_stringify_keys(item) for item in data]
    return data
