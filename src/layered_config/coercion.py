from __future__ import annotations

import json
import re
from typing import Any

_INTEGER = re.compile(r"^[0-9]+$")
_NUMERIC = re.compile(r"^\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*$")

_LITERALS = {"true": True, "false": False, "null": None}

TRUE_WORDS = {"1", "true", "yes", "on"}
FALSE_WORDS = {"0", "false", "no", "off", ""}


def coerce_scalar(value: str) -> Any:
    """Turn a raw INI/.env string into int, float, bool or None where it reads as one."""
    if _INTEGER.match(value):
        return int(value)
    if _NUMERIC.match(value):
        return float(value)
    if value in _LITERALS:
        return _LITERALS[value]
    return value


def is_quoted(value: str) -> bool:
    return len(value) >= 2 and value[0] == '"' and value[-1] == '"'


def unquote(value: str) -> str:
    return value.strip('"')


def stringify(value: Any) -> str:
    """String form used for ``${...}`` substitution and environment export."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def parse_bool_word(value: str) -> bool | None:
    lowered = value.strip().lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    return None
