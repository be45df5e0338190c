from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from .coercion import stringify

REFERENCE_PATTERN = re.compile(r"\$\{([a-zA-Z0-9_]+)\}")
DIR_VARIABLE = "__DIR__"

Lookup = Callable[[str], Any]


def make_lookup(
    location: Optional[str],
    current: Optional[Mapping[str, Any]],
    existing: Lookup,
) -> Lookup:
    """Build the name resolver for one file.

    Order: ``__DIR__`` (directory of ``location``), then ``current`` (the file
    being loaded), then ``existing`` (values merged by earlier loads).
    ``None`` means unresolved.
    """
    directory = str(Path(location).resolve().parent) if location else None

    def lookup(name: str) -> Any:
        if name == DIR_VARIABLE and directory is not None:
            return directory
        value = current.get(name) if current else None
        if value is None:
            value = existing(name)
        return value

    return lookup


def replace_references(data: Any, lookup: Lookup) -> Any:
    """Substitute ``${NAME}`` in every string leaf of ``data``.

    Unresolved references stay as they are. Replacement text is not scanned again.
    """
    if isinstance(data, str):
        def _replace(match: re.Match[str]) -> str:
            value = lookup(match.group(1))
            if value is None:
                return match.group(0)
            return stringify(value)

        return REFERENCE_PATTERN.sub(_replace, data)
    if isinstance(data, list):
        return [replace_references(item, lookup) for item in data]
    if isinstance(data, dict):
        return {key: replace_references(value, lookup) for key, value in data.items()}
    return data


def resolve_mapping(
    parsed: Dict[str, Any],
    location: Optional[str],
    existing: Lookup,
) -> Dict[str, Any]:
    # keys are resolved in file order and written back immediately, so a
    # later key sees the resolved form of an earlier sibling
    lookup = make_lookup(location, parsed, existing)
    for key in list(parsed):
        parsed[key] = replace_references(parsed[key], lookup)
    return parsed
