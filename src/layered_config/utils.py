from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Iterable, Tuple

Path = Tuple[str, ...]

_MISSING = object()


def split_path(path: str, separator: str = "") -> Path:
    """Split a locator into segments. An empty separator never splits."""
    if separator == "":
        return (path,)
    return tuple(path.split(separator))


def get_path(data: Mapping[str, Any], path: Path, default: Any = None) -> Any:
    current: Any = data
    for key in path:
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


def has_path(data: Mapping[str, Any], path: Path) -> bool:
    return get_path(data, path, _MISSING) is not _MISSING


def set_path(data: MutableMapping[str, Any], path: Path, value: Any) -> Any:
    current: MutableMapping[str, Any] = data
    for key in path[:-1]:
        next_val = current.get(key)
        if not isinstance(next_val, MutableMapping):
            # scalars and lists in the way are replaced by a fresh level
            next_val = {}
            current[key] = next_val
        current = next_val
    current[path[-1]] = value
    return value


def delete_path(data: MutableMapping[str, Any], path: Path) -> Any:
    """Remove the value at ``path`` and return it, or ``None`` if absent.

    Parent mappings are left in place even when they become empty.
    """
    current: Any = data
    for key in path[:-1]:
        if not isinstance(current, MutableMapping) or key not in current:
            return None
        current = current[key]
    if isinstance(current, MutableMapping) and path[-1] in current:
        return current.pop(path[-1])
    return None


def iter_paths(data: Mapping[str, Any], prefix: Path = ()) -> Iterable[Path]:
    for key, value in data.items():
        current = prefix + (key,)
        yield current
        if isinstance(value, Mapping):
            yield from iter_paths(value, current)
