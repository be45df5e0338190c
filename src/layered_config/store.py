from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .utils import delete_path, get_path, has_path, set_path, split_path


class NestedStore:
    """Nested dictionary addressed by separator-delimited paths.

    Values go in and come out as deep copies so nothing outside the store can
    reach its internal containers.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._data: Dict[str, Any] = deepcopy(dict(initial or {}))

    def get(self, path: str, default: Any = None, separator: str = "") -> Any:
        value = get_path(self._data, split_path(path, separator), default)
        if value is default:
            return default
        return deepcopy(value)

    def has(self, path: str, separator: str = "") -> bool:
        return has_path(self._data, split_path(path, separator))

    def set(self, path: str, value: Any, separator: str = "") -> Any:
        set_path(self._data, split_path(path, separator), deepcopy(value))
        return value

    def delete(self, path: str, separator: str = "") -> Any:
        return delete_path(self._data, split_path(path, separator))

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def items(self) -> List[Tuple[str, Any]]:
        return [(key, deepcopy(value)) for key, value in self._data.items()]

    def to_dict(self) -> Dict[str, Any]:
        return deepcopy(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"NestedStore({self._data!r})"
