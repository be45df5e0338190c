from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from .utils import get_path, split_path


class FrozenMapping(Mapping[str, Any]):
    """Immutable mapping; nested dicts become FrozenMapping, lists become tuples."""

    def __init__(self, data: Mapping[str, Any]):
        self._data = {key: _freeze(value) for key, value in data.items()}

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{type(self).__name__}({self._data!r})"

    def get(self, key: str, default: Any = None, separator: str = "") -> Any:
        return get_path(self._data, split_path(key, separator), default)

    def to_dict(self) -> Dict[str, Any]:
        return {key: _unfreeze(value) for key, value in self._data.items()}


class FrozenConfig(FrozenMapping):
    """Read-only snapshot of a loader's merged values."""


def _freeze(value: Any) -> Any:
    if isinstance(value, FrozenMapping):
        return value
    if isinstance(value, dict):
        return FrozenMapping(value)
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _unfreeze(item: Any) -> Any:
    if isinstance(item, FrozenMapping):
        return item.to_dict()
    if isinstance(item, tuple):
        return [_unfreeze(v) for v in item]
    return item


def freeze(data: Mapping[str, Any]) -> FrozenConfig:
    return FrozenConfig(data)
