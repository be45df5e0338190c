from __future__ import annotations

from typing import Iterable, Mapping, Any

from .utils import iter_paths


def format_sources(sources: Iterable[str]) -> str:
    sources = list(sources)
    lines = ["Loaded configuration files:"]
    if not sources:
        lines.append("  - none")
    else:
        lines.extend(f"  - {source}" for source in sources)
    return "\n".join(lines)


def format_keys(data: Mapping[str, Any], separator: str = ".") -> str:
    """One line per path in ``data``, nested levels joined by ``separator``."""
    return "\n".join(separator.join(path) for path in iter_paths(data))
