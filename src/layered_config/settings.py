from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .coercion import parse_bool_word

ENV_PREFIX = "LAYERED_CONFIG_"


class LoaderSettings(BaseModel):
    """Knobs that change how a ConfigLoader reads and addresses data."""

    model_config = ConfigDict(frozen=True)

    # "" keeps keys flat; "." would make "db.host" address {"db": {"host": ...}}
    separator: str = ""
    # False visits directory entries in the order the filesystem returns them
    sort_directory: bool = False
    ini_sections: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LoaderSettings":
        environ = os.environ if environ is None else environ
        values = {}

        separator = environ.get(f"{ENV_PREFIX}SEPARATOR")
        if separator is not None:
            values["separator"] = separator

        for field_name, env_name in (
            ("sort_directory", f"{ENV_PREFIX}SORT_DIR"),
            ("ini_sections", f"{ENV_PREFIX}INI_SECTIONS"),
        ):
            raw = environ.get(env_name)
            if raw is None:
                continue
            flag = parse_bool_word(raw)
            if flag is None:
                raise ValueError(f"{env_name} must be an on/off value, got {raw!r}")
            values[field_name] = flag

        return cls(**values)
