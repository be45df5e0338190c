from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional, Sequence

import yaml

from .errors import ConfigError
from .loader import ConfigLoader
from .logging_utils import setup_logging
from .printer import format_keys, format_sources
from .settings import LoaderSettings


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="layered-config",
        description="Merge configuration files and inspect the result.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level for diagnostics on stderr.")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_sources(command: argparse.ArgumentParser) -> None:
        command.add_argument("sources", nargs="+", help="Files or directories, merged in the given order.")
        command.add_argument("--deep", action="store_true", help="Descend into subdirectories.")
        command.add_argument("--sort", action="store_true", help="Read directory entries in name order.")

    dump = sub.add_parser("dump", help="Print the merged configuration.")
    add_sources(dump)
    dump.add_argument("--format", choices=["json", "yaml"], default="json")

    get = sub.add_parser("get", help="Print a single value.")
    get.add_argument("key")
    add_sources(get)
    get.add_argument("--separator", default=None, help="Path separator for KEY (default: flat keys).")
    get.add_argument("--default", default=None, help="Printed when KEY is missing.")

    sources = sub.add_parser("sources", help="List the files that were merged.")
    add_sources(sources)

    keys = sub.add_parser("keys", help="List every key path.")
    add_sources(keys)
    keys.add_argument("--separator", default=".", help="Joiner for nested key paths.")

    return parser.parse_args(argv)


def build_loader(sources: List[str], deep: bool, sort: bool) -> ConfigLoader:
    loader = ConfigLoader(settings=LoaderSettings.from_env())
    for source in sources:
        if os.path.isdir(source):
            loader.from_dir(source, deep=deep, sort=sort or None)
        else:
            loader.from_file(source)
    return loader


def run_dump(loader: ConfigLoader, fmt: str) -> None:
    data = loader.to_dict()
    if fmt == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False), end="")
    else:
        print(json.dumps(data, indent=2, ensure_ascii=False))


def run_get(loader: ConfigLoader, key: str, separator: Optional[str], default: Optional[str]) -> int:
    if not loader.has(key, separator):
        if default is None:
            print(f"Key not found: {key}", file=sys.stderr)
            return 1
        print(default)
        return 0
    value = loader.get(key, None, separator)
    if isinstance(value, (dict, list)):
        print(json.dumps(value, indent=2, ensure_ascii=False))
    else:
        print(loader.get_str(key, "", separator))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        loader = build_loader(args.sources, args.deep, args.sort)
    except ConfigError as exc:
        print(f"Configuration loading failed: {exc}", file=sys.stderr)
        return 1

    if args.command == "dump":
        run_dump(loader, args.format)
    elif args.command == "get":
        return run_get(loader, args.key, args.separator, args.default)
    elif args.command == "sources":
        print(format_sources(loader.sources))
    else:
        print(format_keys(loader.to_dict(), args.separator))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
