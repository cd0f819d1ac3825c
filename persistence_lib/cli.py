"""Inspection tool for persistence_lib storage containers.

Usage: persistence-tool [--base-dir DIR] [--group ID] [--version N]
                        [--config FILE] {status,keys,get} ...

`status` and `keys` only read the container and never run the version
gate. `get` opens the storage like an application would, which stamps or
upgrades the version marker as usual.
"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from persistence_lib.config import Configuration, FileConfig, load_config_file
from persistence_lib.container import FILES_DIR, SETTINGS_FILE, ContainerResolver
from persistence_lib.errors import DataNotFound, PersistenceError
from persistence_lib.logging_config import configure_logging
from persistence_lib.persistence import Persistence
from persistence_lib.registry import KeyRegistry
from persistence_lib.storage.base import StorageType
from persistence_lib.storage.file_backend import FileStore
from persistence_lib.storage.settings_backend import YamlSettingsStore
from persistence_lib.storage.serializer import get_serializer
from persistence_lib.version_gate import VersionGate


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="persistence-tool")
    p.add_argument("--config", type=Path, help="YAML settings file")
    p.add_argument("--base-dir", type=Path, help="Root directory holding storage containers")
    p.add_argument("--group", help="Group identifier of a shared container")
    p.add_argument("--version", type=int, help="Schema version to open the storage with")
    p.add_argument("--log-level", help="Override the log level (DEBUG, INFO, ...)")
    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="Show the stored version and the number of tracked keys")
    sub.add_parser("keys", help="List tracked keys")
    g = sub.add_parser("get", help="Print the value stored under KEY as JSON")
    g.add_argument("key")
    g.add_argument("--storage", choices=[t.value for t in StorageType], default=StorageType.SETTINGS.value)
    return p


def _file_config(args: argparse.Namespace) -> FileConfig:
    fc = load_config_file(args.config) if args.config else FileConfig()
    cfg = fc.configuration
    fc.configuration = Configuration(
        version=args.version if args.version is not None else cfg.version,
        group_identifier=args.group if args.group is not None else cfg.group_identifier,
    )
    if args.base_dir is not None:
        fc.base_dir = args.base_dir
    return fc


def _inspect(resolver: ContainerResolver, config: Configuration) -> Tuple[Path, int, List[str]]:
    """Return the container path, stored version and tracked keys.

    Stores are only opened over directories that already exist, so
    inspecting never creates a container.
    """
    folder = resolver.container_dir(config)
    version = 0
    keys: List[str] = []
    if folder.is_dir():
        version = VersionGate(YamlSettingsStore(folder / SETTINGS_FILE)).stored_version
    if (folder / FILES_DIR).is_dir():
        keys = sorted(KeyRegistry(FileStore(folder / FILES_DIR)).load())
    return folder, version, keys


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    try:
        fc = _file_config(args)
    except (OSError, ValueError) as e:
        print(f"Failed to read config: {e}", file=sys.stderr)
        return 2
    configure_logging(args.config, level=args.log_level or fc.log_level)
    resolver = ContainerResolver(fc.base_dir)

    if args.command in ("status", "keys"):
        try:
            folder, version, keys = _inspect(resolver, fc.configuration)
        except PersistenceError as e:
            print(f"Failed to open storage: {e}", file=sys.stderr)
            return 2
        if args.command == "status":
            print(f"container: {folder}")
            print(f"stored version: {version}")
            print(f"tracked keys: {len(keys)}")
        else:
            for k in keys:
                print(k)
        return 0

    try:
        store = Persistence(fc.configuration, resolver=resolver, serializer=get_serializer(fc.serializer))
    except (PersistenceError, ValueError) as e:
        print(f"Failed to open storage: {e}", file=sys.stderr)
        return 2
    try:
        value = store.load_object(args.key, args.storage)
    except DataNotFound as e:
        print(str(e), file=sys.stderr)
        return 1
    except PersistenceError as e:
        print(str(e), file=sys.stderr)
        return 2
    print(json.dumps(value, indent=2, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
