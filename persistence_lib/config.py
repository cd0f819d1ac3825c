"""Configuration objects for persistence_lib.

`Configuration` is what a `Persistence` instance is built from. Settings
files in YAML can carry the same values plus a few process-level options
(log level, base directory, serializer) and are read with
`load_config_file`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from persistence_lib.errors import InvalidVersion

DEFAULT_VERSION = 1


@dataclass(frozen=True)
class Configuration:
    # Increase to force a migration that wipes all previously stored data.
    version: int = DEFAULT_VERSION
    # Shares storage between applications using the same identifier.
    group_identifier: Optional[str] = None


def validate_version(version: Any) -> int:
    """Return `version` if it is a positive integer, else raise `InvalidVersion`."""
    if isinstance(version, bool) or not isinstance(version, int) or version <= 0:
        raise InvalidVersion(version)
    return version


@dataclass
class FileConfig:
    configuration: Configuration = field(default_factory=Configuration)
    base_dir: Optional[Path] = None
    log_level: Optional[str] = None
    serializer: str = "json"


def load_config_file(path: str | Path) -> FileConfig:
    """Read a YAML settings file.

    Recognised keys: ``version``, ``group_identifier``, ``base_dir``,
    ``log_level`` and ``serializer``. Unknown keys are ignored. The version
    is not validated here; that happens when the storage is opened.
    """
    raw = Path(path).read_text(encoding="utf-8")
    try:
        data: Any = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError("invalid config format: parse error") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("invalid config format: expected mapping")

    group = data.get("group_identifier")
    base_dir = data.get("base_dir")
    return FileConfig(
        configuration=Configuration(
            version=data.get("version", DEFAULT_VERSION),
            group_identifier=str(group) if group is not None else None,
        ),
        base_dir=Path(base_dir).expanduser() if base_dir else None,
        log_level=data.get("log_level"),
        serializer=data.get("serializer", "json"),
    )
