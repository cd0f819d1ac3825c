"""Settings store persisted as a single YAML document.

All keys of the store live in one file. Blobs are written as YAML
``!!binary`` scalars and integer slots as plain integers. Every operation
reads the file again, so external changes are always visible; mutations
rewrite the whole document atomically (temp file, fsync, rename).
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from threading import RLock
from typing import Any, Dict

import yaml

from persistence_lib.errors import DataNotFound
from persistence_lib.storage.base import SettingsStore, StorageType

logger = logging.getLogger(__name__)


class YamlSettingsStore(SettingsStore):
    """Settings store that targets a single on-disk YAML file.

    Parameters
    - file_path: path of the settings document. A missing file is an empty
      store; the parent directory is created so writes succeed.
    """

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = RLock()

    def _read(self) -> Dict[str, Any]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, "rb") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Settings file %s is unreadable, treating as empty: %s", self.file_path, e)
            return {}
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file %s is not a mapping, treating as empty", self.file_path)
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        path = self.file_path
        tmp = path.with_name(path.name + ".tmp")
        payload = yaml.safe_dump(data, sort_keys=True).encode("utf-8")
        with open(tmp, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)

    def put(self, key: str, data: bytes) -> None:
        with self._lock:
            doc = self._read()
            doc[key] = bytes(data)
            self._write(doc)

    def get(self, key: str) -> bytes:
        with self._lock:
            value = self._read().get(key)
        if not isinstance(value, bytes):
            raise DataNotFound(key, StorageType.SETTINGS)
        logger.debug("YamlSettingsStore loaded %s (%d bytes)", key, len(value))
        return value

    def remove(self, key: str) -> None:
        with self._lock:
            doc = self._read()
            if key not in doc:
                return
            del doc[key]
            self._write(doc)

    def get_int(self, key: str) -> int:
        with self._lock:
            value = self._read().get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

    def set_int(self, key: str, value: int) -> None:
        with self._lock:
            doc = self._read()
            doc[key] = int(value)
            self._write(doc)
