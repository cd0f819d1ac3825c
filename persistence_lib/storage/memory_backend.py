"""Simple memory-backed settings store

This backend keeps blobs and integer slots in a process-local dict. It is
useful for tests and for ephemeral sessions that must not touch disk.
"""
from threading import RLock
from typing import Dict, Union

from persistence_lib.errors import DataNotFound
from persistence_lib.storage.base import SettingsStore, StorageType


class MemorySettingsStore(SettingsStore):
    def __init__(self):
        self._lock = RLock()
        self._store: Dict[str, Union[bytes, int]] = {}

    def put(self, key: str, data: bytes) -> None:
        with self._lock:
            self._store[key] = bytes(data)

    def get(self, key: str) -> bytes:
        with self._lock:
            value = self._store.get(key)
        if not isinstance(value, bytes):
            raise DataNotFound(key, StorageType.SETTINGS)
        return value

    def remove(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def get_int(self, key: str) -> int:
        with self._lock:
            value = self._store.get(key)
        return value if isinstance(value, int) else 0

    def set_int(self, key: str, value: int) -> None:
        with self._lock:
            self._store[key] = int(value)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._store
