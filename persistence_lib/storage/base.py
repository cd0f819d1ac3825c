"""Blob store interface definitions.

Defines the `BlobStore` abstract class used by the persistence facade to
write, read and remove raw byte blobs. Backends are pure pass-through:
no caching and no policy, every call touches the underlying store.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum


class StorageType(Enum):
    """Selects which backend a key lives in."""

    SETTINGS = "settings"
    FILE = "file"


class BlobStore(ABC):
    """Abstract byte-blob store addressed by string keys."""

    @abstractmethod
    def put(self, key: str, data: bytes) -> None:
        """Store `data` under `key`, replacing any previous value."""

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the bytes stored under `key`.

        Must raise `DataNotFound` if the key is absent or unreadable.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove `key`. Removing an absent key is a no-op."""


class SettingsStore(BlobStore):
    """Lightweight settings store.

    In addition to byte blobs it offers an integer slot per key, used for
    bookkeeping values such as the persisted schema version.
    """

    @abstractmethod
    def get_int(self, key: str) -> int:
        """Return the integer stored under `key`, or 0 when absent."""

    @abstractmethod
    def set_int(self, key: str, value: int) -> None:
        """Store integer `value` under `key`."""
