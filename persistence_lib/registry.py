"""Durable registry of every key ever saved.

The registry snapshot is a JSON list of key strings stored under a
reserved key in the file store. It is rewritten only when a key is seen
for the first time and removed wholesale when a version upgrade wipes the
stored data.
"""
from __future__ import annotations
import json
import logging
from typing import FrozenSet, Iterator, Set

from persistence_lib.storage.base import BlobStore

logger = logging.getLogger(__name__)

RESERVED_PREFIX = "__persistence"
REGISTRY_KEY = "__persistence_keys__"


def is_reserved_key(key: str) -> bool:
    return key.startswith(RESERVED_PREFIX)


def encode_keys(keys: Set[str]) -> bytes:
    return json.dumps(sorted(keys), ensure_ascii=False).encode("utf-8")


def decode_keys(data: bytes) -> Set[str]:
    result = json.loads(data.decode("utf-8"))
    if not isinstance(result, list) or not all(isinstance(k, str) for k in result):
        raise ValueError("key registry snapshot is not a list of strings")
    return set(result)


class KeyRegistry:
    def __init__(self, store: BlobStore, snapshot_key: str = REGISTRY_KEY) -> None:
        self.store = store
        self.snapshot_key = snapshot_key
        self._keys: Set[str] = set()

    def load(self) -> Set[str]:
        """Read the snapshot into memory and return the loaded keys.

        A missing or corrupt snapshot yields an empty registry; it must never
        block startup.
        """
        try:
            data = self.store.get(self.snapshot_key)
        except (KeyError, OSError):
            logger.debug("No key registry snapshot found, starting empty")
            self._keys = set()
            return set()
        try:
            self._keys = decode_keys(data)
        except (UnicodeDecodeError, ValueError) as e:
            logger.warning("Ignoring corrupt key registry snapshot: %s", e)
            self._keys = set()
        return set(self._keys)

    def record(self, key: str) -> bool:
        """Track `key`. Returns True when the snapshot was rewritten.

        Known keys cause no write at all. If writing the snapshot fails the
        key is forgotten again so the next save retries, and the error is
        raised to the caller.
        """
        if key in self._keys:
            return False
        self._keys.add(key)
        try:
            self.store.put(self.snapshot_key, encode_keys(self._keys))
        except Exception:
            self._keys.discard(key)
            raise
        logger.debug("Registered new key %r (%d tracked)", key, len(self._keys))
        return True

    def clear(self) -> None:
        self._keys = set()
        self.store.remove(self.snapshot_key)

    @property
    def keys(self) -> FrozenSet[str]:
        return frozenset(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))
