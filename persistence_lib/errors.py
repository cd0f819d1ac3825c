"""Exception taxonomy for persistence_lib.

Construction-time errors (`InvalidVersion`, `FailedToInitiate`,
`VersionTooLow`) abort creation of a `Persistence` instance. Per-call
errors (`DataNotFound`, `SerializationFailed`, `InvalidKey`) only affect
the call that raised them.
"""
from __future__ import annotations
from typing import Any, Optional


class PersistenceError(Exception):
    """Base class for all errors raised by persistence_lib."""


class InvalidVersion(PersistenceError, ValueError):
    def __init__(self, version: Any) -> None:
        super().__init__(f"version must be a positive integer, got {version!r}")
        self.version = version


class FailedToInitiate(PersistenceError):
    def __init__(self, group_identifier: Optional[str], reason: str = "") -> None:
        msg = f"failed to initiate storage for group {group_identifier!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.group_identifier = group_identifier


class VersionTooLow(PersistenceError):
    """Configured version is older than the version already persisted."""

    def __init__(self, stored: int, requested: int) -> None:
        super().__init__(f"stored version {stored} is newer than requested version {requested}")
        self.stored = stored
        self.requested = requested


class DataNotFound(PersistenceError, KeyError):
    """No data stored under the key, or the stored data is unreadable.

    Subclasses `KeyError` so backends keep the usual missing-key convention.
    """

    def __init__(self, key: str, storage: Any = None) -> None:
        super().__init__(key)
        self.key = key
        self.storage = storage

    def __str__(self) -> str:
        where = getattr(self.storage, "value", self.storage)
        if where is None:
            return f"no data for key {self.key!r}"
        return f"no data for key {self.key!r} in {where} storage"


class SerializationFailed(PersistenceError):
    pass


class InvalidKey(PersistenceError, ValueError):
    pass
