"""Versioned key/value persistence over a settings store and files on disk."""

from .config import Configuration
from .errors import (
    DataNotFound,
    FailedToInitiate,
    InvalidKey,
    InvalidVersion,
    PersistenceError,
    SerializationFailed,
    VersionTooLow,
)
from .persistence import Persistence
from .storage import StorageType
from .version_gate import GateOutcome

__all__ = [
    "Configuration",
    "Persistence",
    "StorageType",
    "GateOutcome",
    "PersistenceError",
    "InvalidVersion",
    "FailedToInitiate",
    "VersionTooLow",
    "DataNotFound",
    "SerializationFailed",
    "InvalidKey",
]
