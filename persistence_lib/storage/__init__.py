"""Blob store backends for persistence_lib."""

from .base import BlobStore, SettingsStore, StorageType
from .file_backend import FileStore
from .memory_backend import MemorySettingsStore
from .settings_backend import YamlSettingsStore

__all__ = [
    "BlobStore",
    "SettingsStore",
    "StorageType",
    "FileStore",
    "MemorySettingsStore",
    "YamlSettingsStore",
]
