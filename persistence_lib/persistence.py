"""Versioned persistence facade.

`Persistence` stores byte blobs and serialized values under string keys in
either the settings store or the file store. Every key that is ever saved
is tracked in a durable registry so that raising the configured version
can wipe all of it on the next start.

Usage:

    store = Persistence(Configuration(version=2))
    store.save(["Joao", "Giovanni"], "kListOfStrings", StorageType.SETTINGS)
    names = store.load(list[str], "kListOfStrings", StorageType.SETTINGS)
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Type, TypeVar, Union

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from persistence_lib.config import Configuration, load_config_file, validate_version
from persistence_lib.container import ContainerResolver
from persistence_lib.errors import FailedToInitiate, InvalidKey, SerializationFailed
from persistence_lib.registry import KeyRegistry, is_reserved_key
from persistence_lib.storage.base import BlobStore, SettingsStore, StorageType
from persistence_lib.storage.interfaces import BlobStoreProtocol, SettingsStoreProtocol
from persistence_lib.storage.serializer import JSONSerializer, Serializer, get_serializer
from persistence_lib.version_gate import GateOutcome, VersionGate

logger = logging.getLogger(__name__)

T = TypeVar("T")
StorageSelector = Union[StorageType, str]


class Persistence:
    """Key/value persistence with a schema version epoch.

    Construction validates the configuration, resolves the backends, loads
    the key registry and runs the version gate. Any failure along the way
    raises and no instance is returned.
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        *,
        resolver: Optional[ContainerResolver] = None,
        settings: Optional[SettingsStore] = None,
        files: Optional[BlobStore] = None,
        serializer: Optional[Serializer] = None,
    ) -> None:
        self.config = config if config is not None else Configuration()
        self.version = validate_version(self.config.version)
        self.serializer: Serializer = serializer or JSONSerializer()

        if settings is None or files is None:
            resolved_settings, resolved_files = (resolver or ContainerResolver()).resolve(self.config)
            settings = settings if settings is not None else resolved_settings
            files = files if files is not None else resolved_files
        if not isinstance(settings, SettingsStoreProtocol):
            raise FailedToInitiate(self.config.group_identifier, "settings backend is not a settings store")
        if not isinstance(files, BlobStoreProtocol):
            raise FailedToInitiate(self.config.group_identifier, "file backend is not a blob store")

        self.settings = settings
        self.files = files
        self._stores: Dict[StorageType, BlobStore] = {
            StorageType.SETTINGS: settings,
            StorageType.FILE: files,
        }

        self.registry = KeyRegistry(files)
        self.registry.load()
        self.gate = VersionGate(settings)
        self.gate_outcome: GateOutcome = self.gate.check(self.version, self.registry, self._stores)

    @classmethod
    def from_config_file(cls, path: str | Path) -> "Persistence":
        """Open the storage described by a YAML settings file."""
        fc = load_config_file(path)
        return cls(
            fc.configuration,
            resolver=ContainerResolver(fc.base_dir),
            serializer=get_serializer(fc.serializer),
        )

    # Raw blobs -------------------------------------------------------------
    def save_data(self, data: bytes, key: str, storage: StorageSelector) -> None:
        store = self._store_for(storage)
        self._check_key(key)
        store.put(key, data)
        try:
            self.registry.record(key)
        except Exception as e:
            logger.warning("Saved %r but could not update the key registry: %s", key, e)

    def load_data(self, key: str, storage: StorageSelector) -> bytes:
        store = self._store_for(storage)
        self._check_key(key)
        return store.get(key)

    def delete(self, key: str, storage: StorageSelector) -> None:
        """Remove `key` from one backend.

        The key stays in the registry: it records what was ever written and
        is only cleared as a whole by a version upgrade.
        """
        store = self._store_for(storage)
        self._check_key(key)
        store.remove(key)

    # Serialized values -----------------------------------------------------
    def save(self, obj: Any, key: str, storage: StorageSelector) -> None:
        try:
            data = self.serializer.dump(obj)
        except Exception as e:
            raise SerializationFailed(f"could not encode value for key {key!r}: {e}") from e
        self.save_data(data, key, storage)

    def load(self, object_type: Type[T], key: str, storage: StorageSelector) -> T:
        """Load the value under `key` and validate it as `object_type`.

        `object_type` may be anything pydantic can validate: builtins,
        generics like ``list[str]``, dataclasses or pydantic models.

        Validation runs in pydantic's lax mode, so stored values that
        represent the requested type are converted: ``["1", "2"]`` loads as
        ``list[int]`` ``[1, 2]``, a JSON list loads as a tuple or set, and
        ``"yes"`` loads as ``bool`` True. Values that cannot be converted
        raise `SerializationFailed`.
        """
        value = self.load_object(key, storage)
        try:
            if isinstance(value, object_type):
                return value
        except TypeError:
            # parameterized generics cannot be used with isinstance
            pass
        try:
            return TypeAdapter(object_type).validate_python(value)
        except (ValidationError, PydanticSchemaGenerationError) as e:
            raise SerializationFailed(f"value for key {key!r} is not a valid {object_type!r}: {e}") from e

    def load_object(self, key: str, storage: StorageSelector) -> Any:
        """Load and decode the value under `key` without type validation."""
        data = self.load_data(key, storage)
        try:
            return self.serializer.load(data)
        except Exception as e:
            raise SerializationFailed(f"could not decode value for key {key!r}: {e}") from e

    # Introspection ---------------------------------------------------------
    @property
    def tracked_keys(self) -> FrozenSet[str]:
        return self.registry.keys

    @property
    def stored_version(self) -> int:
        return self.gate.stored_version

    def _store_for(self, storage: StorageSelector) -> BlobStore:
        return self._stores[StorageType(storage)]

    @staticmethod
    def _check_key(key: str) -> None:
        if not isinstance(key, str) or not key:
            raise InvalidKey(f"key must be a non-empty string, got {key!r}")
        if is_reserved_key(key):
            raise InvalidKey(f"key {key!r} is in the reserved '__persistence' namespace")
