from typing import Protocol, runtime_checkable


@runtime_checkable
class BlobStoreProtocol(Protocol):
    """Blob store protocol mirroring `persistence_lib.storage.BlobStore`.

    Implementations should follow the semantics documented on the abstract
    base class in `persistence_lib.storage.base` (DataNotFound for missing
    keys, no-op removal of absent keys).
    """

    def put(self, key: str, data: bytes) -> None: ...

    def get(self, key: str) -> bytes: ...

    def remove(self, key: str) -> None: ...


@runtime_checkable
class SettingsStoreProtocol(BlobStoreProtocol, Protocol):
    def get_int(self, key: str) -> int: ...

    def set_int(self, key: str, value: int) -> None: ...
