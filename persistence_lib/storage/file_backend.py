"""Simple file-backed blob store.

Each key is stored as one file directly under the root directory. Only
the characters that are unsafe in a path component are percent-escaped,
so any key maps to exactly one file name inside the root. Keys whose
escaped name would exceed the file system's name limit are stored under
a hashed name instead. Writes are atomic: the blob goes to a temporary
file which is then renamed.
"""
from __future__ import annotations
import hashlib
import logging
import os
from pathlib import Path

from persistence_lib.errors import DataNotFound
from persistence_lib.storage.base import BlobStore, StorageType

logger = logging.getLogger(__name__)

TMP_SUFFIX = ".tmp"
# NAME_MAX on common file systems, minus room for the temp suffix
MAX_NAME_BYTES = 255 - len(TMP_SUFFIX)
# '%' is always escaped, so escaped names never contain '%#'
HASHED_PREFIX = "%#"

# '%' first so the escapes added below are not escaped again
_ESCAPES = (
    ("%", "%25"),
    ("/", "%2F"),
    ("\\", "%5C"),
    ("\x00", "%00"),
    # '.' too, so '.', '..' and the temp suffix can never be produced
    (".", "%2E"),
)


def key_to_filename(key: str) -> str:
    name = key
    for char, escape in _ESCAPES:
        name = name.replace(char, escape)
    if len(name.encode("utf-8")) > MAX_NAME_BYTES:
        return HASHED_PREFIX + hashlib.sha256(key.encode("utf-8")).hexdigest()
    return name


class FileStore(BlobStore):
    def __init__(self, root_dir: str | Path) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        return self.root_dir / key_to_filename(key)

    def put(self, key: str, data: bytes) -> None:
        path = self._path_for(key)
        tmp = path.with_name(path.name + TMP_SUFFIX)
        with open(tmp, "wb") as f:
            f.write(bytes(data))
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)

    def get(self, key: str) -> bytes:
        path = self._path_for(key)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            logger.debug("FileStore could not read %s: %s", path, e)
            raise DataNotFound(key, StorageType.FILE) from e

    def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
