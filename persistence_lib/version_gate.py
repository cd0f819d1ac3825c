"""Schema version gate.

The persisted version marker is a blunt global epoch: data written under
an older version is either fully valid (same version) or fully discarded
(newer version requested). Asking for a version older than the stored one
is refused outright, since silently rolling back could hide a real
incompatibility.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Mapping

from persistence_lib.errors import VersionTooLow
from persistence_lib.registry import KeyRegistry
from persistence_lib.storage.base import BlobStore, SettingsStore, StorageType

logger = logging.getLogger(__name__)

VERSION_KEY = "__persistence_version__"


class GateOutcome(Enum):
    FIRST_RUN = "first_run"
    UNCHANGED = "unchanged"
    UPGRADED = "upgraded"


class VersionGate:
    def __init__(self, settings: SettingsStore, marker_key: str = VERSION_KEY) -> None:
        self.settings = settings
        self.marker_key = marker_key

    @property
    def stored_version(self) -> int:
        return self.settings.get_int(self.marker_key)

    def check(self, target: int, registry: KeyRegistry, stores: Mapping[StorageType, BlobStore]) -> GateOutcome:
        """Compare `target` with the stored marker and act on the result.

        Raises `VersionTooLow` without touching any state when the stored
        version is newer than `target`.
        """
        stored = self.stored_version
        if stored == 0:
            self.settings.set_int(self.marker_key, target)
            logger.info("First run: stamped schema version %d", target)
            return GateOutcome.FIRST_RUN
        if stored > target:
            raise VersionTooLow(stored, target)
        if stored == target:
            return GateOutcome.UNCHANGED

        keys = registry.keys
        logger.info("Upgrading schema version %d -> %d, wiping %d keys", stored, target, len(keys))
        for key in sorted(keys):
            for storage_type, store in stores.items():
                try:
                    store.remove(key)
                except Exception as e:
                    logger.debug("Ignoring failure removing %r from %s: %s", key, storage_type.value, e)
        registry.clear()
        self.settings.set_int(self.marker_key, target)
        return GateOutcome.UPGRADED
