"""Resolve a configuration to its storage container.

A container is a directory holding one settings document and one
directory of per-key files. Configurations without a group identifier use
the ``default`` container; a group identifier selects a shared container
under ``groups/`` so several applications can read the same data.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from persistence_lib.config import Configuration
from persistence_lib.errors import FailedToInitiate
from persistence_lib.storage.base import SettingsStore
from persistence_lib.storage.file_backend import FileStore
from persistence_lib.storage.settings_backend import YamlSettingsStore

logger = logging.getLogger(__name__)

HOME_ENV = "PERSISTENCE_HOME"
SETTINGS_FILE = "settings.yml"
FILES_DIR = "files"


def default_base_dir() -> Path:
    env = os.environ.get(HOME_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".persistence_lib"


def _valid_group(group: str) -> bool:
    if not group or group in (".", ".."):
        return False
    return "/" not in group and "\\" not in group and "\x00" not in group


class ContainerResolver:
    def __init__(self, base_dir: Optional[str | Path] = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else default_base_dir()

    def container_dir(self, config: Configuration) -> Path:
        group = config.group_identifier
        if group is None:
            return self.base_dir / "default"
        if not _valid_group(group):
            raise FailedToInitiate(group, "invalid group identifier")
        return self.base_dir / "groups" / group

    def resolve(self, config: Configuration) -> Tuple[SettingsStore, FileStore]:
        """Return the settings store and file store for `config`.

        Raises `FailedToInitiate` if the container cannot be created.
        """
        folder = self.container_dir(config)
        try:
            settings = YamlSettingsStore(folder / SETTINGS_FILE)
            files = FileStore(folder / FILES_DIR)
        except OSError as e:
            raise FailedToInitiate(config.group_identifier, str(e)) from e
        logger.debug("Resolved storage container %s", folder)
        return settings, files
