from __future__ import annotations
import logging
from pathlib import Path
import yaml
from typing import Optional


def configure_logging(config_path: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for command line use.

    The level comes from `level` when given, else from the ``log_level``
    key of the YAML settings file at `config_path`, else WARNING. The
    function returns a module logger for the caller.
    """
    default_level = logging.WARNING

    lvl = level
    if lvl is None and config_path is not None and Path(config_path).exists():
        try:
            with Path(config_path).open('r', encoding='utf-8') as _f:
                _cfg = yaml.safe_load(_f) or {}
                lvl = _cfg.get('log_level') if isinstance(_cfg, dict) else None
        except (OSError, yaml.YAMLError):
            # If config parse fails, fall back to default level
            lvl = None
    if isinstance(lvl, str):
        numeric = getattr(logging, lvl.upper(), None)
        if isinstance(numeric, int):
            default_level = numeric

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=default_level, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)
    logger.debug("Log level set to: %s", logging.getLevelName(default_level))
    return logger
