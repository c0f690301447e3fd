from __future__ import annotations
import logging
from pathlib import Path
import yaml
from typing import Optional

DEFAULT_CONFIG_PATH = Path('data/config/store_config.yml')


def configure_logging(config_path: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for command line use.

    The level comes from ``level`` when given, else from the ``log_level``
    key of the YAML config file, else WARNING. Returns a module logger for
    the caller.
    """
    log_level = logging.WARNING

    cfg_path = config_path or DEFAULT_CONFIG_PATH
    if level is None and cfg_path.exists():
        try:
            with cfg_path.open('r', encoding='utf-8') as _f:
                _cfg = yaml.safe_load(_f) or {}
            level = _cfg.get('log_level') if isinstance(_cfg, dict) else None
        except (OSError, yaml.YAMLError):
            # If config parse fails, fall back to default level
            logging.getLogger(__name__).warning('Failed to read log level from %s', cfg_path)
    if isinstance(level, str):
        _numeric = getattr(logging, level.upper(), None)
        if isinstance(_numeric, int):
            log_level = _numeric

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=log_level, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)
    logger.debug('Log level set to: %s', logging.getLevelName(log_level))
    return logger
