"""One-time configuration for the item store.

A ``StoreConfig`` starts out with defaults and can be configured exactly
once; afterwards it is read-only. Reading before configuring returns the
defaults.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from securestore_lib.errors import AlreadyConfigured, InvalidConfiguration
from securestore_lib.types import Logger

DEFAULT_CHUNK_SIZE = 2048

# Library logger stays silent unless the application configures logging
_default_logger = logging.getLogger("securestore_lib")
_default_logger.addHandler(logging.NullHandler())


class _WarnAdapter:
    """Expose ``warning`` on a logger that only provides ``warn``."""

    def __init__(self, logger: Any) -> None:
        self.debug = logger.debug
        self.info = logger.info
        self.warning = logger.warn
        self.error = logger.error


def _check_chunk_size(chunk_size: Any) -> int:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise InvalidConfiguration(f"chunk_size must be a positive integer, got {chunk_size!r}")
    return chunk_size


class StoreConfig:
    def __init__(self) -> None:
        self._configured = False
        self._logger: Logger = _default_logger
        self._chunk_size = DEFAULT_CHUNK_SIZE

    def configure(self, logger: Optional[Logger] = None, chunk_size: Optional[int] = None) -> None:
        """Set the logger and chunk size.

        Args:
            logger: logger capability; the library logger when omitted
            chunk_size: chunk budget in bytes; 2048 when omitted

        Raises:
            AlreadyConfigured: if called a second time
            InvalidConfiguration: if ``chunk_size`` is not a positive int
        """
        if self._configured:
            raise AlreadyConfigured("securestore configuration already set")
        if chunk_size is not None:
            self._chunk_size = _check_chunk_size(chunk_size)
        if logger is not None:
            if not hasattr(logger, "warning") and hasattr(logger, "warn"):
                logger = _WarnAdapter(logger)
            self._logger = logger
        self._configured = True

    @property
    def configured(self) -> bool:
        return self._configured

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @classmethod
    def from_settings(cls, settings: dict, logger: Optional[Logger] = None) -> "StoreConfig":
        """Build a configured ``StoreConfig`` from a settings mapping.

        Only ``chunk_size`` is read; other keys belong to the CLI and
        logging setup.
        """
        cfg = cls()
        cfg.configure(logger=logger, chunk_size=settings.get("chunk_size"))
        return cfg

    @classmethod
    def from_yaml(cls, path: str | Path, logger: Optional[Logger] = None) -> "StoreConfig":
        """Build a configured ``StoreConfig`` from a YAML file. A missing file yields the defaults."""
        return cls.from_settings(load_settings(path), logger=logger)


def load_settings(path: str | Path) -> dict:
    """Read a YAML settings mapping; a missing file is an empty mapping.

    Raises:
        InvalidConfiguration: if the file does not parse or is not a mapping
    """
    data: Any = {}
    cfg_path = Path(path)
    if cfg_path.exists():
        with cfg_path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise InvalidConfiguration(f"invalid config file {cfg_path}: parse error") from e
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"invalid config file {cfg_path}: expected mapping")
    return data
