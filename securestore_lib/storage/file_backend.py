"""File-backed key-value backend.

Each key is stored as one file under ``data_dir``: ``<key>.txt`` holding the
UTF-8 text, or ``<key>.enc`` holding a Fernet frame when a cipher is set.
Writes are atomic: a temporary file is written, fsynced and renamed over
the target. Blocking I/O runs in a worker thread.
"""
from __future__ import annotations
import asyncio
import logging
import os
import re
from pathlib import Path
from typing import Iterable, Optional

from securestore_lib.errors import BackendFailure

from .base import KeyValueBackend
from .cipher import FernetCipher

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"[A-Za-z0-9_.-]+")


class FileBackend(KeyValueBackend):
    def __init__(
        self,
        data_dir: str | Path = "./data/store",
        max_value_size: Optional[int] = None,
        cipher: Optional[FernetCipher] = None,
    ) -> None:
        super().__init__(max_value_size)
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.cipher = cipher
        self._suffix = ".enc" if cipher is not None else ".txt"

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.fullmatch(key) or key.startswith("."):
            raise BackendFailure(f"key {key!r} is not usable as a file name", key=key)
        return self.data_dir / f"{key}{self._suffix}"

    def _read(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise BackendFailure(f"failed to read {key!r}: {e}", key=key) from e
        if self.cipher is None:
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise BackendFailure(f"stored value for {key!r} is not valid UTF-8: {e}", key=key) from e
        try:
            return self.cipher.decrypt(data)
        except ValueError as e:
            raise BackendFailure(f"failed to decrypt {key!r}: {e}", key=key) from e

    def _write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        payload = self.cipher.encrypt(value) if self.cipher is not None else value.encode("utf-8")
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            with open(tmp, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(path)
        except OSError as e:
            raise BackendFailure(f"failed to write {key!r}: {e}", key=key) from e

    def _remove(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("FileBackend delete of missing key %s", key)
        except OSError as e:
            raise BackendFailure(f"failed to delete {key!r}: {e}", key=key) from e

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        self._check_size(key, value)
        await asyncio.to_thread(self._write, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)

    def keys(self) -> Iterable[str]:
        for p in sorted(self.data_dir.iterdir()):
            if p.is_file() and p.suffix == self._suffix:
                yield p.stem
