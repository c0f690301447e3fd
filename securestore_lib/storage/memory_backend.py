"""Simple memory-backed key-value backend

This backend keeps values in a dict for the lifetime of the process.
"""
from threading import RLock
from typing import Dict, Iterable, Optional

from .base import KeyValueBackend


class MemoryBackend(KeyValueBackend):
    def __init__(self, max_value_size: Optional[int] = None) -> None:
        super().__init__(max_value_size)
        self._lock = RLock()
        self._store: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._store.get(key)

    async def set(self, key: str, value: str) -> None:
        self._check_size(key, value)
        with self._lock:
            self._store[key] = value

    async def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._store.keys())
