"""Key-value backend interface.

Defines the ``KeyValueBackend`` abstract class: the primitive store the item
layer is built on. Each operation is atomic for a single key; there is no
transaction across keys.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from securestore_lib.errors import BackendFailure, InvalidConfiguration


class KeyValueBackend(ABC):
    """Abstract asynchronous key-value backend.

    Values are text. ``max_value_size`` is the per-entry ceiling in UTF-8
    bytes (``None`` disables the check).
    """

    def __init__(self, max_value_size: Optional[int] = None) -> None:
        if max_value_size is not None and (
            isinstance(max_value_size, bool) or not isinstance(max_value_size, int) or max_value_size <= 0
        ):
            raise InvalidConfiguration(f"max_value_size must be a positive integer, got {max_value_size!r}")
        self.max_value_size = max_value_size

    def _check_size(self, key: str, value: str) -> None:
        if self.max_value_size is None:
            return
        size = len(value.encode("utf-8"))
        if size > self.max_value_size:
            raise BackendFailure(
                f"value for {key!r} is {size} bytes, exceeds quota of {self.max_value_size} bytes",
                key=key,
            )

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None`` when absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete ``key``. Deleting a missing key is a no-op."""
