"""Exception hierarchy for securestore_lib.

Hard errors are raised; soft data-integrity gaps (missing chunks, payloads
that fail to decompress) are reported through the logger and surface to
callers as ``NOT_FOUND`` instead.
"""
from __future__ import annotations
from typing import Optional


class SecureStoreError(Exception):
    """Base class for all errors raised by this package."""


class InvalidKey(SecureStoreError, ValueError):
    """The user key failed validation. Raised before any backend call."""


class AlreadyConfigured(SecureStoreError, RuntimeError):
    """``StoreConfig.configure`` was called more than once."""


class InvalidConfiguration(SecureStoreError, ValueError):
    """A configuration option has an unusable value (e.g. chunk size <= 0)."""


class BackendFailure(SecureStoreError):
    """An operation on the underlying key-value primitive failed."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class CorruptData(SecureStoreError):
    """Stored data was retrievable but could not be parsed."""


class CorruptMetadata(CorruptData):
    """The master record under ``<key>_master`` is not valid metadata."""


class CorruptValue(CorruptData):
    """The reassembled payload could not be deserialized."""
