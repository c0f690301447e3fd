"""Chunked, optionally compressed item storage on top of a size-limited key-value store."""

from .config import StoreConfig
from .errors import (
    AlreadyConfigured,
    BackendFailure,
    CorruptData,
    CorruptMetadata,
    CorruptValue,
    InvalidConfiguration,
    InvalidKey,
    SecureStoreError,
)
from .store import SecureItemStore
from .types import NOT_FOUND, Found, MasterMetadata, NotFound, StorageEntry, StorageType

__all__ = [
    "SecureItemStore",
    "StoreConfig",
    "StorageType",
    "MasterMetadata",
    "StorageEntry",
    "Found",
    "NotFound",
    "NOT_FOUND",
    "SecureStoreError",
    "InvalidKey",
    "AlreadyConfigured",
    "InvalidConfiguration",
    "BackendFailure",
    "CorruptData",
    "CorruptMetadata",
    "CorruptValue",
]
