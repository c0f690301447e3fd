"""Item store orchestrating chunked, optionally compressed values.

``SecureItemStore`` sequences the encoder output against a key-value backend
on write, and drives metadata-led reads and deletes. A logical item exists
exactly when its master entry exists.

Usage:

    store = SecureItemStore(MemoryBackend())
    await store.set_item("user_data", {"name": "Ada"})
    data = await store.get_item("user_data")
    await store.delete_item("user_data")

Writers are not synchronized against each other; callers needing a single
writer per key must serialize externally.
"""
from __future__ import annotations
import asyncio
from typing import Any, Awaitable, Iterable, Optional

from pydantic import ValidationError

from securestore_lib.compression import BrotliCodec, Codec
from securestore_lib.config import StoreConfig
from securestore_lib.errors import CorruptMetadata, CorruptValue
from securestore_lib.helpers.chunking import join_chunks, process_value_for_storage
from securestore_lib.helpers.keys import get_chunk_key, get_master_key, validate_key
from securestore_lib.storage.interfaces import KeyValueProtocol
from securestore_lib.storage.serializer import JSONSerializer, Serializer
from securestore_lib.types import NOT_FOUND, Found, MasterMetadata, ReadResult, StorageType


async def _settle_all(operations: Iterable[Awaitable[Any]]) -> None:
    """Run operations concurrently, wait for every one, then raise the first failure."""
    results = await asyncio.gather(*operations, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result


class SecureItemStore:
    def __init__(
        self,
        backend: KeyValueProtocol,
        config: Optional[StoreConfig] = None,
        codec: Optional[Codec] = None,
        serializer: Optional[Serializer] = None,
    ) -> None:
        self.backend = backend
        self.config = config or StoreConfig()
        self.codec = codec or BrotliCodec()
        self.serializer = serializer or JSONSerializer()

    def _parse_metadata(self, key: str, raw: str) -> MasterMetadata:
        try:
            return MasterMetadata.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptMetadata(f"master metadata for {key!r} is invalid: {e}") from e

    async def set_item(self, key: str, value: Any, storage_type: Optional[StorageType] = None) -> None:
        """Store ``value`` under ``key``, replacing any previous generation.

        The value is serialized, compressed unless ``storage_type`` is
        UNCOMPRESSED, and split into chunks. If any backend write fails the
        first failure is re-raised; entries already written are not rolled
        back.

        Raises:
            InvalidKey: before any backend call
            ValueError: for an unknown ``storage_type``, before any backend call
            BackendFailure: if a backend call fails
            CorruptMetadata: if the previous generation's master is unreadable
        """
        logger = self.config.logger
        try:
            validate_key(key)
            resolved_type = StorageType(storage_type) if storage_type is not None else StorageType.COMPRESSED
            serialized = self.serializer.dumps(value)

            # Drop the previous generation so chunks beyond the new count do not linger
            await self._delete_generation(key)

            encoded = process_value_for_storage(
                key,
                serialized,
                resolved_type,
                chunk_size=self.config.chunk_size,
                codec=self.codec,
            )
            logger.debug(
                "set_item key=%s storage_type=%s entries=%d uncompressed_size=%d processed_size=%d",
                key,
                encoded.storage_type.value,
                len(encoded.entries),
                encoded.uncompressed_size,
                encoded.processed_size,
            )

            await _settle_all(self.backend.set(entry.key, entry.value) for entry in encoded.entries)
        except Exception as e:
            logger.error("set_item failed for key=%s: %r", key, e)
            raise

    async def get_item_result(self, key: str) -> ReadResult:
        """Read ``key`` and return ``Found(value)`` or ``NOT_FOUND``.

        Missing chunks and payloads that fail to decompress are logged and
        reported as ``NOT_FOUND``.

        Raises:
            CorruptMetadata: if the master entry cannot be parsed
            CorruptValue: if the reassembled payload cannot be deserialized
            BackendFailure: if a backend read fails
        """
        logger = self.config.logger

        raw_master = await self.backend.get(get_master_key(key))
        if raw_master is None:
            logger.debug("get_item key=%s: no data found", key)
            return NOT_FOUND

        metadata = self._parse_metadata(key, raw_master)

        chunks = await asyncio.gather(
            *(self.backend.get(get_chunk_key(key, i)) for i in range(metadata.chunk_count))
        )
        missing = [i for i, chunk in enumerate(chunks) if chunk is None]
        if missing:
            logger.error(
                "get_item key=%s: %d of %d chunks missing (indexes %s)",
                key,
                len(missing),
                metadata.chunk_count,
                missing,
            )
            return NOT_FOUND

        payload: Optional[str] = join_chunks(chunks)
        if metadata.storage_type is StorageType.COMPRESSED:
            payload = self.codec.decompress(payload)
            if payload is None:
                logger.error("get_item key=%s: failed to decompress stored payload", key)
                return NOT_FOUND

        try:
            value = self.serializer.loads(payload)
        except ValueError as e:
            raise CorruptValue(f"stored value for {key!r} cannot be deserialized: {e}") from e
        return Found(value)

    async def get_item(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default`` when absent."""
        result = await self.get_item_result(key)
        if isinstance(result, Found):
            return result.value
        return default

    async def delete_item(self, key: str) -> None:
        """Delete the master entry and every chunk of ``key``.

        Deleting an absent item is a no-op. A master entry that cannot be
        parsed aborts the delete before anything is removed.

        Raises:
            InvalidKey: before any backend call
            CorruptMetadata: if the master entry cannot be parsed
            BackendFailure: if a backend call fails; some entries may
                already be gone
        """
        validate_key(key)
        try:
            await self._delete_generation(key)
        except Exception as e:
            self.config.logger.error("delete_item failed for key=%s: %r", key, e)
            raise

    async def _delete_generation(self, key: str) -> None:
        # Callers validate the key and own error logging
        logger = self.config.logger
        master_key = get_master_key(key)
        raw_master = await self.backend.get(master_key)
        if raw_master is None:
            logger.debug("delete_item key=%s: no data found to delete", key)
            return

        metadata = self._parse_metadata(key, raw_master)
        keys_to_delete = [master_key]
        keys_to_delete.extend(get_chunk_key(key, i) for i in range(metadata.chunk_count))

        await _settle_all(self.backend.delete(k) for k in keys_to_delete)
        logger.debug("delete_item key=%s: deleted %d entries", key, len(keys_to_delete))

    async def inspect_item(self, key: str) -> Optional[MasterMetadata]:
        """Return the master metadata of ``key`` without fetching chunks."""
        validate_key(key)
        raw_master = await self.backend.get(get_master_key(key))
        if raw_master is None:
            return None
        return self._parse_metadata(key, raw_master)
