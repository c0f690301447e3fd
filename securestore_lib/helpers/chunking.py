"""Chunk codec and storage encoder.

``split_by_size`` cuts text into pieces whose UTF-8 encoding fits a byte
budget without ever splitting a multi-byte character, and ``join_chunks`` is
its inverse. ``process_value_for_storage`` combines optional compression with
chunking and produces the full write-set for one item.
"""
from __future__ import annotations
from typing import Iterable, List, Optional

from securestore_lib.compression import Codec
from securestore_lib.helpers.keys import get_chunk_key, get_master_key
from securestore_lib.types import EncodedValue, MasterMetadata, StorageEntry, StorageType


def _is_continuation(byte: int) -> bool:
    # UTF-8 continuation bytes have the bit pattern 10xxxxxx
    return (byte & 0xC0) == 0x80


def split_by_size(value: str, chunk_size: int) -> List[str]:
    """Split ``value`` into chunks of at most ``chunk_size`` UTF-8 bytes.

    Chunk boundaries are moved back to the start of a character when the
    tentative end falls inside one. A single character wider than
    ``chunk_size`` is emitted whole as its own chunk.

    Example:
        >>> split_by_size("Hello 世界", 4)
        ['Hell', 'o ', '世', '界']
    """
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")

    data = value.encode("utf-8")
    total = len(data)
    chunks: List[str] = []
    start = 0
    while start < total:
        end = min(start + chunk_size, total)
        while end > start and end < total and _is_continuation(data[end]):
            end -= 1
        if end == start:
            # character wider than chunk_size: take it whole
            end = start + 1
            while end < total and _is_continuation(data[end]):
                end += 1
        chunks.append(data[start:end].decode("utf-8"))
        start = end
    return chunks


def join_chunks(chunks: Iterable[str]) -> str:
    return "".join(chunks)


def process_value_for_storage(
    key: str,
    value: str,
    target_storage_type: Optional[StorageType] = None,
    *,
    chunk_size: int,
    codec: Codec,
) -> EncodedValue:
    """Compress (optionally) and chunk a serialized value.

    Args:
        key: user key the entries are derived from
        value: serialized value text
        target_storage_type: storage type override, COMPRESSED when ``None``
        chunk_size: chunk budget in bytes
        codec: compression codec used for COMPRESSED items

    Returns:
        ``EncodedValue`` whose ``entries`` hold the master entry first, then
        one entry per chunk in ascending index order.
    """
    storage_type = StorageType(target_storage_type) if target_storage_type else StorageType.COMPRESSED
    uncompressed_size = len(value.encode("utf-8"))

    processed = value
    processed_size = uncompressed_size
    if storage_type is StorageType.COMPRESSED:
        processed = codec.compress(value)
        processed_size = len(processed.encode("utf-8"))

    # Values that fit one chunk are still chunked; reads always go through the master entry
    chunks = split_by_size(processed, chunk_size)

    metadata = MasterMetadata(storage_type=storage_type, chunk_count=len(chunks))
    entries = [StorageEntry(key=get_master_key(key), value=metadata.to_wire())]
    entries.extend(
        StorageEntry(key=get_chunk_key(key, index), value=chunk)
        for index, chunk in enumerate(chunks)
    )

    return EncodedValue(
        entries=entries,
        storage_type=storage_type,
        uncompressed_size=uncompressed_size,
        processed_size=processed_size,
    )
