import json

import pytest

from securestore_lib.compression import BrotliCodec
from securestore_lib.helpers.chunking import join_chunks, process_value_for_storage, split_by_size
from securestore_lib.types import StorageEntry, StorageType


class FakeCodec:
    def __init__(self, compressed='COMPRESSED_DATA'):
        self.compressed = compressed
        self.compress_calls = []

    def compress(self, value):
        self.compress_calls.append(value)
        return self.compressed

    def decompress(self, value):
        return None


def test_split_ascii_into_fixed_windows():
    assert split_by_size('Hello World', 4) == ['Hell', 'o Wo', 'rld']


def test_split_moves_boundary_before_multibyte_character():
    # '世' and '界' are 3 bytes each
    assert split_by_size('Hello 世界', 4) == ['Hell', 'o ', '世', '界']


def test_split_multibyte_character_exactly_at_boundary():
    # 'é' is two bytes starting at offset 4, window of 4 ends right before it
    assert split_by_size('abcdé', 4) == ['abcd', 'é']
    assert split_by_size('abcé', 4) == ['abc', 'é']


def test_split_character_wider_than_chunk_size_is_kept_whole():
    assert split_by_size('€', 1) == ['€']
    assert split_by_size('a😀b', 2) == ['a', '😀', 'b']


def test_split_empty_value_yields_no_chunks():
    assert split_by_size('', 4) == []


@pytest.mark.parametrize('chunk_size', [0, -1, 2.5, None, True])
def test_split_rejects_invalid_chunk_size(chunk_size):
    with pytest.raises(ValueError):
        split_by_size('abc', chunk_size)


def test_split_join_round_trip_and_boundary_safety():
    text = 'ascii, ünïcödé, 漢字かな, emoji 😀🎉 and Ω≈ç√ mixed ' * 3
    for chunk_size in (1, 2, 3, 4, 5, 7, 16, 2048):
        chunks = split_by_size(text, chunk_size)
        assert join_chunks(chunks) == text
        for chunk in chunks:
            data = chunk.encode('utf-8')
            assert data, 'no empty chunks'
            # every chunk starts on a character boundary
            assert (data[0] & 0xC0) != 0x80
            # chunks only exceed the budget when holding one wide character
            assert len(data) <= chunk_size or len(chunk) == 1


def test_join_chunks_concatenates_in_order():
    assert join_chunks(['Hel', 'lo', '']) == 'Hello'
    assert join_chunks([]) == ''


def test_process_value_defaults_to_compressed():
    codec = FakeCodec()
    result = process_value_for_storage('test_data', 'Hello World', chunk_size=4, codec=codec)

    assert result.storage_type is StorageType.COMPRESSED
    assert codec.compress_calls == ['Hello World']
    assert result.uncompressed_size == 11
    assert result.processed_size == len('COMPRESSED_DATA')
    # 'COMPRESSED_DATA' is 15 bytes -> 4 chunks of at most 4 bytes
    assert result.entries[0] == StorageEntry(
        key='test_data_master',
        value=json.dumps({'storageType': 'COMPRESSED', 'chunkCount': 4}, separators=(',', ':')),
    )
    assert [e.key for e in result.entries[1:]] == [
        'test_data_chunk_0',
        'test_data_chunk_1',
        'test_data_chunk_2',
        'test_data_chunk_3',
    ]
    assert [e.value for e in result.entries[1:]] == ['COMP', 'RESS', 'ED_D', 'ATA']


def test_process_value_uncompressed_does_not_call_codec():
    codec = FakeCodec()
    result = process_value_for_storage(
        'test_data', 'Hello World', StorageType.UNCOMPRESSED, chunk_size=4, codec=codec
    )

    assert codec.compress_calls == []
    assert result.storage_type is StorageType.UNCOMPRESSED
    assert result.processed_size == result.uncompressed_size == 11
    assert json.loads(result.entries[0].value) == {'storageType': 'UNCOMPRESSED', 'chunkCount': 3}
    assert [e.value for e in result.entries[1:]] == ['Hell', 'o Wo', 'rld']


def test_process_value_with_real_codec_entry_count_matches_chunk_count():
    result = process_value_for_storage('greeting', 'Hello World', chunk_size=4, codec=BrotliCodec())
    meta = json.loads(result.entries[0].value)
    assert meta['storageType'] == 'COMPRESSED'
    assert meta['chunkCount'] == len(result.entries) - 1
    # base64 framing is ASCII so windows are exact
    processed = join_chunks(e.value for e in result.entries[1:])
    assert meta['chunkCount'] == -(-len(processed) // 4)
    assert BrotliCodec().decompress(processed) == 'Hello World'


def test_process_empty_value_compressed_still_has_chunks():
    result = process_value_for_storage('empty', '', chunk_size=4, codec=BrotliCodec())
    meta = json.loads(result.entries[0].value)
    # chunk count follows the compressed payload, not the empty input
    assert result.uncompressed_size == 0
    assert result.processed_size > 0
    assert meta['chunkCount'] >= 1


def test_process_empty_value_uncompressed_has_zero_chunks():
    result = process_value_for_storage('empty', '', StorageType.UNCOMPRESSED, chunk_size=4, codec=FakeCodec())
    assert len(result.entries) == 1
    assert json.loads(result.entries[0].value) == {'storageType': 'UNCOMPRESSED', 'chunkCount': 0}


def test_process_value_preserves_unicode_across_chunks():
    value = 'Hello 世界! Привет 🌍'
    result = process_value_for_storage('intl', value, StorageType.UNCOMPRESSED, chunk_size=5, codec=FakeCodec())
    assert join_chunks(e.value for e in result.entries[1:]) == value
    assert result.uncompressed_size == len(value.encode('utf-8'))
