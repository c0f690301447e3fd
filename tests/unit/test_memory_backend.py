import asyncio

import pytest

from securestore_lib.errors import BackendFailure, InvalidConfiguration
from securestore_lib.storage import KeyValueProtocol, create_backend
from securestore_lib.storage.memory_backend import MemoryBackend


def test_memory_basic_operations():
    m = MemoryBackend()

    async def scenario():
        # set/get
        await m.set('k', 'v')
        assert await m.get('k') == 'v'

        # overwrite
        await m.set('k', 'w')
        assert await m.get('k') == 'w'

        # delete, and delete of a missing key is a no-op
        await m.delete('k')
        assert await m.get('k') is None
        await m.delete('k')

    asyncio.run(scenario())
    assert list(m.keys()) == []


def test_memory_quota_rejects_large_values():
    m = MemoryBackend(max_value_size=4)

    async def scenario():
        await m.set('ok', 'abcd')
        with pytest.raises(BackendFailure) as exc:
            await m.set('big', 'ab€')  # 5 bytes
        assert exc.value.key == 'big'
        assert await m.get('big') is None

    asyncio.run(scenario())


def test_memory_backend_satisfies_protocol():
    assert isinstance(MemoryBackend(), KeyValueProtocol)
    assert isinstance(create_backend('memory'), MemoryBackend)
    with pytest.raises(InvalidConfiguration):
        create_backend('sqlite')


@pytest.mark.parametrize('size', [0, -1, '128'])
def test_invalid_max_value_size_rejected(size):
    with pytest.raises(InvalidConfiguration):
        MemoryBackend(max_value_size=size)
