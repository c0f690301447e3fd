from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueProtocol(Protocol):
    """Backend protocol mirroring `securestore_lib.storage.KeyValueBackend`.

    Any object with these three coroutines can back a `SecureItemStore`;
    subclassing the abstract base is not required.
    """

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...
