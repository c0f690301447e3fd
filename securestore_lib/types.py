from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, List, Protocol, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Logger(Protocol):
    """Logging capability injected through ``StoreConfig``.

    A ``logging.Logger`` satisfies this protocol, as does any object with the
    four levelled methods. The warning level uses Python's ``warning`` name;
    ``StoreConfig.configure`` adapts loggers that only provide ``warn``.
    """

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


class StorageType(str, Enum):
    """How the chunks of an item are encoded."""

    COMPRESSED = "COMPRESSED"
    UNCOMPRESSED = "UNCOMPRESSED"


class MasterMetadata(BaseModel):
    """Record stored under the master key describing how to reassemble an item."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    storage_type: StorageType = Field(alias="storageType")
    chunk_count: int = Field(alias="chunkCount", ge=0, strict=True)

    def to_wire(self) -> str:
        return self.model_dump_json(by_alias=True)


@dataclass(frozen=True)
class StorageEntry:
    """A single key/value pair written to the backend."""

    key: str
    value: str


@dataclass
class EncodedValue:
    """Output of ``process_value_for_storage``: the write-set plus size telemetry."""

    entries: List[StorageEntry] = field(default_factory=list)
    storage_type: StorageType = StorageType.COMPRESSED
    uncompressed_size: int = 0
    processed_size: int = 0


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


class NotFound:
    _instance: "NotFound | None" = None

    def __new__(cls) -> "NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = NotFound()

ReadResult = Union[Found[Any], NotFound]
