"""Key-value backends and value serializers for securestore_lib."""
from __future__ import annotations
from typing import Any

from securestore_lib.errors import InvalidConfiguration

from .base import KeyValueBackend
from .cipher import FernetCipher
from .file_backend import FileBackend
from .interfaces import KeyValueProtocol
from .memory_backend import MemoryBackend
from .serializer import JSONSerializer, Serializer, YAMLSerializer

__all__ = [
    "KeyValueBackend",
    "KeyValueProtocol",
    "MemoryBackend",
    "FileBackend",
    "FernetCipher",
    "Serializer",
    "JSONSerializer",
    "YAMLSerializer",
    "create_backend",
    "create_serializer",
]


def create_backend(backend: str = "memory", **options: Any) -> KeyValueBackend:
    """Create a backend by name.

    Options:
        max_value_size: per-entry ceiling in bytes (both backends)
        data_dir: directory for the file backend
        key / password: enable Fernet encryption for the file backend
    """
    max_value_size = options.get("max_value_size")
    if backend == "memory":
        return MemoryBackend(max_value_size=max_value_size)
    if backend == "file":
        cipher = None
        if options.get("key") is not None or options.get("password") is not None:
            cipher = FernetCipher(key=options.get("key"), password=options.get("password"))
        return FileBackend(
            data_dir=options.get("data_dir") or "./data/store",
            max_value_size=max_value_size,
            cipher=cipher,
        )
    raise InvalidConfiguration(f"unknown backend {backend!r}")


def create_serializer(name: str = "json") -> Serializer:
    if name == "json":
        return JSONSerializer()
    if name == "yaml":
        return YAMLSerializer()
    raise InvalidConfiguration(f"unknown serializer {name!r}")
