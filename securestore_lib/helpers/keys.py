"""Key namespace helpers.

Every logical item owns one master key (``<key>_master``) and a run of chunk
keys (``<key>_chunk_<n>``). User keys are restricted so they can never
collide with either class of derived key.
"""
from __future__ import annotations
import re

from securestore_lib.errors import InvalidKey

MASTER_SUFFIX = "_master"
CHUNK_INFIX = "_chunk_"

_KEY_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def validate_key(key: str) -> None:
    """Validate a user key.

    Raises:
        InvalidKey: if the key is empty or not a string, ends with
            ``_master``, contains ``_chunk_``, or holds characters other than
            ASCII letters, digits and underscores.
    """
    if not isinstance(key, str) or not key:
        raise InvalidKey("Key must be a non-empty string")

    # Prevent collision with internal metadata keys
    if key.endswith(MASTER_SUFFIX) or CHUNK_INFIX in key:
        raise InvalidKey(f"Key cannot end with {MASTER_SUFFIX} or contain {CHUNK_INFIX}")

    if not _KEY_PATTERN.fullmatch(key):
        raise InvalidKey("Key can only contain alphanumeric characters and underscores")


def get_master_key(key: str) -> str:
    return f"{key}{MASTER_SUFFIX}"


def get_chunk_key(key: str, index: int) -> str:
    """Return the key of the zero-based chunk ``index`` of ``key``."""
    return f"{key}{CHUNK_INFIX}{index}"
