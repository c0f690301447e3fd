"""Compression codecs used for COMPRESSED items.

Backends store text, so codecs map text to text. ``BrotliCodec`` compresses
the UTF-8 bytes with brotli and frames the result as base64 ASCII.
"""
from __future__ import annotations
import base64
import binascii
import logging
from typing import Optional, Protocol

import brotli

from securestore_lib.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


class Codec(Protocol):
    """Text-to-text compression codec.

    ``decompress`` returns ``None`` when its input is not a valid payload.
    """

    def compress(self, value: str) -> str: ...

    def decompress(self, value: str) -> Optional[str]: ...


class BrotliCodec:
    def __init__(self, quality: int = 4) -> None:
        if isinstance(quality, bool) or not isinstance(quality, int) or not 0 <= quality <= 11:
            raise InvalidConfiguration(f"brotli quality must be an integer between 0 and 11, got {quality!r}")
        self.quality = quality

    def compress(self, value: str) -> str:
        comp = brotli.compress(value.encode("utf-8"), quality=self.quality)
        return base64.b64encode(comp).decode("ascii")

    def decompress(self, value: str) -> Optional[str]:
        try:
            raw = base64.b64decode(value.encode("ascii"), validate=True)
            return brotli.decompress(raw).decode("utf-8")
        except (binascii.Error, brotli.error, UnicodeError, ValueError) as e:
            logger.debug("BrotliCodec failed to decompress %d chars: %s", len(value), e)
            return None
