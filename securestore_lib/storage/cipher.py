"""Fernet encryption for backends that persist values at rest.

Fernet is an authenticated symmetric cipher from the cryptography library.
Either pass a Fernet ``key`` or a ``password``; in password mode each payload
carries its own random salt and PBKDF2 parameters so the key can be derived
again on decrypt.
"""
from __future__ import annotations
import base64
import json
import os
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


class FernetCipher:
    def __init__(
        self,
        *,
        key: Optional[bytes] = None,
        password: Optional[str] = None,
        iterations: int = 390000,
    ) -> None:
        if key is None and password is None:
            raise ValueError("FernetCipher requires either `key` or `password`")
        self._key = key
        self._password = password
        self._iterations = iterations

    def _derive_key(self, password: str, salt: bytes, iterations: int) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=iterations,
        )
        return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))

    def encrypt(self, plaintext: str) -> bytes:
        """Encrypt text and return a framed JSON blob."""
        inner = plaintext.encode("utf-8")
        if self._password is not None:
            salt = os.urandom(16)
            f = Fernet(self._derive_key(self._password, salt, self._iterations))
            frame = {
                "v": 1,
                "mode": "password",
                "kdf": "pbkdf2",
                "iterations": self._iterations,
                "salt": base64.urlsafe_b64encode(salt).decode("ascii"),
                "ct": base64.urlsafe_b64encode(f.encrypt(inner)).decode("ascii"),
            }
        else:
            f = Fernet(self._key)
            frame = {"v": 1, "mode": "key", "ct": base64.urlsafe_b64encode(f.encrypt(inner)).decode("ascii")}
        return json.dumps(frame).encode("utf-8")

    def decrypt(self, data: bytes) -> str:
        """Parse a framed blob, derive the key if needed and decrypt.

        Raises:
            ValueError: on an unknown frame, a mode this cipher was not set up
                for, or a token that fails authentication.
        """
        frame = json.loads(data.decode("utf-8"))
        if not isinstance(frame, dict):
            raise ValueError("unknown frame format: expected mapping")
        mode = frame.get("mode")
        try:
            if mode == "password":
                if self._password is None:
                    raise ValueError("cipher was not configured with a password")
                salt = base64.urlsafe_b64decode(frame["salt"].encode("ascii"))
                iterations = frame.get("iterations", self._iterations)
                if not isinstance(iterations, int) or isinstance(iterations, bool) or iterations < 1:
                    raise ValueError("frame iterations must be a positive integer")
                f = Fernet(self._derive_key(self._password, salt, iterations))
            elif mode == "key":
                if self._key is None:
                    raise ValueError("cipher was not configured with a key")
                f = Fernet(self._key)
            else:
                raise ValueError("unknown frame format")

            ct = base64.urlsafe_b64decode(frame["ct"].encode("ascii"))
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"malformed frame: {e!r}") from e
        try:
            return f.decrypt(ct).decode("utf-8")
        except InvalidToken as e:
            raise ValueError("payload failed authentication") from e
