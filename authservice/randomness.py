"""Cryptographically secure random values with a URL-safe text form."""

from __future__ import annotations

import base64
import binascii
import hmac
import re
import secrets

_WEB_SAFE_BASE64 = re.compile(r"[A-Za-z0-9_-]*={0,2}")


class Random:
    """An immutable block of random bytes."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    @property
    def data(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        """Compare contents in constant time."""
        if not isinstance(other, Random):
            return NotImplemented
        if len(self._data) != len(other._data):
            return False
        return hmac.compare_digest(self._data, other._data)

    def __hash__(self) -> int:
        return hash(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        """Web-safe base64 without padding, suitable for HTTP use."""
        return base64.urlsafe_b64encode(self._data).decode("ascii").rstrip("=")

    def __repr__(self) -> str:
        return f"Random(size={len(self._data)})"

    @classmethod
    def from_string(cls, text: str) -> Random:
        """Decode the form produced by str(); raise ValueError if malformed."""
        if _WEB_SAFE_BASE64.fullmatch(text) is None:
            raise ValueError(f"not web-safe base64: {text!r}")
        padded = text + "=" * (-len(text) % 4)
        try:
            data = base64.b64decode(padded, altchars=b"-_", validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"not web-safe base64: {text!r}") from exc
        return cls(data)


def generate(size: int) -> Random:
    """Return a Random holding size bytes from the system's secure source."""
    if size < 0:
        raise ValueError("size must not be negative")
    return Random(secrets.token_bytes(size))