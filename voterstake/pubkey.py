"""32-byte public keys and base58 text encoding."""

from __future__ import annotations

import itertools
from typing import Union

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: i for i, char in enumerate(_ALPHABET)}
_unique_counter = itertools.count(1)

PUBKEY_LENGTH = 32


def b58encode(data: bytes) -> str:
    """Encode bytes as base58 text."""
    data = bytes(data)
    stripped = data.lstrip(b"\x00")
    leading = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_ALPHABET[rem])
    return "1" * leading + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text into bytes; raises ValueError on bad characters."""
    stripped = text.lstrip("1")
    leading = len(text) - len(stripped)
    number = 0
    for char in stripped:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character: {char!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * leading + body


class Pubkey:
    """An immutable 32-byte account address."""

    __slots__ = ("_bytes",)

    def __init__(self, value: Union[bytes, bytearray, str, "Pubkey"]) -> None:
        if isinstance(value, Pubkey):
            raw = bytes(value)
        elif isinstance(value, str):
            raw = b58decode(value)
        else:
            raw = bytes(value)
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError(f"public key must be {PUBKEY_LENGTH} bytes, got {len(raw)}")
        self._bytes = raw

    @classmethod
    def new_unique(cls) -> "Pubkey":
        """A fresh key, distinct from every earlier one made this way."""
        return cls(next(_unique_counter).to_bytes(8, "big") + bytes(PUBKEY_LENGTH - 8))

    @classmethod
    def from_base58(cls, text: str) -> "Pubkey":
        return cls(b58decode(text))

    def to_base58(self) -> str:
        return b58encode(self._bytes)

    def __bytes__(self) -> bytes:
        return self._bytes

    def is_default(self) -> bool:
        """True for the all-zero key."""
        return not any(self._bytes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Pubkey):
            return self._bytes == other._bytes
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"Pubkey({self.to_base58()!r})"


PROGRAM_ID = Pubkey("9XZ7Ku7FYGVk3veKba6BRKTFXoYJyh4b4ZHC6MfaTUE8")