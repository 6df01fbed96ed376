"""Event records reporting voter and deposit state, with their wire encoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

T = TypeVar("T")

_U8 = struct.Struct("<B")
_U64 = struct.Struct("<Q")


class _Reader:
    """Sequential reader over an encoded buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise ValueError("unexpected end of data")
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def u8(self) -> int:
        return _U8.unpack(self.take(1))[0]

    def u64(self) -> int:
        return _U64.unpack(self.take(8))[0]

    def option(self, read: Callable[["_Reader"], T]) -> Optional[T]:
        tag = self.u8()
        if tag == 0:
            return None
        if tag == 1:
            return read(self)
        raise ValueError(f"invalid option tag: {tag}")

    def finish(self) -> None:
        if self._pos != len(self._data):
            raise ValueError("trailing bytes after encoded value")


def _option(value: Optional[T], encode: Callable[[T], bytes]) -> bytes:
    return b"\x00" if value is None else b"\x01" + encode(value)


@dataclass
class VoterInfo:
    """Voter's total voting power, with and without lockup effects."""

    voting_power: int
    voting_power_baseline: int

    def to_bytes(self) -> bytes:
        return _U64.pack(self.voting_power) + _U64.pack(self.voting_power_baseline)

    @classmethod
    def _read(cls, reader: _Reader) -> "VoterInfo":
        return cls(voting_power=reader.u64(), voting_power_baseline=reader.u64())

    @classmethod
    def from_bytes(cls, data: bytes) -> "VoterInfo":
        reader = _Reader(data)
        value = cls._read(reader)
        reader.finish()
        return value


@dataclass
class VestingInfo:
    """Amount vested each period and the time of the next vesting."""

    rate: int
    next_timestamp: int

    def to_bytes(self) -> bytes:
        return _U64.pack(self.rate) + _U64.pack(self.next_timestamp)

    @classmethod
    def _read(cls, reader: _Reader) -> "VestingInfo":
        return cls(rate=reader.u64(), next_timestamp=reader.u64())

    @classmethod
    def from_bytes(cls, data: bytes) -> "VestingInfo":
        reader = _Reader(data)
        value = cls._read(reader)
        reader.finish()
        return value


@dataclass
class LockingInfo:
    """Locked amount, when the lockup ends and any vesting schedule."""

    amount: int
    end_timestamp: Optional[int] = None
    vesting: Optional[VestingInfo] = None

    def to_bytes(self) -> bytes:
        return (
            _U64.pack(self.amount)
            + _option(self.end_timestamp, _U64.pack)
            + _option(self.vesting, VestingInfo.to_bytes)
        )

    @classmethod
    def _read(cls, reader: _Reader) -> "LockingInfo":
        return cls(
            amount=reader.u64(),
            end_timestamp=reader.option(_Reader.u64),
            vesting=reader.option(VestingInfo._read),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "LockingInfo":
        reader = _Reader(data)
        value = cls._read(reader)
        reader.finish()
        return value


@dataclass
class DepositEntryInfo:
    """Summary of one deposit entry."""

    deposit_entry_index: int
    voting_mint_config_index: int
    unlocked: int
    voting_power: int
    voting_power_baseline: int
    locking: Optional[LockingInfo] = None

    def to_bytes(self) -> bytes:
        return (
            _U8.pack(self.deposit_entry_index)
            + _U8.pack(self.voting_mint_config_index)
            + _U64.pack(self.unlocked)
            + _U64.pack(self.voting_power)
            + _U64.pack(self.voting_power_baseline)
            + _option(self.locking, LockingInfo.to_bytes)
        )

    @classmethod
    def _read(cls, reader: _Reader) -> "DepositEntryInfo":
        return cls(
            deposit_entry_index=reader.u8(),
            voting_mint_config_index=reader.u8(),
            unlocked=reader.u64(),
            voting_power=reader.u64(),
            voting_power_baseline=reader.u64(),
            locking=reader.option(LockingInfo._read),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "DepositEntryInfo":
        reader = _Reader(data)
        value = cls._read(reader)
        reader.finish()
        return value