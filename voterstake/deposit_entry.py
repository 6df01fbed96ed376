"""Bookkeeping for a single deposit."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .lockup import LOCKUP_SIZE, Lockup, LockupKind, LockupPeriod
from .pubkey import PUBKEY_LENGTH, Pubkey

_TAIL_FORMAT = struct.Struct("<QQQB?32x6x")
DEPOSIT_ENTRY_SIZE = LOCKUP_SIZE + PUBKEY_LENGTH + _TAIL_FORMAT.size


def _zero_key() -> Pubkey:
    return Pubkey(bytes(PUBKEY_LENGTH))


@dataclass
class DepositEntry:
    """A deposit of one mint under one lockup schedule."""

    lockup: Lockup = field(default_factory=Lockup)
    delegate: Pubkey = field(default_factory=_zero_key)
    amount_deposited_native: int = 0
    delegate_last_update_ts: int = 0
    slashing_penalty: int = 0
    voting_mint_config_idx: int = 0
    is_used: bool = False

    def voting_power(self) -> int:
        """Voting power is always equal to the deposited amount."""
        return self.amount_deposited_native

    def amount_locked(self) -> int:
        return self.amount_deposited_native if self.is_staked() else 0

    def amount_unlocked(self) -> int:
        return 0 if self.is_staked() else self.amount_deposited_native

    def weighted_stake(self, curr_ts: int) -> int:
        """Deposited amount times the lockup multiplier at curr_ts."""
        if not self.is_staked():
            return 0
        return self.lockup.multiplier(curr_ts) * self.amount_deposited_native

    def is_staked(self) -> bool:
        """Used, locked with a real kind and period, and not cooling down."""
        return (
            self.is_used
            and self.lockup.kind is not LockupKind.NONE
            and self.lockup.period is not LockupPeriod.NONE
            and not self.lockup.cooldown_requested
        )

    def to_bytes(self) -> bytes:
        return (
            self.lockup.to_bytes()
            + bytes(self.delegate)
            + _TAIL_FORMAT.pack(
                self.amount_deposited_native,
                self.delegate_last_update_ts,
                self.slashing_penalty,
                self.voting_mint_config_idx,
                self.is_used,
            )
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "DepositEntry":
        if len(data) != DEPOSIT_ENTRY_SIZE:
            raise ValueError(
                f"deposit entry must be {DEPOSIT_ENTRY_SIZE} bytes, got {len(data)}"
            )
        key_end = LOCKUP_SIZE + PUBKEY_LENGTH
        amount, last_update, penalty, idx, used = _TAIL_FORMAT.unpack(data[key_end:])
        return cls(
            lockup=Lockup.from_bytes(data[:LOCKUP_SIZE]),
            delegate=Pubkey(data[LOCKUP_SIZE:key_end]),
            amount_deposited_native=amount,
            delegate_last_update_ts=last_update,
            slashing_penalty=penalty,
            voting_mint_config_idx=idx,
            is_used=used,
        )