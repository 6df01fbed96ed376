"""The voter account: a user's deposits and penalties."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

from .deposit_entry import DEPOSIT_ENTRY_SIZE, DepositEntry
from .errors import StakingError, StakingErrorCode
from .pubkey import PUBKEY_LENGTH, Pubkey

DEPOSIT_COUNT = 32

_U64_MAX = 2**64 - 1
_TAIL_FORMAT = struct.Struct(f"<{PUBKEY_LENGTH}s{PUBKEY_LENGTH}sQQBBB13x")
_DEPOSITS_SIZE = DEPOSIT_COUNT * DEPOSIT_ENTRY_SIZE
VOTER_SIZE = _DEPOSITS_SIZE + _TAIL_FORMAT.size

_TOKENFLOW_RESTRICTED_MASK = 1 << 0


def _zero_key() -> Pubkey:
    return Pubkey(bytes(PUBKEY_LENGTH))


def _empty_deposits() -> list[DepositEntry]:
    return [DepositEntry() for _ in range(DEPOSIT_COUNT)]


@dataclass
class Voter:
    """User account holding deposits that mint voting rights."""

    MIN_OWN_WEIGHTED_STAKE: ClassVar[int] = 15_000_000

    deposits: list[DepositEntry] = field(default_factory=_empty_deposits)
    voter_authority: Pubkey = field(default_factory=_zero_key)
    registrar: Pubkey = field(default_factory=_zero_key)
    decreased_weighted_stake_by: int = 0
    batch_minting_restricted_until: int = 0
    voter_bump: int = 0
    voter_weight_record_bump: int = 0
    penalties: int = 0

    def __post_init__(self) -> None:
        if len(self.deposits) != DEPOSIT_COUNT:
            raise ValueError(
                f"voter holds exactly {DEPOSIT_COUNT} deposits, got {len(self.deposits)}"
            )

    def _used(self):
        return (d for d in self.deposits if d.is_used)

    def weight(self) -> int:
        """The full vote weight available to the voter."""
        total = 0
        for deposit in self._used():
            total += deposit.voting_power()
            if total > _U64_MAX:
                raise OverflowError("voter weight overflowed")
        return total

    def weight_baseline(self) -> int:
        """The vote weight when ignoring any lockup effects."""
        return sum(d.amount_deposited_native for d in self._used())

    def weight_locked_guaranteed(self, curr_ts: int, at_ts: int) -> int:
        """Extra lockup weight guaranteed at at_ts; lockups add none."""
        if at_ts < curr_ts:
            raise StakingError(StakingErrorCode.INVALID_TIMESTAMP_ARGUMENTS)
        return 0

    def active_deposit(self, index: int) -> DepositEntry:
        """The used deposit entry at index; raises if out of range or unused."""
        if not 0 <= index < len(self.deposits):
            raise StakingError(StakingErrorCode.OUT_OF_BOUNDS_DEPOSIT_ENTRY_INDEX)
        deposit = self.deposits[index]
        if not deposit.is_used:
            raise StakingError(StakingErrorCode.UNUSED_DEPOSIT_ENTRY_INDEX)
        return deposit

    def restrict_tokenflow(self) -> None:
        if self.is_tokenflow_restricted():
            raise StakingError(StakingErrorCode.TOKENFLOW_RESTRICTED_ALREADY)
        self.penalties |= _TOKENFLOW_RESTRICTED_MASK

    def allow_tokenflow(self) -> None:
        if not self.is_tokenflow_restricted():
            raise StakingError(StakingErrorCode.TOKENFLOW_RESTRICTED_ALREADY)
        self.penalties &= ~_TOKENFLOW_RESTRICTED_MASK & 0xFF

    def is_tokenflow_restricted(self) -> bool:
        return bool(self.penalties & _TOKENFLOW_RESTRICTED_MASK)

    def is_batch_minting_restricted(self, curr_ts: int) -> bool:
        return self.batch_minting_restricted_until > curr_ts

    def seeds(self) -> list[bytes]:
        """Seeds of the voter's program-derived address."""
        return [
            bytes(self.registrar),
            b"voter",
            bytes(self.voter_authority),
            bytes([self.voter_bump]),
        ]

    def to_bytes(self) -> bytes:
        deposits = b"".join(d.to_bytes() for d in self.deposits)
        return deposits + _TAIL_FORMAT.pack(
            bytes(self.voter_authority),
            bytes(self.registrar),
            self.decreased_weighted_stake_by,
            self.batch_minting_restricted_until,
            self.voter_bump,
            self.voter_weight_record_bump,
            self.penalties,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "Voter":
        if len(data) != VOTER_SIZE:
            raise ValueError(f"voter must be {VOTER_SIZE} bytes, got {len(data)}")
        deposits = [
            DepositEntry.from_bytes(data[start : start + DEPOSIT_ENTRY_SIZE])
            for start in range(0, _DEPOSITS_SIZE, DEPOSIT_ENTRY_SIZE)
        ]
        authority, registrar, decreased, until, bump, vwr_bump, penalties = (
            _TAIL_FORMAT.unpack(data[_DEPOSITS_SIZE:])
        )
        return cls(
            deposits=deposits,
            voter_authority=Pubkey(authority),
            registrar=Pubkey(registrar),
            decreased_weighted_stake_by=decreased,
            batch_minting_restricted_until=until,
            voter_bump=bump,
            voter_weight_record_bump=vwr_bump,
            penalties=penalties,
        )