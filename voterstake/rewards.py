"""Instructions of the rewards program, with their wire encoding and account lists."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar, Optional

from .lockup import LockupPeriod
from .pubkey import PUBKEY_LENGTH, Pubkey

SYSTEM_PROGRAM_ID = Pubkey(bytes(PUBKEY_LENGTH))

_U64 = struct.Struct("<Q")
_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class AccountMeta:
    """An account passed to an instruction, with its signer and writable flags."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool


def _writable(key: Pubkey, is_signer: bool = False) -> AccountMeta:
    return AccountMeta(pubkey=key, is_signer=is_signer, is_writable=True)


def _readonly(key: Pubkey, is_signer: bool = False) -> AccountMeta:
    return AccountMeta(pubkey=key, is_signer=is_signer, is_writable=False)


@dataclass(frozen=True)
class Instruction:
    """A call to a program: its id, the accounts it touches and encoded data."""

    program_id: Pubkey
    accounts: tuple[AccountMeta, ...]
    data: bytes

    def decode(self) -> "RewardsInstruction":
        """The rewards instruction carried in the data."""
        return RewardsInstruction.from_bytes(self.data)


class _Reader:
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
        return self.take(1)[0]

    def u64(self) -> int:
        return _U64.unpack(self.take(8))[0]

    def finish(self) -> None:
        if self._pos != len(self._data):
            raise ValueError("trailing bytes after encoded instruction")


def _encode_u64(value: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise ValueError(f"not an unsigned 64-bit integer: {value!r}")
    return _U64.pack(value)


def _encode_pubkey(value: Pubkey) -> bytes:
    if not isinstance(value, Pubkey):
        raise ValueError(f"not a public key: {value!r}")
    return bytes(value)


def _encode_period(value: LockupPeriod) -> bytes:
    return bytes([LockupPeriod(value)])


def _encode_opt_u64(value: Optional[int]) -> bytes:
    return b"\x00" if value is None else b"\x01" + _encode_u64(value)


def _decode_opt_u64(reader: _Reader) -> Optional[int]:
    tag = reader.u8()
    if tag == 0:
        return None
    if tag == 1:
        return reader.u64()
    raise ValueError(f"invalid option tag: {tag}")


_CODECS: dict[str, tuple[Callable[[Any], bytes], Callable[[_Reader], Any]]] = {
    "pubkey": (_encode_pubkey, lambda r: Pubkey(r.take(PUBKEY_LENGTH))),
    "u64": (_encode_u64, _Reader.u64),
    "period": (_encode_period, lambda r: LockupPeriod(r.u8())),
    "opt_u64": (_encode_opt_u64, _decode_opt_u64),
}


def _pubkey():
    return field(metadata={"kind": "pubkey"})


def _u64():
    return field(metadata={"kind": "u64"})


def _period():
    return field(metadata={"kind": "period"})


def _opt_u64():
    return field(default=None, metadata={"kind": "opt_u64"})


_VARIANTS: dict[int, type["RewardsInstruction"]] = {}


class RewardsInstruction:
    """Base of all rewards program instructions; encoded as a tag byte then fields."""

    TAG: ClassVar[int]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.TAG in _VARIANTS:
            raise TypeError(f"duplicate instruction tag {cls.TAG}")
        _VARIANTS[cls.TAG] = cls

    def to_bytes(self) -> bytes:
        parts = [bytes([self.TAG])]
        for item in fields(self):
            encode, _ = _CODECS[item.metadata["kind"]]
            parts.append(encode(getattr(self, item.name)))
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes) -> "RewardsInstruction":
        """Decode an instruction; on a variant class, the tag must match it."""
        reader = _Reader(data)
        tag = reader.u8()
        variant = _VARIANTS.get(tag)
        if variant is None:
            raise ValueError(f"unknown rewards instruction tag: {tag}")
        if cls is not RewardsInstruction and variant is not cls:
            raise ValueError(f"expected {cls.__name__}, found {variant.__name__}")
        values = {}
        for item in fields(variant):
            _, decode = _CODECS[item.metadata["kind"]]
            values[item.name] = decode(reader)
        reader.finish()
        return variant(**values)


@dataclass(frozen=True)
class InitializePool(RewardsInstruction):
    """Create and initialize a reward pool."""

    TAG: ClassVar[int] = 0
    fill_authority: Pubkey = _pubkey()
    distribution_authority: Pubkey = _pubkey()


@dataclass(frozen=True)
class FillVault(RewardsInstruction):
    """Fill the reward pool with rewards distributed until a given date."""

    TAG: ClassVar[int] = 1
    amount: int = _u64()
    distribution_ends_at: int = _u64()


@dataclass(frozen=True)
class InitializeMining(RewardsInstruction):
    """Initialize a mining account for its owner."""

    TAG: ClassVar[int] = 2
    mining_owner: Pubkey = _pubkey()


@dataclass(frozen=True)
class DepositMining(RewardsInstruction):
    """Deposit stake into a mining account."""

    TAG: ClassVar[int] = 3
    amount: int = _u64()
    lockup_period: LockupPeriod = _period()
    owner: Pubkey = _pubkey()
    delegate: Pubkey = _pubkey()


@dataclass(frozen=True)
class WithdrawMining(RewardsInstruction):
    """Withdraw stake from a mining account."""

    TAG: ClassVar[int] = 4
    amount: int = _u64()
    owner: Pubkey = _pubkey()
    delegate: Pubkey = _pubkey()


@dataclass(frozen=True)
class Claim(RewardsInstruction):
    """Claim accrued rewards."""

    TAG: ClassVar[int] = 5


@dataclass(frozen=True)
class ExtendStake(RewardsInstruction):
    """Restake for a new lockup period, optionally adding tokens."""

    TAG: ClassVar[int] = 6
    old_lockup_period: LockupPeriod = _period()
    new_lockup_period: LockupPeriod = _period()
    deposit_start_ts: int = _u64()
    base_amount: int = _u64()
    additional_amount: int = _u64()
    mining_owner: Pubkey = _pubkey()
    delegate: Pubkey = _pubkey()


@dataclass(frozen=True)
class DistributeRewards(RewardsInstruction):
    """Distribute rewards among mining owners."""

    TAG: ClassVar[int] = 7


@dataclass(frozen=True)
class CloseMining(RewardsInstruction):
    """Close a mining account."""

    TAG: ClassVar[int] = 8


@dataclass(frozen=True)
class ChangeDelegate(RewardsInstruction):
    """Move an existing stake to a new delegate."""

    TAG: ClassVar[int] = 9
    staked_amount: int = _u64()
    new_delegate: Pubkey = _pubkey()


@dataclass(frozen=True)
class Slash(RewardsInstruction):
    """Slash a stake; the expiration date is None for Flex stakes."""

    TAG: ClassVar[int] = 10
    mining_owner: Pubkey = _pubkey()
    slash_amount_in_native: int = _u64()
    slash_amount_multiplied_by_period: int = _u64()
    stake_expiration_date: Optional[int] = _opt_u64()


@dataclass(frozen=True)
class DecreaseRewards(RewardsInstruction):
    """Decrease a miner's weighted stake by a given amount."""

    TAG: ClassVar[int] = 11
    mining_owner: Pubkey = _pubkey()
    decreased_weighted_stake_number: int = _u64()


def _build(program_id: Pubkey, payload: RewardsInstruction, *accounts: AccountMeta) -> Instruction:
    return Instruction(program_id=program_id, accounts=tuple(accounts), data=payload.to_bytes())


def initialize_pool(
    program_id,
    reward_pool,
    reward_mint,
    reward_vault,
    payer,
    deposit_authority,
    rent,
    token_program,
    fill_authority,
    distribution_authority,
) -> Instruction:
    """Instruction creating the reward pool, the root of the rewards program."""
    return _build(
        program_id,
        InitializePool(fill_authority, distribution_authority),
        _writable(reward_pool),
        _readonly(reward_mint),
        _writable(reward_vault),
        _writable(payer, True),
        _readonly(deposit_authority, True),
        _readonly(rent),
        _readonly(token_program),
        _readonly(SYSTEM_PROGRAM_ID),
    )


def initialize_mining(program_id, reward_pool, mining, mining_owner, payer) -> Instruction:
    """Instruction creating a mining account for mining_owner."""
    return _build(
        program_id,
        InitializeMining(mining_owner),
        _writable(reward_pool),
        _writable(mining),
        _writable(payer, True),
        _readonly(SYSTEM_PROGRAM_ID),
    )


def deposit_mining(
    program_id,
    reward_pool,
    mining,
    deposit_authority,
    delegate_mining,
    amount,
    lockup_period,
    owner,
    delegate_wallet_addr,
) -> Instruction:
    """Instruction depositing stake into a mining account."""
    return _build(
        program_id,
        DepositMining(amount, LockupPeriod(lockup_period), owner, delegate_wallet_addr),
        _writable(reward_pool),
        _writable(mining),
        _readonly(deposit_authority, True),
        _writable(delegate_mining),
    )


def extend_stake(
    program_id,
    reward_pool,
    mining,
    deposit_authority,
    delegate_mining,
    old_lockup_period,
    new_lockup_period,
    deposit_start_ts,
    base_amount,
    additional_amount,
    mining_owner,
    delegate_wallet_addr,
) -> Instruction:
    """Instruction restaking a deposit for a new lockup period."""
    return _build(
        program_id,
        ExtendStake(
            LockupPeriod(old_lockup_period),
            LockupPeriod(new_lockup_period),
            deposit_start_ts,
            base_amount,
            additional_amount,
            mining_owner,
            delegate_wallet_addr,
        ),
        _writable(reward_pool),
        _writable(mining),
        _readonly(deposit_authority, True),
        _writable(delegate_mining),
    )


def withdraw_mining(
    program_id,
    reward_pool,
    mining,
    deposit_authority,
    delegate_mining,
    amount,
    owner,
    delegate_wallet_addr,
) -> Instruction:
    """Instruction withdrawing stake from a mining account."""
    return _build(
        program_id,
        WithdrawMining(amount, owner, delegate_wallet_addr),
        _writable(reward_pool),
        _writable(mining),
        _readonly(deposit_authority, True),
        _writable(delegate_mining),
    )


def claim(
    program_id,
    reward_pool,
    reward_mint,
    vault,
    mining,
    mining_owner,
    deposit_authority,
    user_reward_token_account,
    token_program,
) -> Instruction:
    """Instruction claiming rewards into the user's token account."""
    return _build(
        program_id,
        Claim(),
        _readonly(reward_pool),
        _readonly(reward_mint),
        _writable(vault),
        _writable(mining),
        _readonly(mining_owner, True),
        _readonly(deposit_authority, True),
        _writable(user_reward_token_account),
        _readonly(token_program),
    )


def close_mining(
    program_id, mining, mining_owner, target_account, deposit_authority, reward_pool
) -> Instruction:
    """Instruction closing a mining account, refunding target_account."""
    return _build(
        program_id,
        CloseMining(),
        _writable(mining),
        _readonly(mining_owner, True),
        _writable(target_account),
        _readonly(deposit_authority, True),
        _readonly(reward_pool),
    )


def change_delegate(
    program_id,
    reward_pool,
    mining,
    deposit_authority,
    mining_owner,
    old_delegate_mining,
    new_delegate_mining,
    new_delegate,
    staked_amount,
) -> Instruction:
    """Instruction moving a stake from the old delegate to the new one."""
    return _build(
        program_id,
        ChangeDelegate(staked_amount, new_delegate),
        _writable(reward_pool),
        _writable(mining),
        _readonly(deposit_authority, True),
        _readonly(mining_owner, True),
        _writable(old_delegate_mining),
        _writable(new_delegate_mining),
    )


def slash(
    program_id,
    deposit_authority,
    reward_pool,
    mining,
    mining_owner,
    slash_amount_in_native,
    slash_amount_multiplied_by_period,
    stake_expiration_date,
) -> Instruction:
    """Instruction slashing part of a stake."""
    return _build(
        program_id,
        Slash(
            mining_owner,
            slash_amount_in_native,
            slash_amount_multiplied_by_period,
            stake_expiration_date,
        ),
        _readonly(deposit_authority, True),
        _writable(reward_pool),
        _writable(mining),
    )


def decrease_rewards(
    program_id,
    deposit_authority,
    reward_pool,
    mining,
    decreased_weighted_stake_number,
    mining_owner,
) -> Instruction:
    """Instruction decreasing a miner's weighted stake."""
    return _build(
        program_id,
        DecreaseRewards(mining_owner, decreased_weighted_stake_number),
        _readonly(deposit_authority, True),
        _readonly(reward_pool),
        _writable(mining),
    )