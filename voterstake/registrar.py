"""The registrar: an instance of a voting rights distributor."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterable

from .errors import StakingError, StakingErrorCode
from .pubkey import PUBKEY_LENGTH, Pubkey
from .voting_mint_config import VOTING_MINT_CONFIG_SIZE, VotingMintConfig

REGISTRAR_DISCRIMINATOR = bytes([193, 202, 205, 51, 78, 168, 150, 128])
VOTING_MINT_COUNT = 2

_U64_MAX = 2**64 - 1
_TAIL_FORMAT = struct.Struct("<B7x")
_KEYS_SIZE = 5 * PUBKEY_LENGTH
_MINTS_SIZE = VOTING_MINT_COUNT * VOTING_MINT_CONFIG_SIZE
REGISTRAR_SIZE = _KEYS_SIZE + _MINTS_SIZE + _TAIL_FORMAT.size


def _zero_key() -> Pubkey:
    return Pubkey(bytes(PUBKEY_LENGTH))


def _empty_mints() -> list[VotingMintConfig]:
    return [VotingMintConfig() for _ in range(VOTING_MINT_COUNT)]


@dataclass(frozen=True)
class MintAccount:
    """A token mint account: its address and its total supply."""

    key: Pubkey
    supply: int


@dataclass
class Registrar:
    """Realm settings and the voting mints that produce vote weight."""

    governance_program_id: Pubkey = field(default_factory=_zero_key)
    realm: Pubkey = field(default_factory=_zero_key)
    realm_governing_token_mint: Pubkey = field(default_factory=_zero_key)
    realm_authority: Pubkey = field(default_factory=_zero_key)
    reward_pool: Pubkey = field(default_factory=_zero_key)
    voting_mints: list[VotingMintConfig] = field(default_factory=_empty_mints)
    bump: int = 0

    def __post_init__(self) -> None:
        if len(self.voting_mints) != VOTING_MINT_COUNT:
            raise ValueError(
                f"registrar holds exactly {VOTING_MINT_COUNT} voting mints, "
                f"got {len(self.voting_mints)}"
            )

    def voting_mint_config_index(self, mint: Pubkey) -> int:
        """Index of the config for mint; raises if the mint is not configured."""
        for index, config in enumerate(self.voting_mints):
            if config.mint == mint:
                return index
        raise StakingError(StakingErrorCode.VOTING_MINT_NOT_FOUND)

    def max_vote_weight(self, mint_accounts: Iterable[MintAccount]) -> int:
        """Sum of twice the supply of every configured voting mint."""
        accounts = list(mint_accounts)
        total = 0
        for config in self.voting_mints:
            if not config.in_use():
                continue
            account = next((a for a in accounts if a.key == config.mint), None)
            if account is None:
                raise StakingError(StakingErrorCode.VOTING_MINT_NOT_FOUND)
            for _ in range(2):
                total += account.supply
                if total > _U64_MAX:
                    raise StakingError(StakingErrorCode.VOTER_WEIGHT_OVERFLOW)
        return total

    def seeds(self) -> list[bytes]:
        """Seeds of the registrar's program-derived address."""
        return [
            bytes(self.realm),
            b"registrar",
            bytes(self.realm_governing_token_mint),
            bytes([self.bump]),
        ]

    def to_bytes(self) -> bytes:
        keys = b"".join(
            bytes(key)
            for key in (
                self.governance_program_id,
                self.realm,
                self.realm_governing_token_mint,
                self.realm_authority,
                self.reward_pool,
            )
        )
        mints = b"".join(config.to_bytes() for config in self.voting_mints)
        return keys + mints + _TAIL_FORMAT.pack(self.bump)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Registrar":
        if len(data) != REGISTRAR_SIZE:
            raise ValueError(f"registrar must be {REGISTRAR_SIZE} bytes, got {len(data)}")
        keys = [
            Pubkey(data[start : start + PUBKEY_LENGTH])
            for start in range(0, _KEYS_SIZE, PUBKEY_LENGTH)
        ]
        mints = [
            VotingMintConfig.from_bytes(data[start : start + VOTING_MINT_CONFIG_SIZE])
            for start in range(_KEYS_SIZE, _KEYS_SIZE + _MINTS_SIZE, VOTING_MINT_CONFIG_SIZE)
        ]
        (bump,) = _TAIL_FORMAT.unpack(data[_KEYS_SIZE + _MINTS_SIZE :])
        return cls(*keys, voting_mints=mints, bump=bump)