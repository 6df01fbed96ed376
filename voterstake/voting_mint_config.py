"""Configuration of a mint whose tokens can be deposited for vote weight."""

from __future__ import annotations

from dataclasses import dataclass, field

from .pubkey import PUBKEY_LENGTH, Pubkey

VOTING_MINT_CONFIG_SIZE = 2 * PUBKEY_LENGTH


def _zero_key() -> Pubkey:
    return Pubkey(bytes(PUBKEY_LENGTH))


@dataclass
class VotingMintConfig:
    """A voting mint and the authority allowed to push grants into voters."""

    mint: Pubkey = field(default_factory=_zero_key)
    grant_authority: Pubkey = field(default_factory=_zero_key)

    def in_use(self) -> bool:
        """Whether this voting mint is configured."""
        return not self.mint.is_default()

    def to_bytes(self) -> bytes:
        return bytes(self.mint) + bytes(self.grant_authority)

    @classmethod
    def from_bytes(cls, data: bytes) -> "VotingMintConfig":
        if len(data) != VOTING_MINT_CONFIG_SIZE:
            raise ValueError(
                f"voting mint config must be {VOTING_MINT_CONFIG_SIZE} bytes, got {len(data)}"
            )
        return cls(
            mint=Pubkey(data[:PUBKEY_LENGTH]),
            grant_authority=Pubkey(data[PUBKEY_LENGTH:]),
        )