"""Staking operations that check and update registrar and voter state.

Operations that talk to the rewards program return the rewards
instruction to be invoked instead of invoking it themselves.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Optional

from . import rewards
from .deposit_entry import DepositEntry
from .errors import StakingError, StakingErrorCode
from .lockup import SECONDS_PER_DAY
from .pubkey import PUBKEY_LENGTH, Pubkey
from .registrar import MintAccount, Registrar
from .voter import Voter
from .voting_mint_config import VotingMintConfig

DELEGATE_UPDATE_DIFF_THRESHOLD = 5 * SECONDS_PER_DAY

_U64 = struct.Struct("<Q")


@dataclass(frozen=True)
class ChangeDelegateAccounts:
    """Addresses of the accounts taking part in a delegate change."""

    registrar: Pubkey
    voter: Pubkey
    voter_authority: Pubkey
    delegate_voter: Pubkey
    old_delegate_mining: Pubkey
    new_delegate_mining: Pubkey
    reward_pool: Pubkey
    deposit_mining: Pubkey
    rewards_program: Pubkey


@dataclass(frozen=True)
class ClaimAccounts:
    """Addresses of the accounts taking part in a rewards claim."""

    reward_pool: Pubkey
    reward_mint: Pubkey
    vault: Pubkey
    deposit_mining: Pubkey
    voter_authority: Pubkey
    registrar: Pubkey
    governance: Pubkey
    user_reward_token_account: Pubkey
    token_program: Pubkey
    rewards_program: Pubkey


@dataclass(frozen=True)
class DaoInteraction:
    """Evidence of a vote: the governance's realm, the proposal's governance
    and the owner recorded in the vote record."""

    governance_realm: Pubkey
    proposal_governance: Pubkey
    vote_record_owner: Pubkey


def change_delegate(
    registrar: Registrar,
    voter: Voter,
    delegate_voter: Voter,
    accounts: ChangeDelegateAccounts,
    deposit_entry_index: int,
    curr_ts: int,
) -> rewards.Instruction:
    """Point a deposit at a new delegate; allowed once per five days.

    Passing the voter's own account as the delegate voter makes the voter
    its own delegate. Returns the rewards instruction moving the stake.
    """
    target = voter.active_deposit(deposit_entry_index)

    if registrar.reward_pool != accounts.reward_pool:
        raise StakingError(StakingErrorCode.INVALID_REWARD_POOL)

    since_update = curr_ts - target.delegate_last_update_ts
    if since_update < 0:
        raise StakingError(StakingErrorCode.ARITHMETIC_OVERFLOW)
    if since_update <= DELEGATE_UPDATE_DIFF_THRESHOLD:
        raise StakingError(StakingErrorCode.DELEGATE_UPDATE_IS_TOO_SOON)

    if accounts.voter == accounts.delegate_voter:
        if target.delegate == voter.voter_authority:
            raise StakingError(StakingErrorCode.SAME_DELEGATE)
        new_delegate = voter.voter_authority
    else:
        if delegate_voter.voter_authority == target.delegate:
            raise StakingError(StakingErrorCode.SAME_DELEGATE)
        own_stake = sum(d.weighted_stake(curr_ts) for d in delegate_voter.deposits)
        if own_stake < Voter.MIN_OWN_WEIGHTED_STAKE:
            raise StakingError(StakingErrorCode.INSUFFICIENT_WEIGHTED_STAKE)
        new_delegate = delegate_voter.voter_authority

    target.delegate = new_delegate
    target.delegate_last_update_ts = curr_ts

    return rewards.change_delegate(
        accounts.rewards_program,
        accounts.reward_pool,
        accounts.deposit_mining,
        accounts.registrar,
        accounts.voter_authority,
        accounts.old_delegate_mining,
        accounts.new_delegate_mining,
        new_delegate,
        target.amount_deposited_native,
    )


def claim(
    registrar: Registrar,
    voter: Voter,
    accounts: ClaimAccounts,
    interaction: DaoInteraction,
    realm: Pubkey,
    dao_pubkey: Pubkey,
) -> rewards.Instruction:
    """Check that a claim is allowed and return the rewards claim instruction.

    The voter must have voted in the DAO's realm, the reward pool must be the
    registrar's and the voter's token flow must not be restricted.
    """
    voted_in_dao = (
        realm == dao_pubkey
        and interaction.governance_realm == realm
        and interaction.proposal_governance == accounts.governance
        and interaction.vote_record_owner == accounts.voter_authority
    )
    if not voted_in_dao:
        raise StakingError(StakingErrorCode.NO_DAO_INTERACTION_FOUND)

    if registrar.reward_pool != accounts.reward_pool:
        raise StakingError(StakingErrorCode.INVALID_REWARD_POOL)

    if voter.is_tokenflow_restricted():
        raise StakingError(StakingErrorCode.TOKENFLOW_RESTRICTED)

    return rewards.claim(
        accounts.rewards_program,
        accounts.reward_pool,
        accounts.reward_mint,
        accounts.vault,
        accounts.deposit_mining,
        accounts.voter_authority,
        accounts.registrar,
        accounts.user_reward_token_account,
        accounts.token_program,
    )


def decode_claimed_rewards(return_data: Optional[bytes]) -> int:
    """The claimed amount from the data returned by the rewards claim."""
    if return_data is None:
        raise StakingError(StakingErrorCode.CPI_RETURN_DATA_IS_ABSENT)
    data = bytes(return_data)
    if len(data) < _U64.size:
        raise ValueError("return data too short for a claimed amount")
    return _U64.unpack_from(data)[0]


def close_deposit_entry(voter: Voter, deposit_entry_index: int) -> None:
    """Free an empty deposit entry so that it can be reused."""
    deposit = voter.active_deposit(deposit_entry_index)
    if deposit.amount_deposited_native != 0:
        raise StakingError(StakingErrorCode.VOTING_TOKEN_NON_ZERO)
    voter.deposits[deposit_entry_index] = DepositEntry()


def configure_voting_mint(
    registrar: Registrar,
    mint: Pubkey,
    idx: int,
    grant_authority: Optional[Pubkey],
    mint_accounts: Iterable[MintAccount],
) -> None:
    """Register mint at idx, or reconfigure it at the index it already has.

    mint_accounts must hold every configured voting mint, the new one
    included; the registrar is left unchanged if the check fails.
    """
    if not 0 <= idx < len(registrar.voting_mints):
        raise StakingError(StakingErrorCode.OUT_OF_BOUNDS_VOTING_MINT_CONFIG_INDEX)

    try:
        existing = registrar.voting_mint_config_index(mint)
    except StakingError:
        if registrar.voting_mints[idx].in_use():
            raise StakingError(
                StakingErrorCode.VOTING_MINT_CONFIG_INDEX_ALREADY_IN_USE
            ) from None
    else:
        if existing != idx:
            raise StakingError(StakingErrorCode.VOTING_MINT_CONFIGURED_WITH_DIFFERENT_INDEX)

    previous = registrar.voting_mints[idx]
    registrar.voting_mints[idx] = VotingMintConfig(
        mint=mint,
        grant_authority=(
            grant_authority if grant_authority is not None else Pubkey(bytes(PUBKEY_LENGTH))
        ),
    )
    try:
        registrar.max_vote_weight(mint_accounts)
    except StakingError:
        registrar.voting_mints[idx] = previous
        raise