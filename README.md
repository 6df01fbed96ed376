# voterstake

Account state and rules for a token-staking registrar that grants voting
weight to deposits, together with the encoding of the instructions it sends
to a companion rewards program. Pure Python, no dependencies.

## Modules

- `voterstake.lockup`: `LockupPeriod` (`NONE`, `FLEX`, `THREE_MONTHS`,
  `SIX_MONTHS`, `ONE_YEAR`, with `to_secs()` and `multiplier()`),
  `LockupKind` (`NONE`, `CONSTANT`) and `Lockup`. `Lockup.new()` checks that
  kind and period match. `Lockup.multiplier(curr_ts)` is zero before the start
  or once cooldown is requested. It is the Flex multiplier after the lockup
  ends, and the period's multiplier otherwise. The module also provides the
  period arithmetic `seconds_left`, `periods_left`, `periods_total`,
  `period_current` and `remove_past_periods`.
- `voterstake.deposit_entry`: `DepositEntry`, with `voting_power()`,
  `amount_locked()`, `amount_unlocked()`, `weighted_stake(curr_ts)` and
  `is_staked()`.
- `voterstake.voting_mint_config`: `VotingMintConfig`, a mint and its grant
  authority. `in_use()` is true once the mint is set.
- `voterstake.registrar`: `Registrar`, which holds two voting mints, and
  `MintAccount`, a mint's key and supply.
  - `voting_mint_config_index(mint)` returns the index of a configured mint.
  - `max_vote_weight(mint_accounts)` sums twice the supply of every
    configured mint and fails if the total overflows a u64.
  - `seeds()` returns the registrar's address seeds.
- `voterstake.voter`: `Voter`, which holds 32 deposit entries.
  - `weight()` and `weight_baseline()` give the voter's weight.
  - `weight_locked_guaranteed(curr_ts, at_ts)` is always zero and raises if
    `at_ts` is before `curr_ts`.
  - `active_deposit(index)` returns a used deposit entry.
  - `restrict_tokenflow()`, `allow_tokenflow()` and
    `is_tokenflow_restricted()` handle the tokenflow restriction.
  - `is_batch_minting_restricted(curr_ts)` reports the batch-minting
    restriction.
  - `seeds()` returns the voter's address seeds.
- `voterstake.events`: the event records `VoterInfo`, `DepositEntryInfo`,
  `LockingInfo` and `VestingInfo`.
- `voterstake.rewards`: the `RewardsInstruction` variants, listed below.
  - `InitializePool`, `FillVault`, `InitializeMining`, `DepositMining`,
    `WithdrawMining`, `Claim`, `ExtendStake`, `DistributeRewards`,
    `CloseMining`, `ChangeDelegate`, `Slash` and `DecreaseRewards`.
  - Each variant is encoded as a tag byte followed by its fields.
  - The builder functions are `initialize_pool`, `initialize_mining`,
    `deposit_mining`, `extend_stake`, `withdraw_mining`, `claim`,
    `close_mining`, `change_delegate`, `slash` and `decrease_rewards`.
  - Each builder returns an `Instruction` with its `AccountMeta` tuple and
    encoded data. `Instruction.decode()` reads the data back.
- `voterstake.operations`: the staking operations.
  - `change_delegate` can be done at most once per five days. It requires
    the delegate to have at least 15,000,000 of own weighted stake.
  - `claim` requires evidence of a vote in the DAO's realm, passed as a
    `DaoInteraction`. It also requires the registrar's reward pool and
    tokenflow that is not restricted.
  - `decode_claimed_rewards` reads the claimed amount from return data.
  - `close_deposit_entry` frees an empty deposit entry.
  - `configure_voting_mint` registers or reconfigures a voting mint.
  - `change_delegate` and `claim` update or check state, then return the
    rewards `Instruction` to be sent. They take addresses as
    `ChangeDelegateAccounts` and `ClaimAccounts`.
- `voterstake.errors`: `StakingError`, raised with a `StakingErrorCode`
  (6000 onwards). `code.message()` gives the text.
- `voterstake.pubkey`: `Pubkey`, a 32-byte address with a base58 text form,
  and `b58encode` / `b58decode`.

`Lockup`, `DepositEntry`, `VotingMintConfig`, `Registrar` and `Voter` each
round-trip through `to_bytes()` / `from_bytes()` in a fixed-size layout. So
do the event records and the rewards instructions, in their variable-length
encodings.

## Example

```python
from voterstake.lockup import Lockup, LockupKind, LockupPeriod
from voterstake.deposit_entry import DepositEntry

lockup = Lockup.new(LockupKind.CONSTANT, 100, LockupPeriod.THREE_MONTHS)
deposit = DepositEntry(lockup=lockup, amount_deposited_native=20_000, is_used=True)

deposit.weighted_stake(100)   # 40000: three-month lockups count twice
deposit.amount_unlocked()     # 0 while staked
```

## What it does not do

The package models state and rules only.

- It does not connect to a network, sign or submit transactions, or run the
  rewards program. The rewards instructions are only built and encoded.
- It does not derive program addresses; `seeds()` only returns the seed
  bytes.
- It does not read governance, proposal or vote-record accounts. Their
  relevant fields are passed to `claim` in a `DaoInteraction`.
- It provides no deposit, withdraw, stake or unlock operations.
- It has no command-line interface.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```