"""Error codes raised by the staking program state logic."""

from __future__ import annotations

from enum import IntEnum


class StakingErrorCode(IntEnum):
    """Numeric error codes, starting at 6000."""

    VOTING_MINT_NOT_FOUND = 6000
    VOTING_TOKEN_NON_ZERO = 6001
    OUT_OF_BOUNDS_DEPOSIT_ENTRY_INDEX = 6002
    UNUSED_DEPOSIT_ENTRY_INDEX = 6003
    INSUFFICIENT_UNLOCKED_TOKENS = 6004
    INVALID_LOCKUP_PERIOD = 6005
    VOTING_MINT_CONFIG_INDEX_ALREADY_IN_USE = 6006
    OUT_OF_BOUNDS_VOTING_MINT_CONFIG_INDEX = 6007
    FORBIDDEN_CPI = 6008
    INVALID_MINT = 6009
    DEPOSIT_STILL_LOCKED = 6010
    INVALID_AUTHORITY = 6011
    INVALID_TOKEN_OWNER_RECORD = 6012
    INVALID_REALM_AUTHORITY = 6013
    VOTER_WEIGHT_OVERFLOW = 6014
    LOCKUP_SATURATION_MUST_BE_POSITIVE = 6015
    VOTING_MINT_CONFIGURED_WITH_DIFFERENT_INDEX = 6016
    INTERNAL_PROGRAM_ERROR = 6017
    INVALID_LOCKUP_KIND = 6018
    VAULT_TOKEN_NON_ZERO = 6019
    INVALID_TIMESTAMP_ARGUMENTS = 6020
    UNLOCK_MUST_BE_CALLED_FIRST = 6021
    UNLOCK_ALREADY_REQUESTED = 6022
    EXTEND_DEPOSIT_IS_NOT_ALLOWED = 6023
    DEPOSITING_IS_FORBIDDED = 6024
    CPI_RETURN_DATA_IS_ABSENT = 6025
    LOCKING_IS_FORBIDDED = 6026
    DEPOSIT_ENTRY_IS_OLD = 6027
    ARITHMETIC_OVERFLOW = 6028
    INSUFFICIENT_WEIGHTED_STAKE = 6029
    INVALID_DELEGATE = 6030
    INVALID_MINING = 6031
    DELEGATE_UPDATE_IS_TOO_SOON = 6032
    SAME_DELEGATE = 6033
    INVALID_REWARD_POOL = 6034
    NO_DAO_INTERACTION_FOUND = 6035
    INVALID_TREASURY = 6036
    TOKENFLOW_RESTRICTED_ALREADY = 6037
    TOKENFLOW_RESTRICTED = 6038

    def message(self) -> str:
        """Human-readable message for this code (empty when none is defined)."""
        return _MESSAGES.get(self, "")


_MESSAGES = {
    StakingErrorCode.DEPOSITING_IS_FORBIDDED: "To deposit additional tokens, extend the deposit",
    StakingErrorCode.CPI_RETURN_DATA_IS_ABSENT: "Cpi call must return data, but data is absent",
    StakingErrorCode.LOCKING_IS_FORBIDDED: "The source for the transfer only can be a deposit on DAO",
    StakingErrorCode.DEPOSIT_ENTRY_IS_OLD: (
        "Locking up tokens is only allowed for freshly-deposited deposit entry"
    ),
    StakingErrorCode.ARITHMETIC_OVERFLOW: "Arithmetic operation has beed overflowed",
    StakingErrorCode.INSUFFICIENT_WEIGHTED_STAKE: (
        "Delegate must have at least 15_000_000 of own weighted stake"
    ),
    StakingErrorCode.INVALID_DELEGATE: "Invalid delegate account",
    StakingErrorCode.INVALID_MINING: "Invalid mining account",
    StakingErrorCode.DELEGATE_UPDATE_IS_TOO_SOON: "Updating delegate is sooner than 5 days",
    StakingErrorCode.SAME_DELEGATE: "Cannot change delegate to the same delegate",
    StakingErrorCode.INVALID_REWARD_POOL: "Invalid reward pool account",
    StakingErrorCode.NO_DAO_INTERACTION_FOUND: (
        "Passed remaining accounts are invalid, interaction with dao wasn't found"
    ),
    StakingErrorCode.INVALID_TREASURY: "Invalid treasury account",
    StakingErrorCode.TOKENFLOW_RESTRICTED_ALREADY: "Tokenflow is already restricted by DAO authority",
    StakingErrorCode.TOKENFLOW_RESTRICTED: "TokenflowRestricted has been restricted by DAO authority",
}


class StakingError(Exception):
    """Raised when a staking rule is violated."""

    def __init__(self, code: StakingErrorCode) -> None:
        self.code = StakingErrorCode(code)
        text = self.code.message()
        detail = f"{self.code.name} ({self.code.value})"
        super().__init__(f"{detail}: {text}" if text else detail)