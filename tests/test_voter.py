import pytest

from voterstake.deposit_entry import DepositEntry
from voterstake.errors import StakingError, StakingErrorCode
from voterstake.lockup import Lockup, LockupKind, LockupPeriod
from voterstake.pubkey import Pubkey
from voterstake.voter import Voter


def _voter_with(amounts_used):
    voter = Voter(voter_authority=Pubkey.new_unique(), registrar=Pubkey.new_unique())
    for index, (amount, used) in enumerate(amounts_used):
        voter.deposits[index] = DepositEntry(amount_deposited_native=amount, is_used=used)
    return voter


def _code(info):
    return info.value.code


def test_weight_of_single_used_deposit():
    voter = _voter_with([(20_000, True)])
    assert voter.weight() == 20_000


def test_weight_ignores_unused_deposits():
    voter = _voter_with([(100, True), (200, True), (400, False)])
    only_used = _voter_with([(100, True), (200, True)])
    assert voter.weight() == only_used.weight()
    assert voter.weight() == voter.weight_baseline()


def test_empty_voter_has_no_weight():
    voter = Voter()
    assert voter.weight() == 0
    assert voter.weight_baseline() == 0


def test_weight_locked_guaranteed():
    voter = _voter_with([(20_000, True)])
    assert voter.weight_locked_guaranteed(10, 10) == 0
    with pytest.raises(StakingError) as info:
        voter.weight_locked_guaranteed(10, 9)
    assert _code(info) is StakingErrorCode.INVALID_TIMESTAMP_ARGUMENTS


def test_active_deposit_returns_used_entry():
    voter = _voter_with([(5, False), (7, True)])
    entry = voter.active_deposit(1)
    assert entry is voter.deposits[1]
    entry.lockup = Lockup.new(LockupKind.CONSTANT, 0, LockupPeriod.ONE_YEAR)
    assert voter.deposits[1].lockup.period is LockupPeriod.ONE_YEAR


def test_active_deposit_errors():
    voter = _voter_with([(5, False)])
    with pytest.raises(StakingError) as info:
        voter.active_deposit(0)
    assert _code(info) is StakingErrorCode.UNUSED_DEPOSIT_ENTRY_INDEX
    with pytest.raises(StakingError) as info:
        voter.active_deposit(32)
    assert _code(info) is StakingErrorCode.OUT_OF_BOUNDS_DEPOSIT_ENTRY_INDEX


def test_tokenflow_restriction_cycle():
    voter = Voter()
    assert voter.is_tokenflow_restricted() is False
    voter.restrict_tokenflow()
    assert voter.is_tokenflow_restricted() is True
    with pytest.raises(StakingError) as info:
        voter.restrict_tokenflow()
    assert _code(info) is StakingErrorCode.TOKENFLOW_RESTRICTED_ALREADY
    voter.allow_tokenflow()
    assert voter.is_tokenflow_restricted() is False
    with pytest.raises(StakingError) as info:
        voter.allow_tokenflow()
    assert _code(info) is StakingErrorCode.TOKENFLOW_RESTRICTED_ALREADY


def test_tokenflow_keeps_other_penalty_bits():
    voter = Voter(penalties=0b10)
    voter.restrict_tokenflow()
    assert voter.penalties == 0b11
    voter.allow_tokenflow()
    assert voter.penalties == 0b10


def test_batch_minting_restriction():
    voter = Voter(batch_minting_restricted_until=100)
    assert voter.is_batch_minting_restricted(99) is True
    assert voter.is_batch_minting_restricted(100) is False


def test_seeds():
    voter = Voter(voter_authority=Pubkey.new_unique(), registrar=Pubkey.new_unique(), voter_bump=7)
    assert voter.seeds() == [
        bytes(voter.registrar),
        b"voter",
        bytes(voter.voter_authority),
        bytes([7]),
    ]


def test_round_trip_and_size():
    voter = _voter_with([(20_000, True), (3, False)])
    voter.deposits[0].lockup = Lockup.new(LockupKind.CONSTANT, 100, LockupPeriod.SIX_MONTHS)
    voter.deposits[0].delegate = Pubkey.new_unique()
    voter.penalties = 1
    voter.batch_minting_restricted_until = 123
    voter.voter_bump = 250
    data = voter.to_bytes()
    assert len(data) == 144 * 32 + 32 + 32 + 8 + 8 + 1 + 1 + 1 + 13
    assert Voter.from_bytes(data) == voter


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        Voter.from_bytes(bytes(100))


def test_requires_thirty_two_deposits():
    with pytest.raises(ValueError):
        Voter(deposits=[DepositEntry()])