import pytest

from voterstake.events import DepositEntryInfo, LockingInfo, VestingInfo, VoterInfo


def test_voter_info_wire_bytes():
    data = VoterInfo(voting_power=1, voting_power_baseline=2).to_bytes()
    assert data == b"\x01" + bytes(7) + b"\x02" + bytes(7)


def test_voter_info_round_trip():
    info = VoterInfo(voting_power=20_000, voting_power_baseline=2**64 - 1)
    assert VoterInfo.from_bytes(info.to_bytes()) == info


def test_vesting_info_round_trip():
    info = VestingInfo(rate=10, next_timestamp=10_000_000_000)
    assert VestingInfo.from_bytes(info.to_bytes()) == info


def test_locking_info_absent_options_encode_as_zero_tags():
    data = LockingInfo(amount=5).to_bytes()
    assert data == (5).to_bytes(8, "little") + b"\x00\x00"


def test_locking_info_round_trip_with_options():
    info = LockingInfo(
        amount=20_000,
        end_timestamp=86_400,
        vesting=VestingInfo(rate=3, next_timestamp=4),
    )
    assert LockingInfo.from_bytes(info.to_bytes()) == info


def test_deposit_entry_info_round_trip():
    info = DepositEntryInfo(
        deposit_entry_index=1,
        voting_mint_config_index=0,
        unlocked=0,
        voting_power=20_000,
        voting_power_baseline=20_000,
        locking=LockingInfo(amount=20_000, end_timestamp=None, vesting=None),
    )
    assert DepositEntryInfo.from_bytes(info.to_bytes()) == info


def test_deposit_entry_info_without_locking():
    info = DepositEntryInfo(3, 1, 7, 8, 9)
    data = info.to_bytes()
    assert data[:2] == bytes([3, 1])
    assert data[-1:] == b"\x00"
    assert DepositEntryInfo.from_bytes(data) == info


def test_trailing_bytes_rejected():
    data = VoterInfo(1, 2).to_bytes() + b"\x00"
    with pytest.raises(ValueError):
        VoterInfo.from_bytes(data)


def test_truncated_data_rejected():
    data = LockingInfo(amount=1, end_timestamp=2).to_bytes()
    with pytest.raises(ValueError):
        LockingInfo.from_bytes(data[:-3])


def test_invalid_option_tag_rejected():
    data = (1).to_bytes(8, "little") + b"\x02\x00"
    with pytest.raises(ValueError):
        LockingInfo.from_bytes(data)