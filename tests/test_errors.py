import pytest

from voterstake.errors import StakingError, StakingErrorCode


def test_first_and_last_codes():
    assert StakingError(6000).code is StakingErrorCode.VOTING_MINT_NOT_FOUND
    assert StakingError(6038).code is StakingErrorCode.TOKENFLOW_RESTRICTED
    assert StakingError(0x1788).code is StakingErrorCode.DEPOSITING_IS_FORBIDDED


def test_codes_are_consecutive():
    decoded = [StakingError(value).code.value for value in range(6000, 6039)]
    assert decoded == list(range(6000, 6039))
    assert len(decoded) == len(StakingErrorCode)


def test_messages_from_source():
    assert (
        StakingErrorCode.DEPOSITING_IS_FORBIDDED.message()
        == "To deposit additional tokens, extend the deposit"
    )
    assert StakingErrorCode.INVALID_DELEGATE.message() == "Invalid delegate account"
    assert StakingErrorCode.VOTING_MINT_NOT_FOUND.message() == ""


def test_error_carries_code():
    err = StakingError(StakingErrorCode.SAME_DELEGATE)
    assert err.code is StakingErrorCode.SAME_DELEGATE
    assert "Cannot change delegate to the same delegate" in str(err)
    with pytest.raises(StakingError) as info:
        raise err
    assert info.value.code is StakingErrorCode.SAME_DELEGATE


def test_error_accepts_integer_code():
    err = StakingError(6028)
    assert err.code is StakingErrorCode.ARITHMETIC_OVERFLOW


def test_error_without_message_names_code():
    err = StakingError(StakingErrorCode.INVALID_MINT)
    assert "INVALID_MINT" in str(err)


def test_unknown_code_rejected():
    with pytest.raises(ValueError):
        StakingError(5999)