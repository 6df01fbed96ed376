import pytest

from voterstake.pubkey import PROGRAM_ID, Pubkey, b58decode, b58encode

PROGRAM_TEXT = "9XZ7Ku7FYGVk3veKba6BRKTFXoYJyh4b4ZHC6MfaTUE8"


@pytest.mark.parametrize(
    "data",
    [b"", b"\x00", b"\x00\x00\x05", b"hello world", bytes(range(32)), b"\xff" * 40],
)
def test_b58_round_trip(data):
    assert b58decode(b58encode(data)) == data


def test_leading_zero_bytes_become_ones():
    encoded = b58encode(b"\x00\x00\x05")
    assert encoded.startswith("11")
    assert not encoded[2:].startswith("1")


def test_zero_key_encoding():
    assert b58encode(bytes(32)) == "1" * 32


def test_empty_encoding():
    assert b58encode(b"") == ""


@pytest.mark.parametrize("text", ["0abc", "Ixyz", "lmn", "O"])
def test_b58decode_rejects_bad_characters(text):
    with pytest.raises(ValueError):
        b58decode(text)


def test_program_id_round_trip():
    assert PROGRAM_ID.to_base58() == PROGRAM_TEXT
    assert Pubkey.from_base58(PROGRAM_TEXT) == PROGRAM_ID
    assert str(PROGRAM_ID) == PROGRAM_TEXT
    assert len(bytes(PROGRAM_ID)) == 32


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        Pubkey(bytes(31))
    with pytest.raises(ValueError):
        Pubkey(bytes(33))


def test_new_unique_keys_differ():
    keys = {Pubkey.new_unique() for _ in range(10)}
    assert len(keys) == 10
    assert not any(key.is_default() for key in keys)


def test_is_default():
    assert Pubkey(bytes(32)).is_default()
    assert not PROGRAM_ID.is_default()


def test_equality_and_hash():
    a = Pubkey(bytes(PROGRAM_ID))
    b = Pubkey(PROGRAM_ID)
    assert a == b
    assert hash(a) == hash(b)
    assert a != Pubkey(bytes(32))