import pytest

from vdf_beacon.constants import HASH_PAD_BYTES, HASH_PAD_HEX_DIGITS
from vdf_beacon.errors import EncodingError
from vdf_beacon.utils.bytes import left_pad
from vdf_beacon.utils.hash import keccak256
from vdf_beacon.vdf.challenge import (
    challenge_operand,
    derive_challenge,
    hash_to_int,
    needs_padding,
)

# exactly HASH_PAD_HEX_DIGITS hex digits
FULL_WIDTH = int("8" + "0" * (HASH_PAD_HEX_DIGITS - 1), 16)
SHORT = 0x1234ABCD


def _h(data: bytes) -> int:
    return int.from_bytes(keccak256(data), "big")


def test_pad_width_constants_agree():
    assert HASH_PAD_BYTES == 129
    assert HASH_PAD_HEX_DIGITS == 2 * HASH_PAD_BYTES


# ---------- operand encoding ----------


def test_challenge_operand_unpadded_is_minimal():
    assert challenge_operand(SHORT, pad=False) == b"\x12\x34\xab\xcd"
    assert challenge_operand(0xABC, pad=False) == b"\x0a\xbc"


def test_challenge_operand_padded_to_width():
    enc = challenge_operand(SHORT, pad=True)
    assert len(enc) == HASH_PAD_BYTES
    assert enc == b"\x00" * (HASH_PAD_BYTES - 4) + b"\x12\x34\xab\xcd"


def test_zero_is_single_byte_even_when_padded():
    assert challenge_operand(0, pad=False) == b"\x00"
    assert challenge_operand(0, pad=True) == b"\x00"


def test_challenge_operand_rejects_negative():
    with pytest.raises(EncodingError):
        challenge_operand(-1, pad=True)


# ---------- hashing ----------


def test_hash_to_int_tight_packing_without_pad():
    expected = _h(b"\x01" + b"\x02" + b"\x03")
    assert hash_to_int(False, 1, 2, 3) == expected


def test_hash_to_int_pads_all_but_third_operand():
    expected = _h(left_pad(b"\x01", HASH_PAD_BYTES) + left_pad(b"\x02", HASH_PAD_BYTES) + b"\x03")
    assert hash_to_int(True, 1, 2, 3) == expected


def test_hash_to_int_fourth_operand_is_padded():
    expected = _h(
        left_pad(b"\x01", HASH_PAD_BYTES)
        + left_pad(b"\x02", HASH_PAD_BYTES)
        + b"\x03"
        + left_pad(b"\x04", HASH_PAD_BYTES)
    )
    assert hash_to_int(True, 1, 2, 3, 4) == expected


def test_hash_to_int_zero_operand_under_pad():
    expected = _h(b"\x00" + left_pad(b"\x02", HASH_PAD_BYTES) + b"\x00")
    assert hash_to_int(True, 0, 2, 0) == expected


def test_hash_to_int_is_deterministic_and_256_bit():
    a = hash_to_int(True, SHORT, SHORT + 1, SHORT + 2)
    b = hash_to_int(True, SHORT, SHORT + 1, SHORT + 2)
    assert a == b
    assert 0 <= a < 2**256
    assert a != hash_to_int(False, SHORT, SHORT + 1, SHORT + 2)


# ---------- pad flag ----------


def test_level_one_is_never_padded():
    assert needs_padding(1, SHORT, SHORT) is False
    assert needs_padding(1, FULL_WIDTH, FULL_WIDTH) is False


def test_later_levels_pad_when_either_operand_is_short():
    assert needs_padding(2, SHORT, FULL_WIDTH) is True
    assert needs_padding(2, FULL_WIDTH, SHORT) is True
    assert needs_padding(7, SHORT, SHORT) is True


def test_later_levels_skip_pad_at_exact_width():
    assert needs_padding(2, FULL_WIDTH, FULL_WIDTH) is False
    # 257 digits is short even though it occupies 129 bytes
    digits_257 = int("f" * (HASH_PAD_HEX_DIGITS - 1), 16)
    assert needs_padding(3, digits_257, FULL_WIDTH) is True


def test_derive_challenge_uses_level_pad_rule():
    assert derive_challenge(1, SHORT, 5, 6) == hash_to_int(False, SHORT, 5, 6)
    assert derive_challenge(2, SHORT, 5, 6) == hash_to_int(True, SHORT, 5, 6)
    assert derive_challenge(2, FULL_WIDTH, FULL_WIDTH, 6) == hash_to_int(False, FULL_WIDTH, FULL_WIDTH, 6)
